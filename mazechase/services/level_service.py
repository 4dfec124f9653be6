"""Per-level assembly and the enemy half of the simulation tick.

A level is built in a fixed order: maze, locks on the backbone, items (one
key more than the requested lock count), distance map from the start cell,
spawn selection, enemy creation. Dimensions, lock count
and enemy count grow with the level number and are capped by config.

The caller owns the frame loop; ``step_enemies`` clamps the elapsed time and
advances every enemy sequentially against the same player snapshot, and
``find_collisions`` reports which unfrozen enemies share the player's cell.
``collect_item`` covers the item-pickup step for the player.s cell.
"""

from __future__ import annotations

import random
import time
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, NamedTuple, Optional, Tuple

from ..config import GameConfig, MazeConfig, EnemyConfig, get_config
from ..logging_utils import get_logger
from ..maze.cells import Coord
from ..maze.distance import distance_map
from ..maze.generator import generate_maze
from ..maze.grid import Grid
from ..maze.items import ItemType, PlacedItem, place_items, take_item
from ..maze.locks import Lock, place_locks
from ..maze.metrics import init_metrics
from .enemy_ai import Enemy
from .spawn_service import create_enemies, pick_enemy_spawns

log = get_logger("level")


@dataclass
class PlayerState:
    """Reference player-like object: current cell plus facing."""

    grid_x: int = 0
    grid_y: int = 0
    facing: Optional[str] = None


@dataclass
class Level:
    number: int
    grid: Grid
    locks: List[Lock]
    distances: Dict[Coord, int]
    enemies: List[Enemy]
    items: List[PlacedItem] = field(default_factory=list)
    start: Coord = (0, 0)
    exit: Coord = (0, 0)
    metrics: Dict[str, Any] = field(default_factory=dict)


def level_dimensions(level: int, config: Optional[MazeConfig] = None) -> Tuple[int, int]:
    cfg = config or get_config().maze
    grow = (max(level, 1) - 1) * cfg.grow_per_level
    return min(cfg.base_width + grow, cfg.max_size), min(cfg.base_height + grow, cfg.max_size)


def lock_count(level: int, config: Optional[MazeConfig] = None) -> int:
    cfg = config or get_config().maze
    return max(0, min(level, cfg.max_locks))


def enemy_count(level: int, config: Optional[EnemyConfig] = None) -> int:
    cfg = config or get_config().enemy
    return max(0, cfg.base_count + (level - 1) * cfg.add_per_level)


def build_level(level: int = 1, *, config: Optional[GameConfig] = None, rng=None) -> Level:
    cfg = config or get_config()
    if rng is None:
        rng = random.Random(cfg.seed) if cfg.seed is not None else random
    start = time.perf_counter()
    metrics = init_metrics()

    width, height = level_dimensions(level, cfg.maze)
    grid = generate_maze(width, height, loop_ratio=cfg.maze.loop_ratio, rng=rng, metrics=metrics)

    wanted_locks = lock_count(level, cfg.maze)
    locks = place_locks(grid, wanted_locks, min_path=cfg.maze.min_lock_path)

    items = place_items(grid, wanted_locks + 1, level, rng, config=cfg.items)

    distances = distance_map(grid, 0, 0)
    spawns = pick_enemy_spawns(
        grid, enemy_count(level, cfg.enemy), 0, 0, distances, config=cfg.enemy, rng=rng
    )
    enemies = create_enemies(spawns, config=cfg.enemy, rng=rng)

    metrics["locks_requested"] = wanted_locks
    metrics["locks_placed"] = len(locks)
    metrics["keys_placed"] = sum(1 for it in items if it.item_type == ItemType.KEY)
    metrics["items_placed"] = len(items)
    metrics["enemies"] = len(enemies)
    metrics["runtime_ms"] = int((time.perf_counter() - start) * 1000)
    log.info(
        event="level_built",
        level_no=level,
        width=width,
        height=height,
        loops=metrics["loops_added"],
        locks=len(locks),
        keys=metrics["keys_placed"],
        enemies=len(enemies),
        runtime_ms=metrics["runtime_ms"],
    )
    return Level(
        number=level,
        grid=grid,
        locks=locks,
        distances=distances,
        enemies=enemies,
        items=items,
        start=(0, 0),
        exit=(width - 1, height - 1),
        metrics=metrics,
    )


def clamp_dt(dt: float, max_dt_ms: float) -> float:
    if dt < 0:
        return 0.0
    return min(dt, max_dt_ms)


def step_enemies(
    enemies: Iterable[Enemy],
    dt: float,
    player: Any,
    grid: Grid,
    *,
    config: Optional[GameConfig] = None,
) -> float:
    cfg = config or get_config()
    step = clamp_dt(dt, cfg.max_dt_ms)
    for enemy in enemies:
        enemy.update(step, player, grid)
    return step


def find_collisions(enemies: Iterable[Enemy], player: Any) -> List[Enemy]:
    return [
        e
        for e in enemies
        if not e.frozen and e.grid_x == player.grid_x and e.grid_y == player.grid_y
    ]


def freeze_all(enemies: Iterable[Enemy], duration: Optional[float] = None) -> int:
    frozen = 0
    for enemy in enemies:
        enemy.freeze(duration if duration is not None else enemy.config.freeze_duration_ms)
        frozen += 1
    return frozen


class Pickup(NamedTuple):
    item_type: ItemType
    score: int
    frozen: int


def collect_item(level: Level, player: Any, *, config: Optional[GameConfig] = None) -> Optional[Pickup]:
    """Take the item under the player and apply its level-wide effect.

    Coins report ``coin_score``; a freeze orb freezes every enemy for
    ``freeze_duration_ms``. Keys, boots, shields and maps only affect the
    player, so they are returned for the caller to apply.
    """
    cfg = config or get_config()
    item = take_item(level.grid, player.grid_x, player.grid_y)
    if item is None:
        return None
    score = cfg.items.coin_score if item == ItemType.COIN else 0
    frozen = freeze_all(level.enemies, cfg.enemy.freeze_duration_ms) if item == ItemType.FREEZE else 0
    return Pickup(item, score, frozen)


__all__ = [
    "PlayerState",
    "Level",
    "level_dimensions",
    "lock_count",
    "enemy_count",
    "build_level",
    "clamp_dt",
    "step_enemies",
    "find_collisions",
    "freeze_all",
    "Pickup",
    "collect_item",
]
