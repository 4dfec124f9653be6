"""Enemy spawn selection & creation.

Spawns should start far from the player. The threshold is a fraction
(``min_spawn_ratio``) of the farthest distance present in the distance map (or
``width + height`` when no map is given, using Manhattan distance instead).

Selection steps:
  1. Collect every cell at or beyond the threshold.
  2. Enough of them: shuffle and take ``count`` (uniform among eligible cells).
  3. Too few: take the globally farthest cells, excluding the player's own,
     sorted by distance descending. This fallback is deterministic.

``create_enemies`` cycles chaser/ambusher/patroller by spawn index and staggers
the first repath so the enemies do not all run A* on the same tick.
"""

from __future__ import annotations

import math
from typing import Dict, List, Optional

from ..config import EnemyConfig, get_config
from ..logging_utils import get_logger
from ..maze.cells import Coord
from ..maze.grid import Grid
from ..utils import manhattan, shuffle
from .enemy_ai import ROTATION, Enemy

log = get_logger("spawn")


def pick_enemy_spawns(
    grid: Grid,
    count: int,
    player_x: int,
    player_y: int,
    distances: Optional[Dict[Coord, int]] = None,
    *,
    config: Optional[EnemyConfig] = None,
    rng=None,
) -> List[Coord]:
    if count <= 0:
        return []
    cfg = config or get_config().enemy

    if distances is not None:
        max_dist = max(distances.values(), default=0)

        def dist_of(c) -> int:
            return distances.get((c.x, c.y), 0)

    else:
        max_dist = grid.width + grid.height

        def dist_of(c) -> int:
            return manhattan(c.x, c.y, player_x, player_y)

    min_dist = math.floor(max_dist * cfg.min_spawn_ratio)
    candidates = [c for c in grid if dist_of(c) >= min_dist]

    if len(candidates) < count:
        ranked = sorted(
            (c for c in grid if not (c.x == player_x and c.y == player_y)),
            key=dist_of,
            reverse=True,
        )
        log.info(event="spawns_fallback", wanted=count, eligible=len(candidates), min_dist=min_dist)
        return [(c.x, c.y) for c in ranked[:count]]

    shuffle(candidates, rng)
    return [(c.x, c.y) for c in candidates[:count]]


def create_enemies(spawns: List[Coord], *, config: Optional[EnemyConfig] = None, rng=None) -> List[Enemy]:
    cfg = config or get_config().enemy
    enemies = []
    for i, (x, y) in enumerate(spawns):
        enemy = Enemy(x, y, ROTATION[i % len(ROTATION)], config=cfg, rng=rng)
        enemy.repath_timer = (i * cfg.repath_stagger_ms) % enemy.repath_interval
        enemies.append(enemy)
    return enemies


__all__ = ["pick_enemy_spawns", "create_enemies"]
