"""Enemy AI: target selection plus path-following movement.

Three archetypes share one ``Enemy`` record and differ only by ``enemy_type``:

    chaser     heads for the player's exact cell whenever it can see them
    ambusher   heads for the cell ``ambusher_look_ahead`` steps ahead of the
               player's facing, clamped to the grid
    patroller  wanders between intersections; within ``patroller_alert_dist``
               it switches to chase mode (faster speed and repath cadence)

Beyond ``view_radius`` (Manhattan) every archetype loses the player and
patrols random intersections instead.

Target policy lives in the pure function ``select_target`` so it can be tested
without the movement machinery. ``Enemy.update`` runs one simulation tick:

    1. frozen enemies only count down their freeze timer
    2. repath timer expiry picks a target and asks A* for a route
    3. an idle enemy with path left either makes a random "mistake" step
       (dropping the path) or steps to the next path cell after re-checking
       the wall; a stale step drops the path and forces a repath
    4. an active move interpolates the render position toward the new cell

The player is any object exposing ``grid_x``, ``grid_y`` and ``facing``
(``up``/``down``/``left``/``right``). Times are milliseconds.
"""

from __future__ import annotations

import random
from enum import Enum
from typing import Any, List, NamedTuple, Optional, Tuple

from ..config import EnemyConfig, get_config
from ..logging_utils import get_logger
from ..maze.cells import Coord
from ..maze.directions import DIRECTIONS, FACING_OFFSETS, direction_between
from ..maze.grid import Grid
from ..utils import clamp, lerp, manhattan
from .pathfinding import find_path

log = get_logger("enemy_ai")


class EnemyType(str, Enum):
    CHASER = "chaser"
    AMBUSHER = "ambusher"
    PATROLLER = "patroller"


ROTATION = (EnemyType.CHASER, EnemyType.AMBUSHER, EnemyType.PATROLLER)


class TargetChoice(NamedTuple):
    target: Coord
    alert_mode: bool
    patrol_target: Optional[Coord]


def movement_profile(enemy_type: EnemyType, alert_mode: bool, cfg: EnemyConfig) -> Tuple[float, float]:
    """(speed multiplier, repath interval ms) for a type and patroller mode."""
    if enemy_type == EnemyType.CHASER:
        return cfg.chaser_speed, cfg.chaser_repath_ms
    if enemy_type == EnemyType.AMBUSHER:
        return cfg.ambusher_speed, cfg.ambusher_repath_ms
    if alert_mode:
        return cfg.patroller_speed_chase, cfg.patroller_repath_chase_ms
    return cfg.patroller_speed_patrol, cfg.patroller_repath_patrol_ms


def random_patrol_target(grid: Grid, fallback: Coord, rng=None) -> Coord:
    r = rng or random
    candidates = grid.intersections()
    if not candidates:
        return fallback
    pick = candidates[r.randrange(len(candidates))]
    return (pick.x, pick.y)


def _patrol_choice(state: Any, grid: Grid, rng) -> TargetChoice:
    here = (state.grid_x, state.grid_y)
    target = state.patrol_target
    if target is None or target == here:
        target = random_patrol_target(grid, here, rng)
    return TargetChoice(target, False, target)


def select_target(
    enemy_type: EnemyType,
    state: Any,
    player: Any,
    grid: Grid,
    *,
    config: Optional[EnemyConfig] = None,
    rng=None,
) -> TargetChoice:
    """Pick the cell an enemy should path toward this repath cycle.

    ``state`` needs ``grid_x``, ``grid_y``, ``alert_mode`` and ``patrol_target``;
    it is only read. The returned choice carries the patroller mode and patrol
    target the caller should adopt.
    """
    cfg = config or get_config().enemy
    px, py = player.grid_x, player.grid_y
    dist = manhattan(state.grid_x, state.grid_y, px, py)

    if dist > cfg.view_radius:
        return _patrol_choice(state, grid, rng)

    if enemy_type == EnemyType.CHASER:
        return TargetChoice((px, py), False, state.patrol_target)

    if enemy_type == EnemyType.AMBUSHER:
        dx, dy = FACING_OFFSETS.get(getattr(player, "facing", None), (0, 0))
        tx = clamp(px + dx * cfg.ambusher_look_ahead, 0, grid.width - 1)
        ty = clamp(py + dy * cfg.ambusher_look_ahead, 0, grid.height - 1)
        return TargetChoice((tx, ty), False, state.patrol_target)

    if dist <= cfg.patroller_alert_dist:
        return TargetChoice((px, py), True, state.patrol_target)
    return _patrol_choice(state, grid, rng)


class Enemy:
    def __init__(
        self,
        x: int,
        y: int,
        enemy_type: EnemyType,
        *,
        config: Optional[EnemyConfig] = None,
        rng=None,
    ):
        self.config = config or get_config().enemy
        self.rng = rng or random
        self.enemy_type = EnemyType(enemy_type)
        self.grid_x = x
        self.grid_y = y
        self.render_x = float(x)
        self.render_y = float(y)
        self.frozen = False
        self.frozen_timer = 0.0

        self.moving = False
        self.move_start: Coord = (x, y)
        self.move_target: Coord = (x, y)
        self.move_timer = 0.0
        self.move_duration = self.config.move_duration_ms

        self.path: List[Coord] = []
        self.path_index = 0
        self.repath_timer = 0.0

        self.alert_mode = False
        self.patrol_target: Optional[Coord] = None
        self.speed_mult, self.repath_interval = movement_profile(self.enemy_type, False, self.config)

    def __repr__(self) -> str:
        return f"Enemy({self.enemy_type.value}, {self.grid_x}, {self.grid_y})"

    @property
    def pos(self) -> Coord:
        return (self.grid_x, self.grid_y)

    @property
    def has_path(self) -> bool:
        return bool(self.path) and self.path_index < len(self.path)

    @property
    def is_idle(self) -> bool:
        return not self.moving

    # ------------------------------------------------------------------
    # Targeting
    # ------------------------------------------------------------------
    def _set_alert(self, alert: bool) -> None:
        # Speed/cadence only change on the transition itself.
        if self.enemy_type != EnemyType.PATROLLER or alert == self.alert_mode:
            return
        self.alert_mode = alert
        self.speed_mult, self.repath_interval = movement_profile(self.enemy_type, alert, self.config)
        log.debug(event="enemy_mode_change", enemy=self.enemy_type.value, alert=alert, x=self.grid_x, y=self.grid_y)

    def get_target(self, player: Any, grid: Grid) -> Coord:
        choice = select_target(self.enemy_type, self, player, grid, config=self.config, rng=self.rng)
        self._set_alert(choice.alert_mode)
        self.patrol_target = choice.patrol_target
        return choice.target

    def repath(self, player: Any, grid: Grid) -> Optional[List[Coord]]:
        tx, ty = self.get_target(player, grid)
        new_path = find_path(grid, self.grid_x, self.grid_y, tx, ty, ignore_locks=True)
        if new_path and len(new_path) > 1:
            self.path = new_path
            self.path_index = 1
        return new_path

    # ------------------------------------------------------------------
    # Simulation tick
    # ------------------------------------------------------------------
    def update(self, dt: float, player: Any, grid: Grid) -> None:
        if self.frozen:
            self.frozen_timer -= dt
            if self.frozen_timer <= 0:
                self.frozen = False
                self.frozen_timer = 0.0
            return

        self.repath_timer -= dt
        if self.repath_timer <= 0:
            self.repath_timer = self.repath_interval
            self.repath(player, grid)

        if not self.moving and self.has_path:
            if self.rng.random() < self.config.mistake_chance:
                self._mistake_step(grid)
            else:
                self._follow_path(grid)

        if self.moving:
            self._advance_motion(dt)

    def _mistake_step(self, grid: Grid) -> None:
        cell = grid.get(self.grid_x, self.grid_y)
        if cell is None:
            return
        options = []
        for d in DIRECTIONS:
            if cell.walls[d]:
                continue
            n = grid.neighbor(self.grid_x, self.grid_y, d)
            if grid.in_bounds(*n):
                options.append(n)
        if not options:
            return
        nx, ny = options[self.rng.randrange(len(options))]
        self._start_move(nx, ny)
        # Tracking resumes only after the next scheduled repath.
        self.path = []
        self.path_index = 0

    def _follow_path(self, grid: Grid) -> None:
        nx, ny = self.path[self.path_index]
        d = direction_between(self.grid_x, self.grid_y, nx, ny)
        cell = grid.get(self.grid_x, self.grid_y)
        if d is not None and cell is not None and not cell.walls[d]:
            self._start_move(nx, ny)
            self.path_index += 1
            return
        if log.enabled("debug"):
            log.debug(event="path_invalidated", enemy=self.enemy_type.value, x=self.grid_x, y=self.grid_y, nx=nx, ny=ny)
        self.path = []
        self.path_index = 0
        self.repath_timer = 0.0

    def _start_move(self, nx: int, ny: int) -> None:
        self.moving = True
        self.move_start = (self.grid_x, self.grid_y)
        self.move_target = (nx, ny)
        self.move_timer = 0.0
        self.move_duration = self.config.move_duration_ms / self.speed_mult
        self.grid_x, self.grid_y = nx, ny

    def _advance_motion(self, dt: float) -> None:
        self.move_timer += dt
        t = min(self.move_timer / self.move_duration, 1.0) if self.move_duration > 0 else 1.0
        (sx, sy), (tx, ty) = self.move_start, self.move_target
        self.render_x = lerp(sx, tx, t)
        self.render_y = lerp(sy, ty, t)
        if t >= 1.0:
            self.moving = False
            self.render_x = float(tx)
            self.render_y = float(ty)

    # ------------------------------------------------------------------
    # External triggers
    # ------------------------------------------------------------------
    def freeze(self, duration: float) -> None:
        """Suspend all AI for ``duration`` ms; path and target state are kept."""
        self.frozen = True
        self.frozen_timer = duration

    def knock_back(self) -> None:
        """Drop the current route and repath on the next tick (shield hit)."""
        self.path = []
        self.path_index = 0
        self.repath_timer = 0.0

    def to_dict(self):
        return {
            "type": self.enemy_type.value,
            "x": self.grid_x,
            "y": self.grid_y,
            "render_x": round(self.render_x, 3),
            "render_y": round(self.render_y, 3),
            "frozen": self.frozen,
            "alert": self.alert_mode,
        }


__all__ = [
    "EnemyType",
    "ROTATION",
    "TargetChoice",
    "movement_profile",
    "random_patrol_target",
    "select_target",
    "Enemy",
]
