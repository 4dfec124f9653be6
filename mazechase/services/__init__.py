"""Enemy AI, pathfinding and level services built on the maze package."""

from .enemy_ai import Enemy, EnemyType, TargetChoice, select_target
from .level_service import (
    Level,
    PlayerState,
    build_level,
    collect_item,
    find_collisions,
    freeze_all,
    step_enemies,
)
from .pathfinding import find_path, path_length
from .spawn_service import create_enemies, pick_enemy_spawns

__all__ = [
    "Enemy",
    "EnemyType",
    "TargetChoice",
    "select_target",
    "find_path",
    "path_length",
    "pick_enemy_spawns",
    "create_enemies",
    "Level",
    "PlayerState",
    "build_level",
    "collect_item",
    "step_enemies",
    "find_collisions",
    "freeze_all",
]
