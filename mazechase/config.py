"""Tunable game constants.

Defaults mirror the shipped game balance. ``load_config`` layers overrides from
a ``.env`` file and the process environment on top:

    MAZECHASE_SEED          int, seeds level generation when set
    MAZECHASE_LOOP_RATIO    float, fraction of interior walls removed after carving
    MAZECHASE_MAX_DT_MS     float, per-tick elapsed time cap
    MAZECHASE_MAX_SIZE      int, maze width/height ceiling
    MAZECHASE_ENEMY_AI      JSON object keyed by EnemyConfig field names

Overrides that fail to parse are skipped with a warning; defaults stay in place.
"""

from __future__ import annotations

import json
import math
import os
from dataclasses import dataclass, field, fields
from typing import Any, Dict, Optional

from dotenv import load_dotenv

from .logging_utils import get_logger

log = get_logger("config")

# Divisors and timer periods; zero or negative values would stall or crash the tick.
_POSITIVE_MARKERS = ("speed", "repath_ms")
_POSITIVE_FIELDS = {"max_size", "base_width", "base_height"}


@dataclass
class MazeConfig:
    base_width: int = 15
    base_height: int = 15
    grow_per_level: int = 4
    max_size: int = 35
    loop_ratio: float = 0.08
    max_locks: int = 3
    min_lock_path: int = 6


@dataclass
class EnemyConfig:
    move_duration_ms: float = 120.0
    mistake_chance: float = 0.25
    view_radius: int = 7
    base_count: int = 1
    add_per_level: int = 1
    min_spawn_ratio: float = 0.6
    chaser_speed: float = 0.6
    chaser_repath_ms: float = 800.0
    ambusher_speed: float = 0.55
    ambusher_repath_ms: float = 1000.0
    ambusher_look_ahead: int = 2
    patroller_speed_patrol: float = 0.5
    patroller_speed_chase: float = 0.65
    patroller_repath_patrol_ms: float = 1000.0
    patroller_repath_chase_ms: float = 500.0
    patroller_alert_dist: int = 4
    repath_stagger_ms: float = 100.0
    freeze_duration_ms: float = 5000.0


@dataclass
class ItemConfig:
    exclude_radius: int = 3
    coin_base: int = 5
    coin_per_level: int = 2
    boots_base: int = 1
    shield_count: int = 1
    freeze_count: int = 1
    map_min_level: int = 2
    coin_score: int = 100


@dataclass
class GameConfig:
    maze: MazeConfig = field(default_factory=MazeConfig)
    enemy: EnemyConfig = field(default_factory=EnemyConfig)
    items: ItemConfig = field(default_factory=ItemConfig)
    max_dt_ms: float = 50.0
    seed: Optional[int] = None


def _coerce(current: Any, raw: Any) -> Any:
    # Cast to the type of the existing default so "7" and 7.0 both land as int 7.
    if isinstance(current, bool):
        return str(raw).lower() in ("1", "true", "yes", "on")
    if isinstance(current, (int, float)):
        value = float(raw)
        if not math.isfinite(value):
            raise ValueError(f"non-finite value {raw!r}")
        return int(value) if isinstance(current, int) else value
    return raw


def _must_be_positive(key: str) -> bool:
    return key in _POSITIVE_FIELDS or any(m in key for m in _POSITIVE_MARKERS)


def apply_overrides(target: Any, data: Dict[str, Any], source: str) -> int:
    """Apply dict overrides onto a config dataclass; return how many were applied."""
    known = {f.name for f in fields(target)}
    applied = 0
    for key, raw in data.items():
        if key not in known:
            log.warn(event="config_override_ignored", source=source, key=key, reason="unknown_key")
            continue
        try:
            value = _coerce(getattr(target, key), raw)
        except (TypeError, ValueError, OverflowError):
            log.warn(event="config_override_ignored", source=source, key=key, reason="bad_value")
            continue
        if _must_be_positive(key) and value <= 0:
            log.warn(event="config_override_ignored", source=source, key=key, reason="not_positive")
            continue
        setattr(target, key, value)
        applied += 1
    return applied


def _enemy_overrides_from_env() -> Dict[str, Any]:
    raw = os.getenv("MAZECHASE_ENEMY_AI")
    if not raw:
        return {}
    try:
        data = json.loads(raw)
    except ValueError:
        log.warn(event="config_override_ignored", source="MAZECHASE_ENEMY_AI", reason="invalid_json")
        return {}
    if not isinstance(data, dict):
        log.warn(event="config_override_ignored", source="MAZECHASE_ENEMY_AI", reason="not_an_object")
        return {}
    return data


def load_config(env_file: Optional[str] = None) -> GameConfig:
    if env_file:
        load_dotenv(env_file)
    else:
        load_dotenv()
    cfg = GameConfig()
    env_map = {
        "MAZECHASE_LOOP_RATIO": (cfg.maze, "loop_ratio"),
        "MAZECHASE_MAX_SIZE": (cfg.maze, "max_size"),
        "MAZECHASE_MAX_DT_MS": (cfg, "max_dt_ms"),
    }
    for env_key, (target, attr) in env_map.items():
        if env_key in os.environ:
            apply_overrides(target, {attr: os.environ[env_key]}, env_key)
    seed_raw = os.getenv("MAZECHASE_SEED")
    if seed_raw:
        try:
            cfg.seed = int(seed_raw)
        except ValueError:
            log.warn(event="config_override_ignored", source="MAZECHASE_SEED", reason="bad_value")
    apply_overrides(cfg.enemy, _enemy_overrides_from_env(), "MAZECHASE_ENEMY_AI")
    return cfg


_CONFIG: Optional[GameConfig] = None


def get_config() -> GameConfig:
    global _CONFIG
    if _CONFIG is None:
        _CONFIG = load_config()
    return _CONFIG


def reset_config() -> None:  # pragma: no cover - utility for tests / CLI
    global _CONFIG
    _CONFIG = None


__all__ = [
    "MazeConfig",
    "EnemyConfig",
    "ItemConfig",
    "GameConfig",
    "apply_overrides",
    "load_config",
    "get_config",
    "reset_config",
]
