import random

import pytest

from mazechase import config as config_mod
from mazechase import logging_utils
from mazechase.config import EnemyConfig, GameConfig, MazeConfig, apply_overrides, get_config, load_config
from mazechase.services.enemy_ai import Enemy, EnemyType
from mazechase.services.level_service import PlayerState
from tests.maze_test_utils import corridor


@pytest.fixture()
def info_logs(monkeypatch):
    monkeypatch.setattr(logging_utils, "CURRENT_LEVEL", logging_utils.LEVELS["info"])
    monkeypatch.setattr(logging_utils, "JSON_MODE", False)


def test_defaults_match_game_balance():
    cfg = GameConfig()
    assert cfg.maze.loop_ratio == 0.08
    assert cfg.maze.max_size == 35
    assert cfg.max_dt_ms == 50
    e = cfg.enemy
    assert (e.chaser_speed, e.chaser_repath_ms) == (0.6, 800)
    assert (e.ambusher_speed, e.ambusher_repath_ms, e.ambusher_look_ahead) == (0.55, 1000, 2)
    assert (e.patroller_speed_patrol, e.patroller_repath_patrol_ms) == (0.5, 1000)
    assert (e.patroller_speed_chase, e.patroller_repath_chase_ms) == (0.65, 500)
    assert e.view_radius == 7
    assert e.patroller_alert_dist == 4
    assert e.mistake_chance == 0.25
    assert e.min_spawn_ratio == 0.6


def test_env_overrides(monkeypatch):
    monkeypatch.setenv("MAZECHASE_LOOP_RATIO", "0.2")
    monkeypatch.setenv("MAZECHASE_MAX_SIZE", "21")
    monkeypatch.setenv("MAZECHASE_MAX_DT_MS", "33")
    monkeypatch.setenv("MAZECHASE_SEED", "99")
    cfg = load_config()
    assert cfg.maze.loop_ratio == 0.2
    assert cfg.maze.max_size == 21
    assert isinstance(cfg.maze.max_size, int)
    assert cfg.max_dt_ms == 33.0
    assert cfg.seed == 99


def test_enemy_json_override(monkeypatch):
    monkeypatch.setenv("MAZECHASE_ENEMY_AI", '{"view_radius": "9", "mistake_chance": 0}')
    cfg = load_config()
    assert cfg.enemy.view_radius == 9
    assert cfg.enemy.mistake_chance == 0.0
    assert cfg.enemy.chaser_speed == 0.6


@pytest.mark.parametrize(
    "raw,reason",
    [("{not json", "invalid_json"), ("[1, 2]", "not_an_object")],
)
def test_malformed_enemy_json_is_ignored(monkeypatch, capsys, info_logs, raw, reason):
    monkeypatch.setenv("MAZECHASE_ENEMY_AI", raw)
    cfg = load_config()
    assert cfg.enemy == EnemyConfig()
    out = capsys.readouterr().out
    assert "config_override_ignored" in out
    assert f"reason={reason}" in out


def test_bad_values_keep_defaults(monkeypatch, capsys, info_logs):
    monkeypatch.setenv("MAZECHASE_LOOP_RATIO", "lots")
    monkeypatch.setenv("MAZECHASE_SEED", "abc")
    cfg = load_config()
    assert cfg.maze.loop_ratio == 0.08
    assert cfg.seed is None
    out = capsys.readouterr().out
    assert out.count("config_override_ignored") == 2


def test_apply_overrides_counts_and_skips(capsys, info_logs):
    target = EnemyConfig()
    applied = apply_overrides(target, {"view_radius": 3, "nope": 1, "chaser_speed": "fast"}, "test")
    assert applied == 1
    assert target.view_radius == 3
    assert target.chaser_speed == 0.6
    out = capsys.readouterr().out
    assert "reason=unknown_key" in out and "reason=bad_value" in out


def test_env_file_is_loaded(tmp_path):
    env_file = tmp_path / "game.env"
    env_file.write_text("MAZECHASE_LOOP_RATIO=0.15\nMAZECHASE_SEED=4\n")
    cfg = load_config(str(env_file))
    assert cfg.maze.loop_ratio == 0.15
    assert cfg.seed == 4


def test_get_config_is_cached_until_reset(monkeypatch):
    first = get_config()
    assert get_config() is first
    monkeypatch.setenv("MAZECHASE_SEED", "7")
    config_mod.reset_config()
    assert get_config().seed == 7


@pytest.mark.parametrize(
    "env_key,raw,attr",
    [
        ("MAZECHASE_MAX_SIZE", "inf", "max_size"),
        ("MAZECHASE_MAX_SIZE", "1e400", "max_size"),
        ("MAZECHASE_LOOP_RATIO", "nan", "loop_ratio"),
    ],
)
def test_non_finite_env_values_keep_defaults(monkeypatch, capsys, info_logs, env_key, raw, attr):
    monkeypatch.setenv(env_key, raw)
    cfg = load_config()
    assert getattr(cfg.maze, attr) == getattr(MazeConfig(), attr)
    assert "reason=bad_value" in capsys.readouterr().out


def test_overflowing_enemy_json_keeps_defaults(monkeypatch, capsys, info_logs):
    monkeypatch.setenv("MAZECHASE_ENEMY_AI", '{"view_radius": 1e400, "chaser_repath_ms": 10' + "0" * 400 + "}")
    cfg = load_config()
    assert cfg.enemy.view_radius == 7
    assert cfg.enemy.chaser_repath_ms == 800
    assert capsys.readouterr().out.count("reason=bad_value") == 2


@pytest.mark.parametrize(
    "key,raw",
    [("chaser_speed", 0), ("patroller_speed_chase", -0.5), ("ambusher_repath_ms", 0), ("max_size", 0)],
)
def test_non_positive_rates_rejected(capsys, info_logs, key, raw):
    target = MazeConfig() if key == "max_size" else EnemyConfig()
    before = getattr(target, key)
    assert apply_overrides(target, {key: raw}, "test") == 0
    assert getattr(target, key) == before
    assert "reason=not_positive" in capsys.readouterr().out


def test_zero_speed_override_leaves_enemies_moving(monkeypatch):
    monkeypatch.setenv("MAZECHASE_ENEMY_AI", '{"chaser_speed": 0, "mistake_chance": 0}')
    cfg = load_config()
    assert cfg.enemy.chaser_speed == 0.6
    grid = corridor(4)
    enemy = Enemy(3, 0, EnemyType.CHASER, config=cfg.enemy, rng=random.Random(0))
    enemy.update(16, PlayerState(0, 0), grid)
    assert enemy.pos == (2, 0)
    assert enemy.move_duration == pytest.approx(200.0)
