import os
import random
import sys

import pytest

# Ensure repository root importable early
ROOT_DIR = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT_DIR not in sys.path:
    sys.path.insert(0, ROOT_DIR)

from mazechase.config import EnemyConfig, GameConfig, reset_config  # noqa: E402
from mazechase.maze import generate_maze  # noqa: E402

_LOG_KEYS = {"MAZECHASE_LOG_LEVEL", "MAZECHASE_LOG_JSON"}


def _config_env_keys():
    return [k for k in os.environ if k.startswith("MAZECHASE_") and k not in _LOG_KEYS]


@pytest.fixture(autouse=True)
def _isolate_config_env(monkeypatch):
    """Keep MAZECHASE_* overrides (including ones a .env load injects) from leaking between tests."""
    for key in _config_env_keys():
        monkeypatch.delenv(key)
    reset_config()
    yield
    for key in _config_env_keys():
        os.environ.pop(key, None)
    reset_config()


@pytest.fixture()
def rng():
    return random.Random(1234)


@pytest.fixture()
def game_cfg():
    return GameConfig()


@pytest.fixture()
def steady_cfg():
    """Enemy tunables with mistakes disabled so movement follows the path exactly."""
    return EnemyConfig(mistake_chance=0.0)


@pytest.fixture()
def maze15():
    return generate_maze(15, 15, loop_ratio=0.08, rng=random.Random(42))
