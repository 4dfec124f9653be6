import importlib
import sys

import pytest


def _maze_lines(text):
    return [line for line in text.splitlines() if line.startswith(("+", "|"))]


@pytest.fixture()
def run_module():
    # Clean import each time (run.py reads VERSION once)
    if "run" in sys.modules:
        del sys.modules["run"]
    return importlib.import_module("run")


def test_version_flag_outputs_version(run_module, capsys):
    with pytest.raises(SystemExit) as exc:
        run_module.parse_args(["--version"])
    assert exc.value.code == 0
    out = capsys.readouterr().out
    assert run_module.__version__ in out
    assert "MazeChase" in out


def test_default_command_is_generate(run_module):
    ns = run_module.parse_args([])
    assert ns.command == "generate"
    assert ns.level == 1


def test_bad_coordinate_is_rejected(run_module):
    with pytest.raises(SystemExit) as exc:
        run_module.parse_args(["path", "--from", "abc"])
    assert exc.value.code == 2


def test_coordinates_are_parsed(run_module):
    ns = run_module.parse_args(["path", "--from", "1,2", "--to", " 3 , 4"])
    assert ns.src == (1, 2)
    assert ns.dst == (3, 4)


def test_generate_prints_maze_and_lock(run_module, capsys):
    assert run_module.main(["generate", "--seed", "3"]) == 0
    out = capsys.readouterr().out
    assert "mode=generate" in out
    assert "+--+" in out
    assert out.count("lock x=") == 1
    assert "|S " in out


def test_generate_explicit_size(run_module, capsys):
    assert run_module.main(["generate", "--seed", "3", "--width", "4", "--height", "3"]) == 0
    out = capsys.readouterr().out
    maze_rows = [line for line in out.splitlines() if line.startswith("+")]
    assert maze_rows[0] == "+--+--+--+--+"
    assert len(maze_rows) == 4
    assert "lock x=" not in out


def test_path_reports_length(run_module, capsys):
    assert run_module.main(["path", "--seed", "3", "--to", "5,5"]) == 0
    out = capsys.readouterr().out
    length_line = next(line for line in out.splitlines() if line.startswith("length="))
    steps = int(length_line.split("=")[1])
    cells = out.strip().splitlines()[-1].split()
    assert len(cells) == steps + 1
    assert cells[0] == "0,0" and cells[-1] == "5,5"


def test_path_out_of_bounds_returns_error(run_module, capsys):
    assert run_module.main(["path", "--seed", "3", "--to", "99,99"]) == 1
    assert "no path" in capsys.readouterr().out


def test_simulate_short_run_survives(run_module, capsys):
    # The single level-1 enemy spawns well away from the start cell
    assert run_module.main(["simulate", "--seed", "3", "--ticks", "20"]) == 0
    assert "player survived 20 ticks" in capsys.readouterr().out


def test_env_file_argument(tmp_path, run_module, capsys):
    env_file = tmp_path / ".env"
    env_file.write_text("MAZECHASE_SEED=11\nMAZECHASE_LOOP_RATIO=0\n")
    assert run_module.main(["--env-file", str(env_file), "generate"]) == 0
    first = capsys.readouterr().out
    assert run_module.main(["--env-file", str(env_file), "generate"]) == 0
    second = capsys.readouterr().out
    # Seed comes from the env file, so both runs draw the same maze
    assert _maze_lines(first) == _maze_lines(second)


def test_startup_event_logged_at_info(monkeypatch, run_module, capsys):
    from mazechase import logging_utils

    monkeypatch.setattr(logging_utils, "CURRENT_LEVEL", logging_utils.LEVELS["info"])
    monkeypatch.setattr(logging_utils, "JSON_MODE", False)
    assert run_module.main(["generate", "--seed", "5", "--level", "2"]) == 0
    out = capsys.readouterr().out
    startup = next(line for line in out.splitlines() if "event=startup" in line)
    assert "level_no=2" in startup and "mode=generate" in startup
    assert "event=level_built" in out
    assert "k" in "".join(_maze_lines(out))


def test_simulate_logs_bound_run_context(monkeypatch, run_module, capsys):
    from mazechase import logging_utils

    monkeypatch.setattr(logging_utils, "CURRENT_LEVEL", logging_utils.LEVELS["info"])
    monkeypatch.setattr(logging_utils, "JSON_MODE", False)
    assert run_module.main(["simulate", "--seed", "4", "--ticks", "5"]) == 0
    finals = [line for line in capsys.readouterr().out.splitlines() if "event=enemy_final" in line]
    assert finals
    assert all("seed=4" in line and "level_no=1" in line for line in finals)
