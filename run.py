"""MazeChase CLI entry point.

Provides subcommands for generating a maze, querying the pathfinder and
running a headless enemy-AI simulation. Accepts configuration via flags and
environment variables, with optional .env loading.

Run `python run.py --help` for details.
"""

import argparse
import random
import sys
from textwrap import dedent

from colorama import Fore, Style
from colorama import init as _color_init

_color_init()
# Disable colors if output is not a real terminal (e.g., during pytest capture)
try:
    _COLOR_ENABLED = sys.stdout.isatty()
except (AttributeError, ValueError):  # pragma: no cover - environment dependent
    _COLOR_ENABLED = False


def _load_version() -> str:
    try:
        with open("VERSION", "r", encoding="utf-8") as f:
            return f.read().strip()
    except OSError:
        from mazechase import __version__ as pkg_version

        return pkg_version


__version__ = _load_version()


def _coord(text: str):
    from mazechase.utils import parse_coord

    try:
        return parse_coord(text)
    except ValueError as e:
        raise argparse.ArgumentTypeError(str(e)) from e


def parse_args(argv: list[str]) -> argparse.Namespace:
    description = """
    MazeChase maze and enemy AI tools

    Generate mazes, inspect A* routes and run the enemy AI headless. Config
    tunables come from MAZECHASE_* environment variables (optionally loaded
    from a .env file); CLI flags take precedence.
    """

    epilog = dedent(
        """
        Environment variables:
          MAZECHASE_SEED          Seed for level generation
          MAZECHASE_LOOP_RATIO    Fraction of interior walls removed (default: 0.08)
          MAZECHASE_MAX_DT_MS     Per-tick elapsed time cap (default: 50)
          MAZECHASE_ENEMY_AI      JSON object overriding enemy tunables
          MAZECHASE_LOG_LEVEL     debug|info|warn|error (default: info)

        Examples:
          # Print a level-2 maze with its locks
          python run.py generate --level 2 --seed 7

          # Shortest route from the start to the exit, honoring locks
          python run.py path --seed 7 --from 0,0 --to 14,14 --respect-locks

          # Let the enemies hunt a stationary player for 600 ticks
          python run.py simulate --seed 7 --ticks 600
        """
    )

    parser = argparse.ArgumentParser(
        prog="MazeChase",
        description=dedent(description),
        epilog=epilog,
        formatter_class=argparse.RawTextHelpFormatter,
    )
    parser.add_argument(
        "--env-file",
        dest="env_file",
        help="Path to a .env file to load before processing flags",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"MazeChase {__version__}",
    )

    subparsers = parser.add_subparsers(dest="command")

    def add_level_args(p: argparse.ArgumentParser) -> None:
        p.add_argument("--level", type=int, default=1, help="Level number (drives size, locks, enemies)")
        p.add_argument("--seed", type=int, default=None, help="Seed (default: env MAZECHASE_SEED or random)")
        p.add_argument("--loop-ratio", dest="loop_ratio", type=float, default=None, help="Override loop ratio")

    gen_parser = subparsers.add_parser(
        "generate",
        help="Generate a maze and print it as ASCII",
        formatter_class=argparse.RawTextHelpFormatter,
    )
    add_level_args(gen_parser)
    gen_parser.add_argument("--width", type=int, default=None, help="Explicit width (overrides --level sizing)")
    gen_parser.add_argument("--height", type=int, default=None, help="Explicit height (overrides --level sizing)")
    gen_parser.add_argument("--locks", type=int, default=None, help="Lock count (default: from level)")
    gen_parser.set_defaults(command="generate")

    path_parser = subparsers.add_parser(
        "path",
        help="Run A* between two cells of a generated level",
        formatter_class=argparse.RawTextHelpFormatter,
    )
    add_level_args(path_parser)
    path_parser.add_argument("--from", dest="src", type=_coord, default=(0, 0), help="Start cell x,y")
    path_parser.add_argument("--to", dest="dst", type=_coord, default=None, help="Goal cell x,y (default: exit)")
    path_parser.add_argument(
        "--respect-locks",
        dest="respect_locks",
        action="store_true",
        help="Treat locked doors as closed (player rules)",
    )
    path_parser.set_defaults(command="path")

    sim_parser = subparsers.add_parser(
        "simulate",
        help="Run the enemy AI against a stationary player",
        formatter_class=argparse.RawTextHelpFormatter,
    )
    add_level_args(sim_parser)
    sim_parser.add_argument("--ticks", type=int, default=600, help="Number of simulation ticks")
    sim_parser.add_argument("--dt", type=float, default=16.0, help="Elapsed ms per tick (capped by config)")
    sim_parser.add_argument("--player", type=_coord, default=(0, 0), help="Player cell x,y")
    sim_parser.set_defaults(command="simulate")

    # If no subcommand provided, default to generate
    if len(argv) == 0:
        argv = ["generate"]

    return parser.parse_args(argv)


def _build(args, config):
    from mazechase.services.level_service import build_level

    if getattr(args, "loop_ratio", None) is not None:
        config.maze.loop_ratio = args.loop_ratio
    seed = args.seed if args.seed is not None else config.seed
    rng = random.Random(seed) if seed is not None else random.Random()
    return build_level(args.level, config=config, rng=rng), seed


def _markers(level):
    from mazechase.maze.items import ItemType
    from mazechase.services.enemy_ai import EnemyType

    letters = {EnemyType.CHASER: "C", EnemyType.AMBUSHER: "A", EnemyType.PATROLLER: "P"}
    item_marks = {
        ItemType.KEY: "k",
        ItemType.COIN: ".",
        ItemType.BOOTS: "b",
        ItemType.SHIELD: "h",
        ItemType.FREEZE: "f",
        ItemType.MAP: "m",
    }
    marks = {(it.x, it.y): item_marks[it.item_type] for it in level.items}
    marks[level.start] = "S"
    marks[level.exit] = "E"
    for e in level.enemies:
        marks[e.pos] = letters[e.enemy_type]
    return marks


def _cmd_generate(args, config) -> int:
    from mazechase.maze.ascii_map import render_ascii
    from mazechase.maze.generator import generate_maze
    from mazechase.maze.locks import place_locks

    if args.width or args.height:
        if args.loop_ratio is not None:
            config.maze.loop_ratio = args.loop_ratio
        rng = random.Random(args.seed) if args.seed is not None else random.Random()
        width = args.width or args.height
        height = args.height or args.width
        grid = generate_maze(width, height, loop_ratio=config.maze.loop_ratio, rng=rng)
        locks = place_locks(grid, args.locks or 0, min_path=config.maze.min_lock_path)
        print(render_ascii(grid, {(0, 0): "S", (width - 1, height - 1): "E"}))
    else:
        level, _seed = _build(args, config)
        grid, locks = level.grid, level.locks
        if args.locks is not None:
            for lk in locks:
                grid.clear_lock(lk.x, lk.y, lk.direction)
            locks = place_locks(grid, args.locks, min_path=config.maze.min_lock_path)
        print(render_ascii(grid, _markers(level)))
    for lk in locks:
        print(f"lock x={lk.x} y={lk.y} dir={lk.direction}")
    return 0


def _cmd_path(args, config) -> int:
    from mazechase.services.pathfinding import find_path

    level, _seed = _build(args, config)
    sx, sy = args.src
    gx, gy = args.dst if args.dst is not None else level.exit
    path = find_path(level.grid, sx, sy, gx, gy, ignore_locks=not args.respect_locks)
    if path is None:
        print("no path")
        return 1
    print(f"length={len(path) - 1}")
    print(" ".join(f"{x},{y}" for x, y in path))
    return 0


def _cmd_simulate(args, config) -> int:
    from mazechase.logging_utils import get_logger
    from mazechase.services.level_service import PlayerState, find_collisions, step_enemies

    level, seed = _build(args, config)
    sim_log = get_logger("simulate").bind(seed=seed, level_no=args.level)
    px, py = args.player
    player = PlayerState(grid_x=px, grid_y=py, facing="right")
    caught_at = None
    for tick in range(max(args.ticks, 0)):
        step_enemies(level.enemies, args.dt, player, level.grid, config=config)
        if find_collisions(level.enemies, player):
            caught_at = tick
            break
    for e in level.enemies:
        sim_log.info(event="enemy_final", **e.to_dict())
    if caught_at is None:
        print(f"player survived {args.ticks} ticks")
    else:
        print(f"player caught at tick {caught_at}")
    return 0


def main(argv: list[str]) -> int:
    args = parse_args(argv)

    from mazechase.config import load_config
    from mazechase.logging_utils import log

    # load_config reads --env-file, or the nearest .env above the package
    config = load_config(getattr(args, "env_file", None))
    mode = (getattr(args, "command", None) or "generate").lower()

    title = f"{Fore.CYAN}{Style.BRIGHT}MazeChase{Style.RESET_ALL}" if _COLOR_ENABLED else "MazeChase"
    divider = (Fore.MAGENTA + "=" * 40 + Style.RESET_ALL) if _COLOR_ENABLED else "=" * 40
    print("\n".join([divider, f"  {title} {__version__}  mode={mode}", divider]))
    log.info(event="startup", mode=mode, level_no=getattr(args, "level", None), seed=getattr(args, "seed", None))

    if mode == "generate":
        return _cmd_generate(args, config)
    if mode == "path":
        return _cmd_path(args, config)
    if mode == "simulate":
        return _cmd_simulate(args, config)
    print(f"[ERROR] Unknown command: {mode}")
    return 2


def cli() -> int:  # pragma: no cover - console_scripts shim
    return main(sys.argv[1:])


if __name__ == "__main__":
    raise SystemExit(main(sys.argv[1:]))
