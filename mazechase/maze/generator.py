"""Maze construction phases: recursive-backtracker carve, then loop injection.

Carving from (0,0) with an explicit stack yields a perfect maze (one simple
path between any two cells, ``cells - 1`` open edges). Loop injection then
knocks out a fixed fraction of the remaining interior walls so the player has
alternate escape routes.

All randomness flows through the ``rng`` argument (a ``random.Random`` or the
``random`` module itself) so a seeded generator reproduces the same maze.
"""

from __future__ import annotations

import math
import random
import time
from typing import Any, Dict, List, Optional, Tuple

from ..config import get_config
from ..logging_utils import get_logger
from ..utils import shuffle
from .cells import Cell
from .directions import BOTTOM, DIRECTIONS, RIGHT
from .grid import Grid

log = get_logger("maze")


def _unvisited_neighbors(grid: Grid, cell: Cell) -> List[Tuple[Cell, str]]:
    out = []
    for d in DIRECTIONS:
        n = grid.neighbor_cell(cell.x, cell.y, d)
        if n is not None and not n.visited:
            out.append((n, d))
    return out


def carve_perfect_maze(grid: Grid, rng=None) -> int:
    """Carve a spanning tree into a fully walled grid; returns walls removed."""
    r = rng or random
    start = grid.get(0, 0)
    start.visited = True
    stack = [start]
    removed = 0
    while stack:
        current = stack[-1]
        options = _unvisited_neighbors(grid, current)
        if not options:
            stack.pop()
            continue
        nxt, d = options[r.randrange(len(options))]
        grid.remove_wall(current, nxt, d)
        nxt.visited = True
        stack.append(nxt)
        removed += 1
    for cell in grid:
        cell.visited = False
    return removed


def loop_candidates(grid: Grid) -> List[Tuple[int, int, str]]:
    """Standing interior walls, each counted once via its right/bottom side."""
    out = []
    for y in range(grid.height):
        for x in range(grid.width):
            cell = grid.get(x, y)
            if x < grid.width - 1 and cell.walls[RIGHT]:
                out.append((x, y, RIGHT))
            if y < grid.height - 1 and cell.walls[BOTTOM]:
                out.append((x, y, BOTTOM))
    return out


def add_loops(grid: Grid, loop_ratio: float, rng=None) -> int:
    candidates = shuffle(loop_candidates(grid), rng)
    remove_count = math.floor(len(candidates) * loop_ratio)
    removed = 0
    for x, y, d in candidates[:remove_count]:
        neighbor = grid.neighbor_cell(x, y, d)
        if neighbor is not None:
            grid.remove_wall(grid.get(x, y), neighbor, d)
            removed += 1
    return removed


def generate_maze(
    width: int,
    height: int,
    *,
    loop_ratio: Optional[float] = None,
    rng=None,
    metrics: Optional[Dict[str, Any]] = None,
) -> Grid:
    if loop_ratio is None:
        loop_ratio = get_config().maze.loop_ratio
    grid = Grid(width, height)
    t0 = time.perf_counter()
    carved = carve_perfect_maze(grid, rng)
    t1 = time.perf_counter()
    loops = add_loops(grid, loop_ratio, rng) if loop_ratio > 0 else 0
    t2 = time.perf_counter()
    if metrics is not None:
        metrics["walls_carved"] = carved
        metrics["loops_added"] = loops
        phases = metrics.setdefault("phase_ms", {})
        phases["carve"] = int((t1 - t0) * 1000)
        phases["loops"] = int((t2 - t1) * 1000)
    log.debug(event="maze_generated", width=width, height=height, carved=carved, loops=loops)
    return grid


__all__ = ["carve_perfect_maze", "loop_candidates", "add_loops", "generate_maze"]
