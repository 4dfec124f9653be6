"""A* pathfinding over the maze grid.

Shared by every enemy archetype. Cells are addressed by flat index
``y * width + x`` so the score tables are plain arrays rather than dicts.

Contract:
    find_path(grid, sx, sy, gx, gy, ignore_locks=True) -> [(x, y), ...] | None

The returned path includes both endpoints. ``None`` means the goal is not
reachable (disconnected region or out-of-bounds endpoint); callers treat that
as "stay put and retry later", never as an error.

Open set is a ``heapq`` binary heap of ``(f, index)`` entries. Improved scores
push a fresh entry instead of decreasing a key, so stale duplicates are skipped
via the closed table when popped. Ties fall to the heap's ordering and are not
a stable guarantee: equal-cost routes may come back in any shape.
"""

from __future__ import annotations

import heapq
from array import array
from typing import List, Optional

from ..maze.cells import Coord
from ..maze.directions import DIRECTIONS, OFFSETS
from ..maze.grid import Grid
from ..utils import manhattan

INF = float("inf")


def _reconstruct(came_from: array, end_idx: int, width: int) -> List[Coord]:
    path: List[Coord] = []
    idx = end_idx
    while idx != -1:
        y, x = divmod(idx, width)
        path.append((x, y))
        idx = came_from[idx]
    path.reverse()
    return path


def find_path(
    grid: Grid,
    start_x: int,
    start_y: int,
    goal_x: int,
    goal_y: int,
    ignore_locks: bool = True,
) -> Optional[List[Coord]]:
    if not (grid.in_bounds(start_x, start_y) and grid.in_bounds(goal_x, goal_y)):
        return None
    if start_x == goal_x and start_y == goal_y:
        return [(start_x, start_y)]

    w = grid.width
    h = grid.height
    size = w * h
    g_score = [INF] * size
    came_from = array("i", [-1]) * size
    closed = bytearray(size)

    start_idx = start_y * w + start_x
    goal_idx = goal_y * w + goal_x
    g_score[start_idx] = 0
    open_heap = [(manhattan(start_x, start_y, goal_x, goal_y), start_idx)]

    while open_heap:
        _f, current = heapq.heappop(open_heap)
        if current == goal_idx:
            return _reconstruct(came_from, current, w)
        if closed[current]:
            continue
        closed[current] = 1

        cy, cx = divmod(current, w)
        cell = grid.cells[current]
        g_next = g_score[current] + 1
        for d in DIRECTIONS:
            if cell.walls[d]:
                continue
            if not ignore_locks and cell.locked_door == d:
                continue
            dx, dy = OFFSETS[d]
            nx, ny = cx + dx, cy + dy
            if nx < 0 or nx >= w or ny < 0 or ny >= h:
                continue
            n_idx = ny * w + nx
            if closed[n_idx]:
                continue
            if g_next < g_score[n_idx]:
                came_from[n_idx] = current
                g_score[n_idx] = g_next
                heapq.heappush(open_heap, (g_next + manhattan(nx, ny, goal_x, goal_y), n_idx))
    return None


def path_length(path: Optional[List[Coord]]) -> Optional[int]:
    """Number of steps along a path (cells - 1), or None for no path."""
    if path is None:
        return None
    return len(path) - 1


__all__ = ["find_path", "path_length"]
