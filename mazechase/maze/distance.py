from __future__ import annotations

from collections import deque
from typing import Dict

from .cells import Coord
from .directions import DIRECTIONS
from .grid import Grid


def distance_map(grid: Grid, sx: int, sy: int) -> Dict[Coord, int]:
    """Hop distance from (sx, sy) to every reachable cell; unreachable cells are absent."""
    if not grid.in_bounds(sx, sy):
        return {}
    dist: Dict[Coord, int] = {(sx, sy): 0}
    q = deque([(sx, sy)])
    while q:
        cx, cy = q.popleft()
        cell = grid.get(cx, cy)
        d = dist[(cx, cy)]
        for direction in DIRECTIONS:
            if cell.walls[direction]:
                continue
            n = grid.neighbor(cx, cy, direction)
            if n not in dist and grid.in_bounds(*n):
                dist[n] = d + 1
                q.append(n)
    return dist


__all__ = ["distance_map"]
