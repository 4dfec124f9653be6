"""Key-lock placement along the start-to-exit backbone.

The backbone is one BFS shortest path from (0,0) to the opposite corner. Locks
split it into ``num_locks + 1`` equal segments, one lock per internal segment
boundary, so the player must collect keys progressively. Enemies path through
locks freely; only the player's movement checks them.
"""

from __future__ import annotations

from collections import deque
from typing import Dict, List, NamedTuple, Optional

from ..logging_utils import get_logger
from .cells import Coord
from .directions import DIRECTIONS, direction_between
from .grid import Grid

log = get_logger("maze")

MIN_LOCK_PATH = 6


class Lock(NamedTuple):
    x: int
    y: int
    direction: str


def bfs_path(grid: Grid, sx: int, sy: int, ex: int, ey: int) -> Optional[List[Coord]]:
    """Unit-weight shortest path over open walls (locks ignored), or None."""
    if not (grid.in_bounds(sx, sy) and grid.in_bounds(ex, ey)):
        return None
    came: Dict[Coord, Optional[Coord]] = {(sx, sy): None}
    q = deque([(sx, sy)])
    while q:
        cx, cy = q.popleft()
        if (cx, cy) == (ex, ey):
            path = []
            node: Optional[Coord] = (ex, ey)
            while node is not None:
                path.append(node)
                node = came[node]
            path.reverse()
            return path
        cell = grid.get(cx, cy)
        for d in DIRECTIONS:
            if cell.walls[d]:
                continue
            n = grid.neighbor(cx, cy, d)
            if n not in came and grid.in_bounds(*n):
                came[n] = (cx, cy)
                q.append(n)
    return None


def place_locks(grid: Grid, num_locks: int, *, min_path: int = MIN_LOCK_PATH) -> List[Lock]:
    if num_locks <= 0:
        return []
    path = bfs_path(grid, 0, 0, grid.width - 1, grid.height - 1)
    if not path or len(path) < min_path:
        log.debug(event="locks_skipped", reason="short_backbone", path_len=len(path or []))
        return []
    locks: List[Lock] = []
    segment = len(path) // (num_locks + 1)
    for i in range(num_locks):
        idx = segment * (i + 1)
        if idx >= len(path) - 1:
            break
        (cx, cy), (nx, ny) = path[idx], path[idx + 1]
        d = direction_between(cx, cy, nx, ny)
        cell = grid.get(cx, cy)
        if d is None or cell.walls[d] or cell.locked_door:
            continue
        grid.set_lock(cx, cy, d)
        locks.append(Lock(cx, cy, d))
    log.info(event="locks_placed", requested=num_locks, placed=len(locks), backbone=len(path))
    return locks


def unlock(grid: Grid, x: int, y: int, direction: str) -> bool:
    """Clear a lock from both sides of its edge (key consumed)."""
    return grid.clear_lock(x, y, direction)


__all__ = ["Lock", "MIN_LOCK_PATH", "bfs_path", "place_locks", "unlock"]
