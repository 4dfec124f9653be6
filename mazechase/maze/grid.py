"""Row-major maze grid.

The grid owns its Cells for the lifetime of a level; only the shape is fixed.
Wall and lock edits always go through the paired helpers below so both sides
of an edge stay in agreement.
"""

from __future__ import annotations

from typing import Iterator, List, Optional

from .cells import Cell, Coord
from .directions import BOTTOM, DIRECTIONS, OFFSETS, OPPOSITE, RIGHT


class Grid:
    def __init__(self, width: int, height: int):
        if width < 1 or height < 1:
            raise ValueError(f"Grid dimensions must be positive, got {width}x{height}")
        self.width = width
        self.height = height
        self.cells: List[Cell] = [Cell(x, y) for y in range(height) for x in range(width)]

    def __iter__(self) -> Iterator[Cell]:
        return iter(self.cells)

    def __len__(self) -> int:
        return len(self.cells)

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def index(self, x: int, y: int) -> int:
        return y * self.width + x

    def get(self, x: int, y: int) -> Optional[Cell]:
        if not self.in_bounds(x, y):
            return None
        return self.cells[y * self.width + x]

    def neighbor(self, x: int, y: int, direction: str) -> Coord:
        dx, dy = OFFSETS[direction]
        return (x + dx, y + dy)

    def neighbor_cell(self, x: int, y: int, direction: str) -> Optional[Cell]:
        nx, ny = self.neighbor(x, y, direction)
        return self.get(nx, ny)

    # ------------------------------------------------------------------
    # Topology edits
    # ------------------------------------------------------------------
    def remove_wall(self, cell: Cell, neighbor: Cell, direction: str) -> None:
        cell.walls[direction] = False
        neighbor.walls[OPPOSITE[direction]] = False

    def add_wall(self, cell: Cell, neighbor: Optional[Cell], direction: str) -> None:
        cell.walls[direction] = True
        if neighbor is not None:
            neighbor.walls[OPPOSITE[direction]] = True

    def set_lock(self, x: int, y: int, direction: str) -> bool:
        cell = self.get(x, y)
        other = self.neighbor_cell(x, y, direction)
        if cell is None or other is None:
            return False
        cell.locked_door = direction
        other.locked_door = OPPOSITE[direction]
        return True

    def clear_lock(self, x: int, y: int, direction: str) -> bool:
        cell = self.get(x, y)
        if cell is None or cell.locked_door != direction:
            return False
        cell.locked_door = None
        other = self.neighbor_cell(x, y, direction)
        if other is not None and other.locked_door == OPPOSITE[direction]:
            other.locked_door = None
        return True

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------
    def can_pass(self, x: int, y: int, direction: str, has_key: bool = False) -> bool:
        """True when the edge is open and either unlocked or a key is available."""
        cell = self.get(x, y)
        if cell is None:
            return False
        if cell.walls[direction]:
            return False
        if cell.locked_door == direction and not has_key:
            return False
        return True

    def open_neighbors(self, x: int, y: int, ignore_locks: bool = True) -> List[Coord]:
        cell = self.get(x, y)
        if cell is None:
            return []
        out = []
        for d in DIRECTIONS:
            if cell.walls[d]:
                continue
            if not ignore_locks and cell.locked_door == d:
                continue
            nx, ny = self.neighbor(x, y, d)
            if self.in_bounds(nx, ny):
                out.append((nx, ny))
        return out

    # Topology can change after generation (locks, loops), so these scan every call.
    def dead_ends(self) -> List[Cell]:
        return [c for c in self.cells if c.is_dead_end()]

    def intersections(self) -> List[Cell]:
        return [c for c in self.cells if c.is_intersection()]

    def locked_edges(self) -> List[tuple]:
        """Each locked edge once, as (x, y, direction) from its right/bottom-facing side."""
        out = []
        for c in self.cells:
            if c.locked_door in (RIGHT, BOTTOM):
                out.append((c.x, c.y, c.locked_door))
        return out

    def reset_explored(self) -> None:
        for cell in self.cells:
            cell.explored = False

    def __repr__(self) -> str:
        return f"Grid({self.width}x{self.height})"


__all__ = ["Grid"]
