"""Plain-text maze dump for the CLI and seed diagnostics.

Each cell is drawn two characters wide. Walls are ``|`` and ``--``; a locked
edge is drawn as ``L`` (vertical) or ``LL`` (horizontal). ``markers`` maps a
coordinate to a one- or two-character label placed inside that cell.
"""

from __future__ import annotations

from typing import Dict, Optional

from .cells import Coord
from .directions import BOTTOM, LEFT, RIGHT, TOP
from .grid import Grid


def _horizontal(cell, direction: str) -> str:
    if cell.walls[direction]:
        return "--"
    return "LL" if cell.locked_door == direction else "  "


def _vertical(cell, direction: str) -> str:
    if cell.walls[direction]:
        return "|"
    return "L" if cell.locked_door == direction else " "


def render_ascii(grid: Grid, markers: Optional[Dict[Coord, str]] = None) -> str:
    markers = markers or {}
    lines = []
    for y in range(grid.height):
        top = "+"
        row = ""
        for x in range(grid.width):
            cell = grid.get(x, y)
            top += _horizontal(cell, TOP) + "+"
            row += _vertical(cell, LEFT) + markers.get((x, y), "  ")[:2].ljust(2)
        row += _vertical(grid.get(grid.width - 1, y), RIGHT)
        lines.append(top)
        lines.append(row)
    bottom = "+"
    for x in range(grid.width):
        bottom += _horizontal(grid.get(x, grid.height - 1), BOTTOM) + "+"
    lines.append(bottom)
    return "\n".join(lines)


__all__ = ["render_ascii"]
