"""Item placement on a finished maze.

Keys go to dead ends so collecting one is always a detour; coins go to
intersections along the main routes. Power-ups take whatever dead ends (or,
for boots and shields, intersections) remain. Cells within ``exclude_radius``
of the start corner or the exit corner never get an item.

Placement order: keys, coins, boots, shield, freeze, map (map only from
``map_min_level`` on). Each category silently places fewer items when its
cell pool runs dry; callers compare ``len`` of the keys placed against the
lock count when that matters.
"""

from __future__ import annotations

import random
from enum import Enum
from typing import Callable, List, NamedTuple, Optional

from ..config import ItemConfig, get_config
from ..logging_utils import get_logger
from ..utils import shuffle
from .cells import Cell
from .grid import Grid

log = get_logger("maze")


class ItemType(str, Enum):
    KEY = "key"
    COIN = "coin"
    BOOTS = "boots"
    SHIELD = "shield"
    FREEZE = "freeze"
    MAP = "map"


class PlacedItem(NamedTuple):
    item_type: ItemType
    x: int
    y: int


def _excluded(grid: Grid, cell: Cell, radius: int) -> bool:
    near_start = cell.x <= radius and cell.y <= radius
    near_exit = cell.x >= grid.width - 1 - radius and cell.y >= grid.height - 1 - radius
    return near_start or near_exit


def _pool(cells: List[Cell]) -> Callable[[], Optional[Cell]]:
    """Cursor over ``cells`` yielding the next one without an item, then None."""
    it = iter(cells)

    def take() -> Optional[Cell]:
        for cell in it:
            if cell.item is None:
                return cell
        return None

    return take


def place_items(
    grid: Grid,
    num_keys: int,
    level: int,
    rng=None,
    *,
    config: Optional[ItemConfig] = None,
) -> List[PlacedItem]:
    cfg = config or get_config().items
    r = rng or random
    dead_ends = shuffle(grid.dead_ends(), r)
    intersections = shuffle(grid.intersections(), r)
    next_dead_end = _pool([c for c in dead_ends if not _excluded(grid, c, cfg.exclude_radius)])
    next_intersection = _pool([c for c in intersections if not _excluded(grid, c, cfg.exclude_radius)])

    def either() -> Optional[Cell]:
        return next_dead_end() or next_intersection()

    plan = [
        (ItemType.KEY, max(num_keys, 0), next_dead_end),
        (ItemType.COIN, cfg.coin_base + level * cfg.coin_per_level, next_intersection),
        (ItemType.BOOTS, cfg.boots_base + level // 2, either),
        (ItemType.SHIELD, cfg.shield_count, either),
        (ItemType.FREEZE, cfg.freeze_count, next_dead_end),
        (ItemType.MAP, 1 if level >= cfg.map_min_level else 0, next_dead_end),
    ]

    placed: List[PlacedItem] = []
    for item_type, count, source in plan:
        for _ in range(count):
            cell = source()
            if cell is None:
                break
            cell.item = item_type
            placed.append(PlacedItem(item_type, cell.x, cell.y))

    keys = sum(1 for p in placed if p.item_type == ItemType.KEY)
    log.info(event="items_placed", keys=keys, keys_wanted=num_keys, total=len(placed))
    return placed


def take_item(grid: Grid, x: int, y: int) -> Optional[ItemType]:
    """Remove and return the item on a cell (None when empty or out of bounds)."""
    cell = grid.get(x, y)
    if cell is None or cell.item is None:
        return None
    item, cell.item = cell.item, None
    return item


__all__ = ["ItemType", "PlacedItem", "place_items", "take_item"]
