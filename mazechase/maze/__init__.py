"""Public maze package interface."""

from .cells import Cell, Coord
from .directions import BOTTOM, DIRECTIONS, LEFT, OPPOSITE, RIGHT, TOP
from .distance import distance_map
from .generator import add_loops, carve_perfect_maze, generate_maze
from .grid import Grid
from .items import ItemType, PlacedItem, place_items, take_item
from .locks import Lock, bfs_path, place_locks, unlock

__all__ = [
    "Cell",
    "Coord",
    "Grid",
    "Lock",
    "TOP",
    "RIGHT",
    "BOTTOM",
    "LEFT",
    "DIRECTIONS",
    "OPPOSITE",
    "generate_maze",
    "carve_perfect_maze",
    "add_loops",
    "place_locks",
    "bfs_path",
    "unlock",
    "distance_map",
    "ItemType",
    "PlacedItem",
    "place_items",
    "take_item",
]
