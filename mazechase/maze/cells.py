from typing import Any, Dict, List, Optional, Tuple

from .directions import DIRECTIONS

Coord = Tuple[int, int]


class Cell:
    """One maze square: four independent wall flags plus lock and fog state."""

    __slots__ = ("x", "y", "walls", "visited", "explored", "item", "locked_door")

    def __init__(self, x: int, y: int):
        self.x = x
        self.y = y
        self.walls: Dict[str, bool] = {d: True for d in DIRECTIONS}
        self.visited = False  # carve scratch only
        self.explored = False
        self.item: Optional[Any] = None
        self.locked_door: Optional[str] = None

    @property
    def pos(self) -> Coord:
        return (self.x, self.y)

    def open_directions(self) -> List[str]:
        return [d for d in DIRECTIONS if not self.walls[d]]

    def open_count(self) -> int:
        return sum(1 for d in DIRECTIONS if not self.walls[d])

    def is_dead_end(self) -> bool:
        return self.open_count() == 1

    def is_intersection(self) -> bool:
        return self.open_count() >= 3

    def to_dict(self):
        return {
            "x": self.x,
            "y": self.y,
            "walls": dict(self.walls),
            "locked_door": self.locked_door,
            "item": getattr(self.item, "value", self.item),
            "explored": self.explored,
        }

    def __repr__(self) -> str:
        return f"Cell({self.x}, {self.y}, open={self.open_directions()})"


__all__ = ["Cell", "Coord"]
