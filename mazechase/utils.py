"""Small numeric helpers shared by the maze and AI modules."""

from __future__ import annotations

import random
from typing import List, TypeVar

T = TypeVar("T")


def manhattan(x1: int, y1: int, x2: int, y2: int) -> int:
    return abs(x1 - x2) + abs(y1 - y2)


def lerp(a: float, b: float, t: float) -> float:
    return a + (b - a) * t


def clamp(val, lo, hi):
    return lo if val < lo else hi if val > hi else val


def shuffle(items: List[T], rng=None) -> List[T]:
    """In-place Fisher-Yates shuffle through the injected rng; returns the list."""
    r = rng or random
    for i in range(len(items) - 1, 0, -1):
        j = r.randrange(i + 1)
        items[i], items[j] = items[j], items[i]
    return items


def parse_coord(text: str):
    """Parse "x,y" into an (x, y) tuple; raises ValueError on malformed input."""
    parts = text.split(",")
    if len(parts) != 2:
        raise ValueError(f"expected x,y but got {text!r}")
    return int(parts[0].strip()), int(parts[1].strip())


__all__ = ["manhattan", "lerp", "clamp", "shuffle", "parse_coord"]
