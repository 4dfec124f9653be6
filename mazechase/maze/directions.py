# Wall directions, ordered the way every scan in the package walks them
TOP = "top"
RIGHT = "right"
BOTTOM = "bottom"
LEFT = "left"
DIRECTIONS = (TOP, RIGHT, BOTTOM, LEFT)

OFFSETS = {
    TOP: (0, -1),
    RIGHT: (1, 0),
    BOTTOM: (0, 1),
    LEFT: (-1, 0),
}

OPPOSITE = {TOP: BOTTOM, RIGHT: LEFT, BOTTOM: TOP, LEFT: RIGHT}

# Player facing uses movement names rather than wall names
FACING_OFFSETS = {
    "up": (0, -1),
    "down": (0, 1),
    "left": (-1, 0),
    "right": (1, 0),
}


def direction_between(x1: int, y1: int, x2: int, y2: int):
    """Wall direction leading from (x1,y1) to an orthogonally adjacent (x2,y2), else None."""
    dx, dy = x2 - x1, y2 - y1
    if dx == 1 and dy == 0:
        return RIGHT
    if dx == -1 and dy == 0:
        return LEFT
    if dy == 1 and dx == 0:
        return BOTTOM
    if dy == -1 and dx == 0:
        return TOP
    return None


__all__ = [
    "TOP",
    "RIGHT",
    "BOTTOM",
    "LEFT",
    "DIRECTIONS",
    "OFFSETS",
    "OPPOSITE",
    "FACING_OFFSETS",
    "direction_between",
]
