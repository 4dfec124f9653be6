"""
project: MazeChase
module: __init__.py

Maze-chase game core: maze generation, lock placement, A* pathfinding and the
enemy pursuit AI. Rendering, input and the game-state machine live outside
this package and talk to it through ``Grid``, ``Enemy`` and the level helpers.
"""

__version__ = "0.4.0"
