import random

import pytest

from mazechase.maze import Grid, Lock, bfs_path, generate_maze, place_locks, unlock
from mazechase.maze.directions import LEFT, OPPOSITE, RIGHT
from tests.maze_test_utils import asymmetric_edges, corridor


def test_zero_or_negative_lock_count(maze15):
    assert place_locks(maze15, 0) == []
    assert place_locks(maze15, -2) == []
    assert maze15.locked_edges() == []


def test_short_backbone_gets_no_locks():
    g = corridor(5)
    assert place_locks(g, 1) == []
    assert g.locked_edges() == []


def test_corridor_lock_sits_on_segment_boundary():
    g = corridor(8)
    locks = place_locks(g, 1)
    # 8-cell path, 2 segments of 4: lock on the edge leaving path[4]
    assert locks == [Lock(4, 0, RIGHT)]
    assert g.get(4, 0).locked_door == RIGHT
    assert g.get(5, 0).locked_door == LEFT


def test_colliding_slots_emit_fewer_locks():
    g = corridor(6)
    locks = place_locks(g, 5)
    assert locks == [Lock(1, 0, RIGHT), Lock(3, 0, RIGHT)]


@pytest.mark.parametrize("seed", [3, 11, 29])
def test_locks_lie_on_backbone_and_mirror(seed):
    g = generate_maze(15, 15, loop_ratio=0.08, rng=random.Random(seed))
    backbone = bfs_path(g, 0, 0, 14, 14)
    locks = place_locks(g, 3)
    assert len(locks) == 3
    segment = len(backbone) // 4
    edges = set(zip(backbone, backbone[1:]))
    for i, lk in enumerate(locks):
        here = (lk.x, lk.y)
        there = g.neighbor(lk.x, lk.y, lk.direction)
        assert here == backbone[segment * (i + 1)]
        assert (here, there) in edges
        assert not g.get(*here).walls[lk.direction]
        assert g.get(*there).locked_door == OPPOSITE[lk.direction]
    # Locks never touch wall flags
    assert asymmetric_edges(g) == []


def test_bfs_path_none_when_disconnected():
    g = Grid(3, 1)
    g.remove_wall(g.get(0, 0), g.get(1, 0), RIGHT)
    assert bfs_path(g, 0, 0, 2, 0) is None
    assert bfs_path(g, 0, 0, 1, 0) == [(0, 0), (1, 0)]
    assert bfs_path(g, 0, 0, 7, 7) is None
    assert place_locks(g, 2) == []


def test_unlock_clears_both_sides():
    g = corridor(8)
    (lk,) = place_locks(g, 1)
    assert unlock(g, lk.x, lk.y, lk.direction) is True
    assert g.locked_edges() == []
    assert unlock(g, lk.x, lk.y, lk.direction) is False
