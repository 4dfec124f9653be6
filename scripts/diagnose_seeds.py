#!/usr/bin/env python3
"""Maze structural diagnostics for specific seeds.

Usage:
  python scripts/diagnose_seeds.py 101 202 303

If no seeds are provided as CLI args, a default list is used.
Exits with non-zero status if structural issues are detected.
"""

from __future__ import annotations

import json
import os
import random
import sys
from typing import List

# Ensure project root on path if executed directly
ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)

from mazechase.maze.directions import DIRECTIONS, OPPOSITE  # noqa: E402 import after path fix
from mazechase.maze.distance import distance_map  # noqa: E402 import after path fix
from mazechase.services.level_service import build_level  # noqa: E402 import after path fix

DEFAULT_SEEDS = [101, 202, 303, 404, 505]
LEVELS = [1, 2, 3]


def asymmetric_walls(grid) -> int:
    bad = 0
    for cell in grid:
        for d in DIRECTIONS:
            n = grid.neighbor_cell(cell.x, cell.y, d)
            if n is not None and cell.walls[d] != n.walls[OPPOSITE[d]]:
                bad += 1
    return bad


def run_for_seed(seed: int, level_no: int) -> dict:
    level = build_level(level_no, rng=random.Random(seed))
    grid = level.grid
    reach = distance_map(grid, 0, 0)
    issues = {
        "unreachable_cells": len(grid) - len(reach),
        "asymmetric_walls": asymmetric_walls(grid),
        "enemies_on_start": sum(1 for e in level.enemies if e.pos == level.start),
        "keys_short": max(0, len(level.locks) - level.metrics["keys_placed"]),
    }
    return {
        "seed": seed,
        "level": level_no,
        "locks": len(level.locks),
        "metrics": {k: v for k, v in level.metrics.items() if k != "phase_ms"},
        "issues": issues,
        "ok": all(v == 0 for v in issues.values()),
    }


def main(argv: List[str]) -> int:
    seeds = [int(a) for a in argv] if argv else DEFAULT_SEEDS
    results = [run_for_seed(s, lv) for s in seeds for lv in LEVELS]
    print(json.dumps({"results": results}, indent=2))
    # Non-zero exit if any failure
    if not all(r["ok"] for r in results):
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main(sys.argv[1:]))
