import os
import random
import sys
import time
from statistics import mean, pstdev

ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)

from mazechase.maze.generator import generate_maze  # noqa: E402
from mazechase.services.pathfinding import find_path  # noqa: E402

SEEDS = [11, 222, 3333, 4444, 55555]
SIZE = (35, 35)
QUERIES = 200


def run():
    runtimes = []
    for s in SEEDS:
        rng = random.Random(s)
        grid = generate_maze(*SIZE, loop_ratio=0.08, rng=rng)
        pairs = [
            (rng.randrange(SIZE[0]), rng.randrange(SIZE[1]), rng.randrange(SIZE[0]), rng.randrange(SIZE[1]))
            for _ in range(QUERIES)
        ]
        t0 = time.perf_counter()
        total_len = 0
        for sx, sy, gx, gy in pairs:
            path = find_path(grid, sx, sy, gx, gy)
            total_len += len(path) if path else 0
        t1 = time.perf_counter()
        per_query = (t1 - t0) * 1000 / QUERIES
        print(f"seed={s} queries={QUERIES} ms_per_query={per_query:.3f} avg_len={total_len / QUERIES:.1f}")
        runtimes.append(per_query)
    print("\nSummary:")
    print(
        f"count={len(runtimes)} avg_ms={mean(runtimes):.3f} sd_ms={pstdev(runtimes):.3f} min_ms={min(runtimes):.3f} max_ms={max(runtimes):.3f}"
    )


if __name__ == "__main__":
    run()
