import sys
import os
import time

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from maze_carver.config import CarveConfig
from maze_carver.driver import MazeDriver

def benchmark_size(width: int, height: int):
    print(f"\n--- Benchmarking {width}x{height} ---")

    for algo in ("prim", "dfs"):
        driver = MazeDriver(CarveConfig(width=width, height=height, algorithm=algo, seed=42, instant=True))

        gen_start = time.perf_counter()
        run = driver.generate()
        gen_time = time.perf_counter() - gen_start

        cells = driver.grid.cell_count()
        print(f"{algo.upper():<5} Generation Time: {gen_time:.4f}s, {run.steps} steps")
        print(f"{algo.upper():<5} Speed: {cells / gen_time:,.0f} cells/sec")

def run_suite():
    sizes = [
        (51, 51),
        (201, 201),
        (501, 501),
    ]

    for w, h in sizes:
        benchmark_size(w, h)

if __name__ == "__main__":
    run_suite()
