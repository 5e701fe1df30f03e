import unittest
import sys
import os
import random
from collections import deque

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from maze_carver.core.grid import Grid, CellState
from maze_carver.core.traversal import TraversalState
from maze_carver.core.errors import NoStartCellAvailable
from maze_carver.algo.base import Phase, StepResult
from maze_carver.algo.dfs import RecursiveBacktracker
from maze_carver.algo.prim import PrimsAlgorithm
from maze_carver.algo.registry import get_algorithm


def carve(algo_cls, w, h, seed):
    grid = Grid(w, h)
    state = TraversalState.for_grid(grid)
    algo = algo_cls(grid, state, random.Random(seed))
    algo.run_all()
    return grid, state, algo


def reachable_cells(grid, start):
    """Flood fill over passages, 1 position at a time."""
    seen = {start}
    queue = deque([start])
    while queue:
        x, y = queue.popleft()
        for dx, dy in ((0, 1), (1, 0), (0, -1), (-1, 0)):
            n = (x + dx, y + dy)
            if n not in seen and grid.contains(n) and grid.get(n) == CellState.PASSAGE:
                seen.add(n)
                queue.append(n)
    return {p for p in seen if grid.is_cell(p)}


class TestGenerators(unittest.TestCase):
    SIZES = [(3, 3), (5, 5), (4, 4), (11, 7), (21, 21), (15, 3)]

    def assert_perfect(self, grid, state):
        cells = set(grid.cells_iter())
        self.assertTrue(state.all_cells_visited())

        # Every cell carved and reachable
        for c in cells:
            self.assertEqual(grid.get(c), CellState.PASSAGE, f"cell {c} left uncarved")
        self.assertEqual(reachable_cells(grid, next(iter(cells))), cells)

        # Spanning tree: exactly cells - 1 carved links
        links = [p for p in grid.passages() if not grid.is_cell(p)]
        self.assertEqual(len(links), len(cells) - 1)

        # Nothing carved on the boundary ring or even/even lattice points
        for x, y in links:
            self.assertTrue(0 < x < grid.width - 1 and 0 < y < grid.height - 1)
            self.assertTrue((x % 2) != (y % 2))

    def test_prim_perfect_maze(self):
        for w, h in self.SIZES:
            for seed in range(5):
                grid, state, _ = carve(PrimsAlgorithm, w, h, seed)
                self.assert_perfect(grid, state)

    def test_dfs_perfect_maze(self):
        for w, h in self.SIZES:
            for seed in range(5):
                grid, state, _ = carve(RecursiveBacktracker, w, h, seed)
                self.assert_perfect(grid, state)

    def test_visited_cells_are_passages(self):
        for algo_cls in (PrimsAlgorithm, RecursiveBacktracker):
            grid, state, _ = carve(algo_cls, 13, 9, 7)
            for c in grid.cells_iter():
                if state.is_visited(c):
                    self.assertEqual(grid.get(c), CellState.PASSAGE)

    def test_five_by_five_example(self):
        for algo_cls in (PrimsAlgorithm, RecursiveBacktracker):
            grid, _, _ = carve(algo_cls, 5, 5, 1)
            links = [p for p in grid.passages() if not grid.is_cell(p)]
            self.assertEqual(len(links), 3)

    def test_dfs_first_step_carves_start(self):
        grid = Grid(9, 9)
        state = TraversalState.for_grid(grid)
        algo = RecursiveBacktracker(grid, state, random.Random(3))
        algo.initialize()
        self.assertEqual(algo.phase, Phase.STEPPING)
        self.assertEqual(list(grid.passages()), [])
        self.assertEqual(state.stack, [algo.start])

        self.assertEqual(algo.step(), StepResult.CONTINUE)
        self.assertEqual(list(grid.passages()), [algo.start])

    def test_dfs_stack_is_path(self):
        grid = Grid(11, 11)
        state = TraversalState.for_grid(grid)
        algo = RecursiveBacktracker(grid, state, random.Random(9))
        algo.initialize()
        while algo.step() is StepResult.CONTINUE:
            stack = state.stack
            self.assertEqual(stack[0], algo.start)
            for a, b in zip(stack, stack[1:]):
                self.assertEqual(abs(a[0] - b[0]) + abs(a[1] - b[1]), 2)
                mid = ((a[0] + b[0]) // 2, (a[1] + b[1]) // 2)
                self.assertEqual(grid.get(mid), CellState.PASSAGE)

    def test_prim_start_carved_by_first_step(self):
        grid = Grid(9, 9)
        state = TraversalState.for_grid(grid)
        algo = PrimsAlgorithm(grid, state, random.Random(3))
        algo.initialize()
        self.assertTrue(state.is_visited(algo.start))
        self.assertEqual(state.stack, [algo.start])
        # Nothing is carved until the first step
        self.assertEqual(list(grid.passages()), [])

        self.assertEqual(algo.step(), StepResult.CONTINUE)
        self.assertEqual(grid.get(algo.start), CellState.PASSAGE)
        self.assertEqual(len(list(grid.passages())), 3)

    def test_dfs_stops_before_stack_unwinds(self):
        for seed in range(5):
            grid, state, algo = carve(RecursiveBacktracker, 21, 21, seed)
            self.assertTrue(algo.done)
            self.assertTrue(state.all_cells_visited())
            self.assertTrue(state.stack, "every cell visited, the leftover stack is never unwound")

    def test_prim_frontier_shrinks_only_when_exhausted(self):
        grid = Grid(15, 11)
        state = TraversalState.for_grid(grid)
        algo = PrimsAlgorithm(grid, state, random.Random(6))
        algo.initialize()

        visited = {c for c in grid.cells_iter() if state.is_visited(c)}
        while not algo.done:
            top = state.peek()
            exhausted = not state.unvisited_neighbors(top)
            size = len(state.stack)
            count = state.visited_count

            algo.step()

            if exhausted:
                self.assertEqual(len(state.stack), size - 1)
            else:
                self.assertEqual(len(state.stack), size + 1)
            self.assertGreaterEqual(state.visited_count, count)

            # Once visited, always visited
            now = {c for c in grid.cells_iter() if state.is_visited(c)}
            self.assertTrue(visited <= now)
            visited = now

    def test_single_cell_maze(self):
        grid, state, algo = carve(PrimsAlgorithm, 3, 3, 0)
        self.assertTrue(algo.done)
        self.assertEqual(algo.step_count, 0)
        self.assertEqual(list(grid.passages()), [(1, 1)])

        grid, state, algo = carve(RecursiveBacktracker, 3, 3, 0)
        self.assertTrue(algo.done)
        self.assertEqual(list(grid.passages()), [(1, 1)])

    def test_no_start_cell(self):
        for algo_cls in (PrimsAlgorithm, RecursiveBacktracker):
            grid = Grid(1, 1)
            algo = algo_cls(grid, TraversalState.for_grid(grid), random.Random(0))
            with self.assertRaises(NoStartCellAvailable):
                algo.initialize()

    def test_step_after_done(self):
        grid, _, algo = carve(PrimsAlgorithm, 7, 7, 2)
        before = grid.to_rows()
        self.assertEqual(algo.step(), StepResult.DONE)
        self.assertEqual(grid.to_rows(), before)

    def test_determinism(self):
        w, h = 15, 15
        grid1, _, _ = carve(RecursiveBacktracker, w, h, 12345)

        grid2 = Grid(w, h)
        rec = RecursiveBacktracker(grid2, TraversalState.for_grid(grid2), random.Random(12345))
        for _ in rec.run(): pass

        self.assertEqual(grid1.cells.tobytes(), grid2.cells.tobytes())

    def test_registry(self):
        self.assertIs(get_algorithm("prim"), PrimsAlgorithm)
        self.assertIs(get_algorithm("DFS"), RecursiveBacktracker)
        self.assertIs(get_algorithm("backtracker"), RecursiveBacktracker)
        with self.assertRaises(ValueError):
            get_algorithm("kruskal")

if __name__ == '__main__':
    unittest.main()
