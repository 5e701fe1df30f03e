import unittest
import sys
import os

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from maze_carver.core.traversal import TraversalState

class TestTraversalState(unittest.TestCase):
    def test_visited_monotonic(self):
        state = TraversalState(5, 5)
        self.assertFalse(state.is_visited((1, 1)))
        state.mark_visited((1, 1))
        state.mark_visited((1, 1))
        self.assertTrue(state.is_visited((1, 1)))
        self.assertEqual(state.visited_count, 1)

    def test_out_of_range_cells_rejected(self):
        state = TraversalState(5, 5)
        for cell in [(-1, 1), (5, 1), (1, -1), (1, 5)]:
            with self.assertRaises(IndexError):
                state.mark_visited(cell)
            with self.assertRaises(IndexError):
                state.is_visited(cell)
        # (-1, 1) would alias (4, 0) in the flat array
        self.assertFalse(state.is_visited((4, 0)))
        self.assertEqual(state.visited_count, 0)

    def test_all_cells_visited(self):
        state = TraversalState(5, 5)
        cells = [(1, 1), (1, 3), (3, 1), (3, 3)]
        for c in cells[:-1]:
            state.mark_visited(c)
            self.assertFalse(state.all_cells_visited())
        state.mark_visited(cells[-1])
        self.assertTrue(state.all_cells_visited())

    def test_neighbors_order_and_bounds(self):
        state = TraversalState(7, 7)
        self.assertEqual(state.neighbors((3, 3)), [(3, 5), (5, 3), (3, 1), (1, 3)])
        # Corner cell: (-1, 1) and (1, -1) are out of range
        self.assertEqual(state.neighbors((1, 1)), [(1, 3), (3, 1)])

    def test_unvisited_neighbors(self):
        state = TraversalState(7, 7)
        state.mark_visited((3, 5))
        state.mark_visited((1, 3))
        self.assertEqual(state.unvisited_neighbors((3, 3)), [(5, 3), (3, 1)])

    def test_stack(self):
        state = TraversalState(5, 5)
        state.push((1, 1))
        state.push((3, 1))
        self.assertEqual(state.peek(), (3, 1))
        self.assertEqual(state.pop(), (3, 1))
        self.assertEqual(state.stack, [(1, 1)])

    def test_reset_and_clear(self):
        state = TraversalState(5, 5)
        state.mark_visited((1, 1))
        state.push((1, 1))
        state.reset(5, 5)
        self.assertFalse(state.is_visited((1, 1)))
        self.assertEqual(state.stack, [])
        state.clear()
        self.assertEqual(state.cell_count, 0)

if __name__ == '__main__':
    unittest.main()
