from array import array
from typing import List, Tuple

from maze_carver.core.grid import Grid

Cell = Tuple[int, int]


class TraversalState:
    """
    Visited flags and the frontier stack for one generation run.
    Owned by the driver and handed to whichever algorithm is active.
    """

    __slots__ = ('width', 'height', 'visited', 'visited_count', 'cell_count', 'stack')

    def __init__(self, width: int = 0, height: int = 0):
        self.reset(width, height)

    def reset(self, width: int, height: int):
        self.width = max(width, 0)
        self.height = max(height, 0)
        # One byte per grid position, only odd/odd entries are ever set
        self.visited = array('B', [0] * (self.width * self.height))
        self.visited_count = 0
        self.cell_count = (self.width // 2) * (self.height // 2)
        self.stack: List[Cell] = []

    @classmethod
    def for_grid(cls, grid: Grid) -> "TraversalState":
        return cls(grid.width, grid.height)

    def clear(self):
        self.reset(0, 0)

    def contains(self, cell: Cell) -> bool:
        x, y = cell
        return 0 <= x < self.width and 0 <= y < self.height

    def get_index(self, cell: Cell) -> int:
        x, y = cell
        if 0 <= x < self.width and 0 <= y < self.height:
            return y * self.width + x
        raise IndexError(f"Coordinate ({x}, {y}) out of bounds")

    def mark_visited(self, cell: Cell):
        idx = self.get_index(cell)
        if not self.visited[idx]:
            self.visited[idx] = 1
            self.visited_count += 1

    def is_visited(self, cell: Cell) -> bool:
        return self.visited[self.get_index(cell)] != 0

    def all_cells_visited(self) -> bool:
        return self.visited_count >= self.cell_count

    def neighbors(self, cell: Cell) -> List[Cell]:
        x, y = cell
        result = []
        for dx, dy in Grid.DIRECTIONS:
            n = (x + dx, y + dy)
            if self.contains(n):
                result.append(n)
        return result

    def unvisited_neighbors(self, cell: Cell) -> List[Cell]:
        return [n for n in self.neighbors(cell) if not self.is_visited(n)]

    # Frontier stack
    def push(self, cell: Cell):
        self.stack.append(cell)

    def peek(self) -> Cell:
        return self.stack[-1]

    def pop(self) -> Cell:
        return self.stack.pop()
