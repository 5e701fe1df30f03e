from array import array
from enum import IntEnum
from typing import Dict, Iterator, List, Optional, Tuple

Position = Tuple[int, int]


class CellState(IntEnum):
    WALL = 0
    PASSAGE = 1
    BOUNDARY = 2


def make_odd(n: int) -> int:
    """Rounds an even dimension up to the next odd value."""
    return n + 1 if n % 2 == 0 else n


class Grid:
    # Cells sit on odd/odd coordinates, walls on everything else.
    # Stepping 2 jumps over exactly one wall position.
    DIRECTIONS = (
        (0, 2),   # Up
        (2, 0),   # Right
        (0, -2),  # Down
        (-2, 0),  # Left
    )

    __slots__ = ('width', 'height', 'cells', 'openings', 'sink')

    def __init__(self, width: int = 0, height: int = 0, sink=None):
        self.sink = sink
        self.width = 0
        self.height = 0
        self.cells = array('B')
        # Frame positions (x == -1 or x == width) opened by entrance/exit placement
        self.openings: Dict[Position, CellState] = {}
        if width or height:
            self.reset(width, height)

    def reset(self, width: int, height: int):
        """
        Normalizes the dimensions to odd values and refills the lattice.
        The sink only sees a single reset notification, never the per-position fill.
        """
        self.width = make_odd(width)
        self.height = make_odd(height)
        self.openings = {}

        w, h = max(self.width, 0), max(self.height, 0)
        cells = array('B', [int(CellState.WALL)] * (w * h))
        for y in range(h):
            for x in range(w):
                if x == 0 or y == 0 or x == w - 1 or y == h - 1:
                    cells[y * w + x] = int(CellState.BOUNDARY)
        self.cells = cells

        if self.sink:
            self.sink.on_reset(self.width, self.height)

    def contains(self, pos: Position) -> bool:
        x, y = pos
        return 0 <= x < self.width and 0 <= y < self.height

    def is_cell(self, pos: Position) -> bool:
        x, y = pos
        return self.contains(pos) and x % 2 == 1 and y % 2 == 1

    def _is_opening_column(self, pos: Position) -> bool:
        x, y = pos
        return (x == -1 or x == self.width) and 0 <= y < self.height

    def _is_frame(self, pos: Position) -> bool:
        x, y = pos
        return -1 <= x <= self.width and -1 <= y <= self.height and not self.contains(pos)

    def get_index(self, x: int, y: int) -> int:
        if 0 <= x < self.width and 0 <= y < self.height:
            return y * self.width + x
        raise IndexError(f"Coordinate ({x}, {y}) out of bounds")

    def get(self, pos: Position) -> CellState:
        if self.contains(pos):
            return CellState(self.cells[pos[1] * self.width + pos[0]])
        if self._is_frame(pos):
            return self.openings.get(pos, CellState.BOUNDARY)
        raise IndexError(f"Coordinate {pos} out of bounds")

    def set(self, pos: Position, state: CellState):
        """
        Writes one position. The entrance column (x = -1) and the exit column
        (x = width) are writable so the boundary frame can be punched through.
        """
        if self.contains(pos):
            idx = pos[1] * self.width + pos[0]
            if self.cells[idx] == state:
                return
            self.cells[idx] = int(state)
        elif self._is_opening_column(pos):
            if self.openings.get(pos) == state:
                return
            self.openings[pos] = CellState(state)
        else:
            raise IndexError(f"Coordinate {pos} out of bounds")

        if self.sink:
            self.sink.on_cell(pos, CellState(state))

    def carve(self, pos: Position):
        self.set(pos, CellState.PASSAGE)

    def carve_between(self, current: Position, neighbor: Position):
        """Carves current, neighbor and the wall position between them."""
        wall = ((current[0] + neighbor[0]) // 2, (current[1] + neighbor[1]) // 2)
        self.carve(wall)
        self.carve(current)
        self.carve(neighbor)

    def cells_iter(self) -> Iterator[Position]:
        """Yields every odd/odd cell position, column by column."""
        for x in range(1, self.width, 2):
            for y in range(1, self.height, 2):
                yield (x, y)

    def cell_count(self) -> int:
        if self.width < 2 or self.height < 2:
            return 0
        return (self.width // 2) * (self.height // 2)

    def passages(self) -> Iterator[Position]:
        for x in range(self.width):
            for y in range(self.height):
                if self.cells[y * self.width + x] == CellState.PASSAGE:
                    yield (x, y)

    def to_rows(self, include_frame: bool = False) -> List[List[CellState]]:
        if not include_frame:
            return [
                [CellState(self.cells[y * self.width + x]) for x in range(self.width)]
                for y in range(self.height)
            ]
        return [
            [self.get((x, y)) for x in range(-1, self.width + 1)]
            for y in range(-1, self.height + 1)
        ]

    def render_text(self, wall: str = "#", passage: str = " ", pending: Optional[str] = None) -> str:
        """
        ASCII picture of the maze including the outer frame.
        Row 0 is printed last so 'up' (+y) points up on screen.
        """
        if pending is None:
            pending = wall
        lines = []
        for y in range(self.height, -2, -1):
            line = []
            for x in range(-1, self.width + 1):
                state = self.get((x, y))
                if state == CellState.PASSAGE:
                    line.append(passage)
                elif self.is_cell((x, y)):
                    line.append(pending)
                else:
                    line.append(wall)
            lines.append("".join(line))
        return "\n".join(lines)
