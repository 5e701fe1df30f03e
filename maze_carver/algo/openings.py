import logging
import random
from dataclasses import dataclass
from typing import List, Optional, Tuple

from maze_carver.core.errors import NoEmptyCellFound
from maze_carver.core.grid import CellState, Grid

logger = logging.getLogger(__name__)

Position = Tuple[int, int]


@dataclass(frozen=True)
class Openings:
    entrance: Position
    exit: Position


def has_adjacent_passage(grid: Grid, pos: Position) -> bool:
    """True if one of the direction-vector neighbours inside the grid is a passage."""
    x, y = pos
    for dx, dy in Grid.DIRECTIONS:
        n = (x + dx, y + dy)
        if grid.contains(n) and grid.get(n) == CellState.PASSAGE:
            return True
    return False


def find_candidates(grid: Grid) -> List[Position]:
    """
    Passage positions that can anchor an entrance or exit.
    Only odd rows qualify: those are the rows where (0, y) and (width-1, y)
    lead straight into a cell.
    """
    passages = list(grid.passages())
    if not passages:
        raise NoEmptyCellFound()

    rows = [p for p in passages if p[1] % 2 == 1]
    candidates = [p for p in rows if has_adjacent_passage(grid, p)]
    if not candidates and grid.cell_count() == 1:
        # A lone cell has no neighbour to be adjacent to
        candidates = rows
    if not candidates:
        raise NoEmptyCellFound(
            f"None of the {len(passages)} passage cells is connected to another passage"
        )
    return candidates


def place_entrance_and_exit(grid: Grid, rng: Optional[random.Random] = None) -> Openings:
    """
    Punches the entrance through the left side of the frame and the exit
    through the right side. The frame is two positions thick (x = -1 plus the
    boundary column inside the grid), so two positions are carved per opening.
    """
    rng = rng if rng is not None else random.Random()
    candidates = find_candidates(grid)

    entrance_anchor = rng.choice(candidates)
    exit_pool = [c for c in candidates if c != entrance_anchor] or candidates
    exit_anchor = rng.choice(exit_pool)

    entrance = (-1, entrance_anchor[1])
    exit_ = (grid.width, exit_anchor[1])

    grid.carve(entrance)
    grid.carve((0, entrance[1]))
    grid.carve(exit_)
    grid.carve((grid.width - 1, exit_[1]))

    logger.debug(f"Entrance at {entrance}, exit at {exit_}")
    return Openings(entrance=entrance, exit=exit_)
