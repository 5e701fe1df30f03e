import random
from abc import ABC, abstractmethod
from enum import Enum
from typing import Iterator, Optional, Tuple

from maze_carver.core.errors import NoStartCellAvailable
from maze_carver.core.grid import Grid
from maze_carver.core.traversal import TraversalState


class Phase(Enum):
    IDLE = "idle"
    INITIALIZING = "initializing"
    STEPPING = "stepping"
    DONE = "done"


class StepResult(Enum):
    CONTINUE = "continue"
    DONE = "done"


class Generator(ABC):
    """
    One carving strategy. The grid and traversal state belong to the caller;
    the generator only mutates them, one step() at a time.
    """

    name = "base"

    def __init__(self, grid: Grid, state: TraversalState, rng: Optional[random.Random] = None):
        self.grid = grid
        self.state = state
        self.rng = rng if rng is not None else random.Random()
        self.phase = Phase.IDLE
        self.start: Optional[Tuple[int, int]] = None
        self.step_count = 0

    @property
    def done(self) -> bool:
        return self.phase is Phase.DONE

    def pick_start(self) -> Tuple[int, int]:
        available = list(self.grid.cells_iter())
        if not available:
            raise NoStartCellAvailable(self.grid.width, self.grid.height)
        return self.rng.choice(available)

    @abstractmethod
    def initialize(self):
        """Chooses the start cell and seeds the frontier stack."""
        pass

    @abstractmethod
    def step(self) -> StepResult:
        """Performs exactly one carving step."""
        pass

    def run(self) -> Iterator[StepResult]:
        if self.phase is Phase.IDLE:
            self.initialize()
        while not self.done:
            yield self.step()

    def run_all(self):
        """Helper to run the generator to completion."""
        for _ in self.run():
            pass
