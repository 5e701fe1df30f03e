import logging
import random
import time
from typing import Callable, Iterator, Optional

from maze_carver.algo.base import Generator, StepResult
from maze_carver.algo.openings import Openings, place_entrance_and_exit
from maze_carver.algo.registry import get_algorithm
from maze_carver.config import CarveConfig
from maze_carver.core.errors import MazeError
from maze_carver.core.events import EventSink
from maze_carver.core.grid import Grid
from maze_carver.core.traversal import TraversalState

logger = logging.getLogger(__name__)


class CarveRun:
    """Everything owned by a single generation run. Dropping it cancels the run."""

    def __init__(self, generator: Generator, rng: random.Random):
        self.generator = generator
        self.rng = rng
        self.openings: Optional[Openings] = None
        self.finished = False

    @property
    def steps(self) -> int:
        return self.generator.step_count


class MazeDriver:
    """
    Runs one generation at a time, either straight to completion (instant)
    or one step per call so a host loop can animate between steps.
    """

    def __init__(self, config: Optional[CarveConfig] = None, sink: Optional[EventSink] = None,
                 rng: Optional[random.Random] = None):
        self.config = config or CarveConfig()
        self.sink = sink
        self.rng = rng
        self.grid = Grid(sink=sink)
        self.state = TraversalState()
        self.run: Optional[CarveRun] = None

    def attach(self, sink: Optional[EventSink]):
        self.sink = sink
        self.grid.sink = sink

    @property
    def running(self) -> bool:
        return self.run is not None and not self.run.finished

    @property
    def openings(self) -> Optional[Openings]:
        return self.run.openings if self.run else None

    def _make_rng(self) -> random.Random:
        if self.rng is not None:
            return self.rng
        return random.Random(self.config.seed)

    def cancel(self):
        """Abandons the in-flight run. Nothing of it is kept or resumed."""
        if self.running:
            logger.info(f"Cancelling {self.run.generator.name} run after {self.run.steps} steps")
        self.run = None
        self.state.clear()

    def generate(self, algorithm: Optional[str] = None, instant: Optional[bool] = None) -> CarveRun:
        """
        Starts a new run, halting any previous one first.
        With instant=True the run completes before this returns and no
        step events are emitted; otherwise call step() until it reports DONE.
        """
        self.cancel()

        name = algorithm or self.config.algorithm
        instant = self.config.instant if instant is None else instant
        algo_cls = get_algorithm(name)

        self.grid.reset(self.config.width, self.config.height)
        self.state.reset(self.grid.width, self.grid.height)

        rng = self._make_rng()
        generator = algo_cls(self.grid, self.state, rng)
        self.run = CarveRun(generator, rng)

        logger.info(f"Generating {self.grid.width}x{self.grid.height} maze with {generator.name.upper()} "
                    f"({'instant' if instant else 'stepped'})")

        self._guard(generator.initialize)

        if instant:
            self.run_to_completion()
        return self.run

    def _guard(self, fn: Callable):
        try:
            return fn()
        except MazeError as e:
            logger.error(f"Generation failed: {e}")
            self.run = None
            self.state.clear()
            raise

    def _finish(self):
        run = self.run
        run.openings = self._guard(lambda: place_entrance_and_exit(self.grid, run.rng))
        run.finished = True
        logger.info(f"Maze done in {run.steps} steps. Entrance {run.openings.entrance}, exit {run.openings.exit}")
        if self.sink:
            self.sink.on_complete(run.openings)

    def step(self) -> StepResult:
        """Advances the active run by exactly one step."""
        run = self.run
        if run is None or run.finished:
            return StepResult.DONE

        generator = run.generator
        if not generator.done:
            self._guard(generator.step)
            if self.sink:
                self.sink.on_step(generator.step_count)

        if generator.done:
            self._finish()
            return StepResult.DONE
        return StepResult.CONTINUE

    def run_to_completion(self):
        """Synchronous mode: no step is observable from outside."""
        run = self.run
        if run is None or run.finished:
            return
        self._guard(run.generator.run_all)
        self._finish()

    def play(self, delay: Optional[float] = None, sleep: Callable[[float], None] = time.sleep) -> Iterator[StepResult]:
        """
        Steps the active run, pausing `delay` seconds (config.step_delay by
        default) between steps. Stops early if the run is cancelled or replaced.
        """
        delay = self.config.step_delay if delay is None else delay
        run = self.run
        while run is not None and self.run is run and not run.finished:
            result = self.step()
            yield result
            if result is StepResult.DONE:
                break
            if delay > 0:
                sleep(delay)
