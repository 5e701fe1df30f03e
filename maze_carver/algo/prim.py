from maze_carver.algo.base import Generator, Phase, StepResult


class PrimsAlgorithm(Generator):
    """
    Randomized iterative Prim's. The stack is used as a plain frontier:
    a cell stays on it until all of its neighbours have been taken.
    """

    name = "prim"

    def initialize(self):
        self.phase = Phase.INITIALIZING
        self.start = self.pick_start()

        self.state.mark_visited(self.start)
        self.state.push(self.start)

        if self.state.all_cells_visited():
            # Single-cell maze: no step will ever carve the start
            self.grid.carve(self.start)
            self.phase = Phase.DONE
        else:
            # The first step carves the start as `current`
            self.phase = Phase.STEPPING

    def step(self) -> StepResult:
        if self.phase is Phase.IDLE:
            self.initialize()
        if self.phase is Phase.DONE:
            return StepResult.DONE

        current = self.state.peek()
        neighbors = self.state.unvisited_neighbors(current)

        if neighbors:
            nxt = self.rng.choice(neighbors)
            self.state.mark_visited(nxt)
            self.grid.carve_between(current, nxt)
            self.state.push(nxt)
        else:
            # Exhausted, drop it from the frontier
            self.state.pop()

        self.step_count += 1

        if self.state.all_cells_visited():
            self.phase = Phase.DONE
            return StepResult.DONE
        return StepResult.CONTINUE
