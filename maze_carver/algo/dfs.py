from maze_carver.algo.base import Generator, Phase, StepResult


class RecursiveBacktracker(Generator):
    name = "dfs"

    def initialize(self):
        self.phase = Phase.INITIALIZING
        self.start = self.pick_start()
        # Start is pushed but not carved; the first step carves it
        self.state.push(self.start)
        self.phase = Phase.STEPPING

    def step(self) -> StepResult:
        if self.phase is Phase.IDLE:
            self.initialize()
        if self.phase is Phase.DONE:
            return StepResult.DONE

        if self.step_count == 0:
            self.grid.carve(self.start)
            self.step_count += 1
            return StepResult.CONTINUE

        current = self.state.peek()
        self.state.mark_visited(current)

        neighbors = self.state.unvisited_neighbors(current)
        if neighbors:
            nxt = self.rng.choice(neighbors)
            self.grid.carve_between(current, nxt)
            self.state.push(nxt)
        else:
            # Backtrack
            self.grid.carve(current)
            self.state.pop()

        self.step_count += 1

        # Once every cell is in the tree the rest of the stack only unwinds
        if not self.state.stack or self.state.all_cells_visited():
            self.phase = Phase.DONE
            return StepResult.DONE
        return StepResult.CONTINUE
