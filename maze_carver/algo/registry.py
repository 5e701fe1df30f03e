from maze_carver.algo.dfs import RecursiveBacktracker
from maze_carver.algo.prim import PrimsAlgorithm

ALGORITHMS = {
    "prim": PrimsAlgorithm,
    "dfs": RecursiveBacktracker,
    "backtracker": RecursiveBacktracker,
}


def get_algorithm(name: str):
    try:
        return ALGORITHMS[name.lower()]
    except KeyError:
        raise ValueError(f"Unknown algorithm '{name}'. Choose from: {', '.join(sorted(ALGORITHMS))}") from None
