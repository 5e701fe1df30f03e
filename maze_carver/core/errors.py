class MazeError(RuntimeError):
    """Base class for failures that abort a generation run."""


class NoStartCellAvailable(MazeError):
    def __init__(self, width: int, height: int):
        super().__init__(f"No cells available for a start position in a {width}x{height} grid")
        self.width = width
        self.height = height


class NoEmptyCellFound(MazeError):
    def __init__(self, reason: str = "No passage cells found for entrance/exit"):
        super().__init__(reason)
