from typing import Iterable, List, Tuple

# Event Types
EVT_INIT = 0x01
EVT_CELL = 0x02
EVT_STEP = 0x03
EVT_DONE = 0x04


class EventSink:
    """
    Receives the engine's notifications. Every hook is a no-op here,
    so consumers override only what they care about.
    """

    def on_reset(self, width: int, height: int):
        pass

    def on_cell(self, pos: Tuple[int, int], state):
        pass

    def on_step(self, index: int):
        pass

    def on_complete(self, openings):
        pass


class SinkGroup(EventSink):
    """Fans every event out to several sinks, in order."""

    def __init__(self, sinks: Iterable[EventSink] = ()):
        self.sinks: List[EventSink] = [s for s in sinks if s is not None]

    def add(self, sink: EventSink):
        self.sinks.append(sink)

    def on_reset(self, width, height):
        for sink in self.sinks:
            sink.on_reset(width, height)

    def on_cell(self, pos, state):
        for sink in self.sinks:
            sink.on_cell(pos, state)

    def on_step(self, index):
        for sink in self.sinks:
            sink.on_step(index)

    def on_complete(self, openings):
        for sink in self.sinks:
            sink.on_complete(openings)


class EventRecorder(EventSink):
    """Keeps an in-memory log of (type_code, payload) tuples."""

    def __init__(self):
        self.events: List[Tuple[int, tuple]] = []

    def on_reset(self, width, height):
        self.events.append((EVT_INIT, (width, height)))

    def on_cell(self, pos, state):
        self.events.append((EVT_CELL, (pos[0], pos[1], int(state))))

    def on_step(self, index):
        self.events.append((EVT_STEP, (index,)))

    def on_complete(self, openings):
        self.events.append((EVT_DONE, (openings.entrance, openings.exit)))

    def of_type(self, type_code: int) -> List[tuple]:
        return [data for code, data in self.events if code == type_code]

    def clear(self):
        self.events = []
