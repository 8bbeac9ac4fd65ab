"""
recorder.py
Keeps a GameSession's event stream in memory. The stream lives only as long as the process; hosts that want
a replay file serialize recorder.events() themselves.
Related modules:
- events.py: GameEvent and the event type names.
- serializer.py: JSON encoding of the stream.
"""

from typing import Iterator, List

from .events import GameEvent


class InMemoryRecorder:
    """
    Ordered, append-only list of GameEvent objects, cleared when a new game is seated.
    """
    def __init__(self):
        self._log: List[GameEvent] = []

    def record(self, event: GameEvent) -> None:
        self._log.append(event)

    def events(self) -> List[GameEvent]:
        """Copy of the stream, oldest first."""
        return list(self._log)

    def of_type(self, event_type: str) -> List[GameEvent]:
        """Events of a single type, e.g. every 'BidPlaced' this game."""
        return [e for e in self._log if e.event_type == event_type]

    def clear(self) -> None:
        self._log.clear()

    def __iter__(self) -> Iterator[GameEvent]:
        return iter(list(self._log))

    def __len__(self) -> int:
        return len(self._log)
