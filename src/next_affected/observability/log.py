"""Event log — the bounded record of one run.

Runs are single-threaded and short, so the log is a plain ring buffer read
back by event type when the verbose summary is printed.
"""

from collections import deque

from next_affected.observability.events import RunEvent


class EventLog:
    """Most recent ``RunEvent`` objects, oldest dropped first.

    Args:
        max_events: Capacity of the ring buffer.

    """

    __slots__ = ("_events",)

    def __init__(self, max_events: int = 10_000) -> None:
        self._events: deque[RunEvent] = deque(maxlen=max_events)

    def append(self, event: RunEvent) -> None:
        self._events.append(event)

    def query(self, *, event_type: type | None = None, limit: int = 100) -> list[RunEvent]:
        """Return up to *limit* events of *event_type* (any type if None), newest first."""
        matches = (
            event
            for event in reversed(self._events)
            if event_type is None or isinstance(event, event_type)
        )
        return [event for _, event in zip(range(limit), matches)]

    def __len__(self) -> int:
        return len(self._events)
