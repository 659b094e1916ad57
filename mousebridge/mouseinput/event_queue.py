"""Thread-safe hand-off of button events from the UI thread to the pump."""

import threading
from typing import List

from .models import ButtonEvent


class ButtonEventQueue:
    """Mutex-guarded FIFO of pending :class:`ButtonEvent` objects.

    Producers (toolkit callbacks) never block beyond the short lock.
    :meth:`drain` swaps the backing list out under the lock, so the
    caller can dispatch the returned events without holding it.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._events: List[ButtonEvent] = []

    def put(self, evt: ButtonEvent) -> None:
        with self._lock:
            self._events.append(evt)

    def drain(self) -> List[ButtonEvent]:
        """Remove and return every queued event in arrival order."""
        with self._lock:
            events, self._events = self._events, []
        return events

    def clear(self) -> None:
        with self._lock:
            self._events = []

    def __len__(self) -> int:
        with self._lock:
            return len(self._events)
