"""Bounded memory of recently issued opening questions."""

import threading
from collections import deque

DEFAULT_CAPACITY = 5


class RecentQuestions:
    """FIFO buffer of the last ``capacity`` opening questions.

    Only used to steer the judge away from repeating itself, so losing an entry
    is harmless. The lock covers the multi-worker case.
    """

    def __init__(self, capacity: int = DEFAULT_CAPACITY) -> None:
        if capacity < 1:
            raise ValueError(f"capacity must be >= 1, got {capacity}")
        self._items: deque[str] = deque(maxlen=capacity)
        self._lock = threading.Lock()

    @property
    def capacity(self) -> int:
        return self._items.maxlen or 0

    def record(self, question: str) -> None:
        with self._lock:
            self._items.append(question)

    def snapshot(self) -> list[str]:
        """Return retained questions, oldest first."""
        with self._lock:
            return list(self._items)
