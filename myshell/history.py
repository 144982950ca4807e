from __future__ import annotations

from collections import deque
from collections.abc import Iterator

DEFAULT_HISTORY_SIZE = 10


class HistoryBuffer:
    """Fixed-capacity record of raw input lines; the oldest is evicted first."""

    def __init__(self, capacity: int = DEFAULT_HISTORY_SIZE) -> None:
        if capacity <= 0:
            raise ValueError(f"history capacity must be positive, got {capacity}")
        self._entries: deque[str] = deque(maxlen=capacity)

    @property
    def capacity(self) -> int:
        return self._entries.maxlen

    def add(self, line: str) -> None:
        self._entries.append(line)

    def entries(self) -> list[str]:
        """Return a snapshot of the stored lines, oldest first."""
        return list(self._entries)

    def numbered(self) -> list[tuple[int, str]]:
        """Return ``(index, line)`` pairs numbered from 1, oldest first."""
        return list(enumerate(self._entries, start=1))

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[str]:
        return iter(self.entries())
