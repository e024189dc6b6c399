from __future__ import annotations

from collections import deque
from typing import Deque


class ReadyQueue:
    """
    FIFO of process indices for Round Robin.

    Push and pop are amortized O(1); the queue grows without bound.
    """

    def __init__(self) -> None:
        self._items: Deque[int] = deque()

    def push(self, index: int) -> None:
        self._items.append(index)

    def pop(self) -> int:
        """
        Remove and return the head of the queue.

        Raises IndexError on an empty queue; callers check ``is_empty`` first.
        """
        if not self._items:
            raise IndexError("pop from an empty ready queue")
        return self._items.popleft()

    def is_empty(self) -> bool:
        return not self._items

    def __len__(self) -> int:
        return len(self._items)
