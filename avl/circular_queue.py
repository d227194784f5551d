"""Growable ring-buffer FIFO used for level-order traversal."""

from typing import TypeVar, Generic, List, Optional

T = TypeVar('T')

INITIAL_CAPACITY = 4


class CircularQueue(Generic[T]):
    def __init__(self, capacity: int = INITIAL_CAPACITY) -> None:
        if capacity < 1:
            raise ValueError("capacity must be positive")
        self._data: List[Optional[T]] = [None] * capacity
        self._head = 0
        self._tail = 0
        self._size = 0

    @property
    def capacity(self) -> int:
        return len(self._data)

    def enqueue(self, value: T) -> None:
        if self._size == len(self._data):
            self._grow()
        self._data[self._tail] = value
        self._tail = (self._tail + 1) % len(self._data)
        self._size += 1

    def dequeue(self) -> T:
        if self._size == 0:
            raise IndexError("dequeue from empty queue")
        value = self._data[self._head]
        self._data[self._head] = None
        self._head = (self._head + 1) % len(self._data)
        self._size -= 1
        return value

    def is_empty(self) -> bool:
        return self._size == 0

    def _grow(self) -> None:
        old = self._data
        data: List[Optional[T]] = [None] * (len(old) * 2)
        for i in range(self._size):
            data[i] = old[(self._head + i) % len(old)]
        self._data = data
        self._head = 0
        self._tail = self._size

    def __len__(self) -> int:
        return self._size

    def __bool__(self) -> bool:
        return self._size > 0
