"""List backed LIFO stack used to track loop nesting."""

from typing import Generic, List, TypeVar

from .errors import StackUnderflowError

T = TypeVar("T")


class Stack(Generic[T]):
    """Unbounded stack. Popping or peeking an empty stack raises."""

    def __init__(self):
        self._data: List[T] = []

    def push(self, value: T) -> None:
        self._data.append(value)

    def pop(self) -> T:
        """Remove and return the top element."""
        if not self._data:
            raise StackUnderflowError("pop from an empty stack (unmatched ']'?)")
        return self._data.pop()

    def peek(self) -> T:
        """Return the top element without removing it."""
        if not self._data:
            raise StackUnderflowError("peek on an empty stack")
        return self._data[-1]

    def is_empty(self) -> bool:
        return not self._data

    def __len__(self) -> int:
        return len(self._data)

    def __repr__(self) -> str:
        return f"Stack({self._data!r})"
