"""Data tape: a row of fixed width cells backed by a numpy array."""

import numpy as np

from .config import DEFAULT_TAPE_CAPACITY, DEFAULT_TAPE_LENGTH
from .errors import TapeBoundsError


class DataTape:
    """Memory tape for the interpreter.

    Cells wrap at the width of ``dtype``. The tape starts at
    ``initial_length`` cells and grows (zero filled, doubling) when the
    pointer moves past its end, up to ``capacity`` cells.
    """

    def __init__(self, dtype=np.int64, initial_length=DEFAULT_TAPE_LENGTH, capacity=DEFAULT_TAPE_CAPACITY):
        self.dtype = np.dtype(dtype)
        self.capacity = capacity
        self.cells = np.zeros(initial_length, dtype=self.dtype)

    def __len__(self):
        return len(self.cells)

    def __getitem__(self, index):
        return self.cells[index]

    def __setitem__(self, index, value):
        self.cells[index] = self._wrap(int(value))

    def _wrap(self, value: int) -> int:
        # Out of range values wrap the same way cell arithmetic does
        bits = 8 * self.dtype.itemsize
        value %= 1 << bits
        if self.dtype.kind == "i" and value >= 1 << (bits - 1):
            value -= 1 << bits
        return value

    def add(self, index, amount):
        """Add ``amount`` to a cell, wrapping at the cell width."""
        # Slice arithmetic wraps silently where scalar arithmetic would warn
        self.cells[index : index + 1] += self.dtype.type(amount)

    def sub(self, index, amount):
        self.cells[index : index + 1] -= self.dtype.type(amount)

    def value(self, index) -> int:
        return int(self.cells[index])

    def is_zero(self, index) -> bool:
        return bool(self.cells[index] == 0)

    def check(self, index):
        """Make sure ``index`` addresses a cell, growing the tape if needed."""
        if index < 0:
            raise TapeBoundsError(f"data pointer moved left of cell 0 (to {index})")
        if index >= len(self.cells):
            if index >= self.capacity:
                raise TapeBoundsError(
                    f"data pointer moved past the tape capacity of {self.capacity} cells (to {index})"
                )
            self._grow(index + 1)

    def _grow(self, minimum):
        new_length = min(max(len(self.cells) * 2, minimum), self.capacity)
        grown = np.zeros(new_length, dtype=self.dtype)
        grown[: len(self.cells)] = self.cells
        self.cells = grown

    def window(self, start, end):
        return [int(v) for v in self.cells[start:end]]

    def __repr__(self):
        return f"DataTape(dtype={self.dtype.name}, length={len(self.cells)}, capacity={self.capacity})"
