from __future__ import annotations

import numpy as np

from .errors import TapeMemoryError


class Tape:
    """
    Unbounded tape of 8-bit cells, growable in both directions.

    Cells live in a single ``uint8`` buffer; logical index ``i`` is stored
    at ``cells[origin + i]``. When an index falls outside the buffer the
    capacity is doubled (or more) and the contents are recentered, so
    growth is amortized O(1) either way. Cells never written read as 0.
    """

    def __init__(self, size: int = 64):
        size = max(1, int(size))
        self.cells = np.zeros(size, dtype=np.uint8)
        self.origin = size // 2
        self.low = 0  # lowest visited index
        self.high = 0  # highest visited index

    def __len__(self) -> int:
        return self.high - self.low + 1

    def __getitem__(self, index: int) -> int:
        pos = self.origin + index
        if 0 <= pos < len(self.cells):
            return int(self.cells[pos])
        return 0

    def __setitem__(self, index: int, value: int) -> None:
        self.visit(index)
        self.cells[self.origin + index] = value & 0xFF

    @property
    def capacity(self) -> int:
        return len(self.cells)

    def visit(self, index: int) -> None:
        """Make sure ``index`` is backed by the buffer and mark it visited."""
        pos = self.origin + index
        if pos < 0 or pos >= len(self.cells):
            self._grow(index)
        if index < self.low:
            self.low = index
        elif index > self.high:
            self.high = index

    def _grow(self, index: int) -> None:
        low = min(self.low, index)
        high = max(self.high, index)
        used = high - low + 1
        new_size = max(len(self.cells) * 2, used * 2)
        try:
            cells = np.zeros(new_size, dtype=np.uint8)
        except MemoryError as exc:
            raise TapeMemoryError(
                message=f"tape exhausted host memory growing to {new_size} cells",
                cells=new_size,
            ) from exc
        origin = (new_size - used) // 2 - low
        old_low = self.origin + self.low
        cells[origin + self.low:origin + self.high + 1] = self.cells[old_low:self.origin + self.high + 1]
        self.cells = cells
        self.origin = origin

    def window(self) -> bytes:
        """Contents of every visited cell, lowest index first."""
        return self.cells[self.origin + self.low:self.origin + self.high + 1].tobytes()
