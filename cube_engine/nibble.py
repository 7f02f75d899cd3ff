# cube_engine/nibble.py
from __future__ import annotations


def _fill_byte(value: int) -> int:
    v = value & 0x0F
    return (v << 4) | v


class NibbleArray:
    """
    `size` cells of 4 bits packed two per byte: even cells in the high
    nibble, odd cells in the low nibble of byte `i // 2`.
    """

    def __init__(self, size: int, init_value: int = 0x0F):
        if size <= 0:
            raise ValueError(f"size must be positive, got {size}")
        self.size = size
        self.data = bytearray([_fill_byte(init_value)]) * ((size + 1) // 2)

    def __len__(self) -> int:
        return self.size

    @property
    def storage_size(self) -> int:
        return len(self.data)

    def _check(self, pos: int) -> None:
        if not 0 <= pos < self.size:
            raise IndexError(f"nibble index out of range: {pos} (size {self.size})")

    def get(self, pos: int) -> int:
        self._check(pos)
        val = self.data[pos >> 1]
        if pos & 1:
            return val & 0x0F
        return val >> 4

    def set(self, pos: int, value: int) -> None:
        self._check(pos)
        i = pos >> 1
        cur = self.data[i]
        if pos & 1:
            self.data[i] = (cur & 0xF0) | (value & 0x0F)
        else:
            self.data[i] = (cur & 0x0F) | ((value & 0x0F) << 4)

    def fill(self, value: int) -> None:
        self.data[:] = bytes([_fill_byte(value)]) * len(self.data)
