"""Pixel buffer and frame compositor for the LED matrix."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Sequence

RGB = tuple[int, int, int]
BYTES_PER_PIXEL = 3


@dataclass
class PixelBuffer:
    """Row-major RGB frame buffer, top row first, left to right."""

    width: int
    height: int
    data: bytearray = field(init=False, repr=False)

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise ValueError(f"Buffer size must be positive, got {self.width}x{self.height}.")
        self.data = bytearray(self.width * self.height * BYTES_PER_PIXEL)

    def __len__(self) -> int:
        return len(self.data)

    def clear(self) -> None:
        self.data[:] = bytes(len(self.data))

    def index_of(self, x: int, y: int) -> int:
        """Byte offset of the red channel for cell (x, y)."""
        return (y * self.width + x) * BYTES_PER_PIXEL

    def set_pixel(self, x: int, y: int, color: RGB) -> bool:
        """Write one cell; returns False and writes nothing when out of range."""
        if not (0 <= x < self.width and 0 <= y < self.height):
            return False
        base = self.index_of(x, y)
        if base < 0 or base + BYTES_PER_PIXEL > len(self.data):
            return False
        self.data[base : base + BYTES_PER_PIXEL] = bytes(color)
        return True

    def get_pixel(self, x: int, y: int) -> RGB:
        base = self.index_of(x, y)
        r, g, b = self.data[base : base + BYTES_PER_PIXEL]
        return r, g, b


def paint(buffer: PixelBuffer, columns: Sequence[int], offset: int, frame_color: RGB) -> None:
    """Clear the buffer and draw the column stream shifted right by offset."""
    buffer.clear()
    total_columns = len(columns)
    for x in range(buffer.width):
        src_index = x - offset
        if src_index < 0 or src_index >= total_columns:
            continue
        column = columns[src_index]
        if not column:
            continue
        for y in range(buffer.height):
            if (column >> y) & 1:
                buffer.set_pixel(x, y, frame_color)


__all__ = ["BYTES_PER_PIXEL", "PixelBuffer", "RGB", "paint"]
