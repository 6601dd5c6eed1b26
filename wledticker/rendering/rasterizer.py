"""Convert text into a stream of glyph columns."""

from __future__ import annotations

from wledticker.rendering.font import glyph_of

SPACER_COLUMN = 0x00


def rasterize(text: str) -> list[int]:
    """Expand text into column bitmasks, one blank spacer after each glyph."""
    columns: list[int] = []
    for ch in text:
        columns.extend(glyph_of(ch))
        columns.append(SPACER_COLUMN)
    return columns


__all__ = ["SPACER_COLUMN", "rasterize"]
