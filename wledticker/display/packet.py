"""WLED realtime UDP packet encoding (DRGB mode)."""

from __future__ import annotations

from wledticker.rendering.compositor import PixelBuffer

PROTOCOL_DRGB = 2
DEFAULT_TIMEOUT_SECONDS = 2
HEADER_SIZE = 2


def drgb_header(timeout_seconds: int = DEFAULT_TIMEOUT_SECONDS) -> bytes:
    """Header for a DRGB frame.

    The second byte is how long WLED stays in realtime mode after the last
    packet before returning to its own effects.
    """
    if not 1 <= timeout_seconds <= 255:
        raise ValueError(f"Realtime timeout must be 1..255 seconds, got {timeout_seconds}.")
    return bytes((PROTOCOL_DRGB, timeout_seconds))


DRGB_HEADER = drgb_header()


def packet_size(width: int, height: int) -> int:
    return HEADER_SIZE + width * height * 3


def encode(buffer: PixelBuffer, header: bytes = DRGB_HEADER) -> bytes:
    """Prefix the raw buffer bytes with the packet header."""
    if len(header) != HEADER_SIZE:
        raise ValueError(f"Header must be {HEADER_SIZE} bytes, got {len(header)}.")
    return header + bytes(buffer.data)


__all__ = ["DRGB_HEADER", "HEADER_SIZE", "PROTOCOL_DRGB", "drgb_header", "encode", "packet_size"]
