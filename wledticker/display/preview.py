"""Sink that writes frames to a PNG instead of the network."""

from __future__ import annotations

from wledticker.display.packet import HEADER_SIZE, packet_size
from wledticker.rendering.compositor import PixelBuffer
from wledticker.rendering.emulator import buffer_to_image, save_frame


class PreviewSink:
    """Decode each packet back into a buffer and save it as an image."""

    def __init__(self, width: int, height: int, path: str = "emulator_output/frame.png", scale: int = 8) -> None:
        self._buffer = PixelBuffer(width, height)
        self._path = path
        self._scale = scale
        self.frames_written = 0

    async def send(self, packet: bytes) -> None:
        expected = packet_size(self._buffer.width, self._buffer.height)
        if len(packet) != expected:
            raise ValueError(f"Packet size mismatch. Expected {expected}, got {len(packet)}.")
        self._buffer.data[:] = packet[HEADER_SIZE:]
        save_frame(buffer_to_image(self._buffer, scale=self._scale), self._path)
        self.frames_written += 1


__all__ = ["PreviewSink"]
