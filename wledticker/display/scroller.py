"""Scroll animator and fixed-cadence frame pump."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
import logging
import time
from typing import Awaitable, Callable, Protocol

from wledticker.display.packet import DRGB_HEADER, encode
from wledticker.rendering.color import ColorGenerator
from wledticker.rendering.compositor import PixelBuffer, paint
from wledticker.rendering.rasterizer import rasterize

logger = logging.getLogger(__name__)

DEFAULT_FRAME_INTERVAL = 0.024
BLANK_GAP_FRAMES = 2


class FrameSink(Protocol):
    async def send(self, packet: bytes) -> None: ...


@dataclass(frozen=True)
class ScrollResult:
    """Summary of one scroll pass."""

    columns: int
    frames_sent: int
    blank_frames_sent: int


def pacing_delay(interval: float, elapsed: float) -> float:
    """Time to wait after a frame; a frame that overran waits a full interval."""
    delay = interval - elapsed
    if delay < 0:
        return interval
    return delay


class Scroller:
    """Scroll messages across the matrix, one paced frame at a time.

    The scroller owns its pixel buffer. Each frame's color is computed once
    before painting, and each send is awaited before the pacing delay.
    """

    def __init__(
        self,
        buffer: PixelBuffer,
        sink: FrameSink,
        colors: ColorGenerator,
        frame_interval: float = DEFAULT_FRAME_INTERVAL,
        header: bytes = DRGB_HEADER,
        monotonic: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], Awaitable[object]] = asyncio.sleep,
    ) -> None:
        if frame_interval <= 0:
            raise ValueError(f"Frame interval must be positive, got {frame_interval}.")
        self._buffer = buffer
        self._sink = sink
        self._colors = colors
        self._frame_interval = frame_interval
        self._header = header
        self._monotonic = monotonic
        self._sleep = sleep

    @property
    def buffer(self) -> PixelBuffer:
        return self._buffer

    async def scroll(self, text: str) -> ScrollResult:
        """Run one full scroll pass for text, then the blank inter-message gap.

        Text that rasterizes to no columns is skipped entirely: no frames and
        no blank gap are sent.
        """
        columns = rasterize(text)
        total_columns = len(columns)
        if total_columns == 0:
            return ScrollResult(columns=0, frames_sent=0, blank_frames_sent=0)

        frame_counter = 0
        frames_sent = 0
        for offset in range(self._buffer.width, -total_columns, -1):
            frame_start = self._monotonic()
            frame_color = self._colors.current_color(frame_counter)
            frame_counter += 1
            paint(self._buffer, columns, offset, frame_color)
            await self._sink.send(encode(self._buffer, self._header))
            frames_sent += 1
            await self._pace(frame_start)

        self._buffer.clear()
        for _ in range(BLANK_GAP_FRAMES):
            frame_start = self._monotonic()
            await self._sink.send(encode(self._buffer, self._header))
            await self._pace(frame_start)

        logger.debug("Scrolled %d columns in %d frames", total_columns, frames_sent)
        return ScrollResult(
            columns=total_columns,
            frames_sent=frames_sent,
            blank_frames_sent=BLANK_GAP_FRAMES,
        )

    async def _pace(self, frame_start: float) -> None:
        elapsed = self._monotonic() - frame_start
        await self._sleep(pacing_delay(self._frame_interval, elapsed))


__all__ = ["BLANK_GAP_FRAMES", "FrameSink", "ScrollResult", "Scroller", "pacing_delay"]
