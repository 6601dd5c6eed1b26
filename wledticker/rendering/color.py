"""Time-of-day text color with temporal dithering."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
import math
import time
from typing import Callable
from zoneinfo import ZoneInfo

RGB = tuple[int, int, int]

NIGHT_COLOR: RGB = (4, 0, 0)
DAY_START_SECONDS = 7 * 3600
DAY_END_SECONDS = 20 * 3600
DAY_CYCLE_SECONDS = 120.0
DAY_SATURATION = 1.0
DAY_VALUE = 0.12

CHANNEL_PHASE_OFFSETS = (0, 85, 170)


@dataclass(frozen=True)
class ColorSettings:
    """Parameters for the day/night color schedule."""

    day_start_seconds: int = DAY_START_SECONDS
    day_end_seconds: int = DAY_END_SECONDS
    cycle_seconds: float = DAY_CYCLE_SECONDS
    saturation: float = DAY_SATURATION
    value: float = DAY_VALUE
    dither: bool = True
    night_color: RGB = NIGHT_COLOR
    timezone: str | None = None


def hsv_to_rgb(h: float, s: float, v: float) -> tuple[float, float, float]:
    """Convert HSV (all 0..1, hue wraps) to RGB floats in 0..1."""
    h6 = (h % 1.0) * 6.0
    sector = math.floor(h6)
    f = h6 - sector
    p = v * (1.0 - s)
    q = v * (1.0 - s * f)
    t = v * (1.0 - s * (1.0 - f))

    if sector == 0:
        return v, t, p
    if sector == 1:
        return q, v, p
    if sector == 2:
        return p, v, t
    if sector == 3:
        return p, q, v
    if sector == 4:
        return t, p, v
    return v, p, q


def quantize(x: float, phase: int, dither: bool = True) -> int:
    """Quantize a 0..1 channel to 0..255, rounding up on some phases.

    The fractional remainder decides how many of every 256 phases round up,
    so a steady input averages out to its true level across frames.
    """
    y = x * 255.0
    base = math.floor(y)
    if dither:
        frac = y - base
        if (phase % 256) < frac * 256.0:
            base += 1
    return max(0, min(255, base))


def seconds_since_midnight(wall_clock_time: float, tz_name: str | None = None) -> int:
    """Local seconds since midnight for an epoch timestamp."""
    if tz_name:
        local = datetime.fromtimestamp(wall_clock_time, tz=ZoneInfo(tz_name))
    else:
        local = datetime.fromtimestamp(wall_clock_time)
    return local.hour * 3600 + local.minute * 60 + local.second


class ColorGenerator:
    """Compute one text color per frame from the wall clock."""

    def __init__(
        self,
        settings: ColorSettings | None = None,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self._settings = settings or ColorSettings()
        self._clock = clock
        if self._settings.timezone:
            # Raises ZoneInfoNotFoundError for unknown names.
            ZoneInfo(self._settings.timezone)

    @property
    def settings(self) -> ColorSettings:
        return self._settings

    def is_night(self, wall_clock_time: float) -> bool:
        settings = self._settings
        local_seconds = seconds_since_midnight(wall_clock_time, settings.timezone)
        return local_seconds < settings.day_start_seconds or local_seconds >= settings.day_end_seconds

    def color_for_frame(self, frame_index: int, wall_clock_time: float) -> RGB:
        """Return the color for a frame at the given epoch time."""
        settings = self._settings
        if self.is_night(wall_clock_time):
            return settings.night_color

        hue = (wall_clock_time % settings.cycle_seconds) / settings.cycle_seconds
        channels = hsv_to_rgb(hue, settings.saturation, settings.value)

        phase = frame_index % 256
        r, g, b = (
            quantize(channel, phase + offset, settings.dither)
            for channel, offset in zip(channels, CHANNEL_PHASE_OFFSETS)
        )
        return r, g, b

    def current_color(self, frame_index: int) -> RGB:
        return self.color_for_frame(frame_index, self._clock())


__all__ = [
    "ColorGenerator",
    "ColorSettings",
    "NIGHT_COLOR",
    "RGB",
    "hsv_to_rgb",
    "quantize",
    "seconds_since_midnight",
]
