"""Clock provider."""

from __future__ import annotations

from datetime import datetime
import time
from typing import Callable
from zoneinfo import ZoneInfo

from wledticker.data.base import TextProvider

DEFAULT_FORMAT = "%H:%M"


class ClockProvider(TextProvider):
    """Formats the current local time."""

    def __init__(
        self,
        provider_id: str,
        time_format: str = DEFAULT_FORMAT,
        timezone: str | None = None,
        clock: Callable[[], float] = time.time,
    ) -> None:
        super().__init__(provider_id)
        self._time_format = time_format
        self._tz = ZoneInfo(timezone) if timezone else None
        self._clock = clock

    async def get_text(self) -> str:
        now = datetime.fromtimestamp(self._clock(), tz=self._tz)
        return now.strftime(self._time_format)


__all__ = ["ClockProvider"]
