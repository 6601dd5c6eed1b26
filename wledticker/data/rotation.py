"""Round-robin loop feeding provider text to the scroller."""

from __future__ import annotations

import asyncio
import logging
from typing import Awaitable, Callable, Protocol, Sequence

from wledticker.data.base import TextProvider

logger = logging.getLogger(__name__)

IDLE_PAUSE_SECONDS = 1.0


class TextScroller(Protocol):
    async def scroll(self, text: str) -> object: ...


async def run_rotation(
    providers: Sequence[TextProvider],
    scroller: TextScroller,
    cycles: int | None = None,
    idle_pause: float = IDLE_PAUSE_SECONDS,
    sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
) -> None:
    """Scroll each provider's text in turn, forever or for a number of cycles.

    A provider that raises is logged and skipped for that cycle. When a whole
    cycle scrolls nothing, the loop waits ``idle_pause`` seconds before the next.
    """
    if not providers:
        raise ValueError("At least one provider is required")

    completed = 0
    while cycles is None or completed < cycles:
        scrolled = False
        for provider in providers:
            try:
                text = await provider.get_text()
                logger.info("Provider [%s] text: %s", provider.provider_id, text)
                await scroller.scroll(text)
                scrolled = scrolled or bool(text)
            except Exception as exc:
                logger.error("Provider [%s] failed: %s", provider.provider_id, exc)
        completed += 1
        if not scrolled and (cycles is None or completed < cycles):
            logger.debug("Nothing to show; pausing %.1fs", idle_pause)
            await sleep(idle_pause)


__all__ = ["IDLE_PAUSE_SECONDS", "TextScroller", "run_rotation"]
