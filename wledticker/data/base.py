"""Text provider contract."""

from __future__ import annotations

from abc import ABC, abstractmethod


class ProviderError(Exception):
    """Raised when a provider cannot produce its text."""


class TextProvider(ABC):
    """Source of one ticker message, fetched when its turn comes."""

    def __init__(self, provider_id: str) -> None:
        self.provider_id = provider_id

    @abstractmethod
    async def get_text(self) -> str:
        """Return the text to scroll; may raise."""

    def __repr__(self) -> str:
        return f"{type(self).__name__}(provider_id={self.provider_id!r})"


class StaticTextProvider(TextProvider):
    """Always returns the same message."""

    def __init__(self, provider_id: str, text: str) -> None:
        super().__init__(provider_id)
        self._text = text

    async def get_text(self) -> str:
        return self._text


__all__ = ["ProviderError", "StaticTextProvider", "TextProvider"]
