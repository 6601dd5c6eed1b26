"""Text providers and the rotation loop."""

from wledticker.data.base import ProviderError, StaticTextProvider, TextProvider
from wledticker.data.registry import build_providers
from wledticker.data.rotation import run_rotation

__all__ = ["ProviderError", "StaticTextProvider", "TextProvider", "build_providers", "run_rotation"]
