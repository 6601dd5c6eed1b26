"""Weather provider backed by wttr.in."""

from __future__ import annotations

import asyncio

import requests

from wledticker.data.base import ProviderError, TextProvider

WTTR_BASE = "https://wttr.in"
DEFAULT_FORMAT = "%l: %c %t"


class WeatherError(ProviderError):
    """Raised when a wttr.in request fails or returns an unusable body."""


class WttrClient:
    """Thin wrapper around the wttr.in one-line format using requests."""

    def __init__(self, location: str = "", timeout_seconds: float = 10) -> None:
        self._location = location
        self._timeout_seconds = timeout_seconds

    def get_report(self, report_format: str = DEFAULT_FORMAT) -> str:
        """Fetch a one-line weather report."""
        url = f"{WTTR_BASE}/{self._location}"
        params = {"format": report_format}
        try:
            response = requests.get(url, params=params, timeout=self._timeout_seconds)
        except requests.RequestException as exc:
            raise WeatherError(f"wttr.in request failed: {exc}") from exc

        if response.status_code != 200:
            body_text = response.text.strip()
            detail = f"Status {response.status_code}"
            if body_text:
                detail = f"{detail}, Body: {body_text}"
            raise WeatherError(f"wttr.in request failed: {detail}")

        report = response.text.strip()
        if not report:
            raise WeatherError("wttr.in returned an empty report")
        return report


class WeatherProvider(TextProvider):
    """Current conditions for one location."""

    def __init__(
        self,
        provider_id: str,
        location: str = "",
        report_format: str = DEFAULT_FORMAT,
        client: WttrClient | None = None,
    ) -> None:
        super().__init__(provider_id)
        self._client = client or WttrClient(location)
        self._report_format = report_format

    async def get_text(self) -> str:
        return await asyncio.to_thread(self._client.get_report, self._report_format)


__all__ = ["WeatherError", "WeatherProvider", "WttrClient"]
