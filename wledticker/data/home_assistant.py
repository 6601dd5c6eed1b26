"""Home Assistant sensor provider."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from typing import Any

import requests

from wledticker.data.base import ProviderError, TextProvider

ENTITY_SEPARATOR = "  "
ATTACHED_UNITS = ("%", "°", "°C", "°F")


class HomeAssistantError(ProviderError):
    """Raised when a Home Assistant API request fails or returns a non-200 response."""


@dataclass(frozen=True)
class EntitySpec:
    """One sensor to show, with an optional label prefix."""

    entity_id: str
    label: str = ""


class HomeAssistantClient:
    """Thin wrapper around the Home Assistant REST API using requests."""

    def __init__(self, base_url: str, token: str, timeout_seconds: float = 10) -> None:
        self._base_url = base_url.rstrip("/")
        self._token = token
        self._timeout_seconds = timeout_seconds

    def get_state(self, entity_id: str) -> dict[str, Any]:
        """Fetch the state object for one entity."""
        return self._get(f"/api/states/{entity_id}")

    def _get(self, path: str) -> dict[str, Any]:
        url = f"{self._base_url}{path}"
        headers = {
            "Authorization": f"Bearer {self._token}",
            "Content-Type": "application/json",
        }
        try:
            response = requests.get(url, headers=headers, timeout=self._timeout_seconds)
        except requests.RequestException as exc:
            raise HomeAssistantError(f"Home Assistant request failed: {exc}") from exc

        if response.status_code != 200:
            body_text = response.text.strip()
            detail = f"Status {response.status_code}"
            if body_text:
                detail = f"{detail}, Body: {body_text}"
            raise HomeAssistantError(f"Home Assistant request failed: {detail}")

        try:
            return response.json()
        except ValueError as exc:
            raise HomeAssistantError("Home Assistant response was not valid JSON") from exc


def format_state(state: dict[str, Any], label: str = "") -> str:
    """Render "LABEL VALUE UNIT" for a state object.

    Percent and temperature units are glued to the value ("21.5°C", "40%").
    """
    value = str(state.get("state", "")).strip()
    unit = (state.get("attributes") or {}).get("unit_of_measurement") or ""
    if unit in ATTACHED_UNITS:
        parts = [label, value + unit]
    else:
        parts = [label, value, unit]
    return " ".join(part for part in parts if part)


class HomeAssistantProvider(TextProvider):
    """Joined readings of several Home Assistant entities."""

    def __init__(
        self,
        provider_id: str,
        client: HomeAssistantClient,
        entities: list[EntitySpec],
    ) -> None:
        super().__init__(provider_id)
        if not entities:
            raise ValueError("Home Assistant provider needs at least one entity")
        self._client = client
        self._entities = entities

    def _fetch_text(self) -> str:
        readings = []
        for entity in self._entities:
            state = self._client.get_state(entity.entity_id)
            readings.append(format_state(state, entity.label))
        return ENTITY_SEPARATOR.join(readings)

    async def get_text(self) -> str:
        return await asyncio.to_thread(self._fetch_text)


__all__ = [
    "EntitySpec",
    "HomeAssistantClient",
    "HomeAssistantError",
    "HomeAssistantProvider",
    "format_state",
]
