"""Build the ordered provider list from configuration."""

from __future__ import annotations

import os
from typing import Any, Callable

from wledticker.config import ProviderConfig, validate_timezone
from wledticker.data.base import StaticTextProvider, TextProvider
from wledticker.data.clock import DEFAULT_FORMAT as CLOCK_FORMAT
from wledticker.data.clock import ClockProvider
from wledticker.data.home_assistant import EntitySpec, HomeAssistantClient, HomeAssistantProvider
from wledticker.data.mpd import DEFAULT_PORT as MPD_PORT
from wledticker.data.mpd import MPDClient, MPDProvider
from wledticker.data.weather import DEFAULT_FORMAT as WEATHER_FORMAT
from wledticker.data.weather import WeatherProvider, WttrClient


def _require_option(config: ProviderConfig, key: str) -> Any:
    if key not in config.options:
        raise ValueError(f"Missing required key '{key}' in provider '{config.provider_id}' config")
    return config.options[key]


def _build_static(config: ProviderConfig, timezone: str | None) -> TextProvider:
    return StaticTextProvider(config.provider_id, str(_require_option(config, "text")))


def _build_clock(config: ProviderConfig, timezone: str | None) -> TextProvider:
    zone = config.options.get("timezone")
    if zone:
        timezone = validate_timezone(str(zone))
    return ClockProvider(
        config.provider_id,
        time_format=config.options.get("format", CLOCK_FORMAT),
        timezone=timezone,
    )


def _build_weather(config: ProviderConfig, timezone: str | None) -> TextProvider:
    client = WttrClient(
        location=str(config.options.get("location", "")),
        timeout_seconds=config.options.get("timeout_seconds", 10),
    )
    return WeatherProvider(
        config.provider_id,
        report_format=config.options.get("format", WEATHER_FORMAT),
        client=client,
    )


def _build_mpd(config: ProviderConfig, timezone: str | None) -> TextProvider:
    client = MPDClient(
        host=config.options.get("host", "localhost"),
        port=config.options.get("port", MPD_PORT),
    )
    return MPDProvider(config.provider_id, client=client)


def _build_home_assistant(config: ProviderConfig, timezone: str | None) -> TextProvider:
    raw_entities = _require_option(config, "entities")
    if not isinstance(raw_entities, list):
        raise ValueError(f"'entities' in provider '{config.provider_id}' must be a list")

    entities = []
    for raw in raw_entities:
        if isinstance(raw, str):
            entities.append(EntitySpec(entity_id=raw))
        elif isinstance(raw, dict) and "entity_id" in raw:
            entities.append(EntitySpec(entity_id=raw["entity_id"], label=raw.get("label", "")))
        else:
            raise ValueError(f"Invalid entity entry in provider '{config.provider_id}': {raw!r}")

    client = HomeAssistantClient(
        base_url=_require_option(config, "base_url"),
        token=os.environ.get("HA_TOKEN", ""),
    )
    return HomeAssistantProvider(config.provider_id, client=client, entities=entities)


PROVIDER_TYPES: dict[str, Callable[[ProviderConfig, str | None], TextProvider]] = {
    "static": _build_static,
    "clock": _build_clock,
    "weather": _build_weather,
    "mpd": _build_mpd,
    "home_assistant": _build_home_assistant,
}


def build_providers(configs: list[ProviderConfig], timezone: str | None = None) -> list[TextProvider]:
    """Instantiate providers in configured order."""
    providers = []
    for config in configs:
        builder = PROVIDER_TYPES.get(config.type)
        if builder is None:
            known = ", ".join(sorted(PROVIDER_TYPES))
            raise ValueError(f"Unknown provider type '{config.type}' (known: {known})")
        providers.append(builder(config, timezone))
    return providers


__all__ = ["PROVIDER_TYPES", "build_providers"]
