"""Configuration loader for the WLED matrix ticker."""

from __future__ import annotations

from dataclasses import dataclass, field
import os
from typing import Any
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from dotenv import load_dotenv
import yaml

DEFAULT_PORT = 21324
DEFAULT_REALTIME_TIMEOUT = 2


@dataclass(frozen=True)
class MatrixConfig:
    """Matrix geometry."""

    width: int
    height: int


@dataclass(frozen=True)
class TargetConfig:
    """WLED controller address."""

    host: str
    port: int = DEFAULT_PORT
    realtime_timeout_seconds: int = DEFAULT_REALTIME_TIMEOUT


@dataclass(frozen=True)
class AnimationConfig:
    """Frame pacing and color schedule."""

    frame_interval_ms: int = 24
    day_start_seconds: int = 7 * 3600
    day_end_seconds: int = 20 * 3600
    cycle_seconds: float = 120.0
    saturation: float = 1.0
    value: float = 0.12
    dither: bool = True
    night_color: tuple[int, int, int] = (4, 0, 0)
    timezone: str | None = None


@dataclass(frozen=True)
class ProviderConfig:
    """One entry of the provider rotation."""

    type: str
    provider_id: str
    options: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class LoggingConfig:
    """Logging configuration."""

    level: str = "INFO"
    log_dir: str | None = None


@dataclass(frozen=True)
class AppConfig:
    """Top-level application configuration."""

    matrix: MatrixConfig
    target: TargetConfig
    animation: AnimationConfig
    providers: list[ProviderConfig]
    log: LoggingConfig


def _require_key(mapping: dict[str, Any], key: str, context: str) -> Any:
    if key not in mapping:
        raise ValueError(f"Missing required key '{key}' in {context} config")
    return mapping[key]


def _section(data: dict[str, Any], key: str, required: bool = True) -> dict[str, Any]:
    section = _require_key(data, key, key) if required else data.get(key) or {}
    if not isinstance(section, dict):
        raise ValueError(f"'{key}' config must be a mapping")
    return section


def _int_in_range(value: Any, key: str, low: int, high: int | None = None) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"'{key}' must be an integer, got {value!r}")
    if value < low or (high is not None and value > high):
        bounds = f"{low}..{high}" if high is not None else f">= {low}"
        raise ValueError(f"'{key}' must be {bounds}, got {value}")
    return value


def _float_in_range(value: Any, key: str, low: float, high: float | None = None) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueError(f"'{key}' must be a number, got {value!r}")
    if value < low or (high is not None and value > high):
        raise ValueError(f"'{key}' out of range: {value}")
    return float(value)


def parse_time_of_day(value: Any, key: str) -> int:
    """Parse "HH:MM" or "HH:MM:SS" into seconds since midnight."""
    if not isinstance(value, str):
        # YAML 1.1 reads an unquoted 07:00 as the base-60 integer 420.
        raise ValueError(f"'{key}' must be a quoted string like \"07:00\", got {value!r}")
    parts = value.split(":")
    if len(parts) not in (2, 3) or not all(part.isdigit() for part in parts):
        raise ValueError(f"'{key}' must look like HH:MM or HH:MM:SS, got {value!r}")
    hours, minutes = int(parts[0]), int(parts[1])
    seconds = int(parts[2]) if len(parts) == 3 else 0
    if hours > 23 or minutes > 59 or seconds > 59:
        raise ValueError(f"'{key}' is not a valid time of day: {value!r}")
    return hours * 3600 + minutes * 60 + seconds


def _parse_color(value: Any, key: str) -> tuple[int, int, int]:
    if not isinstance(value, (list, tuple)) or len(value) != 3:
        raise ValueError(f"'{key}' must be a list of three integers")
    r, g, b = (_int_in_range(channel, key, 0, 255) for channel in value)
    return r, g, b


def validate_timezone(name: str) -> str:
    """Return an IANA zone name unchanged, or raise ValueError if it is unknown."""
    try:
        ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError) as exc:
        raise ValueError(f"Unknown time zone '{name}'") from exc
    return name


def _parse_animation(section: dict[str, Any]) -> AnimationConfig:
    defaults = AnimationConfig()
    timezone = os.environ.get("MATRIX_TZ") or section.get("timezone") or None
    day_start = parse_time_of_day(section.get("day_start", "07:00"), "day_start")
    day_end = parse_time_of_day(section.get("day_end", "20:00"), "day_end")
    if day_start >= day_end:
        raise ValueError("'day_start' must be earlier than 'day_end'")
    if timezone:
        validate_timezone(timezone)

    return AnimationConfig(
        frame_interval_ms=_int_in_range(
            section.get("frame_interval_ms", defaults.frame_interval_ms), "frame_interval_ms", 1
        ),
        day_start_seconds=day_start,
        day_end_seconds=day_end,
        cycle_seconds=_float_in_range(section.get("cycle_seconds", defaults.cycle_seconds), "cycle_seconds", 1.0),
        saturation=_float_in_range(section.get("saturation", defaults.saturation), "saturation", 0.0, 1.0),
        value=_float_in_range(section.get("value", defaults.value), "value", 0.0, 1.0),
        dither=bool(section.get("dither", defaults.dither)),
        night_color=_parse_color(section.get("night_color", list(defaults.night_color)), "night_color"),
        timezone=timezone,
    )


def _parse_providers(raw: Any) -> list[ProviderConfig]:
    if not isinstance(raw, list) or not raw:
        raise ValueError("'providers' config must be a non-empty list")

    providers = []
    for entry in raw:
        if not isinstance(entry, dict):
            raise ValueError("Each provider entry must be a mapping")
        options = dict(entry)
        provider_type = _require_key(options, "type", "provider")
        options.pop("type")
        provider_id = str(options.pop("id", provider_type))
        providers.append(ProviderConfig(type=provider_type, provider_id=provider_id, options=options))
    return providers


def load_config(path: str = "config/config.yaml") -> AppConfig:
    """Load application configuration from a YAML file."""
    load_dotenv()
    try:
        with open(path, "r", encoding="utf-8") as handle:
            data = yaml.safe_load(handle)
    except FileNotFoundError as exc:
        raise ValueError(f"Config file not found: {path}") from exc

    if not isinstance(data, dict):
        raise ValueError("Config file must contain a mapping at the top level")

    matrix_section = _section(data, "matrix")
    target_section = _section(data, "target")
    animation_section = _section(data, "animation", required=False)
    logging_section = _section(data, "logging", required=False)

    matrix = MatrixConfig(
        width=_int_in_range(_require_key(matrix_section, "width", "matrix"), "width", 1),
        height=_int_in_range(_require_key(matrix_section, "height", "matrix"), "height", 1),
    )

    target = TargetConfig(
        host=str(_require_key(target_section, "host", "target")),
        port=_int_in_range(target_section.get("port", DEFAULT_PORT), "port", 1, 65535),
        realtime_timeout_seconds=_int_in_range(
            target_section.get("realtime_timeout_seconds", DEFAULT_REALTIME_TIMEOUT),
            "realtime_timeout_seconds",
            1,
            255,
        ),
    )

    logging = LoggingConfig(
        level=str(logging_section.get("level", "INFO")),
        log_dir=logging_section.get("log_dir") or None,
    )

    return AppConfig(
        matrix=matrix,
        target=target,
        animation=_parse_animation(animation_section),
        providers=_parse_providers(data.get("providers")),
        log=logging,
    )
