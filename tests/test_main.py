from __future__ import annotations

import asyncio
import json
import logging

import pytest

from wledticker.__main__ import build_scroller, color_settings, main, run
from wledticker.config import (
    AnimationConfig,
    AppConfig,
    LoggingConfig,
    MatrixConfig,
    ProviderConfig,
    TargetConfig,
)
from wledticker.logging_setup import setup_logging


def _config(**animation) -> AppConfig:
    return AppConfig(
        matrix=MatrixConfig(width=8, height=8),
        target=TargetConfig(host="127.0.0.1", realtime_timeout_seconds=5),
        animation=AnimationConfig(frame_interval_ms=1, **animation),
        providers=[ProviderConfig("static", "motd", {"text": "A"})],
        log=LoggingConfig(),
    )


class RecordingSink:
    def __init__(self) -> None:
        self.packets: list[bytes] = []

    async def send(self, packet: bytes) -> None:
        self.packets.append(packet)


def test_color_settings_from_config() -> None:
    settings = color_settings(_config(cycle_seconds=30.0, dither=False, night_color=(1, 1, 1)))

    assert settings.cycle_seconds == 30.0
    assert settings.dither is False
    assert settings.night_color == (1, 1, 1)
    assert settings.day_start_seconds == 7 * 3600


def test_build_scroller_uses_configured_header() -> None:
    sink = RecordingSink()
    scroller = build_scroller(_config(), sink)

    result = asyncio.run(scroller.scroll("A"))

    assert result.frames_sent == 8 + 6
    assert len(sink.packets) == 16
    assert all(packet[:2] == bytes((2, 5)) for packet in sink.packets)
    assert all(len(packet) == 2 + 8 * 8 * 3 for packet in sink.packets)


def test_run_once_with_preview(tmp_path) -> None:
    output = tmp_path / "frame.png"

    asyncio.run(run(_config(), cycles=1, preview_path=str(output)))

    assert output.exists()


@pytest.fixture()
def _restore_root_logger():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    for handler in root.handlers:
        handler.close()
    root.handlers[:] = handlers
    root.setLevel(level)


def test_setup_logging_writes_json_file(tmp_path, _restore_root_logger) -> None:
    setup_logging("DEBUG", tmp_path / "logs")

    logging.getLogger("wledticker.test").info("hello %s", "matrix")
    for handler in logging.getLogger().handlers:
        handler.flush()

    lines = (tmp_path / "logs" / "wledticker.log").read_text(encoding="utf-8").splitlines()
    entry = json.loads(lines[-1])
    assert entry["level"] == "INFO"
    assert entry["logger"] == "wledticker.test"
    assert entry["message"] == "hello matrix"
    assert logging.getLogger().level == logging.DEBUG


def test_main_rejects_unknown_provider_timezone(tmp_path, monkeypatch, capsys, _restore_root_logger) -> None:
    config_path = tmp_path / "config.yaml"
    config_path.write_text(
        "matrix:\n"
        "  width: 8\n"
        "  height: 8\n"
        "target:\n"
        "  host: \"127.0.0.1\"\n"
        "providers:\n"
        "  - type: clock\n"
        "    timezone: Not/AZone\n"
    )
    monkeypatch.delenv("MATRIX_TZ", raising=False)
    monkeypatch.setattr(
        "sys.argv",
        ["wledticker", "--config", str(config_path), "--once", "--preview", str(tmp_path / "frame.png")],
    )

    assert main() == 2

    assert "Unknown time zone 'Not/AZone'" in capsys.readouterr().out
    assert not (tmp_path / "frame.png").exists()
