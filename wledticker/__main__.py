"""Run the WLED matrix ticker."""

from __future__ import annotations

import argparse
import asyncio
import logging

from wledticker.config import AppConfig, load_config
from wledticker.data import build_providers, run_rotation
from wledticker.display import PreviewSink, Scroller, UdpSink, drgb_header, resolve_host
from wledticker.display.scroller import FrameSink
from wledticker.logging_setup import setup_logging
from wledticker.rendering import ColorGenerator, ColorSettings, PixelBuffer

logger = logging.getLogger("wledticker")


def color_settings(config: AppConfig) -> ColorSettings:
    animation = config.animation
    return ColorSettings(
        day_start_seconds=animation.day_start_seconds,
        day_end_seconds=animation.day_end_seconds,
        cycle_seconds=animation.cycle_seconds,
        saturation=animation.saturation,
        value=animation.value,
        dither=animation.dither,
        night_color=animation.night_color,
        timezone=animation.timezone,
    )


def build_scroller(config: AppConfig, sink: FrameSink) -> Scroller:
    return Scroller(
        buffer=PixelBuffer(config.matrix.width, config.matrix.height),
        sink=sink,
        colors=ColorGenerator(color_settings(config)),
        frame_interval=config.animation.frame_interval_ms / 1000.0,
        header=drgb_header(config.target.realtime_timeout_seconds),
    )


def _log_banner(config: AppConfig, address: str) -> None:
    matrix = config.matrix
    logger.info("Starting WLED matrix scroller (UDP realtime DRGB)")
    logger.info("WLED target: %s:%d", address, config.target.port)
    logger.info("Matrix size: %d x %d (%d LEDs)", matrix.width, matrix.height, matrix.width * matrix.height)
    if config.animation.timezone:
        logger.info("Time zone: %s", config.animation.timezone)
    logger.info("Day cycle seconds: %s", config.animation.cycle_seconds)
    logger.info("Providers: %s", ", ".join(p.provider_id for p in config.providers))


async def run(config: AppConfig, cycles: int | None = None, preview_path: str | None = None) -> None:
    providers = build_providers(config.providers, timezone=config.animation.timezone)

    if preview_path:
        sink = PreviewSink(config.matrix.width, config.matrix.height, path=preview_path)
        _log_banner(config, f"preview -> {preview_path}")
        await run_rotation(providers, build_scroller(config, sink), cycles=cycles)
        return

    address = await resolve_host(config.target.host)
    async with UdpSink(address, config.target.port) as udp_sink:
        _log_banner(config, address)
        await run_rotation(providers, build_scroller(config, udp_sink), cycles=cycles)


def main() -> int:
    parser = argparse.ArgumentParser(description="Scroll provider text on a WLED matrix.")
    parser.add_argument("--config", default="config/config.yaml")
    parser.add_argument("--once", action="store_true", help="Run a single provider rotation and exit")
    parser.add_argument("--preview", default=None, help="Write frames to this PNG instead of sending UDP")
    args = parser.parse_args()

    try:
        config = load_config(args.config)
    except ValueError as exc:
        setup_logging()
        logger.critical("Invalid configuration: %s", exc)
        return 2

    setup_logging(config.log.level, config.log.log_dir)
    try:
        asyncio.run(run(config, cycles=1 if args.once else None, preview_path=args.preview))
    except KeyboardInterrupt:
        logger.info("Stopped")
    except ValueError as exc:
        logger.critical("Invalid provider configuration: %s", exc)
        return 2
    except OSError as exc:
        logger.critical("Fatal I/O error: %s", exc)
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
