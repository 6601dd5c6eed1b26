"""Render a single ticker frame to a PNG."""

from __future__ import annotations

import argparse
from pathlib import Path
import sys
import time

sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

from wledticker.rendering import (
    ColorGenerator,
    ColorSettings,
    PixelBuffer,
    buffer_to_image,
    paint,
    rasterize,
    save_frame,
)


def main() -> int:
    parser = argparse.ArgumentParser()
    parser.add_argument("text")
    parser.add_argument("--width", type=int, default=32)
    parser.add_argument("--height", type=int, default=8)
    parser.add_argument("--offset", type=int, default=0)
    parser.add_argument("--timestamp", type=float, default=None, help="Epoch seconds for the color")
    parser.add_argument("--timezone", default=None)
    parser.add_argument("--scale", type=int, default=8)
    parser.add_argument("--output", default="emulator_output/frame.png")
    args = parser.parse_args()

    buffer = PixelBuffer(args.width, args.height)
    colors = ColorGenerator(ColorSettings(timezone=args.timezone))
    timestamp = args.timestamp if args.timestamp is not None else time.time()
    paint(buffer, rasterize(args.text), args.offset, colors.color_for_frame(0, timestamp))
    save_frame(buffer_to_image(buffer, scale=args.scale), args.output)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
