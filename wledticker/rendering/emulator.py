"""Frame output helpers for previewing the matrix without hardware."""

from __future__ import annotations

from pathlib import Path

from PIL import Image

from wledticker.rendering.compositor import PixelBuffer


def buffer_to_image(buffer: PixelBuffer, scale: int = 1) -> Image.Image:
    """Build an RGB image from a pixel buffer, optionally upscaled."""
    image = Image.frombytes("RGB", (buffer.width, buffer.height), bytes(buffer.data))
    if scale > 1:
        image = image.resize((buffer.width * scale, buffer.height * scale), Image.Resampling.NEAREST)
    return image


def save_frame(image: Image.Image, path: str = "emulator_output/frame.png") -> None:
    """Save a frame to disk as a PNG image."""
    output_path = Path(path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    image.save(output_path, format="PNG")


__all__ = ["buffer_to_image", "save_frame"]
