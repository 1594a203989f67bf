"""Image loading and saving."""

from __future__ import annotations

import io
from pathlib import Path
from typing import Sequence

import numpy as np
from PIL import Image, UnidentifiedImageError

from shaky_lines.errors import UnsupportedPixelFormat
from shaky_lines.mask import as_rgb_array


def load_source_image(path: Path) -> np.ndarray:
    """Load a source image as an (H, W, 3) uint8 RGB array."""

    try:
        with Image.open(path) as image:
            image.load()
            return as_rgb_array(image)
    except UnidentifiedImageError as exc:
        raise UnsupportedPixelFormat(f"Cannot read image '{path}'.") from exc


def to_pil(pixels: np.ndarray) -> Image.Image:
    """Wrap a (H, W, 3) or (H, W, 4) uint8 frame as a PIL image."""

    if pixels.ndim != 3 or pixels.shape[2] not in (3, 4) or pixels.dtype != np.uint8:
        raise ValueError(f"Expected a uint8 RGB/RGBA frame, got {pixels.dtype} {pixels.shape}.")
    return Image.fromarray(np.ascontiguousarray(pixels))


def encode_png(pixels: np.ndarray) -> bytes:
    buffer = io.BytesIO()
    to_pil(pixels).save(buffer, format="PNG")
    return buffer.getvalue()


def save_frame(path: Path, pixels: np.ndarray) -> None:
    """Save a frame as PNG, RGBA when it carries alpha."""

    path.parent.mkdir(parents=True, exist_ok=True)
    to_pil(pixels).save(path, format="PNG")


def _flatten_on_white(pixels: np.ndarray) -> Image.Image:
    """Composite an RGBA frame over white for formats without real alpha."""

    image = to_pil(pixels)
    if image.mode != "RGBA":
        return image
    background = Image.new("RGBA", image.size, (255, 255, 255, 255))
    return Image.alpha_composite(background, image).convert("RGB")


def encode_preview_gif(frames: Sequence[np.ndarray], fps: int) -> bytes:
    """Encode frames as a looping animated GIF for live preview."""

    if not frames:
        raise ValueError("Cannot encode a preview without frames.")
    images = [_flatten_on_white(frame) for frame in frames]
    buffer = io.BytesIO()
    images[0].save(
        buffer,
        format="GIF",
        save_all=True,
        append_images=images[1:],
        duration=max(1, 1000 // max(1, fps)),
        loop=0,
    )
    return buffer.getvalue()
