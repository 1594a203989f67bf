"""Luminance and ink-mask extraction."""

from __future__ import annotations

from typing import Union

import numpy as np
from PIL import Image

from shaky_lines.errors import InvalidDimensions, InvalidParameter, UnsupportedPixelFormat

# Luma weights scaled by 1000 so the threshold test stays in integers.
_LUMA_WEIGHTS = (299, 587, 114)
_LUMA_SCALE = 1000

SourceImage = Union[np.ndarray, Image.Image]


def _check_dimensions(width: int, height: int) -> None:
    if width <= 0 or height <= 0:
        raise InvalidDimensions(f"Image must be non-empty, got {width}x{height}.")


def as_rgb_array(image: SourceImage) -> np.ndarray:
    """Return the RGB channels of ``image`` as an (H, W, 3) uint8 array.

    Accepts PIL images of any mode Pillow can convert to RGB and uint8 arrays
    shaped (H, W), (H, W, 3) or (H, W, 4). Alpha is ignored.
    """

    if isinstance(image, Image.Image):
        _check_dimensions(image.width, image.height)
        try:
            rgb = image.convert("RGB")
        except (OSError, ValueError) as exc:
            raise UnsupportedPixelFormat(f"Cannot convert mode '{image.mode}' to RGB.") from exc
        return np.asarray(rgb, dtype=np.uint8)

    if not isinstance(image, np.ndarray):
        raise UnsupportedPixelFormat(f"Unsupported image type {type(image).__name__}.")
    if image.ndim not in (2, 3) or (image.ndim == 3 and image.shape[2] not in (3, 4)):
        raise UnsupportedPixelFormat(f"Unsupported image shape {image.shape}.")
    _check_dimensions(image.shape[1], image.shape[0])
    if image.dtype != np.uint8:
        raise UnsupportedPixelFormat(f"Expected uint8 pixels, got {image.dtype}.")
    if image.ndim == 2:
        return np.repeat(image[..., None], 3, axis=-1)
    return image[..., :3]


def _weighted_luma(rgb: np.ndarray) -> np.ndarray:
    """Luma scaled by 1000, exact in int32."""

    channels = rgb.astype(np.int32)
    r_w, g_w, b_w = _LUMA_WEIGHTS
    return channels[..., 0] * r_w + channels[..., 1] * g_w + channels[..., 2] * b_w


def luminance(image: SourceImage) -> np.ndarray:
    """Perceptual luma 0.299 R + 0.587 G + 0.114 B as float32 in [0, 255]."""

    weighted = _weighted_luma(as_rgb_array(image))
    return (weighted / _LUMA_SCALE).astype(np.float32)


def validate_threshold(threshold: int) -> int:
    if isinstance(threshold, bool) or not isinstance(threshold, (int, np.integer)):
        raise InvalidParameter(f"Threshold must be an integer, got {threshold!r}.")
    if not 0 <= threshold <= 255:
        raise InvalidParameter(f"Threshold must be in [0, 255], got {threshold}.")
    return int(threshold)


def extract_mask(image: SourceImage, threshold: int) -> np.ndarray:
    """Binary ink mask: 1.0 where luma < threshold, else 0.0.

    The result is a fresh (H, W) float32 array; ``image`` is not modified.
    """

    threshold = validate_threshold(threshold)
    weighted = _weighted_luma(as_rgb_array(image))
    return (weighted < threshold * _LUMA_SCALE).astype(np.float32)
