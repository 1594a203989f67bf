"""Turn resampled mask values into output pixels."""

from __future__ import annotations

import numpy as np

from shaky_lines.errors import InvalidParameter

INK_CUTOFF = 0.5

# "mask" and "threshold" name the same output: the remapped mask already is
# the ink decision.
RENDER_MODES = ("mask", "threshold", "transparent")


def validate_render_mode(render_mode: str) -> str:
    key = str(render_mode).lower()
    if key not in RENDER_MODES:
        raise InvalidParameter(
            f"Unknown render mode '{render_mode}'. Available: {', '.join(RENDER_MODES)}"
        )
    return key


def resolve_render_mode(mask_only: bool, transparent_background: bool) -> str:
    """Map the mask-only and transparent-background flags onto a mode name."""

    if transparent_background:
        return "transparent"
    return "mask" if mask_only else "threshold"


def compose_pixels(values: np.ndarray, render_mode: str) -> np.ndarray:
    """Build the output image from sampled values.

    ``transparent`` yields (H, W, 4) RGBA with opaque black ink on a fully
    transparent background; the other modes yield opaque (H, W, 3) RGB with
    black ink on white.
    """

    mode = validate_render_mode(render_mode)
    ink = values > INK_CUTOFF
    height, width = values.shape
    if mode == "transparent":
        pixels = np.zeros((height, width, 4), dtype=np.uint8)
        pixels[..., 3] = np.where(ink, 255, 0)
        return pixels

    gray = np.where(ink, 0, 255).astype(np.uint8)
    return np.repeat(gray[..., None], 3, axis=-1)
