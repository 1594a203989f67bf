"""Inverse-remap sampling of the ink mask."""

from __future__ import annotations

import numpy as np

from shaky_lines.errors import InvalidDimensions


def _gather(mask: np.ndarray, xi: np.ndarray, yi: np.ndarray) -> np.ndarray:
    """Read ``mask[yi, xi]``, returning 0 wherever the index is out of bounds."""

    height, width = mask.shape
    inside = (xi >= 0) & (yi >= 0) & (xi < width) & (yi < height)
    values = np.zeros(xi.shape, dtype=np.float32)
    values[inside] = mask[yi[inside], xi[inside]]
    return values


def sample_nearest(mask: np.ndarray, sx: np.ndarray, sy: np.ndarray) -> np.ndarray:
    """Nearest-neighbour lookup; halves round to even, outside reads 0."""

    sx = np.asarray(sx, dtype=np.float32)
    sy = np.asarray(sy, dtype=np.float32)
    xi = np.rint(sx).astype(np.int64)
    yi = np.rint(sy).astype(np.int64)
    return _gather(mask, xi, yi)


def sample_bilinear(mask: np.ndarray, sx: np.ndarray, sy: np.ndarray) -> np.ndarray:
    """Bilinear lookup where neighbours outside the mask count as 0.

    Ink therefore fades toward the border instead of clamping or wrapping.
    """

    sx = np.asarray(sx, dtype=np.float32)
    sy = np.asarray(sy, dtype=np.float32)
    x0f = np.floor(sx)
    y0f = np.floor(sy)
    tx = sx - x0f
    ty = sy - y0f
    x0 = x0f.astype(np.int64)
    y0 = y0f.astype(np.int64)
    x1 = x0 + 1
    y1 = y0 + 1

    c00 = _gather(mask, x0, y0)
    c10 = _gather(mask, x1, y0)
    c01 = _gather(mask, x0, y1)
    c11 = _gather(mask, x1, y1)

    top = c00 * (1 - tx) + c10 * tx
    bottom = c01 * (1 - tx) + c11 * tx
    return (top * (1 - ty) + bottom * ty).astype(np.float32)


def remap_mask(mask: np.ndarray, dx: np.ndarray, dy: np.ndarray, antialias: bool) -> np.ndarray:
    """Pull each output pixel from ``(x - dx, y - dy)`` in the mask.

    Returns a new float32 (H, W) array of values in [0, 1].
    """

    if mask.ndim != 2 or 0 in mask.shape:
        raise InvalidDimensions(f"Mask must be a non-empty 2D grid, got shape {mask.shape}.")
    if dx.shape != mask.shape or dy.shape != mask.shape:
        raise InvalidDimensions("Displacement fields and mask shapes must match.")

    height, width = mask.shape
    ys, xs = np.mgrid[0:height, 0:width].astype(np.float32)
    sx = xs - dx
    sy = ys - dy
    if antialias:
        return sample_bilinear(mask, sx, sy)
    return sample_nearest(mask, sx, sy)
