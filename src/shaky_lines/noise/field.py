"""Smooth displacement fields from seeded value noise.

Two coarse grids of uniform values in [-1, 1) are drawn from decorrelated
seeded streams, then interpolated to full resolution with smoothstep-eased
bilinear blending. All arithmetic is float32 so a given
(width, height, cell_count, seed, strength) always yields the same bits.
"""

from __future__ import annotations

import math
from typing import Tuple

import numpy as np

from shaky_lines.data import DisplacementField
from shaky_lines.errors import InvalidDimensions, InvalidParameter

SEED_MULTIPLIER = 73856093
SEED_MIX = 0x9E3779B9
SEED_MODULUS = 2**32
MAX_STRENGTH = float(np.finfo(np.float32).max)


def validate_seed(seed: int) -> int:
    if isinstance(seed, bool) or not isinstance(seed, (int, np.integer)):
        raise InvalidParameter(f"Seed must be an integer, got {seed!r}.")
    if not 0 <= seed < SEED_MODULUS:
        raise InvalidParameter(f"Seed must be in [0, 2**32), got {seed}.")
    return int(seed)


def validate_cell_count(cell_count: int) -> int:
    if isinstance(cell_count, bool) or not isinstance(cell_count, (int, np.integer)):
        raise InvalidParameter(f"Cell count must be an integer, got {cell_count!r}.")
    if cell_count < 1:
        raise InvalidParameter(f"Cell count must be >= 1, got {cell_count}.")
    return int(cell_count)


def validate_strength(strength: float) -> float:
    try:
        value = float(strength)
    except (TypeError, ValueError) as exc:
        raise InvalidParameter(f"Strength must be a number, got {strength!r}.") from exc
    if not math.isfinite(value) or value < 0.0:
        raise InvalidParameter(f"Strength must be finite and >= 0, got {strength}.")
    if value > MAX_STRENGTH:
        raise InvalidParameter(f"Strength must fit in float32, got {strength}.")
    return value


def split_seed(seed: int) -> Tuple[int, int]:
    """Derive the seeds of the x and y streams from one frame seed.

    The y seed is ``(seed * SEED_MULTIPLIER) ^ SEED_MIX`` wrapped to 32 bits.
    """

    seed = validate_seed(seed)
    mixed = ((seed * SEED_MULTIPLIER) ^ SEED_MIX) % SEED_MODULUS
    return seed, mixed


def coarse_grid_shape(width: int, height: int, cell_count: int) -> Tuple[int, int]:
    """Cell counts (gx, gy); gy follows the image aspect ratio."""

    if width <= 0 or height <= 0:
        raise InvalidDimensions(f"Field must be non-empty, got {width}x{height}.")
    gx = max(1, int(cell_count))
    gy = max(1, int(round(gx * height / width)))
    return gx, gy


def coarse_grids(cells: Tuple[int, int], seed: int) -> Tuple[np.ndarray, np.ndarray]:
    """Random grids of shape (gy + 1, gx + 1) with values in [-1, 1)."""

    gx, gy = cells
    seed_x, seed_y = split_seed(seed)
    shape = (gy + 1, gx + 1)
    grid_x = (np.random.default_rng(seed_x).random(shape) * 2.0 - 1.0).astype(np.float32)
    grid_y = (np.random.default_rng(seed_y).random(shape) * 2.0 - 1.0).astype(np.float32)
    return grid_x, grid_y


def smoothstep(t: np.ndarray) -> np.ndarray:
    return t * t * (3 - 2 * t)


def lerp(a: np.ndarray, b: np.ndarray, t: np.ndarray) -> np.ndarray:
    # Exact at both ends: lerp(a, b, 0) == a and lerp(a, b, 1) == b.
    return a * (1 - t) + b * t


def _axis_lookup(size: int, cells: int) -> Tuple[np.ndarray, np.ndarray, np.ndarray]:
    """Lower index, upper index and eased fraction for every pixel on an axis."""

    cell_size = np.float32(size) / np.float32(cells)
    coords = np.arange(size, dtype=np.float32) / cell_size
    lower = np.floor(coords)
    frac = (coords - lower).astype(np.float32)
    return _clamp_axis(lower.astype(np.int64), frac, cells)


def _clamp_axis(lower: np.ndarray, frac: np.ndarray, cells: int) -> Tuple[np.ndarray, np.ndarray, np.ndarray]:
    # The last grid row/column repeats past the edge.
    upper = np.minimum(lower + 1, cells)
    lower = np.clip(lower, 0, cells)
    return lower, upper, smoothstep(frac)


def interpolate_grid(
    grid: np.ndarray,
    rows: Tuple[np.ndarray, np.ndarray, np.ndarray],
    cols: Tuple[np.ndarray, np.ndarray, np.ndarray],
) -> np.ndarray:
    """Blend the four corners around each pixel with eased fractions."""

    j0, j1, sy = rows
    i0, i1, sx = cols
    j0, j1, sy = j0[:, None], j1[:, None], sy[:, None]
    i0, i1, sx = i0[None, :], i1[None, :], sx[None, :]
    top = lerp(grid[j0, i0], grid[j0, i1], sx)
    bottom = lerp(grid[j1, i0], grid[j1, i1], sx)
    return lerp(top, bottom, sy)


def blend_cell(grid: np.ndarray, i: int, j: int, tx: float, ty: float) -> float:
    """Noise value inside cell (i, j) at fractional offset (tx, ty) in [0, 1].

    The grid edge repeats instead of wrapping.
    """

    cells_y, cells_x = grid.shape[0] - 1, grid.shape[1] - 1
    rows = _clamp_axis(np.array([j], dtype=np.int64), np.array([ty], dtype=np.float32), cells_y)
    cols = _clamp_axis(np.array([i], dtype=np.int64), np.array([tx], dtype=np.float32), cells_x)
    return float(interpolate_grid(grid, rows, cols)[0, 0])


def sample_noise(grid: np.ndarray, fx: float, fy: float) -> float:
    """Evaluate the value noise at continuous cell coordinates (fx, fy)."""

    i = int(math.floor(fx))
    j = int(math.floor(fy))
    return blend_cell(grid, i, j, fx - i, fy - j)


def generate_displacement(
    width: int,
    height: int,
    cell_count: int,
    seed: int,
    strength: float,
) -> DisplacementField:
    """Generate dx/dy fields of shape (height, width) in pixel units.

    Every value lies in [-strength, strength].
    """

    cell_count = validate_cell_count(cell_count)
    strength = validate_strength(strength)
    cells = coarse_grid_shape(width, height, cell_count)
    grid_x, grid_y = coarse_grids(cells, seed)

    cols = _axis_lookup(width, cells[0])
    rows = _axis_lookup(height, cells[1])
    scale = np.float32(strength)
    dx = np.clip(interpolate_grid(grid_x, rows, cols), -1, 1) * scale
    dy = np.clip(interpolate_grid(grid_y, rows, cols), -1, 1) * scale
    return DisplacementField(
        dx=dx.astype(np.float32),
        dy=dy.astype(np.float32),
        grid_x=grid_x,
        grid_y=grid_y,
        cells=cells,
    )
