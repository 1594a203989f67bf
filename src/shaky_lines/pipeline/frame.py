"""Single-frame rendering: mask, displacement, remap, compose."""

from __future__ import annotations

import numpy as np

from shaky_lines.compositor import compose_pixels, validate_render_mode
from shaky_lines.data import RenderParams
from shaky_lines.errors import InvalidDimensions
from shaky_lines.mask import extract_mask, validate_threshold
from shaky_lines.mask.extract import SourceImage
from shaky_lines.noise import generate_displacement, validate_cell_count, validate_seed, validate_strength
from shaky_lines.remap import remap_mask


def validate_params(params: RenderParams) -> RenderParams:
    """Check every field of ``params``; raises ``InvalidParameter``."""

    validate_strength(params.strength)
    validate_cell_count(params.cell_count)
    validate_threshold(params.threshold)
    validate_seed(params.seed)
    validate_render_mode(params.render_mode)
    return params


def render_mask_frame(mask: np.ndarray, params: RenderParams) -> np.ndarray:
    """Render one frame from an already extracted mask."""

    if mask.ndim != 2 or 0 in mask.shape:
        raise InvalidDimensions(f"Mask must be a non-empty 2D grid, got shape {mask.shape}.")
    height, width = mask.shape
    field = generate_displacement(width, height, params.cell_count, params.seed, params.strength)
    values = remap_mask(mask, field.dx, field.dy, params.antialias)
    return compose_pixels(values, params.render_mode)


def render_frame(
    source_image: SourceImage,
    strength: float,
    cell_count: int,
    seed: int,
    threshold: int,
    antialias: bool = True,
    render_mode: str = "mask",
) -> np.ndarray:
    """Render one shaken frame of ``source_image``.

    Returns a new uint8 array: (H, W, 3) for the opaque modes, (H, W, 4) for
    ``"transparent"``. Identical arguments always produce identical pixels.
    """

    params = validate_params(
        RenderParams(
            strength=strength,
            cell_count=cell_count,
            threshold=threshold,
            seed=seed,
            antialias=bool(antialias),
            render_mode=render_mode,
        )
    )
    mask = extract_mask(source_image, params.threshold)
    return render_mask_frame(mask, params)
