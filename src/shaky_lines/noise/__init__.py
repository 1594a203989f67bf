"""Value-noise displacement fields."""

from shaky_lines.noise.field import (
    SEED_MIX,
    SEED_MULTIPLIER,
    blend_cell,
    coarse_grid_shape,
    coarse_grids,
    generate_displacement,
    sample_noise,
    smoothstep,
    split_seed,
    validate_cell_count,
    validate_seed,
    validate_strength,
)

__all__ = [
    "SEED_MIX",
    "SEED_MULTIPLIER",
    "blend_cell",
    "coarse_grid_shape",
    "coarse_grids",
    "generate_displacement",
    "sample_noise",
    "smoothstep",
    "split_seed",
    "validate_cell_count",
    "validate_seed",
    "validate_strength",
]
