"""Public frame rendering entry points."""

from shaky_lines.pipeline.frame import render_frame, render_mask_frame, validate_params

__all__ = ["render_frame", "render_mask_frame", "validate_params"]
