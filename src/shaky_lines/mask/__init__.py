"""Grayscale and ink-mask extraction."""

from shaky_lines.mask.extract import as_rgb_array, extract_mask, luminance, validate_threshold

__all__ = ["as_rgb_array", "extract_mask", "luminance", "validate_threshold"]
