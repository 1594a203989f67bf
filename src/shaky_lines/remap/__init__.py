"""Inverse-remap resampling."""

from shaky_lines.remap.sampler import remap_mask, sample_bilinear, sample_nearest

__all__ = ["remap_mask", "sample_bilinear", "sample_nearest"]
