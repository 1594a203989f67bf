"""Shaky line animation: value-noise displacement of black/white artwork."""

from shaky_lines.errors import (
    InvalidDimensions,
    InvalidParameter,
    ShakyLinesError,
    UnsupportedPixelFormat,
)
from shaky_lines.mask import extract_mask
from shaky_lines.pipeline import render_frame

__all__ = [
    "InvalidDimensions",
    "InvalidParameter",
    "ShakyLinesError",
    "UnsupportedPixelFormat",
    "extract_mask",
    "render_frame",
]
