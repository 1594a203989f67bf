"""Error types raised by the frame pipeline."""

from __future__ import annotations


class ShakyLinesError(ValueError):
    """Base class for invalid inputs to the frame pipeline."""


class InvalidDimensions(ShakyLinesError):
    """The source image has zero width or height."""


class InvalidParameter(ShakyLinesError):
    """A render parameter is outside its accepted range."""


class UnsupportedPixelFormat(ShakyLinesError):
    """The source image cannot be read as RGB luminance."""
