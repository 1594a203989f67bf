"""Output pixel composition for the render modes."""

from shaky_lines.compositor.modes import (
    INK_CUTOFF,
    RENDER_MODES,
    compose_pixels,
    resolve_render_mode,
    validate_render_mode,
)

__all__ = [
    "INK_CUTOFF",
    "RENDER_MODES",
    "compose_pixels",
    "resolve_render_mode",
    "validate_render_mode",
]
