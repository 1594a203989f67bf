"""Animation scheduling interface."""

from shaky_lines.scheduler.animate import frame_seeds, render_animation
from shaky_lines.scheduler.control import RunControl

__all__ = ["RunControl", "frame_seeds", "render_animation"]
