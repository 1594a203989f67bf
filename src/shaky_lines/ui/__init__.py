"""Web UI for rendering and previewing animations."""

from shaky_lines.ui.app import AnimationWorker, RenderRequest, create_app

__all__ = ["AnimationWorker", "RenderRequest", "create_app"]
