"""Image I/O and frame packaging."""

from shaky_lines.io.archive import frame_names, write_frames_dir, write_frames_zip
from shaky_lines.io.images import (
    encode_png,
    encode_preview_gif,
    load_source_image,
    save_frame,
)

__all__ = [
    "encode_png",
    "encode_preview_gif",
    "frame_names",
    "load_source_image",
    "save_frame",
    "write_frames_dir",
    "write_frames_zip",
]
