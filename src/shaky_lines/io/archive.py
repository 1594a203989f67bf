"""Frame sequence packaging."""

from __future__ import annotations

import zipfile
from pathlib import Path
from typing import List, Sequence

import numpy as np

from shaky_lines.io.images import encode_png, save_frame

FRAME_NAME = "frame_{index:03d}.png"


def frame_names(count: int) -> List[str]:
    return [FRAME_NAME.format(index=index) for index in range(count)]


def write_frames_zip(path: Path, frames: Sequence[np.ndarray]) -> Path:
    """Write one PNG entry per frame, numbered in frame order."""

    if not frames:
        raise ValueError("No frames to write; render the animation first.")
    path.parent.mkdir(parents=True, exist_ok=True)
    with zipfile.ZipFile(path, "w", compression=zipfile.ZIP_DEFLATED) as archive:
        for name, frame in zip(frame_names(len(frames)), frames):
            archive.writestr(name, encode_png(frame))
    return path


def write_frames_dir(directory: Path, frames: Sequence[np.ndarray]) -> List[Path]:
    """Write frames as individual PNG files using the archive naming."""

    paths = [directory / name for name in frame_names(len(frames))]
    for path, frame in zip(paths, frames):
        save_frame(path, frame)
    return paths
