"""Core data structures used throughout the pipeline."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Tuple

import numpy as np


@dataclass(frozen=True)
class RenderParams:
    """Parameters for a single frame. Immutable while the frame renders."""

    strength: float
    cell_count: int
    threshold: int
    seed: int
    antialias: bool = True
    render_mode: str = "mask"


@dataclass
class DisplacementField:
    """Per-pixel displacement in pixels plus the coarse grids it came from.

    ``dx``/``dy`` have shape (H, W). ``grid_x``/``grid_y`` have shape
    (gy + 1, gx + 1) and ``cells`` is (gx, gy).
    """

    dx: np.ndarray
    dy: np.ndarray
    grid_x: np.ndarray
    grid_y: np.ndarray
    cells: Tuple[int, int]

    @property
    def grid_size(self) -> Tuple[int, int]:
        """Number of coarse grid points along x and y."""

        return (self.cells[0] + 1, self.cells[1] + 1)


@dataclass
class Animation:
    """Frames rendered for one animation run, in frame order."""

    frames: List[np.ndarray] = field(default_factory=list)
    seeds: List[int] = field(default_factory=list)
    fps: int = 15
    completed: bool = True

    @property
    def size(self) -> Tuple[int, int]:
        if not self.frames:
            return (0, 0)
        height, width = self.frames[0].shape[:2]
        return (width, height)
