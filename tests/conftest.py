from pathlib import Path

import numpy as np
import pytest
from PIL import Image


@pytest.fixture
def line_art() -> np.ndarray:
    """White 64x48 RGB image with a few black strokes."""

    image = np.full((48, 64, 3), 255, dtype=np.uint8)
    image[10:12, 5:60] = 0
    image[5:45, 30:32] = 0
    image[30:33, 8:50] = 20
    return image


@pytest.fixture
def line_art_png(tmp_path: Path, line_art: np.ndarray) -> Path:
    path = tmp_path / "source.png"
    Image.fromarray(line_art).save(path)
    return path
