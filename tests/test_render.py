import numpy as np
import pytest
from PIL import Image

from shaky_lines import (
    InvalidDimensions,
    InvalidParameter,
    UnsupportedPixelFormat,
    extract_mask,
    render_frame,
)


@pytest.mark.parametrize("antialias", [True, False])
@pytest.mark.parametrize("render_mode", ["mask", "threshold", "transparent"])
def test_render_is_deterministic(line_art, antialias, render_mode):
    kwargs = dict(strength=4, cell_count=6, seed=77, threshold=80, antialias=antialias, render_mode=render_mode)
    first = render_frame(line_art, **kwargs)
    second = render_frame(line_art, **kwargs)
    assert np.array_equal(first, second)


@pytest.mark.parametrize("antialias", [True, False])
def test_zero_strength_reproduces_mask(line_art, antialias):
    out = render_frame(line_art, strength=0, cell_count=8, seed=5, threshold=80, antialias=antialias)
    mask = extract_mask(line_art, 80)
    expected = np.where(mask > 0, 0, 255).astype(np.uint8)
    assert out.shape == (48, 64, 3)
    for channel in range(3):
        assert np.array_equal(out[..., channel], expected)


def test_white_image_stays_white():
    image = np.full((4, 4, 3), 255, dtype=np.uint8)
    for seed in (0, 1, 999):
        out = render_frame(image, strength=10, cell_count=3, seed=seed, threshold=80)
        assert (out == 255).all()


def test_single_black_pixel():
    image = np.zeros((1, 1, 3), dtype=np.uint8)
    out = render_frame(image, strength=0, cell_count=8, seed=1234, threshold=80)
    assert out.shape == (1, 1, 3)
    assert out[0, 0].tolist() == [0, 0, 0]


def test_seed_changes_output(line_art):
    first = render_frame(line_art, strength=5, cell_count=8, seed=1, threshold=80)
    second = render_frame(line_art, strength=5, cell_count=8, seed=2, threshold=80)
    assert not np.array_equal(first, second)


def test_mask_and_threshold_modes_match(line_art):
    mask_mode = render_frame(line_art, strength=3, cell_count=8, seed=9, threshold=80, render_mode="mask")
    threshold_mode = render_frame(line_art, strength=3, cell_count=8, seed=9, threshold=80, render_mode="threshold")
    assert np.array_equal(mask_mode, threshold_mode)


def test_transparent_mode(line_art):
    out = render_frame(line_art, strength=3, cell_count=8, seed=9, threshold=80, render_mode="transparent")
    opaque = render_frame(line_art, strength=3, cell_count=8, seed=9, threshold=80, render_mode="mask")
    assert out.shape == (48, 64, 4)
    assert not out[..., :3].any()
    assert set(np.unique(out[..., 3]).tolist()) <= {0, 255}
    assert np.array_equal(out[..., 3] == 255, opaque[..., 0] == 0)


def test_output_is_strictly_black_and_white(line_art):
    out = render_frame(line_art, strength=6, cell_count=5, seed=3, threshold=80)
    assert set(np.unique(out).tolist()) <= {0, 255}


def test_source_is_not_modified(line_art):
    before = line_art.copy()
    render_frame(line_art, strength=6, cell_count=5, seed=3, threshold=80)
    assert np.array_equal(line_art, before)


def test_pil_source_matches_array(line_art):
    from_array = render_frame(line_art, strength=2, cell_count=4, seed=8, threshold=80)
    from_pil = render_frame(Image.fromarray(line_art), strength=2, cell_count=4, seed=8, threshold=80)
    assert np.array_equal(from_array, from_pil)


def test_zero_sized_source():
    with pytest.raises(InvalidDimensions):
        render_frame(np.zeros((0, 10, 3), dtype=np.uint8), strength=1, cell_count=2, seed=1, threshold=80)


@pytest.mark.parametrize(
    "kwargs",
    [
        {"strength": -0.5},
        {"strength": 1e39},
        {"cell_count": 0},
        {"threshold": 300},
        {"seed": -5},
        {"render_mode": "sepia"},
    ],
)
def test_invalid_parameters(line_art, kwargs):
    params = dict(strength=1, cell_count=2, seed=1, threshold=80)
    params.update(kwargs)
    with pytest.raises(InvalidParameter):
        render_frame(line_art, **params)


def test_unsupported_source():
    with pytest.raises(UnsupportedPixelFormat):
        render_frame(np.zeros((4, 4), dtype=np.float64), strength=1, cell_count=2, seed=1, threshold=80)
