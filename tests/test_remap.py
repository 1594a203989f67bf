import numpy as np
import pytest

from shaky_lines import InvalidDimensions, InvalidParameter
from shaky_lines.compositor import compose_pixels, resolve_render_mode
from shaky_lines.remap import remap_mask, sample_bilinear, sample_nearest


@pytest.fixture
def dot_mask() -> np.ndarray:
    mask = np.zeros((3, 3), dtype=np.float32)
    mask[1, 1] = 1.0
    return mask


def test_nearest_rounds_to_closest_pixel(dot_mask):
    assert float(sample_nearest(dot_mask, 1.4, 0.6)) == 1.0
    assert float(sample_nearest(dot_mask, 0.4, 1.0)) == 0.0


def test_nearest_rounds_half_to_even():
    mask = np.zeros((3, 3), dtype=np.float32)
    mask[1, 2] = 1.0
    assert float(sample_nearest(mask, 2.5, 1.0)) == 1.0
    assert float(sample_nearest(mask, 1.5, 1.0)) == 1.0
    assert float(sample_nearest(mask, 0.5, 1.0)) == 0.0


def test_nearest_out_of_bounds_is_background():
    mask = np.ones((3, 3), dtype=np.float32)
    assert float(sample_nearest(mask, -0.6, 1.0)) == 0.0
    assert float(sample_nearest(mask, 1.0, 3.0)) == 0.0
    assert float(sample_nearest(mask, -0.4, 1.0)) == 1.0


def test_bilinear_interpolates(dot_mask):
    assert float(sample_bilinear(dot_mask, 1.0, 1.0)) == 1.0
    assert float(sample_bilinear(dot_mask, 1.5, 1.0)) == pytest.approx(0.5)
    assert float(sample_bilinear(dot_mask, 0.5, 0.5)) == pytest.approx(0.25)


def test_bilinear_fades_at_border():
    mask = np.ones((4, 4), dtype=np.float32)
    interior = float(sample_bilinear(mask, 1.5, 1.5))
    assert interior == 1.0

    left = float(sample_bilinear(mask, -0.5, 1.0))
    assert 0.0 < left < interior
    assert left == pytest.approx(0.5)

    corner = float(sample_bilinear(mask, 3.25, 3.75))
    assert 0.0 < corner < interior
    assert corner == pytest.approx(0.75 * 0.25)

    assert float(sample_bilinear(mask, -10.0, -10.0)) == 0.0
    assert float(sample_bilinear(mask, 100.0, 2.0)) == 0.0


def test_remap_without_displacement_is_identity():
    rng = np.random.default_rng(3)
    mask = (rng.random((12, 17)) > 0.5).astype(np.float32)
    zeros = np.zeros_like(mask)
    for antialias in (True, False):
        out = remap_mask(mask, zeros, zeros, antialias)
        assert np.array_equal(out, mask)
        assert out is not mask


def test_remap_is_an_inverse_warp():
    rng = np.random.default_rng(4)
    mask = (rng.random((10, 10)) > 0.5).astype(np.float32)
    dx = np.ones_like(mask)
    dy = np.zeros_like(mask)
    for antialias in (True, False):
        out = remap_mask(mask, dx, dy, antialias)
        # Output pixel x reads from x - 1, so content moves right.
        assert np.array_equal(out[:, 1:], mask[:, :-1])
        assert not out[:, 0].any()


def test_remap_shape_mismatch():
    mask = np.zeros((4, 4), dtype=np.float32)
    with pytest.raises(InvalidDimensions):
        remap_mask(mask, np.zeros((4, 5), dtype=np.float32), np.zeros((4, 4), dtype=np.float32), True)


def test_compose_mask_mode():
    values = np.array([[0.0, 0.5, 0.51, 1.0]], dtype=np.float32)
    pixels = compose_pixels(values, "mask")
    assert pixels.shape == (1, 4, 3)
    assert pixels.dtype == np.uint8
    assert pixels[0, :, 0].tolist() == [255, 255, 0, 0]
    assert np.array_equal(compose_pixels(values, "threshold"), pixels)


def test_compose_transparent_mode():
    values = np.array([[0.2, 0.9]], dtype=np.float32)
    pixels = compose_pixels(values, "transparent")
    assert pixels.shape == (1, 2, 4)
    assert pixels[0, 0].tolist() == [0, 0, 0, 0]
    assert pixels[0, 1].tolist() == [0, 0, 0, 255]


def test_resolve_render_mode():
    assert resolve_render_mode(mask_only=True, transparent_background=False) == "mask"
    assert resolve_render_mode(mask_only=False, transparent_background=False) == "threshold"
    assert resolve_render_mode(mask_only=True, transparent_background=True) == "transparent"
    assert resolve_render_mode(mask_only=False, transparent_background=True) == "transparent"


def test_unknown_render_mode():
    with pytest.raises(InvalidParameter):
        compose_pixels(np.zeros((2, 2), dtype=np.float32), "sepia")
