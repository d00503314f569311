import numpy as np
import pytest

from heatmap_engine.models import PreconditionViolation
from heatmap_engine.services import make_stamp


def _distances(size):
    coords = np.arange(size, dtype=np.float64)
    xs, ys = np.meshgrid(coords, coords)
    center = size / 2.0
    return np.sqrt((xs - center) ** 2 + (ys - center) ** 2)


def test_stamp_shape_and_channels():
    stamp = make_stamp(10)
    assert stamp.shape == (10, 10, 4)
    assert stamp.dtype == np.uint8
    assert not stamp[..., :3].any()
    assert not stamp.flags.writeable


def test_center_texel_is_near_opaque():
    stamp = make_stamp(10)
    assert stamp[5, 5, 3] == 205


@pytest.mark.parametrize("size", [3, 9, 10, 31])
def test_equidistant_texels_have_equal_alpha(size):
    alpha = make_stamp(size)[..., 3]
    squared = np.round(_distances(size) ** 2, 9)
    for value in np.unique(squared):
        assert len(set(alpha[squared == value].tolist())) == 1
    np.testing.assert_array_equal(alpha, alpha.T)


@pytest.mark.parametrize("size", [4, 10, 25, 64])
def test_alpha_falls_off_with_distance(size):
    alpha = make_stamp(size)[..., 3].astype(int).ravel()
    distance = _distances(size).ravel()
    threshold = 0.5 * np.sqrt(2) * (size / 2.0)

    order = np.argsort(distance, kind="stable")
    inside = order[distance[order] < threshold]
    assert np.all(np.diff(alpha[inside]) <= 0)
    assert np.all(alpha[inside] > 0)
    assert np.all(alpha[distance >= threshold] == 0)


def test_single_pixel_stamp_is_transparent():
    assert not make_stamp(1).any()


def test_two_pixel_stamp_only_marks_center_texel():
    alpha = make_stamp(2)[..., 3]
    assert alpha[1, 1] == 205
    assert np.count_nonzero(alpha) == 1


def test_non_positive_size_rejected():
    with pytest.raises(PreconditionViolation):
        make_stamp(0)
