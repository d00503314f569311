import numpy as np

from heatmap_engine.models import Point
from heatmap_engine.services import DensityCompositor, make_stamp
from heatmap_engine.services.compositor import over, placement_origin


def _pixel(alpha):
    return np.array([[[0, 0, 0, alpha]]], dtype=np.uint8)


def test_over_blends_rather_than_sums():
    once = over(_pixel(0), _pixel(205))
    twice = over(once, _pixel(205))
    assert once[0, 0, 3] == 205
    assert twice[0, 0, 3] == 246

    s = 205 / 255.0
    assert abs(twice[0, 0, 3] / 255.0 - (s + s * (1 - s))) <= 1 / 255.0
    assert once[0, 0, 3] < twice[0, 0, 3] < 2 * 205


def test_over_identities():
    dst = np.array([[[10, 20, 30, 200]]], dtype=np.uint8)
    opaque = np.array([[[1, 2, 3, 255]]], dtype=np.uint8)
    np.testing.assert_array_equal(over(dst, np.zeros_like(dst)), dst)
    np.testing.assert_array_equal(over(dst, opaque), opaque)


def test_placement_origin_rounds_and_centers():
    assert placement_origin(Point(10, 10), 10) == (5, 5)
    assert placement_origin(Point(10.4, 9.6), 10) == (5, 5)
    assert placement_origin(Point(3, 3), 7) == (0, 0)


def test_placement_origin_rounds_halves_to_even():
    assert placement_origin(Point(2.5, 3.5), 2) == (1, 3)
    assert placement_origin(Point(-2.5, 0.5), 2) == (-3, -1)


def test_single_point_copies_stamp():
    stamp = make_stamp(10)
    density = DensityCompositor(20, 20).composite([Point(10, 10)], stamp)

    assert density.shape == (20, 20, 4)
    assert not density.flags.writeable
    np.testing.assert_array_equal(density[5:15, 5:15], stamp)
    outside = np.ones((20, 20), dtype=bool)
    outside[5:15, 5:15] = False
    assert not density[outside].any()


def test_repeated_point_is_over_composited():
    stamp = make_stamp(10)
    density = DensityCompositor(20, 20).composite([Point(10, 10), Point(10, 10)], stamp)
    expected = over(stamp, stamp)
    np.testing.assert_array_equal(density[5:15, 5:15], expected)
    assert density[10, 10, 3] == 246


def test_stamps_are_clipped_at_canvas_edges():
    stamp = make_stamp(10)
    compositor = DensityCompositor(20, 20)
    density = compositor.composite([Point(0, 0), Point(19, 19)], stamp)

    np.testing.assert_array_equal(density[0:5, 0:5], stamp[5:10, 5:10])
    np.testing.assert_array_equal(density[14:20, 14:20], stamp[0:6, 0:6])


def test_points_off_canvas_leave_it_blank():
    stamp = make_stamp(10)
    compositor = DensityCompositor(20, 20)
    canvas = compositor.new_canvas()
    assert not compositor.place(canvas, Point(100, 100), stamp)
    assert not compositor.place(canvas, Point(-50, 5), stamp)
    assert not canvas.any()


def test_overlapping_points_are_blended_in_sequence_order():
    stamp = make_stamp(12)
    points = [Point(8, 8), Point(12, 10), Point(9, 14)]
    density = DensityCompositor(24, 24).composite(points, stamp)

    expected = np.zeros((24, 24, 4), dtype=np.uint8)
    for p in points:
        x0, y0 = placement_origin(p, 12)
        expected[y0:y0 + 12, x0:x0 + 12] = over(expected[y0:y0 + 12, x0:x0 + 12], stamp)
    np.testing.assert_array_equal(density, expected)
