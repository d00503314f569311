import pytest

from heatmap_engine.models import Point, PreconditionViolation
from heatmap_engine.services import find_limits


def test_limits_of_mixed_points():
    bounds = find_limits([Point(0, 0), Point(10, 5), Point(-3, 7)])
    assert bounds.min == Point(-3, 0)
    assert bounds.max == Point(10, 7)
    assert bounds.dx == 13
    assert bounds.dy == 7


def test_single_point_has_zero_extent():
    bounds = find_limits([Point(4.5, -2.0)])
    assert bounds.min == bounds.max == Point(4.5, -2.0)
    assert bounds.dx == 0 and bounds.dy == 0


def test_empty_points_rejected():
    with pytest.raises(PreconditionViolation):
        find_limits([])
