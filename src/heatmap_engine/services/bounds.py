"""
Bounding box computation for point clouds.
"""

import logging
from typing import Sequence

from ..models import BoundingBox, Point, PreconditionViolation

logger = logging.getLogger(__name__)


def find_limits(points: Sequence[Point]) -> BoundingBox:
    """
    Find the coordinate extrema of a point cloud in a single pass.

    Args:
        points: Non-empty sequence of points

    Returns:
        BoundingBox whose min holds the smallest x and y and whose max holds the largest

    Raises:
        PreconditionViolation: If the sequence is empty
    """
    if not points:
        raise PreconditionViolation("Cannot compute limits of an empty point sequence")

    min_x = max_x = points[0].x
    min_y = max_y = points[0].y

    for p in points:
        min_x = min(p.x, min_x)
        min_y = min(p.y, min_y)
        max_x = max(p.x, max_x)
        max_y = max(p.y, max_y)

    bounds = BoundingBox(Point(min_x, min_y), Point(max_x, max_y))
    logger.debug(f"Limits of {len(points)} points: {bounds}")
    return bounds
