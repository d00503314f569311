"""
Stamp generation: the radial alpha footprint placed once for every point.
"""

import logging
import numpy as np

from ..models import PreconditionViolation

logger = logging.getLogger(__name__)


def make_stamp(size: int) -> np.ndarray:
    """
    Build the square alpha mask representing one point's impact.

    Alpha falls off linearly with the distance from the stamp center and is
    zero at and beyond ``0.5 * sqrt(2) * size / 2``. Color channels are zero
    (premultiplied black), so only the alpha channel carries information.

    Args:
        size: Diameter of the stamp in pixels

    Returns:
        Read-only (size, size, 4) uint8 RGBA array
    """
    if size <= 0:
        raise PreconditionViolation(f"Stamp size must be positive, got {size}")

    center = size / 2.0
    max_distance = 0.5 * np.sqrt(center ** 2 + center ** 2)

    # Texel grid, rows are y and columns are x
    coords = np.arange(size, dtype=np.float64)
    x_grid, y_grid = np.meshgrid(coords, coords)
    distance = np.sqrt((x_grid - center) ** 2 + (y_grid - center) ** 2)

    inside = distance < max_distance
    falloff = np.clip(200.0 * distance / max_distance + 50.0, 0, 255).astype(np.uint8)

    stamp = np.zeros((size, size, 4), dtype=np.uint8)
    stamp[..., 3] = np.where(inside, 255 - falloff, 0)
    stamp.flags.writeable = False

    logger.debug(f"Stamp generated: size={size}, threshold radius={max_distance:.3f}")
    return stamp
