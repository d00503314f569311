"""
Density compositing: stamps every point onto an alpha canvas in order.

The canvas is an 8-bit premultiplied RGBA buffer. Stamps are blended with the
source-over operator evaluated in 16-bit integer arithmetic, so overlapping
stamps combine as ``src + dst * (1 - src)`` rather than being summed.
"""

import logging
from typing import Optional, Sequence, Tuple
import numpy as np

from ..models import Point

logger = logging.getLogger(__name__)

# Full-scale 16-bit channel value
_M = 0xFFFF


def over(dst: np.ndarray, src: np.ndarray) -> np.ndarray:
    """
    Composite premultiplied RGBA pixels ``src`` over ``dst``.

    Args:
        dst: (..., 4) uint8 destination pixels
        src: (..., 4) uint8 source pixels, same shape as dst

    Returns:
        (..., 4) uint8 array of blended pixels
    """
    src16 = src.astype(np.int64) * 0x101
    keep = (_M - src16[..., 3:4]) * 0x101
    blended = (dst.astype(np.int64) * keep // _M + src16) >> 8
    return blended.astype(np.uint8)


def placement_origin(point: Point, dot_size: int) -> Tuple[int, int]:
    """Top-left canvas pixel at which the stamp for ``point`` is placed."""
    return int(round(point.x)) - dot_size // 2, int(round(point.y)) - dot_size // 2


class DensityCompositor:
    """
    Builds the density buffer by sequentially stamping points onto a canvas.

    Placement order matters: each stamp is composited over everything placed
    before it. Stamps that fall partially or entirely outside the canvas are
    clipped.
    """

    def __init__(self, width: int, height: int) -> None:
        """
        Initialize the compositor.

        Args:
            width: Canvas width in pixels
            height: Canvas height in pixels
        """
        self.width = width
        self.height = height

    def new_canvas(self) -> np.ndarray:
        """Return a fully transparent (height, width, 4) canvas."""
        return np.zeros((self.height, self.width, 4), dtype=np.uint8)

    def place(self, canvas: np.ndarray, point: Point, stamp: np.ndarray,
              dot_size: Optional[int] = None) -> bool:
        """
        Composite one stamp onto the canvas in place.

        Args:
            canvas: Mutable (height, width, 4) uint8 canvas
            point: Point the stamp is centered on
            stamp: (size, size, 4) uint8 stamp
            dot_size: Size used to center the stamp (defaults to the stamp width)

        Returns:
            True if any part of the stamp landed on the canvas
        """
        stamp_h, stamp_w = stamp.shape[:2]
        origin_x, origin_y = placement_origin(point, stamp_w if dot_size is None else dot_size)

        # Clip the stamp rectangle to the canvas
        x0 = max(origin_x, 0)
        y0 = max(origin_y, 0)
        x1 = min(origin_x + stamp_w, self.width)
        y1 = min(origin_y + stamp_h, self.height)
        if x1 <= x0 or y1 <= y0:
            return False

        sx0 = x0 - origin_x
        sy0 = y0 - origin_y
        src = stamp[sy0:sy0 + (y1 - y0), sx0:sx0 + (x1 - x0)]
        canvas[y0:y1, x0:x1] = over(canvas[y0:y1, x0:x1], src)
        return True

    def composite(self, points: Sequence[Point], stamp: np.ndarray,
                  dot_size: Optional[int] = None) -> np.ndarray:
        """
        Stamp every point onto a blank canvas, in sequence order.

        Args:
            points: Points to place, in placement order
            stamp: Shared read-only stamp
            dot_size: Size used to center each stamp (defaults to the stamp width)

        Returns:
            Read-only (height, width, 4) uint8 density buffer
        """
        canvas = self.new_canvas()
        placed = 0
        for point in points:
            if self.place(canvas, point, stamp, dot_size):
                placed += 1

        canvas.flags.writeable = False
        logger.info(
            f"Composited {len(points)} points onto {self.width}x{self.height} canvas "
            f"({len(points) - placed} fully clipped)"
        )
        return canvas
