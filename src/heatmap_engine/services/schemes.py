"""
Color scheme construction for heatmaps.

A scheme is declared as an ordered list of color ranges; each range
contributes a fixed number of linearly interpolated colors. The resulting
ramp is ordered hottest first, which is the order the color mapper indexes.
"""

import logging
from typing import Dict, List, Sequence
import numpy as np
from matplotlib import colormaps

from ..models import Color, ColorRange, ColorRamp, WHITE, TRANSPARENT

logger = logging.getLogger(__name__)


YELLOW = Color(255, 255, 0, 255)
RED = Color(255, 0, 0, 255)
GREY = Color(128, 128, 128, 220)

# White hot core fading through yellow and red to a transparent tail
ALPHA_FIRE: List[ColorRange] = [
    ColorRange(WHITE, YELLOW, 50),
    ColorRange(YELLOW, RED, 60),
    ColorRange(RED, GREY, 100),
    ColorRange(GREY, TRANSPARENT, 46),
]

SCHEMES: Dict[str, List[ColorRange]] = {
    "alphafire": ALPHA_FIRE,
}


def interpolate_range(color_range: ColorRange) -> np.ndarray:
    """
    Interpolate every channel of a range in premultiplied 16-bit precision.

    The start color is included and the end color is not, so consecutive
    ranges sharing a color do not repeat it.

    Returns:
        (steps, 4) int64 array of 16-bit channels
    """
    start = np.array(color_range.start.premultiplied16(), dtype=np.float64)
    end = np.array(color_range.end.premultiplied16(), dtype=np.float64)
    fractions = np.arange(color_range.steps, dtype=np.float64) / color_range.steps
    return (start + (end - start) * fractions[:, None]).astype(np.int64)


def build_ramp(ranges: Sequence[ColorRange]) -> ColorRamp:
    """
    Build a color ramp from an ordered list of ranges.

    Args:
        ranges: Ranges in declared order, hottest first

    Returns:
        ColorRamp with sum(range.steps) colors
    """
    if not ranges:
        return ColorRamp([])
    ramp = ColorRamp(np.concatenate([interpolate_range(r) for r in ranges]))
    logger.debug(f"Built ramp of {len(ramp)} colors from {len(ranges)} ranges")
    return ramp


def from_colormap(name: str, steps: int = 256) -> ColorRamp:
    """
    Sample a matplotlib colormap into a ramp.

    The top of the colormap becomes the hottest (first) ramp entry.

    Args:
        name: Registered matplotlib colormap name (e.g. 'hot', 'inferno')
        steps: Number of colors to sample

    Raises:
        ValueError: If the colormap is unknown or steps is not positive
    """
    if steps <= 0:
        raise ValueError("Colormap steps must be positive")
    if name not in colormaps:
        raise ValueError(f"Unknown colormap: {name}")

    rgba16 = colormaps[name](np.linspace(1.0, 0.0, steps), bytes=True).astype(np.int64) * 0x101
    rgba16[:, :3] = rgba16[:, :3] * rgba16[:, 3:] // 0xFFFF
    return ColorRamp(rgba16)


def get_scheme(name: str, steps: int = 256) -> ColorRamp:
    """
    Look up a color scheme by name.

    Built-in schemes are tried first, then any matplotlib colormap. The
    ``steps`` argument only applies to colormaps; built-in schemes carry
    their own step counts.
    """
    key = name.lower()
    if key in SCHEMES:
        return build_ramp(SCHEMES[key])
    try:
        return from_colormap(name, steps)
    except ValueError:
        raise ValueError(
            f"Unknown scheme '{name}'. Built-in schemes: {', '.join(sorted(SCHEMES))}; "
            f"any matplotlib colormap name is also accepted"
        ) from None


def scheme_preview(ramp: ColorRamp, height: int = 20) -> np.ndarray:
    """
    Render a ramp as an image strip for inspection.

    Args:
        ramp: Ramp to draw, one pixel column per color
        height: Strip height in pixels

    Returns:
        (height, len(ramp), 4) uint8 array of the ramp downsampled to 8 bits
    """
    if height <= 0:
        raise ValueError("Preview height must be positive")
    row = (ramp.values.astype(np.int64) >> 8).astype(np.uint8)
    return np.repeat(row[None, :, :], height, axis=0)
