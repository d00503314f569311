"""
Data models for heatmap rendering: points, colors, ramps and rendered images.
"""

import math
from dataclasses import dataclass, field
from typing import Iterable, Iterator, List, Optional, Sequence, Tuple, Union
import numpy as np


# Maximum value of a 16-bit color channel
MAX_CHANNEL_16 = 0xFFFF


class PreconditionViolation(ValueError):
    """Raised when render inputs are rejected before any rendering starts."""


@dataclass(frozen=True)
class Point:
    """
    A data point to be plotted, in canvas pixel coordinates.

    Attributes:
        x: Horizontal position in pixels
        y: Vertical position in pixels
    """
    x: float
    y: float


@dataclass(frozen=True)
class BoundingBox:
    """
    Coordinate extrema of a point cloud.

    Attributes:
        min: Point holding the smallest x and smallest y
        max: Point holding the largest x and largest y
    """
    min: Point
    max: Point

    @property
    def dx(self) -> float:
        """Horizontal extent of the box."""
        return self.max.x - self.min.x

    @property
    def dy(self) -> float:
        """Vertical extent of the box."""
        return self.max.y - self.min.y


@dataclass(frozen=True)
class Color:
    """
    A straight (non-premultiplied) RGBA color with 8-bit channels.

    Attributes:
        r: Red channel (0-255)
        g: Green channel (0-255)
        b: Blue channel (0-255)
        a: Alpha channel (0-255), opaque by default
    """
    r: int
    g: int
    b: int
    a: int = 255

    def __post_init__(self) -> None:
        """Validate channel values."""
        for name in ("r", "g", "b", "a"):
            value = getattr(self, name)
            if not (0 <= value <= 255):
                raise ValueError(f"Color channel {name}={value} must be between 0 and 255")

    def rgba16(self) -> Tuple[int, int, int, int]:
        """Return the channels upsampled to 16-bit precision."""
        return (self.r * 0x101, self.g * 0x101, self.b * 0x101, self.a * 0x101)

    def premultiplied16(self) -> Tuple[int, int, int, int]:
        """Return 16-bit channels with the color channels scaled by alpha."""
        r, g, b, a = self.rgba16()
        return (r * a // MAX_CHANNEL_16, g * a // MAX_CHANNEL_16, b * a // MAX_CHANNEL_16, a)


WHITE = Color(255, 255, 255, 255)
TRANSPARENT = Color(0, 0, 0, 0)


@dataclass(frozen=True)
class ColorRange:
    """
    One segment of a color scheme.

    Attributes:
        start: First color of the segment
        end: Color the segment interpolates towards
        steps: Number of colors the segment contributes
    """
    start: Color
    end: Color
    steps: int

    def __post_init__(self) -> None:
        """Validate the segment."""
        if self.steps <= 0:
            raise ValueError("Color range steps must be positive")


ColorLike = Union[Color, Sequence[int]]


def as_color(value: ColorLike) -> Color:
    """Coerce a Color or an (r, g, b[, a]) tuple of 8-bit channels to a Color."""
    if isinstance(value, Color):
        return value
    return Color(*(int(channel) for channel in value))


class ColorRamp:
    """
    Ordered sequence of premultiplied 16-bit RGBA colors used to color density values.

    Index 0 is the hottest end of the ramp. The colors are stored in a
    read-only ``(N, 4)`` uint16 array so that the ramp can be shared freely
    between worker threads.
    """

    def __init__(self, values: Union[np.ndarray, Iterable[Sequence[int]]]) -> None:
        """
        Initialize the ramp from premultiplied 16-bit RGBA rows.

        Args:
            values: Array-like of shape (N, 4) with channels in 0..65535
        """
        if not isinstance(values, np.ndarray):
            values = list(values)
        array = np.asarray(values, dtype=np.int64)
        if array.size == 0:
            array = np.zeros((0, 4), dtype=np.int64)
        if array.ndim != 2 or array.shape[1] != 4:
            raise ValueError(f"Ramp values must have shape (N, 4), got {array.shape}")
        if np.any(array < 0) or np.any(array > MAX_CHANNEL_16):
            raise ValueError("Ramp channels must be between 0 and 65535")

        self._values = array.astype(np.uint16)
        self._values.flags.writeable = False

    @classmethod
    def from_colors(cls, colors: Iterable[ColorLike]) -> "ColorRamp":
        """Build a ramp from 8-bit colors, hottest first."""
        return cls([as_color(color).premultiplied16() for color in colors])

    @property
    def values(self) -> np.ndarray:
        """Read-only (N, 4) uint16 array of premultiplied 16-bit channels."""
        return self._values

    def colors(self) -> List[Color]:
        """Return the ramp downsampled to 8-bit premultiplied colors."""
        return [Color(*(int(channel) >> 8 for channel in row)) for row in self._values]

    def reversed(self) -> "ColorRamp":
        """Return a ramp with the hot and cool ends swapped."""
        return ColorRamp(self._values[::-1])

    def __len__(self) -> int:
        return int(self._values.shape[0])

    def __getitem__(self, index: int) -> Tuple[int, int, int, int]:
        return tuple(int(channel) for channel in self._values[index])

    def __iter__(self) -> Iterator[Tuple[int, int, int, int]]:
        for index in range(len(self)):
            yield self[index]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ColorRamp):
            return NotImplemented
        return np.array_equal(self._values, other._values)

    def __repr__(self) -> str:
        return f"ColorRamp(length={len(self)})"


@dataclass
class RenderParameters:
    """
    Scalar parameters of a single render call.

    Attributes:
        width: Canvas width in pixels
        height: Canvas height in pixels
        dot_size: Diameter in pixels of each point's impact
        opacity: Global alpha scale (0-255) applied to colored pixels
    """
    width: int
    height: int
    dot_size: int
    opacity: int

    def __post_init__(self) -> None:
        """Validate render parameters."""
        for name in ("width", "height", "dot_size", "opacity"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, (int, np.integer)):
                raise PreconditionViolation(f"{name} must be an integer, got {value!r}")
        if self.width <= 0 or self.height <= 0:
            raise PreconditionViolation(
                f"Canvas dimensions must be positive, got {self.width}x{self.height}"
            )
        if self.dot_size <= 0:
            raise PreconditionViolation(f"Dot size must be positive, got {self.dot_size}")
        if not (0 <= self.opacity <= 255):
            raise PreconditionViolation(f"Opacity must be between 0 and 255, got {self.opacity}")


def as_point(value: Union[Point, Sequence[float]]) -> Point:
    """
    Coerce a Point or an (x, y) pair to a Point.

    Raises:
        PreconditionViolation: If the value is not a pair of finite numbers
    """
    if isinstance(value, Point):
        x, y = value.x, value.y
    else:
        try:
            x, y = value
            x, y = float(x), float(y)
        except (TypeError, ValueError) as e:
            raise PreconditionViolation(f"Point must be an (x, y) pair, got {value!r}") from e
    if not (math.isfinite(x) and math.isfinite(y)):
        raise PreconditionViolation(f"Point coordinates must be finite, got ({x}, {y})")
    return value if isinstance(value, Point) else Point(x, y)


@dataclass
class HeatmapImage:
    """
    A fully rendered heatmap.

    Attributes:
        data: (height, width, 4) uint8 array of straight-alpha RGBA pixels
        width: Image width in pixels
        height: Image height in pixels
        bounds: Bounding box of the rendered points
        metadata: Optional details about the render call
    """
    data: np.ndarray
    width: int
    height: int
    bounds: Optional[BoundingBox] = None
    metadata: dict = field(default_factory=dict)

    def __post_init__(self) -> None:
        """Validate the image data."""
        if self.data.shape != (self.height, self.width, 4):
            raise ValueError(
                f"Data shape {self.data.shape} doesn't match dimensions "
                f"({self.height}, {self.width}, 4)"
            )
        if self.data.dtype != np.uint8:
            raise ValueError(f"Image data must be uint8, got {self.data.dtype}")

    def pixel(self, x: int, y: int) -> Tuple[int, int, int, int]:
        """Return the RGBA value of the pixel at column x, row y."""
        return tuple(int(channel) for channel in self.data[y, x])
