"""
Heatmap rendering entry point.

Rendering runs in two phases. Points are first stamped one after another onto
an alpha-only density canvas; the finished canvas is then colored column by
column in parallel. All inputs are validated before either phase starts, so a
render call either returns a complete image or raises PreconditionViolation.
"""

import logging
import time
from typing import Iterable, List, Optional, Sequence, Union

from ..models import (
    ColorRamp,
    HeatmapImage,
    Point,
    PreconditionViolation,
    RenderParameters,
    as_point,
)
from ..models.heat_data import ColorLike
from .bounds import find_limits
from .stamp import make_stamp
from .compositor import DensityCompositor
from .color_mapper import ColorMapper

logger = logging.getLogger(__name__)

PointLike = Union[Point, Sequence[float]]


class HeatmapRenderer:
    """
    Renders point clouds into RGBA heatmap images.

    Points are interpreted directly as canvas pixel coordinates; the bounding
    box of the cloud is computed and reported with the image but does not
    rescale placement.
    """

    def __init__(self, mapper_workers: Optional[int] = None) -> None:
        """
        Initialize the renderer.

        Args:
            mapper_workers: Worker threads for color mapping (defaults to settings)
        """
        self.color_mapper = ColorMapper(workers=mapper_workers)

    def render(
        self,
        width: int,
        height: int,
        points: Iterable[PointLike],
        dot_size: int,
        opacity: int,
        scheme: Union[ColorRamp, Iterable[ColorLike]],
    ) -> HeatmapImage:
        """
        Draw a heatmap.

        Args:
            width: Width of the image to create
            height: Height of the image to create
            points: Points to plot, in placement order
            dot_size: Impact size of each point on the output
            opacity: Alpha value (0-255) of the colored overlay
            scheme: Color ramp to choose from, hottest color first

        Returns:
            Rendered HeatmapImage

        Raises:
            PreconditionViolation: If any input is rejected
        """
        params = RenderParameters(width=width, height=height, dot_size=dot_size, opacity=opacity)
        point_list = self._validate_points(points)
        ramp = self._validate_scheme(scheme)

        start = time.perf_counter()

        bounds = find_limits(point_list)
        stamp = make_stamp(params.dot_size)

        compositor = DensityCompositor(params.width, params.height)
        density = compositor.composite(point_list, stamp, params.dot_size)

        pixels = self.color_mapper.map(density, params.opacity, ramp)

        elapsed = time.perf_counter() - start
        logger.info(
            f"Rendered {len(point_list)} points into {params.width}x{params.height} heatmap "
            f"in {elapsed:.3f}s (dot size={params.dot_size}, opacity={params.opacity}, "
            f"ramp length={len(ramp)})"
        )

        return HeatmapImage(
            data=pixels,
            width=params.width,
            height=params.height,
            bounds=bounds,
            metadata={
                "point_count": len(point_list),
                "dot_size": params.dot_size,
                "opacity": params.opacity,
                "ramp_length": len(ramp),
                "render_seconds": elapsed,
            },
        )

    @staticmethod
    def _validate_points(points: Iterable[PointLike]) -> List[Point]:
        """Coerce the points to a list of Point, rejecting empty input."""
        if points is None:
            raise PreconditionViolation("Points must be provided")
        point_list = [as_point(p) for p in points]
        if not point_list:
            raise PreconditionViolation("Cannot render an empty point sequence")
        return point_list

    @staticmethod
    def _validate_scheme(scheme: Union[ColorRamp, Iterable[ColorLike]]) -> ColorRamp:
        """Coerce the scheme to a ColorRamp, rejecting empty ramps."""
        if scheme is None:
            raise PreconditionViolation("A color scheme must be provided")
        if not isinstance(scheme, ColorRamp):
            try:
                scheme = ColorRamp.from_colors(scheme)
            except (TypeError, ValueError) as e:
                raise PreconditionViolation(f"Invalid color scheme: {e}") from e
        if len(scheme) == 0:
            raise PreconditionViolation("Color scheme must contain at least one color")
        return scheme


def render_heatmap(
    width: int,
    height: int,
    points: Iterable[PointLike],
    dot_size: int,
    opacity: int,
    scheme: Union[ColorRamp, Iterable[ColorLike]],
    mapper_workers: Optional[int] = None,
) -> HeatmapImage:
    """Render a heatmap with a one-off HeatmapRenderer."""
    renderer = HeatmapRenderer(mapper_workers=mapper_workers)
    return renderer.render(width, height, points, dot_size, opacity, scheme)
