"""Data models for the heatmap engine."""

from .heat_data import (
    Point,
    BoundingBox,
    Color,
    ColorRange,
    ColorRamp,
    RenderParameters,
    HeatmapImage,
    PreconditionViolation,
    WHITE,
    TRANSPARENT,
    as_color,
    as_point,
)

__all__ = [
    "Point",
    "BoundingBox",
    "Color",
    "ColorRange",
    "ColorRamp",
    "RenderParameters",
    "HeatmapImage",
    "PreconditionViolation",
    "WHITE",
    "TRANSPARENT",
    "as_color",
    "as_point",
]
