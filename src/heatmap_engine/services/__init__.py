"""Services module for the heatmap engine."""

from .bounds import find_limits
from .stamp import make_stamp
from .compositor import DensityCompositor
from .color_mapper import ColorMapper
from .renderer import HeatmapRenderer, render_heatmap
from .schemes import build_ramp, from_colormap, get_scheme, scheme_preview
from .image_writer import save_png, to_data_uri

__all__ = [
    "find_limits",
    "make_stamp",
    "DensityCompositor",
    "ColorMapper",
    "HeatmapRenderer",
    "render_heatmap",
    "build_ramp",
    "from_colormap",
    "get_scheme",
    "scheme_preview",
    "save_png",
    "to_data_uri",
]
