"""
Heatmap Engine - A point density heatmap renderer.

This package turns a cloud of 2D points into an RGBA raster where areas with
more nearby points appear hotter according to a configurable color scheme.
"""

__version__ = "0.1.0"
