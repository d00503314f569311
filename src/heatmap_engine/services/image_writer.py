"""
Image output for rendered heatmaps: PNG files and inline data URIs.
"""

import io
import base64
import logging
from pathlib import Path
from typing import Union
import numpy as np
from matplotlib import image as mpimg

from ..models import HeatmapImage

logger = logging.getLogger(__name__)


def _pixels(image: Union[HeatmapImage, np.ndarray]) -> np.ndarray:
    """Return the RGBA pixel array of an image or a raw array."""
    data = image.data if isinstance(image, HeatmapImage) else np.asarray(image)
    if data.ndim != 3 or data.shape[2] != 4 or data.dtype != np.uint8:
        raise ValueError(f"Expected (H, W, 4) uint8 RGBA pixels, got {data.shape} {data.dtype}")
    return data


def save_png(image: Union[HeatmapImage, np.ndarray], path: Union[str, Path]) -> Path:
    """
    Write a heatmap to a PNG file.

    Args:
        image: Rendered heatmap or (H, W, 4) uint8 RGBA array
        path: Destination file; parent directories are created

    Returns:
        Path of the written file
    """
    data = _pixels(image)
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    mpimg.imsave(path, data, format="png")
    logger.info(f"Wrote {data.shape[1]}x{data.shape[0]} image to {path}")
    return path


def to_data_uri(image: Union[HeatmapImage, np.ndarray]) -> str:
    """
    Encode a heatmap as a base64 PNG data URI.

    Args:
        image: Rendered heatmap or (H, W, 4) uint8 RGBA array

    Returns:
        String of the form ``data:image/png;base64,...``
    """
    data = _pixels(image)

    buffer = io.BytesIO()
    mpimg.imsave(buffer, data, format="png")
    image_data = base64.b64encode(buffer.getvalue()).decode("utf-8")
    buffer.close()

    return f"data:image/png;base64,{image_data}"
