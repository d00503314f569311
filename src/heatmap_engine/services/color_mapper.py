"""
Color mapping service that turns a density buffer into the final heatmap pixels.

Mapping is split into one task per canvas column. Tasks only read the finished
density buffer and the color ramp and each one writes its own output column, so
workers never share mutable state and need no locking.
"""

import logging
import threading
from queue import Queue, Empty
from typing import List, Optional, Tuple
import numpy as np

from ..models import ColorRamp
from ..config import settings

logger = logging.getLogger(__name__)

# Color given to pixels that received no density at all
BACKGROUND_RGBA: Tuple[int, int, int, int] = (0, 0, 0, 50)


def map_alpha(alpha: np.ndarray, opacity: int, ramp_values: np.ndarray) -> np.ndarray:
    """
    Map 8-bit density alpha values to straight-alpha RGBA pixels.

    Args:
        alpha: Array of uint8 density alpha values (any shape)
        opacity: Global alpha scale (0-255)
        ramp_values: (N, 4) uint16 premultiplied ramp, hottest color first

    Returns:
        uint8 array of shape alpha.shape + (4,)
    """
    alpha16 = alpha.astype(np.int64) * 0x101
    percent = alpha16 / float(0xFFFF)

    ramp_length = ramp_values.shape[0]
    index = ((ramp_length - 1) * (1.0 - percent)).astype(np.int64)
    index = np.clip(index, 0, ramp_length - 1)

    template = ramp_values[index].astype(np.int64)
    out = np.empty(alpha.shape + (4,), dtype=np.uint8)
    out[..., :3] = template[..., :3] >> 8
    out[..., 3] = ((template[..., 3] >> 8) * (opacity / 256.0)).astype(np.uint8)

    out[alpha16 == 0] = BACKGROUND_RGBA
    return out


class ColorMapper:
    """
    Column-parallel mapper from density to ramp colors.

    Every column of the canvas is queued as an independent task and drained by
    a bounded pool of worker threads. ``map`` returns only after every worker
    has been joined, so a partially colored image is never observable.
    """

    def __init__(self, workers: Optional[int] = None) -> None:
        """
        Initialize the color mapper.

        Args:
            workers: Number of worker threads (defaults to settings.mapper_workers)
        """
        self.workers = workers if workers is not None else settings.mapper_workers
        if self.workers <= 0:
            raise ValueError("Worker count must be positive")

        logger.info(f"Color mapper initialized: {self.workers} workers")

    def map(self, density: np.ndarray, opacity: int, ramp: ColorRamp) -> np.ndarray:
        """
        Color every pixel of a density buffer.

        Args:
            density: Read-only (height, width, 4) uint8 density buffer
            opacity: Global alpha scale (0-255)
            ramp: Non-empty color ramp, hottest color first

        Returns:
            Read-only (height, width, 4) uint8 straight-alpha RGBA image

        Raises:
            RuntimeError: If any column task failed
        """
        height, width = density.shape[:2]
        ramp_values = ramp.values
        out = np.zeros((height, width, 4), dtype=np.uint8)

        columns: "Queue[int]" = Queue()
        for x in range(width):
            columns.put(x)

        failures: List[Tuple[int, Exception]] = []
        failures_lock = threading.Lock()

        def drain() -> None:
            while True:
                try:
                    x = columns.get_nowait()
                except Empty:
                    return
                try:
                    self._map_column(density, out, x, opacity, ramp_values)
                except Exception as e:
                    with failures_lock:
                        failures.append((x, e))

        threads = [
            threading.Thread(target=drain, name=f"heatmap-mapper-{i}", daemon=True)
            for i in range(min(self.workers, width))
        ]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        if failures:
            x, error = min(failures, key=lambda failure: failure[0])
            raise RuntimeError(
                f"Color mapping failed in {len(failures)} column(s), first at x={x}: {error}"
            ) from error

        out.flags.writeable = False
        logger.info(f"Mapped {width} columns of {height} pixels with {len(threads)} workers")
        return out

    @staticmethod
    def _map_column(density: np.ndarray, out: np.ndarray, x: int,
                    opacity: int, ramp_values: np.ndarray) -> None:
        """Map a single canvas column into the output image."""
        out[:, x] = map_alpha(density[:, x, 3], opacity, ramp_values)
