#!/usr/bin/env python3
"""
Quick demonstration script for the heatmap engine.

This script renders clustered sample points with the built-in AlphaFire scheme
and shows the result over a dark background with a simple matplotlib display.
"""

import sys
import os
import time
import matplotlib.pyplot as plt

# Add src to path for imports
sys.path.insert(0, os.path.join(os.path.dirname(__file__), 'src'))

from heatmap_engine.main import sample_points
from heatmap_engine.services import HeatmapRenderer, get_scheme
from heatmap_engine.config import settings


def main():
    """Run a simple demonstration of the heatmap engine."""
    width, height = 512, 512
    print("Heatmap Engine Demo")
    print("=" * 50)
    print(f"Canvas size: {width}x{height}")
    print(f"Dot size: {settings.dot_size // 2}px, opacity: {settings.opacity}")

    renderer = HeatmapRenderer()
    ramp = get_scheme("alphafire")
    points = sample_points(300, width, height, seed=7)

    start_time = time.time()
    image = renderer.render(width, height, points, settings.dot_size // 2, settings.opacity, ramp)
    elapsed = time.time() - start_time

    print(f"Rendered {len(points)} points in {elapsed:.2f}s")
    print(f"Point limits: {image.bounds}")

    fig, ax = plt.subplots(figsize=(8, 8))
    fig.patch.set_facecolor('black')
    ax.set_facecolor('black')
    ax.imshow(image.data, interpolation='nearest')
    ax.set_title('Heatmap Engine - AlphaFire', color='white', fontsize=14, fontweight='bold')
    ax.tick_params(colors='white')

    try:
        plt.show()
    except KeyboardInterrupt:
        print("\nDemo stopped")
    finally:
        plt.close(fig)
        print("Demo complete!")


if __name__ == "__main__":
    main()
