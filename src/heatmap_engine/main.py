"""
Command-line entry point for the heatmap engine.

Renders heatmaps from point files or generated sample points and writes
color scheme previews.
"""

import logging
import sys
from pathlib import Path
from typing import List, Optional

import numpy as np

from .models import Point, PreconditionViolation
from .services import HeatmapRenderer, get_scheme, save_png, scheme_preview
from .config import settings

logger = logging.getLogger(__name__)


def configure_logging(level: Optional[str] = None) -> None:
    """Configure root logging for command-line use."""
    if logging.getLogger().handlers:
        return
    logging.basicConfig(
        level=getattr(logging, (level or settings.log_level).upper()),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=[
            logging.StreamHandler(sys.stdout),
            logging.FileHandler(settings.log_file)
        ]
    )


def load_points(path: Path) -> List[Point]:
    """
    Load points from a text file with two columns (x, y).

    Comma or whitespace separated values are accepted; lines starting with
    '#' are ignored.

    Args:
        path: Path to the points file

    Returns:
        List of points in file order
    """
    data_lines = [
        line for line in Path(path).read_text().splitlines()
        if line.strip() and not line.lstrip().startswith("#")
    ]
    if not data_lines:
        return []
    delimiter = "," if any("," in line for line in data_lines) else None
    data = np.loadtxt(path, delimiter=delimiter, ndmin=2, comments="#")
    if data.size == 0:
        return []
    if data.shape[1] < 2:
        raise ValueError(f"Points file {path} must have at least two columns")
    return [Point(float(x), float(y)) for x, y in data[:, :2]]


def sample_points(count: int, width: int, height: int, seed: Optional[int] = None) -> List[Point]:
    """
    Generate clustered sample points inside a canvas.

    Points are drawn from a handful of gaussian blobs with random centers so
    the resulting heatmap shows distinct hot spots.

    Args:
        count: Number of points to generate
        width: Canvas width in pixels
        height: Canvas height in pixels
        seed: Optional random seed for reproducible output
    """
    rng = np.random.default_rng(seed)
    clusters = max(1, min(5, count // 20))
    centers = rng.uniform((0.15 * width, 0.15 * height), (0.85 * width, 0.85 * height),
                          size=(clusters, 2))
    spread = 0.08 * min(width, height)

    assignment = rng.integers(0, clusters, size=count)
    coords = centers[assignment] + rng.normal(0.0, spread, size=(count, 2))
    coords[:, 0] = np.clip(coords[:, 0], 0, width - 1)
    coords[:, 1] = np.clip(coords[:, 1], 0, height - 1)
    return [Point(float(x), float(y)) for x, y in coords]


def run_render(args) -> Path:
    """Render a heatmap according to parsed command-line arguments."""
    if args.points:
        points = load_points(args.points)
        logger.info(f"Loaded {len(points)} points from {args.points}")
    else:
        points = sample_points(args.random, args.width, args.height, seed=args.seed)
        logger.info(f"Generated {len(points)} sample points (seed={args.seed})")

    ramp = get_scheme(args.scheme, steps=args.steps)
    renderer = HeatmapRenderer(mapper_workers=args.workers)
    image = renderer.render(
        args.width, args.height, points, args.dot_size, args.opacity, ramp
    )

    if image.bounds is not None:
        logger.info(
            f"Point limits: ({image.bounds.min.x:.1f}, {image.bounds.min.y:.1f}) - "
            f"({image.bounds.max.x:.1f}, {image.bounds.max.y:.1f})"
        )
    return save_png(image, args.output)


def run_scheme_preview(args) -> Path:
    """Write a preview strip of the selected color scheme."""
    ramp = get_scheme(args.scheme, steps=args.steps)
    logger.info(f"Scheme '{args.scheme}' has {len(ramp)} colors")
    return save_png(scheme_preview(ramp, height=args.preview_height), args.output)


def build_parser():
    """Build the command-line argument parser."""
    import argparse

    parser = argparse.ArgumentParser(description="Heatmap Engine - Point Density Heatmaps")
    parser.add_argument(
        "--mode",
        choices=["render", "scheme"],
        default="render",
        help="Execution mode: render (draw a heatmap) or scheme (preview a color scheme)"
    )
    source = parser.add_mutually_exclusive_group()
    source.add_argument(
        "--points",
        type=Path,
        help="Text file with x,y point coordinates in canvas pixels"
    )
    source.add_argument(
        "--random",
        type=int,
        default=200,
        help="Number of generated sample points when no points file is given"
    )
    parser.add_argument("--seed", type=int, default=None, help="Random seed for sample points")
    parser.add_argument("--width", type=int, default=settings.canvas_width, help="Canvas width")
    parser.add_argument("--height", type=int, default=settings.canvas_height, help="Canvas height")
    parser.add_argument(
        "--dot-size",
        type=int,
        default=settings.dot_size,
        help="Impact diameter of each point in pixels"
    )
    parser.add_argument(
        "--opacity",
        type=int,
        default=settings.opacity,
        help="Alpha value (0-255) of the heatmap overlay"
    )
    parser.add_argument(
        "--scheme",
        default=settings.scheme_name,
        help="Built-in scheme name or matplotlib colormap name"
    )
    parser.add_argument(
        "--steps",
        type=int,
        default=settings.scheme_steps,
        help="Number of colors sampled from a matplotlib colormap"
    )
    parser.add_argument(
        "--workers",
        type=int,
        default=None,
        help="Color mapping worker threads"
    )
    parser.add_argument(
        "--preview-height",
        type=int,
        default=20,
        help="Height of the scheme preview strip"
    )
    parser.add_argument("--output", type=Path, default=Path(settings.output_path), help="Output PNG")
    parser.add_argument("--log-level", default=None, help="Override the LOG_LEVEL setting")
    return parser


def main(argv: Optional[List[str]] = None) -> None:
    """Main entry point for the application."""
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(args.log_level)

    try:
        if args.mode == "render":
            path = run_render(args)
        else:
            path = run_scheme_preview(args)
        logger.info(f"Output written to {path}")
    except PreconditionViolation as e:
        logger.error(f"Invalid render input: {e}")
        sys.exit(2)
    except Exception as e:
        logger.error(f"Application error: {e}", exc_info=True)
        sys.exit(1)


if __name__ == "__main__":
    main()
