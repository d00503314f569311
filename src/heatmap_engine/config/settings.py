"""
Configuration settings for the heatmap engine.
"""

import os
from dataclasses import dataclass


@dataclass
class Settings:
    """Application settings loaded from environment variables."""

    # Canvas parameters
    canvas_width: int = int(os.getenv("HEATMAP_WIDTH", "1024"))
    canvas_height: int = int(os.getenv("HEATMAP_HEIGHT", "1024"))

    # Point impact parameters
    dot_size: int = int(os.getenv("HEATMAP_DOT_SIZE", "150"))
    opacity: int = int(os.getenv("HEATMAP_OPACITY", "128"))

    # Color scheme
    scheme_name: str = os.getenv("HEATMAP_SCHEME", "alphafire")
    scheme_steps: int = int(os.getenv("HEATMAP_SCHEME_STEPS", "256"))

    # Color mapping worker threads
    mapper_workers: int = int(os.getenv("HEATMAP_MAPPER_WORKERS", str(os.cpu_count() or 1)))

    # Output
    output_path: str = os.getenv("HEATMAP_OUTPUT", "heatmap.png")

    # Logging
    log_level: str = os.getenv("LOG_LEVEL", "INFO")
    log_file: str = os.getenv("LOG_FILE", "heatmap_engine.log")

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        if self.canvas_width <= 0 or self.canvas_height <= 0:
            raise ValueError("Canvas dimensions must be positive")
        if self.dot_size <= 0:
            raise ValueError("Dot size must be positive")
        if not (0 <= self.opacity <= 255):
            raise ValueError("Opacity must be between 0 and 255")
        if self.scheme_steps <= 0:
            raise ValueError("Scheme steps must be positive")
        if self.mapper_workers <= 0:
            raise ValueError("Mapper worker count must be positive")


# Global settings instance
settings = Settings()
