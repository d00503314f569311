"""Configuration for the heatmap engine."""

from .settings import Settings, settings

__all__ = [
    "Settings",
    "settings",
]
