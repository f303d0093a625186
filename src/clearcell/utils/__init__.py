"""Utility functions for Clear Cell."""
from .config import DEFAULT_CONFIG, load_config, merge_config
from .logger import Logger, MetricsTracker

__all__ = [
    "DEFAULT_CONFIG",
    "load_config",
    "merge_config",
    "Logger",
    "MetricsTracker",
]
