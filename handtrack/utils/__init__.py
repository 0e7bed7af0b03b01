"""Utility functions and classes."""

from .config import (
    load_config, save_config, merge_configs, parse_overrides, apply_overrides, TrackingConfig
)
from .logging_utils import setup_logging, get_logger

__all__ = [
    "load_config",
    "save_config",
    "merge_configs",
    "parse_overrides",
    "apply_overrides",
    "TrackingConfig",
    "setup_logging",
    "get_logger",
]
