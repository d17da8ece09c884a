"""Utilities for infragraph setup and configuration.

Includes:
- Project file loading with env var substitution
- Structured logging
"""

from .config_loader import load_project, load_yaml_with_env
from .logging import StructuredLogger, configure_logging, get_logger, logger

__all__ = [
    "load_project",
    "load_yaml_with_env",
    "StructuredLogger",
    "configure_logging",
    "get_logger",
    "logger",
]
