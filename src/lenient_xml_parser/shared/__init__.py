"""Shared utilities for lenient XML parsing.

This module provides the configuration objects and correlation-aware logging
used across the parser, adapters and command-line tool.
"""

from .config import (
    CLIConfig,
    ConfigError,
    ConfigValidationError,
    OutputConfig,
)
from .logging import (
    CorrelationLogger,
    get_logger,
)

__all__ = [
    "CLIConfig",
    "ConfigError",
    "ConfigValidationError",
    "OutputConfig",
    "CorrelationLogger",
    "get_logger",
]
