"""Command-line interface module for the lenient XML parser.

This module provides the ``lenient-xml`` tool, which parses XML files and
prints the resulting trees as JSON, an indented outline or a summary.
"""

from .main import main

__all__ = ["main"]
