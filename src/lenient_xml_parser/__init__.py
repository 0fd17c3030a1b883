"""Lenient XML Parser.

A small recursive-descent XML reader that turns XML text into a tree of
plain nodes. It tolerates malformed input by returning whatever it could
parse instead of raising, and deliberately skips DTDs, namespace resolution
and custom entities.

Entry points:
- parse(): parse XML text into a Document
- parse_file(): read a file and parse it
"""

__version__ = "0.1.0"
__author__ = "Lenient XML Parser Team"

from .api import parse, parse_file
from .shared.config import CLIConfig, OutputConfig
from .tree import Declaration, Document, Node

__all__ = [
    # Version and metadata
    "__author__",
    "__version__",

    # Parsing functions
    "parse",
    "parse_file",

    # Result objects
    "Declaration",
    "Document",
    "Node",

    # Configuration for the command-line tool
    "CLIConfig",
    "OutputConfig",
]
