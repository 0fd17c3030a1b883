"""Public API for the lenient XML parser.

This module exposes the parsing entry points and the integration adapters.
"""

from .adapters import (
    AdapterMetadata,
    AdapterRegistry,
    AdapterType,
    ConversionResult,
    ElementTreeAdapter,
    IntegrationAdapter,
    LxmlAdapter,
    PandasAdapter,
    get_adapter,
    list_available_adapters,
    register_adapter,
)
from .parser import parse, parse_file

__all__ = [
    "parse",
    "parse_file",
    "AdapterMetadata",
    "AdapterRegistry",
    "AdapterType",
    "ConversionResult",
    "ElementTreeAdapter",
    "IntegrationAdapter",
    "LxmlAdapter",
    "PandasAdapter",
    "get_adapter",
    "list_available_adapters",
    "register_adapter",
]
