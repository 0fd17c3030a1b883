"""Character processing layer for the lenient XML parser.

This module provides input normalisation (comment and whitespace stripping)
and decoding of entity and character references in text content.
"""

from .entities import (
    XML_ENTITIES,
    decode_code_point,
    decode_entities,
)
from .preprocess import preprocess

__all__ = [
    "XML_ENTITIES",
    "decode_code_point",
    "decode_entities",
    "preprocess",
]
