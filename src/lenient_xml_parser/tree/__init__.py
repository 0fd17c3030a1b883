"""Document tree and grammar for the lenient XML parser.

This module provides the ``Document``/``Declaration``/``Node`` data model and
the recursive-descent rules that build it from a cursor.
"""

from .grammar import attribute, content, declaration, document, tag
from .nodes import AttributeMap, Declaration, Document, Node

__all__ = [
    "AttributeMap",
    "Declaration",
    "Document",
    "Node",
    "attribute",
    "content",
    "declaration",
    "document",
    "tag",
]
