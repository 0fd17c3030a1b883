"""Recursive-descent grammar for the lenient XML parser.

Each rule takes the shared ``Cursor`` and returns either what it recognised or
None when the rule does not apply at the current position. Rules never raise
and never rewind: when a rule gives up half way it returns what it has built,
and the caller carries on with a smaller tree.

Known leniencies, kept on purpose:

- Closing tag names are not compared with the opening tag name.
- Only the text directly after an opening tag becomes ``content``; text after
  a child element is never read.
- ``?>`` is accepted where ``>`` ends an opening tag.
"""

import re
from typing import Optional, Tuple

from lenient_xml_parser.character import decode_entities
from lenient_xml_parser.tokenization import Cursor

from .nodes import Declaration, Document, Node

# Patterns are anchored by Cursor.try_match; none of them starts with "^".
# \w is ASCII-only, matching the accepted name characters of the grammar.
DECLARATION_OPEN = re.compile(r"<\?xml\s*")
DECLARATION_CLOSE = re.compile(r"\?>\s*")
TAG_OPEN = re.compile(r"<([\w\-:.]+)\s*", re.ASCII)
TAG_SELF_CLOSE = re.compile(r"\s*/>\s*")
TAG_END = re.compile(r"\??>\s*")
TAG_CLOSE = re.compile(r"</[\w\-:.]+>\s*", re.ASCII)
ATTRIBUTE = re.compile(
    r"""([\w:\-]+)\s*=\s*("[^"]*"|'[^']*'|\w+)\s*""", re.ASCII
)
CDATA = re.compile(r"<!\[CDATA\[(.*?)\]\]>", re.DOTALL)
TEXT = re.compile(r"[^<]*")

_QUOTES = "\"'"

Attribute = Tuple[str, str]


def strip_quotes(value: str) -> str:
    """Remove one leading and one trailing quote character, independently."""
    if value[:1] in _QUOTES:
        value = value[1:]
    if value[-1:] in _QUOTES:
        value = value[:-1]
    return value


def attribute(cursor: Cursor) -> Optional[Attribute]:
    """Parse ``name=value`` with a double-quoted, single-quoted or bare value."""
    match = cursor.try_match(ATTRIBUTE)
    if match is None:
        return None
    return match.group(1), strip_quotes(match.group(2))


def declaration(cursor: Cursor) -> Optional[Declaration]:
    """Parse the ``<?xml ...?>`` prolog if the input starts with one."""
    if cursor.try_match(DECLARATION_OPEN) is None:
        return None

    decl = Declaration()
    while not (cursor.at_end() or cursor.starts_with("?>")):
        attr = attribute(cursor)
        if attr is None:
            return decl
        name, value = attr
        decl.attributes[name] = value

    cursor.try_match(DECLARATION_CLOSE)
    return decl


def content(cursor: Cursor) -> str:
    """Parse a CDATA section verbatim, or a run of text with entities decoded."""
    match = cursor.try_match(CDATA)
    if match is not None:
        return match.group(1)

    match = cursor.try_match(TEXT)
    if match is None:
        return ""
    return decode_entities(match.group(0))


def tag(cursor: Cursor) -> Optional[Node]:
    """Parse an element and, recursively, its children.

    Returns None when the cursor is not at an opening tag, which is also how
    the children loop of the enclosing element terminates.
    """
    match = cursor.try_match(TAG_OPEN)
    if match is None:
        return None

    node = Node(name=match.group(1))

    while not (
        cursor.at_end()
        or cursor.starts_with(">")
        or cursor.starts_with("?>")
        or cursor.starts_with("/>")
    ):
        attr = attribute(cursor)
        if attr is None:
            return node
        name, value = attr
        node.attributes[name] = value

    if cursor.try_match(TAG_SELF_CLOSE) is not None:
        return node

    cursor.try_match(TAG_END)
    node.content = content(cursor)

    while True:
        child = tag(cursor)
        if child is None:
            break
        node.children.append(child)

    cursor.try_match(TAG_CLOSE)
    return node


def document(cursor: Cursor) -> Document:
    """Parse an optional declaration followed by an optional root element."""
    decl = declaration(cursor)
    root = tag(cursor)
    return Document(declaration=decl, root=root)
