"""Document tree produced by the lenient XML parser.

Nodes own their children and attributes exclusively and keep no reference to
their parent, so two trees built from the same input compare equal with ``==``.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Optional

AttributeMap = Dict[str, str]


@dataclass
class Node:
    """A single element.

    ``content`` holds the text between the opening tag and the first child
    (or the closing tag). It is None for self-closing elements and for
    elements whose attribute list could not be parsed.
    """

    name: str
    attributes: AttributeMap = field(default_factory=dict)
    children: List["Node"] = field(default_factory=list)
    content: Optional[str] = None

    @property
    def is_self_closing(self) -> bool:
        """Whether the element had no content section.

        Also True for an element cut short by an unparseable attribute, which
        leaves the same ``content is None`` shape as ``<a/>``.
        """
        return self.content is None and not self.children

    @property
    def local_name(self) -> str:
        """Name without namespace prefix."""
        if ":" in self.name:
            return self.name.split(":", 1)[1]
        return self.name

    @property
    def namespace_prefix(self) -> Optional[str]:
        """Literal namespace prefix, if the name has one."""
        if ":" in self.name:
            return self.name.split(":", 1)[0]
        return None

    def get_attribute(self, name: str, default: Optional[str] = None) -> Optional[str]:
        """Get attribute value with optional default."""
        return self.attributes.get(name, default)

    def has_attribute(self, name: str) -> bool:
        """Check if element has specific attribute."""
        return name in self.attributes

    def iter(self) -> Iterator["Node"]:
        """Iterate over this node and all descendants in document order."""
        yield self
        for child in self.children:
            yield from child.iter()

    def find(self, name: str) -> Optional["Node"]:
        """Find the first descendant (excluding self) named ``name``."""
        for child in self.children:
            for node in child.iter():
                if node.name == name:
                    return node
        return None

    def find_all(self, name: str) -> List["Node"]:
        """Find all descendants (excluding self) named ``name``."""
        return [
            node
            for child in self.children
            for node in child.iter()
            if node.name == name
        ]

    def depth(self) -> int:
        """Depth of the deepest descendant relative to this node (leaf = 0)."""
        if not self.children:
            return 0
        return 1 + max(child.depth() for child in self.children)

    def to_dict(self) -> Dict[str, Any]:
        """Convert node to plain dictionaries and lists.

        The ``content`` key is omitted when the node has no content.
        """
        result: Dict[str, Any] = {
            "name": self.name,
            "attributes": dict(self.attributes),
            "children": [child.to_dict() for child in self.children],
        }
        if self.content is not None:
            result["content"] = self.content
        return result


@dataclass
class Declaration:
    """The ``<?xml ...?>`` prolog."""

    attributes: AttributeMap = field(default_factory=dict)

    @property
    def version(self) -> Optional[str]:
        return self.attributes.get("version")

    @property
    def encoding(self) -> Optional[str]:
        """Declared encoding; informational only, never acted upon."""
        return self.attributes.get("encoding")

    def to_dict(self) -> Dict[str, Any]:
        return {"attributes": dict(self.attributes)}


@dataclass
class Document:
    """Parse result: an optional declaration and an optional root element."""

    declaration: Optional[Declaration] = None
    root: Optional[Node] = None

    @property
    def is_empty(self) -> bool:
        """True when neither a declaration nor a root element was found."""
        return self.declaration is None and self.root is None

    @property
    def element_count(self) -> int:
        return sum(1 for _ in self.iter_nodes())

    @property
    def max_depth(self) -> int:
        """Nesting depth below the root (root only = 0, no root = 0)."""
        return self.root.depth() if self.root else 0

    def iter_nodes(self) -> Iterator[Node]:
        """Iterate over all elements in document order."""
        if self.root:
            yield from self.root.iter()

    def find(self, name: str) -> Optional[Node]:
        """Find the first element named ``name``, including the root."""
        return next((node for node in self.iter_nodes() if node.name == name), None)

    def find_all(self, name: str) -> List[Node]:
        """Find all elements named ``name``, including the root."""
        return [node for node in self.iter_nodes() if node.name == name]

    def to_dict(self) -> Dict[str, Any]:
        """Convert document to plain dictionaries suitable for JSON output."""
        return {
            "declaration": self.declaration.to_dict() if self.declaration else None,
            "root": self.root.to_dict() if self.root else None,
        }
