"""Integration adapters converting parsed documents for other libraries.

Adapters hand a ``Document`` over to xml.etree.ElementTree, lxml or pandas.
Conversions never raise: a missing library, an empty document or a name the
target library rejects all produce an unsuccessful ``ConversionResult``.
"""

import threading
import time
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Any, Dict, List, Optional, Type

from lenient_xml_parser.shared import get_logger
from lenient_xml_parser.tree import Document, Node

MS_PER_SECOND = 1000


class AdapterType(Enum):
    """Types of integration adapters."""

    XML_LIBRARY = auto()     # XML processing libraries (ElementTree, lxml)
    DATA_FRAME = auto()      # DataFrame libraries (pandas)


@dataclass
class AdapterMetadata:
    """Metadata about an integration adapter."""

    name: str
    adapter_type: AdapterType
    target_library: str
    description: str
    bidirectional: bool = False


@dataclass
class ConversionResult:
    """Result of a conversion operation."""

    success: bool
    converted_data: Any
    original_data: Any
    conversion_time_ms: float
    errors: List[str] = field(default_factory=list)
    metadata: Dict[str, Any] = field(default_factory=dict)


class IntegrationAdapter(ABC):
    """Base class for adapters between ``Document`` and a target library."""

    def __init__(self, correlation_id: Optional[str] = None) -> None:
        """Initialize the integration adapter.

        Args:
            correlation_id: Optional correlation ID for request tracking
        """
        self.correlation_id = correlation_id
        self._logger = get_logger(__name__, correlation_id, self.__class__.__name__)

    @property
    @abstractmethod
    def metadata(self) -> AdapterMetadata:
        """Get adapter metadata."""

    @abstractmethod
    def is_available(self) -> bool:
        """Check if the target library can be imported."""

    @abstractmethod
    def to_target(self, document: Document) -> ConversionResult:
        """Convert ``document`` to the target representation."""

    def from_target(self, target_data: Any) -> ConversionResult:
        """Convert target data back into a ``Document``.

        Only adapters whose library can render XML text support this.
        """
        return self._create_error_result(
            f"{self.metadata.name} adapter does not convert back to a Document",
            target_data
        )

    def _create_error_result(
        self,
        error_message: str,
        original_data: Any,
        conversion_time_ms: float = 0.0
    ) -> ConversionResult:
        self._logger.warning(
            "Conversion failed",
            extra={"adapter": self.metadata.name, "error": error_message}
        )
        return ConversionResult(
            success=False,
            converted_data=None,
            original_data=original_data,
            conversion_time_ms=conversion_time_ms,
            errors=[error_message],
        )


def _elapsed_ms(start_time: float) -> float:
    return (time.perf_counter() - start_time) * MS_PER_SECOND


class _ElementLibraryAdapter(IntegrationAdapter):
    """Shared conversion logic for libraries with an ElementTree-style API."""

    def _import_module(self) -> Any:
        raise NotImplementedError

    def to_target(self, document: Document) -> ConversionResult:
        """Convert the document's root element to a library element.

        The declaration is not carried over; element ``content`` becomes the
        element's ``text``.
        """
        start_time = time.perf_counter()
        name = self.metadata.name

        try:
            etree = self._import_module()
        except ImportError as e:
            return self._create_error_result(
                f"{name} is not available: {e}", document, _elapsed_ms(start_time)
            )

        if document.root is None:
            return self._create_error_result(
                "Document has no root element", document, _elapsed_ms(start_time)
            )

        try:
            target_root = self._convert_node(document.root, etree)
        except (TypeError, ValueError) as e:
            return self._create_error_result(
                f"Failed to convert to {name}: {e}",
                document,
                _elapsed_ms(start_time)
            )

        return ConversionResult(
            success=True,
            converted_data=target_root,
            original_data=document,
            conversion_time_ms=_elapsed_ms(start_time),
            metadata={"element_count": sum(1 for _ in target_root.iter())},
        )

    def from_target(self, target_data: Any) -> ConversionResult:
        """Render a library element to text and parse it into a ``Document``."""
        from lenient_xml_parser.api.parser import parse

        start_time = time.perf_counter()
        name = self.metadata.name

        try:
            etree = self._import_module()
        except ImportError as e:
            return self._create_error_result(
                f"{name} is not available: {e}", target_data, _elapsed_ms(start_time)
            )

        if not hasattr(target_data, "tag"):
            return self._create_error_result(
                f"Target data is not a valid {name} element",
                target_data,
                _elapsed_ms(start_time)
            )

        xml_string = etree.tostring(target_data, encoding="unicode")
        document = parse(xml_string, self.correlation_id)

        return ConversionResult(
            success=True,
            converted_data=document,
            original_data=target_data,
            conversion_time_ms=_elapsed_ms(start_time),
            metadata={"original_tag": target_data.tag, "xml_length": len(xml_string)},
        )

    def _convert_node(self, node: Node, etree: Any) -> Any:
        element = etree.Element(node.name)
        for key, value in node.attributes.items():
            element.set(key, value)
        if node.content:
            element.text = node.content
        for child in node.children:
            element.append(self._convert_node(child, etree))
        return element

    def is_available(self) -> bool:
        """Check if the target library can be imported."""
        try:
            self._import_module()
        except ImportError:
            return False
        return True


class ElementTreeAdapter(_ElementLibraryAdapter):
    """Adapter for xml.etree.ElementTree."""

    @property
    def metadata(self) -> AdapterMetadata:
        return AdapterMetadata(
            name="elementtree",
            adapter_type=AdapterType.XML_LIBRARY,
            target_library="xml.etree.ElementTree",
            description="Conversion between Document and ElementTree elements",
            bidirectional=True,
        )

    def _import_module(self) -> Any:
        import xml.etree.ElementTree as ET
        return ET


class LxmlAdapter(_ElementLibraryAdapter):
    """Adapter for lxml.etree.

    lxml validates names, so prefixed names such as ``c:Key`` (which this
    parser keeps literally, without a namespace URI) fail to convert.
    """

    @property
    def metadata(self) -> AdapterMetadata:
        return AdapterMetadata(
            name="lxml",
            adapter_type=AdapterType.XML_LIBRARY,
            target_library="lxml",
            description="Conversion between Document and lxml.etree elements",
            bidirectional=True,
        )

    def _import_module(self) -> Any:
        import lxml.etree
        return lxml.etree


class PandasAdapter(IntegrationAdapter):
    """Adapter flattening a document into a pandas DataFrame.

    One row per element in document order, with columns ``path``, ``name``,
    ``depth``, ``content`` and one ``attr_<name>`` column per attribute name
    seen anywhere in the document.
    """

    @property
    def metadata(self) -> AdapterMetadata:
        return AdapterMetadata(
            name="pandas",
            adapter_type=AdapterType.DATA_FRAME,
            target_library="pandas",
            description="Flatten a Document into a pandas DataFrame",
        )

    def is_available(self) -> bool:
        try:
            import pandas  # noqa: F401
        except ImportError:
            return False
        return True

    def to_target(self, document: Document) -> ConversionResult:
        """Convert ``document`` to a DataFrame; an empty document gives no rows."""
        start_time = time.perf_counter()

        try:
            import pandas as pd
        except ImportError as e:
            return self._create_error_result(
                f"pandas is not available: {e}", document, _elapsed_ms(start_time)
            )

        rows: List[Dict[str, Any]] = []
        if document.root is not None:
            self._extract_rows(document.root, f"/{document.root.name}", 0, rows)

        df = pd.DataFrame(rows, columns=self._columns(rows))

        return ConversionResult(
            success=True,
            converted_data=df,
            original_data=document,
            conversion_time_ms=_elapsed_ms(start_time),
            metadata={"row_count": len(df), "columns": list(df.columns)},
        )

    @staticmethod
    def _columns(rows: List[Dict[str, Any]]) -> List[str]:
        columns = ["path", "name", "depth", "content"]
        for row in rows:
            for key in row:
                if key not in columns:
                    columns.append(key)
        return columns

    def _extract_rows(
        self, node: Node, path: str, depth: int, rows: List[Dict[str, Any]]
    ) -> None:
        row: Dict[str, Any] = {
            "path": path,
            "name": node.name,
            "depth": depth,
            "content": node.content,
        }
        for attr_name, attr_value in node.attributes.items():
            row[f"attr_{attr_name}"] = attr_value
        rows.append(row)

        for index, child in enumerate(node.children):
            self._extract_rows(child, f"{path}/{child.name}[{index}]", depth + 1, rows)


class AdapterRegistry:
    """Registry of adapter classes keyed by adapter name."""

    def __init__(self) -> None:
        self._adapters: Dict[str, Type[IntegrationAdapter]] = {}
        self._lock = threading.RLock()

    def register(self, adapter_class: Type[IntegrationAdapter]) -> None:
        """Register an adapter class under its metadata name."""
        name = adapter_class().metadata.name
        with self._lock:
            self._adapters[name] = adapter_class

    def get_adapter(
        self,
        adapter_name: str,
        correlation_id: Optional[str] = None
    ) -> Optional[IntegrationAdapter]:
        """Get an adapter instance, or None if unknown or its library is missing."""
        with self._lock:
            adapter_class = self._adapters.get(adapter_name)
        if adapter_class is None:
            return None
        instance = adapter_class(correlation_id)
        return instance if instance.is_available() else None

    def list_available_adapters(self) -> List[AdapterMetadata]:
        """List metadata of registered adapters whose library is importable."""
        with self._lock:
            adapter_classes = list(self._adapters.values())
        available = []
        for adapter_class in adapter_classes:
            instance = adapter_class()
            if instance.is_available():
                available.append(instance.metadata)
        return available


_adapter_registry = AdapterRegistry()
for _adapter_class in (ElementTreeAdapter, LxmlAdapter, PandasAdapter):
    _adapter_registry.register(_adapter_class)


def register_adapter(adapter_class: Type[IntegrationAdapter]) -> None:
    """Register an integration adapter globally."""
    _adapter_registry.register(adapter_class)


def get_adapter(
    adapter_name: str,
    correlation_id: Optional[str] = None
) -> Optional[IntegrationAdapter]:
    """Get a registered adapter instance by name."""
    return _adapter_registry.get_adapter(adapter_name, correlation_id)


def list_available_adapters() -> List[AdapterMetadata]:
    """List all available integration adapters."""
    return _adapter_registry.list_available_adapters()
