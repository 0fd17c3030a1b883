"""Public parsing API for the lenient XML parser.

``parse`` is the single entry point for text; ``parse_file`` reads a file and
hands its contents to ``parse``. Parsing itself never fails on malformed XML:
anything the grammar cannot make sense of is left out of the returned tree.
"""

import logging
import time
from pathlib import Path
from typing import Optional, Union

from lenient_xml_parser.character import preprocess
from lenient_xml_parser.shared import get_logger
from lenient_xml_parser.shared.logging import preview
from lenient_xml_parser.tokenization import Cursor
from lenient_xml_parser.tree import Document, document

MS_PER_SECOND = 1000  # Milliseconds per second conversion


def parse(
    xml: Union[str, bytes],
    correlation_id: Optional[str] = None
) -> Document:
    """Parse XML text into a ``Document``.

    Args:
        xml: XML text; bytes are decoded as UTF-8 with undecodable bytes
            replaced, no encoding detection is attempted
        correlation_id: Optional correlation ID attached to log records

    Returns:
        Document with the declaration and root element that could be parsed;
        both are None for empty or whitespace-only input

    Raises:
        TypeError: If ``xml`` is neither str nor bytes
        RecursionError: If elements nest deeper than the interpreter's
            recursion limit

    Examples:
        >>> doc = parse('<?xml version="1.0"?><a x="1">hi<b/></a>')
        >>> doc.declaration.attributes
        {'version': '1.0'}
        >>> doc.root.content, doc.root.children[0].name
        ('hi', 'b')
        >>> parse("   ").is_empty
        True
    """
    if isinstance(xml, bytes):
        xml = xml.decode("utf-8", errors="replace")
    elif not isinstance(xml, str):
        raise TypeError(
            f"parse() expects str or bytes, got {type(xml).__name__}"
        )

    start_time = time.perf_counter()
    logger = get_logger(__name__, correlation_id, "parse")

    if logger.is_enabled_for(logging.DEBUG):
        logger.debug(
            "Starting parse",
            extra={"content_length": len(xml), "preview": preview(xml)}
        )

    cursor = Cursor(preprocess(xml))
    result = document(cursor)

    if logger.is_enabled_for(logging.DEBUG):
        logger.debug(
            "Parse completed",
            extra={
                "has_declaration": result.declaration is not None,
                "has_root": result.root is not None,
                "element_count": result.element_count,
                "max_depth": result.max_depth,
                "unconsumed_length": len(cursor.text) - cursor.position,
                "processing_time_ms": (
                    (time.perf_counter() - start_time) * MS_PER_SECOND
                ),
            }
        )

    return result


def parse_file(
    file_path: Union[str, Path],
    encoding: str = "utf-8",
    correlation_id: Optional[str] = None
) -> Document:
    """Read ``file_path`` as text and parse it.

    Args:
        file_path: Path to the XML file
        encoding: Text encoding used to read the file
        correlation_id: Optional correlation ID attached to log records

    Raises:
        OSError: If the file cannot be read (missing, directory, permissions);
            logged at ERROR without a traceback before it propagates
    """
    path_obj = Path(file_path)
    logger = get_logger(__name__, correlation_id, "parse_file")

    try:
        text = path_obj.read_text(encoding=encoding, errors="replace")
    except OSError as e:
        logger.error(
            f"Could not read XML file {path_obj}: {e.strerror or e}",
            extra={"file_path": str(path_obj), "encoding": encoding},
            exc_info=False
        )
        raise

    logger.info(
        "Parsing XML file",
        extra={"file_path": str(path_obj), "content_length": len(text)}
    )
    return parse(text, correlation_id)
