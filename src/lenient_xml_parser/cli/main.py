"""Main CLI entry point for the lenient-xml command-line tool.

Parses XML files (or standard input) and prints the resulting trees as JSON,
as an indented outline, or as a one-line summary per input.
"""

import argparse
import json
import logging
import sys
from dataclasses import replace
from pathlib import Path
from typing import Any, Dict, List, Optional

from lenient_xml_parser import __version__
from lenient_xml_parser.api import parse, parse_file
from lenient_xml_parser.shared.config import (
    OUTPUT_FORMATS,
    CLIConfig,
    ConfigError,
    OutputConfig,
)
from lenient_xml_parser.shared.logging import get_logger
from lenient_xml_parser.tree import Document, Node

STDIN_SOURCE = "-"
EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_USAGE = 2
EXIT_INTERRUPTED = 130  # Standard exit code for SIGINT


class DocumentProcessor:
    """Parses input sources and renders the results."""

    def __init__(self, config: CLIConfig) -> None:
        self.config = config
        self.logger = get_logger(__name__, None, "cli_processor")

    def process_source(self, source: str) -> Dict[str, Any]:
        """Parse one file path, or standard input for ``-``."""
        try:
            if source == STDIN_SOURCE:
                document = parse(sys.stdin.read())
            else:
                document = parse_file(source, encoding=self.config.encoding)
        except (OSError, UnicodeError, LookupError) as e:
            self.logger.debug(
                "Failed to read input", extra={"source": source, "error": str(e)}
            )
            return {"source": source, "success": False, "error": str(e)}

        return {"source": source, "success": True, "document": document}

    def process_all(self, sources: List[str]) -> List[Dict[str, Any]]:
        return [self.process_source(source) for source in sources]

    def format_results(self, results: List[Dict[str, Any]]) -> str:
        """Render results in the configured output format."""
        output = self.config.output
        if output.format == "json":
            return format_json(results, output)
        if output.format == "tree":
            return format_tree(results, output)
        return format_summary(results)


def document_to_dict(document: Document, output: OutputConfig) -> Dict[str, Any]:
    data = document.to_dict()
    if not output.include_declaration:
        del data["declaration"]
    return data


def format_json(results: List[Dict[str, Any]], output: OutputConfig) -> str:
    """Render results as JSON; a single input is rendered without a list."""
    payload = []
    for result in results:
        entry: Dict[str, Any] = {"source": result["source"], "success": result["success"]}
        if result["success"]:
            entry["document"] = document_to_dict(result["document"], output)
        else:
            entry["error"] = result["error"]
        payload.append(entry)

    data: Any = payload[0] if len(payload) == 1 else payload
    return json.dumps(data, indent=output.indent, ensure_ascii=False)


def render_node(node: Node, level: int, indent: int, lines: List[str]) -> None:
    parts = [" " * (level * indent) + node.name]
    parts.extend(f'{key}="{value}"' for key, value in node.attributes.items())
    line = " ".join(parts)
    # Elements truncated at a bad attribute render as self-closing too.
    if node.is_self_closing:
        line += " /"
    elif node.content:
        line += ": " + json.dumps(node.content, ensure_ascii=False)
    lines.append(line)
    for child in node.children:
        render_node(child, level + 1, indent, lines)


def render_tree(document: Document, output: OutputConfig) -> str:
    """Render a document as an indented outline, one element per line."""
    lines: List[str] = []
    if output.include_declaration and document.declaration is not None:
        attrs = " ".join(
            f'{key}="{value}"' for key, value in document.declaration.attributes.items()
        )
        lines.append(f"<?xml {attrs}?>" if attrs else "<?xml?>")
    if document.root is not None:
        render_node(document.root, 0, output.indent, lines)
    if not lines:
        lines.append("(empty document)")
    return "\n".join(lines)


def format_tree(results: List[Dict[str, Any]], output: OutputConfig) -> str:
    blocks = []
    for result in results:
        header = f"== {result['source']}"
        if result["success"]:
            body = render_tree(result["document"], output)
        else:
            body = f"error: {result['error']}"
        blocks.append(f"{header}\n{body}" if len(results) > 1 else body)
    return "\n\n".join(blocks)


def summarize(document: Document) -> str:
    root = document.root.name if document.root is not None else "-"
    version = "-"
    if document.declaration is not None and document.declaration.version:
        version = document.declaration.version
    return (
        f"root={root} elements={document.element_count} "
        f"depth={document.max_depth} version={version}"
    )


def format_summary(results: List[Dict[str, Any]]) -> str:
    lines = []
    for result in results:
        if result["success"]:
            lines.append(f"{result['source']}: {summarize(result['document'])}")
        else:
            lines.append(f"{result['source']}: error: {result['error']}")
    return "\n".join(lines)


def create_argument_parser() -> argparse.ArgumentParser:
    """Create the main argument parser."""
    parser = argparse.ArgumentParser(
        prog="lenient-xml",
        description="Lenient XML parser: print XML documents as trees"
    )
    parser.add_argument("--version", action="version", version=__version__)
    parser.add_argument(
        "--config", "-c",
        type=Path,
        help="JSON configuration file"
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Verbose output"
    )
    parser.add_argument(
        "--quiet", "-q",
        action="store_true",
        help="Quiet output"
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    parse_parser = subparsers.add_parser("parse", help="Parse XML files")
    parse_parser.add_argument(
        "paths",
        nargs="+",
        help="XML files to parse ('-' reads standard input)"
    )
    parse_parser.add_argument(
        "--format", "-f",
        choices=OUTPUT_FORMATS,
        help="Output format (default: json)"
    )
    parse_parser.add_argument(
        "--indent",
        type=int,
        help="Indentation width for json and tree output (default: 2)"
    )
    parse_parser.add_argument(
        "--no-declaration",
        action="store_true",
        help="Omit the XML declaration from the output"
    )
    parse_parser.add_argument(
        "--encoding",
        help="Encoding used to read files (default: utf-8)"
    )
    parse_parser.add_argument(
        "--output", "-o",
        type=Path,
        help="Write output to file instead of standard output"
    )

    return parser


def build_config(args: argparse.Namespace) -> CLIConfig:
    """Merge the configuration file (if any) with command-line overrides.

    Raises:
        ConfigError: If the configuration file or an override is invalid
    """
    config = CLIConfig.from_file(args.config) if args.config else CLIConfig()

    output_overrides: Dict[str, Any] = {}
    if getattr(args, "format", None):
        output_overrides["format"] = args.format
    if getattr(args, "indent", None) is not None:
        output_overrides["indent"] = args.indent
    if getattr(args, "no_declaration", False):
        output_overrides["include_declaration"] = False

    overrides: Dict[str, Any] = {}
    if output_overrides:
        overrides["output"] = replace(config.output, **output_overrides)
    if getattr(args, "encoding", None):
        overrides["encoding"] = args.encoding
    if args.verbose:
        overrides["log_level"] = "DEBUG"
    elif args.quiet:
        overrides["log_level"] = "ERROR"

    return replace(config, **overrides) if overrides else config


def cmd_parse(args: argparse.Namespace, config: CLIConfig) -> int:
    """Handle parse command."""
    processor = DocumentProcessor(config)
    results = processor.process_all(args.paths)
    formatted_output = processor.format_results(results)

    if args.output:
        try:
            args.output.write_text(formatted_output + "\n", encoding="utf-8")
        except OSError as e:
            print(f"Error writing output: {e}", file=sys.stderr)
            return EXIT_FAILURE
        if not args.quiet:
            print(f"Results written to {args.output}", file=sys.stderr)
    else:
        print(formatted_output)

    if not results:
        return EXIT_FAILURE
    return EXIT_OK if all(r["success"] for r in results) else EXIT_FAILURE


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entry point."""
    parser = create_argument_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return EXIT_FAILURE

    try:
        config = build_config(args)
    except (ConfigError, ValueError) as e:
        print(f"Invalid configuration: {e}", file=sys.stderr)
        return EXIT_USAGE

    logging.basicConfig(level=getattr(logging, config.log_level))

    try:
        if args.command == "parse":
            return cmd_parse(args, config)
        print(f"Unknown command: {args.command}", file=sys.stderr)
        return EXIT_FAILURE

    except KeyboardInterrupt:
        print("\nOperation interrupted by user", file=sys.stderr)
        return EXIT_INTERRUPTED


if __name__ == "__main__":
    sys.exit(main())
