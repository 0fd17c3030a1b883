"""Tests for the CLI main module."""

import io
import json
import tempfile
from pathlib import Path
from unittest.mock import patch

import pytest

from lenient_xml_parser.cli.main import (
    DocumentProcessor,
    build_config,
    create_argument_parser,
    main,
    render_tree,
    summarize,
)
from lenient_xml_parser.api import parse
from lenient_xml_parser.shared.config import CLIConfig, OutputConfig

SAMPLE = '<?xml version="1.0"?><root a="1">hello<leaf/><item>x &amp; y</item></root>'


@pytest.fixture
def xml_file():
    """Write SAMPLE to a temporary file and remove it afterwards."""
    with tempfile.NamedTemporaryFile(
        mode="w", encoding="utf-8", suffix=".xml", delete=False
    ) as f:
        f.write(SAMPLE)
        path = Path(f.name)
    yield path
    path.unlink()


class TestRendering:
    """Test output renderers."""

    def test_render_tree(self):
        """Test the indented outline."""
        output = render_tree(parse(SAMPLE), OutputConfig(format="tree"))
        assert output.splitlines() == [
            '<?xml version="1.0"?>',
            'root a="1": "hello"',
            "  leaf /",
            '  item: "x & y"',
        ]

    def test_render_tree_without_declaration(self):
        """Test the declaration line can be omitted."""
        config = OutputConfig(format="tree", indent=4, include_declaration=False)
        output = render_tree(parse("<?xml version='1.0'?><a><b/></a>"), config)
        assert output.splitlines() == ["a", "    b /"]

    def test_render_truncated_element(self):
        """Test an element cut short by a bad attribute renders without content."""
        output = render_tree(parse('<a x="1" broken><b/></a>'), OutputConfig())
        assert output == 'a x="1" /'

    def test_render_empty_tree(self):
        """Test an empty document renders a placeholder."""
        assert render_tree(parse(""), OutputConfig()) == "(empty document)"

    def test_summarize(self):
        """Test the one-line summary."""
        assert summarize(parse(SAMPLE)) == "root=root elements=3 depth=1 version=1.0"
        assert summarize(parse("")) == "root=- elements=0 depth=0 version=-"


class TestDocumentProcessor:
    """Test source processing."""

    def test_process_file(self, xml_file):
        """Test a readable file is parsed."""
        result = DocumentProcessor(CLIConfig()).process_source(str(xml_file))
        assert result["success"] is True
        assert result["document"].root.name == "root"

    def test_process_missing_file(self):
        """Test an unreadable file is reported, not raised."""
        result = DocumentProcessor(CLIConfig()).process_source("/nonexistent/file.xml")
        assert result["success"] is False
        assert result["error"]

    def test_process_stdin(self):
        """Test '-' reads standard input."""
        with patch("sys.stdin", io.StringIO("<a>in</a>")):
            result = DocumentProcessor(CLIConfig()).process_source("-")
        assert result["document"].root.content == "in"

    def test_json_single_and_multiple(self, xml_file):
        """Test JSON output is an object for one input and a list for many."""
        processor = DocumentProcessor(CLIConfig())
        single = json.loads(processor.format_results(processor.process_all([str(xml_file)])))
        assert single["success"] is True
        assert single["document"]["declaration"] == {"attributes": {"version": "1.0"}}
        assert single["document"]["root"]["children"][1]["content"] == "x & y"

        many = json.loads(processor.format_results(
            processor.process_all([str(xml_file), "/nonexistent/file.xml"])
        ))
        assert [entry["success"] for entry in many] == [True, False]
        assert "error" in many[1]


class TestArguments:
    """Test argument parsing and configuration merging."""

    def test_parse_command_defaults(self):
        """Test parse command arguments."""
        args = create_argument_parser().parse_args(["parse", "a.xml", "b.xml"])
        assert args.command == "parse"
        assert args.paths == ["a.xml", "b.xml"]
        assert args.format is None

    def test_build_config_overrides(self):
        """Test command-line flags override configuration."""
        args = create_argument_parser().parse_args(
            ["-v", "parse", "--format", "tree", "--indent", "4", "--no-declaration", "a.xml"]
        )
        config = build_config(args)
        assert config.output == OutputConfig(format="tree", indent=4, include_declaration=False)
        assert config.log_level == "DEBUG"

    def test_build_config_from_file(self):
        """Test configuration file values apply when no flag is given."""
        with tempfile.NamedTemporaryFile(mode="w", suffix=".json", delete=False) as f:
            json.dump({"output": {"format": "summary"}}, f)
            config_path = Path(f.name)

        try:
            args = create_argument_parser().parse_args(
                ["--config", str(config_path), "-q", "parse", "a.xml"]
            )
            config = build_config(args)
            assert config.output.format == "summary"
            assert config.log_level == "ERROR"
        finally:
            config_path.unlink()


class TestMain:
    """Test the main entry point."""

    def test_no_command(self, capsys):
        """Test running without a command prints help."""
        assert main([]) == 1
        assert "usage" in capsys.readouterr().out

    def test_parse_summary(self, xml_file, capsys):
        """Test successful parsing exits with 0."""
        assert main(["parse", "--format", "summary", str(xml_file)]) == 0
        out = capsys.readouterr().out
        assert out.strip() == f"{xml_file}: root=root elements=3 depth=1 version=1.0"

    def test_parse_missing_file(self, capsys):
        """Test an unreadable input exits with 1."""
        assert main(["parse", "-f", "summary", "/nonexistent/file.xml"]) == 1
        assert "error" in capsys.readouterr().out

    def test_invalid_indent(self, capsys):
        """Test invalid option values exit with 2."""
        assert main(["parse", "--indent", "-3", "a.xml"]) == 2
        assert "Invalid configuration" in capsys.readouterr().err

    def test_unreadable_config_file(self, xml_file, capsys):
        """Test a config path that cannot be read exits with 2."""
        with tempfile.TemporaryDirectory() as tmp:
            assert main(["--config", tmp, "parse", str(xml_file)]) == 2
        assert "Invalid configuration" in capsys.readouterr().err

    def test_zero_indent_json(self, xml_file, capsys):
        """Test --indent 0 keeps one value per line."""
        assert main(["-q", "parse", "--indent", "0", str(xml_file)]) == 0
        out = capsys.readouterr().out
        assert '\n"source": ' in out
        assert json.loads(out)["success"] is True

    def test_output_file(self, xml_file):
        """Test writing output to a file."""
        with tempfile.TemporaryDirectory() as tmp:
            out_path = Path(tmp) / "out.json"
            assert main(["-q", "parse", "-o", str(out_path), str(xml_file)]) == 0
            data = json.loads(out_path.read_text(encoding="utf-8"))
            assert data["document"]["root"]["name"] == "root"

    def test_version(self, capsys):
        """Test --version prints the package version."""
        with pytest.raises(SystemExit) as exc_info:
            main(["--version"])
        assert exc_info.value.code == 0
        assert "0.1.0" in capsys.readouterr().out
