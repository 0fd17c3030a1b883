"""Test module for lenient_xml_parser package initialization."""


def test_package_import() -> None:
    """Test that the package can be imported successfully."""
    import lenient_xml_parser

    assert lenient_xml_parser is not None


def test_package_has_version() -> None:
    """Test that the package has a version attribute."""
    import lenient_xml_parser

    assert isinstance(lenient_xml_parser.__version__, str)
    assert lenient_xml_parser.__version__ == "0.1.0"


def test_package_exports() -> None:
    """Test the public entry points are exported."""
    import lenient_xml_parser

    for name in ("parse", "parse_file", "Document", "Declaration", "Node"):
        assert name in lenient_xml_parser.__all__
        assert hasattr(lenient_xml_parser, name)


def test_top_level_parse() -> None:
    """Test parsing through the package namespace."""
    from lenient_xml_parser import Node, parse

    assert parse("<a>b</a>").root == Node(name="a", content="b")
