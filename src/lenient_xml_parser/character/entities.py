"""Decoding of XML entity and character references in text content.

Only the five predefined XML entities and numeric character references are
recognised. Anything else that looks like a reference, including HTML-only
names such as ``&nbsp;`` and references missing their terminating ``;``, is
passed through unchanged.
"""

import re
from typing import Dict

XML_ENTITIES: Dict[str, str] = {
    "amp": "&",
    "lt": "<",
    "gt": ">",
    "quot": '"',
    "apos": "'",
}

REPLACEMENT_CHARACTER = "\ufffd"

# Unicode scalar value bounds
MAX_CODE_POINT = 0x10FFFF
SURROGATE_RANGE_START = 0xD800
SURROGATE_RANGE_END = 0xDFFF

_REFERENCE_PATTERN = re.compile(
    r"&(?:#[xX](?P<hex>[0-9a-fA-F]+)|#(?P<dec>[0-9]+)|(?P<name>[a-zA-Z][a-zA-Z0-9]*));"
)


def decode_code_point(code_point: int) -> str:
    """Convert a numeric character reference value to a character.

    Values that are not Unicode scalar values (NUL, surrogates, anything above
    U+10FFFF) decode to U+FFFD REPLACEMENT CHARACTER.
    """
    if (
        code_point == 0
        or code_point > MAX_CODE_POINT
        or SURROGATE_RANGE_START <= code_point <= SURROGATE_RANGE_END
    ):
        return REPLACEMENT_CHARACTER
    return chr(code_point)


def _replace_reference(match: "re.Match[str]") -> str:
    hex_digits = match.group("hex")
    if hex_digits is not None:
        return decode_code_point(int(hex_digits, 16))

    dec_digits = match.group("dec")
    if dec_digits is not None:
        return decode_code_point(int(dec_digits))

    return XML_ENTITIES.get(match.group("name"), match.group(0))


def decode_entities(text: str) -> str:
    """Decode standard XML entity and numeric character references.

    Args:
        text: Text content taken from outside a CDATA section

    Returns:
        Text with ``&amp; &lt; &gt; &quot; &apos;``, ``&#NNNN;`` and
        ``&#xHHHH;`` replaced by the characters they stand for

    Examples:
        >>> decode_entities("Data &amp; Test")
        'Data & Test'
        >>> decode_entities("&lt;/br&gt;")
        '</br>'
        >>> decode_entities("&#65;&#x42;&nbsp;")
        'AB&nbsp;'
    """
    if "&" not in text:
        return text
    return _REFERENCE_PATTERN.sub(_replace_reference, text)
