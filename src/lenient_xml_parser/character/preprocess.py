"""Input normalisation applied once before grammar matching.

Comments are dropped and whitespace is collapsed so that the grammar never has
to skip over either. As a side effect any text made only of whitespace between
two tags disappears, which is why inter-tag text is not preserved.

A byte-order mark (U+FEFF) counts as whitespace here. ``str.strip`` and ``\\s``
leave it alone, and a leading mark would otherwise hide the whole document.
"""

import re

_BLANK = r"[\s\ufeff]"

_TRIM_PATTERN = re.compile(rf"^{_BLANK}+|{_BLANK}+\Z")

# Whitespace preceded by ">", whitespace at the very start, or a comment span.
# The lookbehind sees the original string, so whitespace following the ">" of
# a removed comment is removed as well.
_STRIP_PATTERN = re.compile(
    rf"(?<=>){_BLANK}+|^{_BLANK}+|<!--.*?-->", re.DOTALL
)


def preprocess(xml: str) -> str:
    """Trim ``xml`` and strip comments and whitespace following ``>``.

    Examples:
        >>> preprocess("  <a>\\n  <!-- note -->\\n  <b/>\\n</a>  ")
        '<a><b/></a>'
        >>> preprocess("\\ufeff<a/>")
        '<a/>'
        >>> preprocess("   ")
        ''
    """
    return _STRIP_PATTERN.sub("", _TRIM_PATTERN.sub("", xml))
