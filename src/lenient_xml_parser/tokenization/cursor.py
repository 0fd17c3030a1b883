"""Cursor over the preprocessed input used by the grammar functions.

The cursor keeps an offset into an immutable string. Patterns are matched in
place with ``Pattern.match(text, pos)``, which anchors at the offset, so no
substring is ever copied while consuming input.
"""

import re
from typing import Optional

# Max characters shown by repr()
_REPR_PREVIEW = 20


class Cursor:
    """Position within the text remaining to be parsed.

    Attributes:
        text: The complete (preprocessed) input
        position: Offset of the first unconsumed character
    """

    __slots__ = ("text", "position")

    def __init__(self, text: str, position: int = 0) -> None:
        if not (0 <= position <= len(text)):
            raise ValueError("Cursor position out of range")
        self.text = text
        self.position = position

    def try_match(self, pattern: "re.Pattern[str]") -> Optional["re.Match[str]"]:
        """Match ``pattern`` at the current position and advance past it.

        The pattern must not begin with ``^``: ``Pattern.match`` with a start
        offset already anchors there, while ``^`` would only match at offset 0.

        Returns:
            The match object, or None with the position unchanged
        """
        match = pattern.match(self.text, self.position)
        if match is None:
            return None
        self.position = match.end()
        return match

    def at_end(self) -> bool:
        """Check whether all input has been consumed."""
        return self.position >= len(self.text)

    def starts_with(self, prefix: str) -> bool:
        """Check whether the remaining input begins with ``prefix``."""
        return self.text.startswith(prefix, self.position)

    @property
    def remaining(self) -> str:
        """The unconsumed input (copies; intended for diagnostics only)."""
        return self.text[self.position:]

    def __repr__(self) -> str:
        upcoming = self.text[self.position:self.position + _REPR_PREVIEW]
        return f"Cursor(position={self.position}, upcoming={upcoming!r})"
