"""Input cursor for the lenient XML parser grammar."""

from .cursor import Cursor

__all__ = ["Cursor"]
