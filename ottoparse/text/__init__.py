"""Text positions and ranges."""

from ottoparse.text.text import START, TextPosition, TextRange, slice_text_range

__all__ = [
    "START",
    "TextPosition",
    "TextRange",
    "slice_text_range",
]
