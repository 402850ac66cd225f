"""Report scrubbing."""

from ottoparse.scrubbers.scrubber import (
    LineClass,
    classify_line,
    normalize_line,
    scrub,
    scrub_text,
)

__all__ = [
    "LineClass",
    "classify_line",
    "normalize_line",
    "scrub",
    "scrub_text",
]
