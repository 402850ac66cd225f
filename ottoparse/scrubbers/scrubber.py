"""Line scrubber for docx/text extracted turn reports."""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable
from enum import StrEnum
from typing import Final

from ottoparse.lexer import decode_source

logger = logging.getLogger(__name__)

_RUN_OF_TABS: Final[re.Pattern[str]] = re.compile(r"\t+")
_RUN_OF_SPACES: Final[re.Pattern[str]] = re.compile(r" {2,}")

_UNIT_LOCATION_LINES: Final[tuple[re.Pattern[str], ...]] = (
    re.compile(r"^Courier [0-9]{4}c[1-9],"),
    re.compile(r"^Element [0-9]{4}e[1-9],"),
    re.compile(r"^Fleet [0-9]{4}f[1-9],"),
    re.compile(r"^Garrison [0-9]{4}g[1-9],"),
    re.compile(r"^Tribe [0-9]{4},"),
)
_CURRENT_TURN_LINE: Final[re.Pattern[str]] = re.compile(r"^Current Turn .*Next Turn")
_SCOUT_LINE: Final[re.Pattern[str]] = re.compile(r"^Scout [1-8]:Scout ")
_STATUS_LINE: Final[re.Pattern[str]] = re.compile(r"^[0-9]{4}(?:[cefg][0-9])? Status:")
_TRIBE_MOVEMENT_PREFIX: Final[str] = "Tribe Movement:"

# Units without a previous location are treated as not having moved.
# This is wrong for units that report movement this turn.
_PATCH_NA: Final[re.Pattern[str]] = re.compile(
    r"Current Hex = ([A-Z]{2} [0-9]{4}),.*\(Previous Hex = N/A\)"
)


class LineClass(StrEnum):
    """Kinds of report lines the scrubber keeps."""

    UNIT_LOCATION = "unit_location"
    CURRENT_TURN = "current_turn"
    TRIBE_MOVEMENT = "tribe_movement"
    SCOUT = "scout"
    STATUS = "status"


def normalize_line(line: str) -> str:
    """Trim and collapse runs of tabs and spaces to a single space."""
    line = line.strip()
    line = _RUN_OF_TABS.sub(" ", line)
    return _RUN_OF_SPACES.sub(" ", line)


def classify_line(line: str) -> LineClass | None:
    """Classify a normalized line, or return None if the scrubber drops it."""
    if any(pattern.match(line) for pattern in _UNIT_LOCATION_LINES):
        return LineClass.UNIT_LOCATION
    if _CURRENT_TURN_LINE.match(line):
        return LineClass.CURRENT_TURN
    if line.startswith(_TRIBE_MOVEMENT_PREFIX):
        return LineClass.TRIBE_MOVEMENT
    if _SCOUT_LINE.match(line):
        return LineClass.SCOUT
    if _STATUS_LINE.match(line):
        return LineClass.STATUS
    return None


def scrub(lines: Iterable[str | bytes]) -> list[str]:
    """Normalize raw report lines and keep only the ones the parser understands."""
    accepted: list[str] = []
    dropped = 0
    for raw in lines:
        line = normalize_line(decode_source(raw))
        line_class = classify_line(line)
        if line_class is None:
            dropped += 1
            continue
        if line_class == LineClass.UNIT_LOCATION:
            line = _PATCH_NA.sub(r"Current Hex = \1, (Previous Hex = \1)", line)
        accepted.append(line)
    logger.debug("Scrubbed report: kept %d lines, dropped %d", len(accepted), dropped)
    return accepted


def scrub_text(text: str | bytes) -> str:
    """Scrub a whole report and return it as newline-terminated text."""
    lines = scrub(decode_source(text).split("\n"))
    if not lines:
        return ""
    return "\n".join(lines) + "\n"
