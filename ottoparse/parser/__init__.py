"""Parser infrastructure (token cursor + grammar + entrypoints)."""

from ottoparse.parser.grammar import (
    parse_coords,
    parse_land_movement_line,
    parse_turn_report,
    parse_unit_goes_to_line,
    parse_unit_line,
    parse_unit_section,
)
from ottoparse.parser.options import ParseMode, ParserOptions
from ottoparse.parser.parse_lists import ParseLineList
from ottoparse.parser.parser import Parser, ParserProgress
from ottoparse.parser.report import parse, parse_result, parse_text, parse_turn_line

__all__ = [
    "ParseLineList",
    "ParseMode",
    "Parser",
    "ParserOptions",
    "ParserProgress",
    "parse",
    "parse_coords",
    "parse_result",
    "parse_land_movement_line",
    "parse_text",
    "parse_turn_line",
    "parse_turn_report",
    "parse_unit_goes_to_line",
    "parse_unit_line",
    "parse_unit_section",
]
