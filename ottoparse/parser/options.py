"""Parser modes and configuration options."""

from dataclasses import dataclass
from enum import StrEnum


class ParseMode(StrEnum):
    """Top-level parser behavior profile."""

    STRICT = "strict"
    EXTENDED = "extended"


@dataclass(frozen=True, slots=True)
class ParserOptions:
    """Feature flags controlling keyword recognition and semantic checks.

    `movement_keywords` and `composite_na` are lexer flags; they only take
    effect when the parser scans the text itself (`parse_text`, `run_report`).
    """

    mode: ParseMode = ParseMode.STRICT
    movement_keywords: bool = False
    composite_na: bool = False
    validate_coords: bool = False

    @staticmethod
    def for_mode(mode: ParseMode) -> "ParserOptions":
        if mode == ParseMode.EXTENDED:
            return ParserOptions(
                mode=mode,
                movement_keywords=True,
                composite_na=True,
                validate_coords=True,
            )

        return ParserOptions(
            mode=mode,
            movement_keywords=False,
            composite_na=False,
            validate_coords=False,
        )
