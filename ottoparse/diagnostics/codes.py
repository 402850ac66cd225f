"""Diagnostic codes and messages."""

from dataclasses import dataclass
from typing import Final, Literal

Severity = Literal["error", "warning"]


@dataclass(frozen=True, slots=True)
class DiagnosticSpec:
    code: str
    message: str
    hint: str | None = None
    severity: Severity = "error"
    category: str | None = None


PARSER_UNEXPECTED_TOKEN: Final[DiagnosticSpec] = DiagnosticSpec(
    code="PARSER_UNEXPECTED_TOKEN",
    message="Unexpected token",
    severity="error",
    category="parser",
)

PARSER_UNEXPECTED_EOF: Final[DiagnosticSpec] = DiagnosticSpec(
    code="PARSER_UNEXPECTED_EOF",
    message="Unexpected end of input",
    hint="The report ended in the middle of a line; check that the file was not truncated.",
    severity="error",
    category="parser",
)

PARSER_UNKNOWN_PREFIX: Final[DiagnosticSpec] = DiagnosticSpec(
    code="PARSER_UNKNOWN_PREFIX",
    message="unexpected tokens before unit section",
    hint="Reports start with a unit line such as `Tribe 0987, , Current Hex = ...`.",
    severity="error",
    category="parser",
)

PARSER_MALFORMED_COORDS: Final[DiagnosticSpec] = DiagnosticSpec(
    code="PARSER_MALFORMED_COORDS",
    message="expected coordinates",
    hint="Coordinates look like `AB 0102`, `## 0102` or `N/A`.",
    severity="error",
    category="parser",
)

PARSER_MALFORMED_NOTE: Final[DiagnosticSpec] = DiagnosticSpec(
    code="PARSER_MALFORMED_NOTE",
    message="unit note is not closed by a comma",
    severity="error",
    category="parser",
)

PARSER_MALFORMED_UNIT_ID: Final[DiagnosticSpec] = DiagnosticSpec(
    code="PARSER_MALFORMED_UNIT_ID",
    message="expected unit id",
    hint="Unit ids are four digits with an optional c/e/f/g suffix and digit, e.g. `0987e1`.",
    severity="error",
    category="parser",
)
