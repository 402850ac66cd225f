"""Diagnostics."""

from ottoparse.diagnostics.codes import (
    PARSER_MALFORMED_COORDS,
    PARSER_MALFORMED_NOTE,
    PARSER_MALFORMED_UNIT_ID,
    PARSER_UNEXPECTED_EOF,
    PARSER_UNEXPECTED_TOKEN,
    PARSER_UNKNOWN_PREFIX,
    DiagnosticSpec,
    Severity,
)
from ottoparse.diagnostics.diagnostic import Diagnostic
from ottoparse.diagnostics.report import format_diagnostic, has_errors

__all__ = [
    "PARSER_MALFORMED_COORDS",
    "PARSER_MALFORMED_NOTE",
    "PARSER_MALFORMED_UNIT_ID",
    "PARSER_UNEXPECTED_EOF",
    "PARSER_UNEXPECTED_TOKEN",
    "PARSER_UNKNOWN_PREFIX",
    "Diagnostic",
    "DiagnosticSpec",
    "Severity",
    "format_diagnostic",
    "has_errors",
]
