"""Diagnostics core types."""

from dataclasses import dataclass

from ottoparse.diagnostics.codes import DiagnosticSpec, Severity
from ottoparse.text import TextPosition, TextRange


@dataclass(frozen=True, slots=True)
class Diagnostic:
    """Structured diagnostic attached to the CST node that was being built."""

    code: str
    message: str
    range: TextRange
    position: TextPosition
    severity: Severity = "error"
    hint: str | None = None
    category: str | None = None

    @staticmethod
    def from_spec(
        spec: DiagnosticSpec,
        range: TextRange,
        position: TextPosition,
        message: str | None = None,
    ) -> "Diagnostic":
        return Diagnostic(
            code=spec.code,
            message=message if message is not None else spec.message,
            range=range,
            position=position,
            severity=spec.severity,
            hint=spec.hint,
            category=spec.category,
        )

    def __str__(self) -> str:
        return f"{self.position}: {self.message}"
