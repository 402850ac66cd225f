"""Diagnostics helpers."""

from __future__ import annotations

from collections.abc import Iterable

from ottoparse.diagnostics.diagnostic import Diagnostic


def has_errors(diagnostics: Iterable[Diagnostic]) -> bool:
    return any(d.severity == "error" for d in diagnostics)


def format_diagnostic(diagnostic: Diagnostic, name: str | None = None) -> str:
    """Render `name:line:col: CODE message` for command-line reporting."""
    prefix = f"{name}:" if name else ""
    return f"{prefix}{diagnostic.position}: {diagnostic.code} {diagnostic.message}"
