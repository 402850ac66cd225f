"""Syntax kinds."""

from ottoparse.syntax.kind import ReportSyntaxKind

__all__ = ["ReportSyntaxKind"]
