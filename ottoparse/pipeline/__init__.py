"""Shared parse carrier and lazy pipeline entrypoint exports."""

from __future__ import annotations

from os import PathLike

from ottoparse.parser.options import ParseMode, ParserOptions
from ottoparse.pipeline.result import ReportParseResult


def run_report(
    source: str | bytes,
    options: ParserOptions | None = None,
    *,
    mode: ParseMode | None = None,
    scrub: bool = False,
    name: str | None = None,
) -> ReportParseResult:
    from ottoparse.pipeline.entrypoints import run_report as _run_report

    return _run_report(source, options=options, mode=mode, scrub=scrub, name=name)


def run_report_file(
    path: str | PathLike[str],
    options: ParserOptions | None = None,
    *,
    mode: ParseMode | None = None,
    scrub: bool = False,
) -> ReportParseResult:
    from ottoparse.pipeline.entrypoints import run_report_file as _run_report_file

    return _run_report_file(path, options=options, mode=mode, scrub=scrub)


__all__ = [
    "ReportParseResult",
    "run_report",
    "run_report_file",
]
