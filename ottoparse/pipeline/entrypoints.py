"""Entrypoints that read, optionally scrub, scan and parse one report."""

from __future__ import annotations

import logging
from os import PathLike
from pathlib import Path

from ottoparse.lexer import decode_source
from ottoparse.parser import ParseMode, ParserOptions, parse_result
from ottoparse.pipeline.result import ReportParseResult
from ottoparse.scrubbers import scrub_text

logger = logging.getLogger(__name__)


def run_report(
    source: str | bytes,
    options: ParserOptions | None = None,
    *,
    mode: ParseMode | None = None,
    scrub: bool = False,
    name: str | None = None,
) -> ReportParseResult:
    """Parse one report; with `scrub=True` the raw text is scrubbed first."""
    text = scrub_text(source) if scrub else decode_source(source)
    result = parse_result(text, options=options, mode=mode)
    if name is not None:
        result.name = name

    logger.debug(
        "Parsed %s: %d tokens, %d sections, %d diagnostics",
        name or "<text>",
        len(result.tokens),
        result.section_count,
        len(result.diagnostics),
    )
    return result


def run_report_file(
    path: str | PathLike[str],
    options: ParserOptions | None = None,
    *,
    mode: ParseMode | None = None,
    scrub: bool = False,
) -> ReportParseResult:
    """Read a report file as bytes and parse it; OSError propagates."""
    file_path = Path(path)
    logger.info("Parsing %s", file_path)
    data = file_path.read_bytes()
    return run_report(data, options=options, mode=mode, scrub=scrub, name=str(file_path))
