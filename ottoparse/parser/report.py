"""High-level parse entrypoints for turn reports."""

from __future__ import annotations

from collections.abc import Iterable
from typing import TYPE_CHECKING

from ottoparse.cst import TurnLine, TurnReport
from ottoparse.lexer import Token, decode_source, scan
from ottoparse.parser import grammar
from ottoparse.parser.options import ParseMode, ParserOptions
from ottoparse.parser.parser import Parser

if TYPE_CHECKING:
    from ottoparse.pipeline import ReportParseResult


def _resolve_options(
    options: ParserOptions | None,
    mode: ParseMode | None,
) -> ParserOptions:
    if mode is not None and options is not None:
        raise ValueError("Pass either options or mode, not both")

    if options is not None:
        return options

    if mode is not None:
        return ParserOptions.for_mode(mode)

    return ParserOptions()


def parse(
    tokens: Iterable[Token],
    options: ParserOptions | None = None,
    *,
    mode: ParseMode | None = None,
) -> TurnReport:
    """Parse a token stream; never raises on bad input."""
    resolved_options = _resolve_options(options=options, mode=mode)
    parser = Parser(tokens, options=resolved_options)
    return grammar.parse_turn_report(parser)


def parse_turn_line(tokens: Iterable[Token]) -> TurnLine:
    return grammar.parse_turn_line(Parser(tokens))


def parse_text(
    text: str | bytes,
    options: ParserOptions | None = None,
    *,
    mode: ParseMode | None = None,
) -> TurnReport:
    resolved_options = _resolve_options(options=options, mode=mode)
    tokens = scan(
        text,
        movement_keywords=resolved_options.movement_keywords,
        composite_na=resolved_options.composite_na,
    )
    return parse(tokens, options=resolved_options)


def parse_result(
    text: str | bytes,
    options: ParserOptions | None = None,
    *,
    mode: ParseMode | None = None,
) -> ReportParseResult:
    from ottoparse.pipeline import ReportParseResult

    resolved_options = _resolve_options(options=options, mode=mode)
    source_text = decode_source(text)
    tokens = scan(
        source_text,
        movement_keywords=resolved_options.movement_keywords,
        composite_na=resolved_options.composite_na,
    )
    return ReportParseResult(
        source_text=source_text,
        tokens=tokens,
        root=parse(tokens, options=resolved_options),
        options=resolved_options,
    )
