"""`ottoparse` command line: dump tokens, parse reports, scrub raw text."""

from __future__ import annotations

import argparse
import logging
import sys
from collections.abc import Sequence
from pathlib import Path

from tqdm import tqdm

from ottoparse.diagnostics import format_diagnostic
from ottoparse.lexer import dump_tokens, scan
from ottoparse.parser import ParseMode, ParserOptions
from ottoparse.pipeline import run_report_file
from ottoparse.scrubbers import scrub_text

logger = logging.getLogger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="ottoparse", description="Parse scrubbed TribeNet turn reports")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log progress and debug details to stderr")
    commands = parser.add_subparsers(dest="command", required=True)

    tokens = commands.add_parser("tokens", help="Print the token stream of a report")
    tokens.add_argument("file", type=Path)
    _add_mode_argument(tokens)

    parse = commands.add_parser("parse", help="Parse reports and print their syntax trees")
    parse.add_argument("files", type=Path, nargs="+")
    _add_mode_argument(parse)
    parse.add_argument("--scrub", action="store_true", help="Scrub raw report text before parsing")
    parse.add_argument("--line-no", action="store_true", help="Show line numbers in the tree dump")
    parse.add_argument("--col-no", action="store_true", help="Show line:column positions in the tree dump")
    parse.add_argument("--kinds", action="store_true", help="Show token kinds in the tree dump")
    parse.add_argument("--quiet", action="store_true", help="Only report diagnostics, skip the tree dump")
    parse.add_argument(
        "--no-progress",
        action="store_true",
        help="Disable the tqdm progress bar shown for multiple files",
    )

    scrub = commands.add_parser("scrub", help="Print only the report lines the parser understands")
    scrub.add_argument("file", type=Path)

    return parser


def _add_mode_argument(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--mode",
        type=ParseMode,
        choices=list(ParseMode),
        default=ParseMode.STRICT,
        help="Parser profile (default: strict)",
    )


def _read_file(path: Path) -> bytes | None:
    try:
        return path.read_bytes()
    except OSError as exc:
        logger.error("Cannot read %s: %s", path, exc)
        return None


def _run_tokens(args: argparse.Namespace) -> int:
    source = _read_file(args.file)
    if source is None:
        return 1
    options = ParserOptions.for_mode(args.mode)
    tokens = scan(
        source,
        movement_keywords=options.movement_keywords,
        composite_na=options.composite_na,
    )
    dump_tokens(tokens)
    return 0


def _run_parse(args: argparse.Namespace) -> int:
    files: list[Path] = args.files
    show_progress = len(files) > 1 and not args.no_progress
    iterator = tqdm(files, desc="parse", unit="file") if show_progress else files

    failed = 0
    for path in iterator:
        try:
            result = run_report_file(path, mode=args.mode, scrub=args.scrub)
        except OSError as exc:
            logger.error("Cannot read %s: %s", path, exc)
            failed += 1
            continue

        if not args.quiet:
            sys.stdout.write(
                result.pretty(
                    show_line_no=args.line_no,
                    show_col_no=args.col_no,
                    show_token_kind=args.kinds,
                )
            )
        for diagnostic in result.diagnostics:
            tqdm.write(format_diagnostic(diagnostic, name=str(path)), file=sys.stderr)
        if result.has_errors:
            failed += 1

    logger.info("Parsed %d files, %d with errors", len(files), failed)
    return 1 if failed else 0


def _run_scrub(args: argparse.Namespace) -> int:
    source = _read_file(args.file)
    if source is None:
        return 1
    sys.stdout.write(scrub_text(source))
    return 0


def main(argv: Sequence[str] | None = None) -> int:
    args = _build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    match args.command:
        case "tokens":
            return _run_tokens(args)
        case "parse":
            return _run_parse(args)
        case "scrub":
            return _run_scrub(args)
    raise AssertionError(f"unhandled command {args.command!r}")


if __name__ == "__main__":
    raise SystemExit(main())
