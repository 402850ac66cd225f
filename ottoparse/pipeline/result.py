"""Parse carrier shared by the entrypoints and the command line."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from ottoparse.cst import TurnReport, pretty_print
from ottoparse.diagnostics import has_errors
from ottoparse.parser.options import ParserOptions

if TYPE_CHECKING:
    from ottoparse.diagnostics import Diagnostic
    from ottoparse.lexer import Token


@dataclass(slots=True)
class ReportParseResult:
    """One report's text, tokens and tree, parsed once and read many times."""

    source_text: str
    tokens: list[Token]
    root: TurnReport
    options: ParserOptions
    name: str | None = None
    _pretty: dict[tuple[bool, bool, bool], str] = field(default_factory=dict, init=False, repr=False)

    @property
    def diagnostics(self) -> list[Diagnostic]:
        return self.root.errors

    @property
    def has_errors(self) -> bool:
        return has_errors(self.root.errors)

    @property
    def section_count(self) -> int:
        return len(self.root.sections)

    def pretty(
        self,
        *,
        show_line_no: bool = False,
        show_col_no: bool = False,
        show_token_kind: bool = False,
    ) -> str:
        key = (show_line_no, show_col_no, show_token_kind)
        if key not in self._pretty:
            self._pretty[key] = pretty_print(
                self.root,
                name=self.name,
                show_line_no=show_line_no,
                show_col_no=show_col_no,
                show_token_kind=show_token_kind,
            )
        return self._pretty[key]
