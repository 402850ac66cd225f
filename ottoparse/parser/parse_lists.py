"""Reusable line-list parse loop."""

from collections.abc import Callable
from dataclasses import dataclass
from typing import Generic, TypeVar

from ottoparse.cst import CstNode
from ottoparse.parser.parser import Parser, ParserProgress

N = TypeVar("N", bound=CstNode)


@dataclass(slots=True)
class ParseLineList(Generic[N]):
    """Parse whole lines until `is_at_list_end`, guarding against stalls."""

    is_at_list_end: Callable[[Parser], bool]
    parse_line: Callable[[Parser], N]

    def parse_list(self, parser: Parser) -> list[N]:
        lines: list[N] = []
        progress = ParserProgress()

        while not parser.at_end() and not self.is_at_list_end(parser):
            progress.assert_progressing(parser)
            lines.append(self.parse_line(parser))

        return lines
