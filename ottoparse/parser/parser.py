"""Token cursor used by the turn report grammar."""

from collections.abc import Iterable
from dataclasses import dataclass
from typing import TypeAlias

from ottoparse.cst import CstNode
from ottoparse.diagnostics import (
    PARSER_UNEXPECTED_EOF,
    PARSER_UNEXPECTED_TOKEN,
    Diagnostic,
    DiagnosticSpec,
)
from ottoparse.lexer import UNIT_KEYWORDS, Token, TokenKind
from ottoparse.parser.options import ParserOptions
from ottoparse.text import START, TextPosition, TextRange

KindPattern: TypeAlias = TokenKind | frozenset[TokenKind]


@dataclass(slots=True)
class ParserProgress:
    """Detect parser stalls inside list-style loops."""

    _position: int | None = None

    def has_progressed(self, parser: "Parser") -> bool:
        has_progressed = self._position is None or self._position < parser.position
        self._position = parser.position
        return has_progressed

    def assert_progressing(self, parser: "Parser") -> None:
        if not self.has_progressed(parser):
            raise RuntimeError(
                f"Parser stopped making progress at {parser.peek_kind().display_name} {parser.here()[1]}"
            )


class Parser:
    """Position index into a token list, with lookahead and recovery helpers.

    Nothing here raises on bad input: `expect` records a diagnostic on the
    node being built and the grammar decides how to recover.
    """

    def __init__(self, tokens: Iterable[Token], options: ParserOptions | None = None) -> None:
        self._tokens = list(tokens)
        self._options = options or ParserOptions()
        self._pos = 0

    @property
    def options(self) -> ParserOptions:
        return self._options

    @property
    def tokens(self) -> list[Token]:
        return self._tokens

    @property
    def position(self) -> int:
        return self._pos

    # ---- lookahead ----

    def peek(self) -> Token | None:
        if self._pos >= len(self._tokens):
            return None
        return self._tokens[self._pos]

    def peek_kind(self) -> TokenKind:
        return self.nth_kind(0)

    def nth(self, n: int) -> Token | None:
        index = self._pos + n
        if index >= len(self._tokens):
            return None
        return self._tokens[index]

    def nth_kind(self, n: int) -> TokenKind:
        token = self.nth(n)
        return token.kind if token is not None else TokenKind.EOF

    def at(self, kind: TokenKind) -> bool:
        return self.peek_kind() == kind

    def at_end(self) -> bool:
        return self._pos >= len(self._tokens) or self.peek_kind() == TokenKind.EOF

    def at_line_start(self) -> bool:
        return self._pos == 0 or self._tokens[self._pos - 1].kind == TokenKind.EOL

    def at_unit_keyword(self) -> bool:
        return self.peek_kind() in UNIT_KEYWORDS

    def at_trailing_blank_lines(self) -> bool:
        """True when only empty lines (and the end-of-input token) remain."""
        return all(token.kind in (TokenKind.EOL, TokenKind.EOF) for token in self._tokens[self._pos :])

    def pattern(self, *kinds: KindPattern) -> bool:
        """Fixed-length lookahead; each position is a kind or a set of kinds."""
        for offset, expected in enumerate(kinds):
            actual = self.nth_kind(offset)
            if isinstance(expected, frozenset):
                if actual not in expected:
                    return False
            elif actual != expected:
                return False
        return True

    # ---- consuming ----

    def advance(self) -> Token | None:
        token = self.peek()
        if token is not None:
            self._pos += 1
        return token

    def match(self, *kinds: TokenKind) -> Token | None:
        if self.peek() is not None and self.peek_kind() in kinds:
            return self.advance()
        return None

    def expect(self, kind: TokenKind, node: CstNode) -> Token | None:
        """Consume a `kind` token into `node`, or record why it is missing."""
        token = self.match(kind)
        if token is not None:
            return node.add(token)
        got = self.peek_kind()
        spec = PARSER_UNEXPECTED_EOF if self.at_end() else PARSER_UNEXPECTED_TOKEN
        node.error(self.diagnostic(spec, f"expected {kind.display_name}, got {got.display_name}"))
        return None

    def advance_to(self, *delimiters: TokenKind) -> tuple[list[Token], bool]:
        """Consume tokens up to, not including, the first delimiter.

        Returns the consumed tokens and whether a delimiter was reached
        (False means the input ran out first).
        """
        consumed: list[Token] = []
        while not self.at_end():
            if self.peek_kind() in delimiters:
                return consumed, True
            token = self.advance()
            if token is not None:
                consumed.append(token)
        return consumed, False

    def sync_to_next_line(self) -> list[Token]:
        """Consume through the next EOL, inclusive."""
        skipped: list[Token] = []
        while not self.at_end():
            token = self.advance()
            if token is None:
                break
            skipped.append(token)
            if token.kind == TokenKind.EOL:
                break
        return skipped

    def sync_to_unit_keyword(self) -> list[Token]:
        """Consume up to, not including, the next unit keyword."""
        skipped: list[Token] = []
        while not self.at_end() and not self.at_unit_keyword():
            token = self.advance()
            if token is not None:
                skipped.append(token)
        return skipped

    def take_rest(self) -> list[Token]:
        """Consume everything left, the end-of-input token included."""
        rest = self._tokens[self._pos :]
        self._pos = len(self._tokens)
        return rest

    # ---- diagnostics ----

    def here(self) -> tuple[TextRange, TextPosition]:
        """Range and position of the next token, or of the end of input."""
        token = self.peek()
        if token is not None:
            return token.range, token.position
        if not self._tokens:
            return TextRange.empty(0), START
        last = self._tokens[-1]
        offset = last.full_range.end
        if last.kind == TokenKind.EOL:
            return TextRange.empty(offset), TextPosition(last.line + 1, 1)
        return TextRange.empty(offset), TextPosition(last.line, last.column + last.length)

    def diagnostic(
        self,
        spec: DiagnosticSpec,
        message: str | None = None,
        *,
        token: Token | None = None,
    ) -> Diagnostic:
        if token is not None:
            return Diagnostic.from_spec(spec, token.range, token.position, message)
        range, position = self.here()
        return Diagnostic.from_spec(spec, range, position, message)

    def start_position(self) -> TextPosition | None:
        token = self.peek()
        return token.position if token is not None else None
