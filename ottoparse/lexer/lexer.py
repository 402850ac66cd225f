"""Lexer."""

import re
from typing import Final

from ottoparse.lexer.tokens import (
    DELIMITERS,
    KEYWORDS,
    MOVEMENT_KEYWORDS,
    TRIVIA_CHARS,
    Span,
    Token,
    TokenKind,
)
from ottoparse.text import TextRange

_GRID_RE: Final[re.Pattern[str]] = re.compile(r"[A-Z]{2}")
_NUMBER_RE: Final[re.Pattern[str]] = re.compile(r"[0-9]+")


def decode_source(data: str | bytes) -> str:
    """Decode report bytes so that every byte sequence survives a round trip."""
    if isinstance(data, bytes):
        return data.decode("utf-8", errors="surrogateescape")
    return data


def encode_source(text: str) -> bytes:
    """Inverse of `decode_source`."""
    return text.encode("utf-8", errors="surrogateescape")


class Lexer:
    """Lossless lexer that attaches whitespace trivia to the tokens around it."""

    def __init__(
        self,
        source: str | bytes,
        *,
        movement_keywords: bool = False,
        composite_na: bool = False,
    ) -> None:
        self._source = decode_source(source)
        self._position = 0
        self._line = 1
        self._column = 1
        self._keywords = MOVEMENT_KEYWORDS if movement_keywords else KEYWORDS
        self._composite_na = composite_na

    @property
    def source(self) -> str:
        """Original source text."""
        return self._source

    @property
    def position(self) -> int:
        return self._position

    @property
    def is_eof(self) -> bool:
        return self._position >= len(self._source)

    def lex(self) -> list[Token]:
        tokens: list[Token] = []
        while not self.is_eof:
            start = self._position
            tokens.append(self._next_token())
            if self._position <= start:
                raise RuntimeError(f"Lexer did not advance at offset {start}")
        return tokens

    def _next_token(self) -> Token:
        leading = self._lex_trivia()
        if self.is_eof:
            # Trivia with nothing after it hangs off an empty EOF token.
            value = self._span(TokenKind.EOF, self._position, self._line, self._column)
            return Token(TokenKind.EOF, leading, value)

        start, line, column = self._position, self._line, self._column
        kind = self._lex_value()
        value = self._span(kind, start, line, column)
        if kind == TokenKind.EOL:
            self._line += 1
            self._column = 1
            return Token(kind, leading, value)
        return Token(kind, leading, value, self._lex_trivia())

    def _lex_trivia(self) -> tuple[Span, ...]:
        start, line, column = self._position, self._line, self._column
        while not self.is_eof and self._current_char() in TRIVIA_CHARS:
            self._advance(1)
        if self._position == start:
            return ()
        return (self._span(TokenKind.SPACES, start, line, column),)

    def _lex_value(self) -> TokenKind:
        ch = self._current_char()

        if ch == "\n":
            self._advance(1)
            return TokenKind.EOL

        if ch == "#" and self._peek_char() == "#":
            self._advance(2)
            return TokenKind.GRID

        if self._composite_na and self._at_composite_na():
            self._advance(3)
            return TokenKind.NA

        kind = DELIMITERS.get(ch)
        if kind is not None:
            self._advance(1)
            return kind

        return self._lex_text()

    def _lex_text(self) -> TokenKind:
        start = self._position
        while not self.is_eof and not self._is_boundary(self._current_char()):
            self._advance(1)
        text = self._source[start : self._position]

        keyword = self._keywords.get(text)
        if keyword is not None:
            return keyword
        if _GRID_RE.fullmatch(text):
            return TokenKind.GRID
        if _NUMBER_RE.fullmatch(text):
            return TokenKind.NUMBER
        return TokenKind.TEXT

    def _at_composite_na(self) -> bool:
        if self._current_char() != "N" or self._peek_char() != "/" or self._peek_char(2) != "A":
            return False
        if self._position + 3 >= len(self._source):
            return True
        return self._is_boundary(self._peek_char(3))

    def _is_boundary(self, ch: str) -> bool:
        return ch in TRIVIA_CHARS or ch == "\n" or ch in DELIMITERS

    def _span(self, kind: TokenKind, start: int, line: int, column: int) -> Span:
        return Span(
            kind=kind,
            line=line,
            column=column,
            text=self._source[start : self._position],
            range=TextRange(start, self._position),
        )

    def _current_char(self) -> str:
        if self.is_eof:
            return "\0"
        return self._source[self._position]

    def _peek_char(self, ahead: int = 1) -> str:
        index = self._position + ahead
        if index >= len(self._source):
            return "\0"
        return self._source[index]

    def _advance(self, steps: int) -> None:
        self._position += steps
        self._column += steps


def scan(
    source: str | bytes,
    *,
    movement_keywords: bool = False,
    composite_na: bool = False,
) -> list[Token]:
    """Tokenize a report. Pure; `to_source(scan(s)) == s` for every input."""
    lexer = Lexer(source, movement_keywords=movement_keywords, composite_na=composite_na)
    return lexer.lex()


def token_text(token: Token, null_char_on_eof: bool = False) -> str:
    """Get the text of a token without its trivia."""
    if token.kind == TokenKind.EOF:
        return "\0" if null_char_on_eof else ""
    return token.text


def dump_tokens(tokens: list[Token]) -> None:
    """Print token list with kind, position, trivia counts and text for debugging."""
    for i, tok in enumerate(tokens):
        print(
            f"{i:03d} {tok.kind.name:<12} {tok.line}:{tok.column} len={tok.length} "
            f"lead={len(tok.leading_trivia)} trail={len(tok.trailing_trivia)} text={tok.text!r}"
        )
