"""Lexer tokens."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from enum import IntEnum
from types import MappingProxyType
from typing import Final

from ottoparse.text import TextPosition, TextRange


class TokenKind(IntEnum):
    """Token kinds emitted by the report lexer."""

    # ---- Special / sentinels ----
    EOF = 0
    EOL = 1
    SPACES = 2  # trivia only

    # ---- Delimiters ----
    COMMA = 10
    DASH = 11
    EQUALS = 12
    HASH = 13
    LEFT_PAREN = 14
    RIGHT_PAREN = 15
    SLASH = 16
    BACKSLASH = 17
    COLON = 18
    DELIMITER = 19  # any other punctuation

    # ---- Lexical ----
    TEXT = 20
    NUMBER = 21
    GRID = 22
    NA = 23  # composite `N/A`, only with composite_na
    NOTE = 24  # synthesized by the parser

    # ---- Unit keywords ----
    TRIBE = 30
    COURIER = 31
    ELEMENT = 32
    FLEET = 33
    GARRISON = 34

    # ---- Keywords ----
    CURRENT = 40
    HEX = 41
    PREVIOUS = 42
    TURN = 43
    NEXT = 44
    SEASON = 45
    WEATHER = 46
    SCOUT = 47
    STATUS = 48

    # ---- Movement keywords (movement_keywords) ----
    GOES = 50
    TO = 51
    MOVEMENT = 52
    MOVE = 53

    @property
    def display_name(self) -> str:
        """CamelCase name used by the pretty-printer and error messages."""
        if self in (TokenKind.EOF, TokenKind.EOL, TokenKind.NA):
            return self.name
        return "".join(part.capitalize() for part in self.name.split("_"))


UNIT_KEYWORDS: Final[frozenset[TokenKind]] = frozenset(
    {
        TokenKind.TRIBE,
        TokenKind.COURIER,
        TokenKind.ELEMENT,
        TokenKind.FLEET,
        TokenKind.GARRISON,
    }
)

DELIMITERS: Final[Mapping[str, TokenKind]] = MappingProxyType(
    {
        ",": TokenKind.COMMA,
        "-": TokenKind.DASH,
        "=": TokenKind.EQUALS,
        "#": TokenKind.HASH,
        "(": TokenKind.LEFT_PAREN,
        ")": TokenKind.RIGHT_PAREN,
        "/": TokenKind.SLASH,
        "\\": TokenKind.BACKSLASH,
        ":": TokenKind.COLON,
        "$": TokenKind.DELIMITER,
        ".": TokenKind.DELIMITER,
        '"': TokenKind.DELIMITER,
        "'": TokenKind.DELIMITER,
        "*": TokenKind.DELIMITER,
        "+": TokenKind.DELIMITER,
    }
)

TRIVIA_CHARS: Final[frozenset[str]] = frozenset({" ", "\t", "\r"})

KEYWORDS: Final[Mapping[str, TokenKind]] = MappingProxyType(
    {
        "Tribe": TokenKind.TRIBE,
        "Courier": TokenKind.COURIER,
        "Element": TokenKind.ELEMENT,
        "Fleet": TokenKind.FLEET,
        "Garrison": TokenKind.GARRISON,
        "Current": TokenKind.CURRENT,
        "Hex": TokenKind.HEX,
        "Previous": TokenKind.PREVIOUS,
        "Turn": TokenKind.TURN,
        "Next": TokenKind.NEXT,
        "Scout": TokenKind.SCOUT,
        "Status": TokenKind.STATUS,
        "Spring": TokenKind.SEASON,
        "Summer": TokenKind.SEASON,
        "Fall": TokenKind.SEASON,
        "Winter": TokenKind.SEASON,
        "FINE": TokenKind.WEATHER,
    }
)

MOVEMENT_KEYWORDS: Final[Mapping[str, TokenKind]] = MappingProxyType(
    {
        **KEYWORDS,
        "Goes": TokenKind.GOES,
        "To": TokenKind.TO,
        "Movement": TokenKind.MOVEMENT,
        "Move": TokenKind.MOVE,
    }
)


@dataclass(frozen=True, slots=True)
class Span:
    """Contiguous slice of the source with its 1-based start position."""

    kind: TokenKind
    line: int
    column: int
    text: str
    range: TextRange

    @property
    def length(self) -> int:
        return len(self.text)

    @property
    def position(self) -> TextPosition:
        return TextPosition(self.line, self.column)


@dataclass(frozen=True, slots=True)
class Token:
    """Token value plus the whitespace trivia attached on either side."""

    kind: TokenKind
    leading_trivia: tuple[Span, ...]
    value: Span
    trailing_trivia: tuple[Span, ...] = ()

    @property
    def text(self) -> str:
        """Value text without trivia."""
        return self.value.text

    @property
    def length(self) -> int:
        return self.value.length

    @property
    def line(self) -> int:
        return self.value.line

    @property
    def column(self) -> int:
        return self.value.column

    @property
    def position(self) -> TextPosition:
        return self.value.position

    @property
    def range(self) -> TextRange:
        return self.value.range

    @property
    def full_range(self) -> TextRange:
        """Range covering the leading trivia, value and trailing trivia."""
        full = self.value.range
        for span in self.leading_trivia:
            full = full.cover(span.range)
        for span in self.trailing_trivia:
            full = full.cover(span.range)
        return full

    def source(self) -> str:
        """Text of the token including its trivia."""
        return (
            "".join(span.text for span in self.leading_trivia)
            + self.value.text
            + "".join(span.text for span in self.trailing_trivia)
        )


def merge_tokens(kind: TokenKind, tokens: Iterable[Token]) -> Token:
    """Fuse consecutive tokens into one token of `kind`.

    The first token keeps its leading trivia and the last its trailing trivia;
    everything in between (values and inner trivia) becomes the merged value.
    """
    merged = list(tokens)
    if not merged:
        raise ValueError("merge_tokens needs at least one token")
    first, last = merged[0], merged[-1]
    parts: list[str] = []
    for index, token in enumerate(merged):
        if index > 0:
            parts.extend(span.text for span in token.leading_trivia)
        parts.append(token.value.text)
        if index < len(merged) - 1:
            parts.extend(span.text for span in token.trailing_trivia)
    text = "".join(parts)
    value = Span(
        kind=kind,
        line=first.value.line,
        column=first.value.column,
        text=text,
        range=TextRange.at(first.value.range.start, len(text)),
    )
    return Token(kind, first.leading_trivia, value, last.trailing_trivia)


def to_source(tokens: Iterable[Token]) -> str:
    """Rebuild the original text from a token sequence."""
    return "".join(token.source() for token in tokens)
