"""Lexer."""

from ottoparse.lexer.lexer import (
    Lexer,
    decode_source,
    dump_tokens,
    encode_source,
    scan,
    token_text,
)
from ottoparse.lexer.tokens import (
    DELIMITERS,
    KEYWORDS,
    MOVEMENT_KEYWORDS,
    UNIT_KEYWORDS,
    Span,
    Token,
    TokenKind,
    merge_tokens,
    to_source,
)

__all__ = [
    "DELIMITERS",
    "KEYWORDS",
    "MOVEMENT_KEYWORDS",
    "UNIT_KEYWORDS",
    "Lexer",
    "Span",
    "Token",
    "TokenKind",
    "decode_source",
    "dump_tokens",
    "encode_source",
    "merge_tokens",
    "scan",
    "to_source",
    "token_text",
]
