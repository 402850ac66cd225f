from pathlib import Path

import pytest

from ottoparse.lexer import (
    Lexer,
    TokenKind,
    dump_tokens,
    encode_source,
    merge_tokens,
    scan,
    to_source,
    token_text,
)
from ottoparse.text import slice_text_range
from tests._debug import debug_dump_tokens

TESTDATA = Path(__file__).parent / "testdata"
REPORT = TESTDATA / "0900-01.0987.scrubbed.txt"

K = TokenKind

# (line, column, kind, trailing trivia count, text) for the first two lines
# of the sample report.
REPORT_HEAD: list[tuple[int, int, TokenKind, int, str]] = [
    (1, 1, K.TRIBE, 1, "Tribe"),
    (1, 7, K.NUMBER, 0, "0987"),
    (1, 11, K.COMMA, 1, ","),
    (1, 13, K.COMMA, 1, ","),
    (1, 15, K.CURRENT, 1, "Current"),
    (1, 23, K.HEX, 1, "Hex"),
    (1, 27, K.EQUALS, 1, "="),
    (1, 29, K.GRID, 1, "QQ"),
    (1, 32, K.NUMBER, 0, "1509"),
    (1, 36, K.COMMA, 1, ","),
    (1, 38, K.LEFT_PAREN, 0, "("),
    (1, 39, K.PREVIOUS, 1, "Previous"),
    (1, 48, K.HEX, 1, "Hex"),
    (1, 52, K.EQUALS, 1, "="),
    (1, 54, K.GRID, 1, "QQ"),
    (1, 57, K.NUMBER, 0, "1410"),
    (1, 61, K.RIGHT_PAREN, 0, ")"),
    (1, 62, K.EOL, 0, "\n"),
    (2, 1, K.CURRENT, 1, "Current"),
    (2, 9, K.TURN, 1, "Turn"),
    (2, 14, K.NUMBER, 0, "900"),
    (2, 17, K.DASH, 0, "-"),
    (2, 18, K.NUMBER, 1, "01"),
    (2, 21, K.LEFT_PAREN, 0, "("),
    (2, 22, K.HASH, 0, "#"),
    (2, 23, K.NUMBER, 0, "1"),
    (2, 24, K.RIGHT_PAREN, 0, ")"),
    (2, 25, K.COMMA, 1, ","),
    (2, 27, K.SEASON, 0, "Spring"),
    (2, 33, K.COMMA, 1, ","),
    (2, 35, K.WEATHER, 1, "FINE"),
    (2, 40, K.NEXT, 1, "Next"),
    (2, 45, K.TURN, 1, "Turn"),
    (2, 50, K.NUMBER, 0, "900"),
    (2, 53, K.DASH, 0, "-"),
    (2, 54, K.NUMBER, 1, "02"),
    (2, 57, K.LEFT_PAREN, 0, "("),
    (2, 58, K.HASH, 0, "#"),
    (2, 59, K.NUMBER, 0, "2"),
    (2, 60, K.RIGHT_PAREN, 0, ")"),
    (2, 61, K.COMMA, 1, ","),
    (2, 63, K.NUMBER, 0, "12"),
    (2, 65, K.SLASH, 0, "/"),
    (2, 66, K.NUMBER, 0, "12"),
    (2, 68, K.SLASH, 0, "/"),
    (2, 69, K.NUMBER, 0, "2025"),
    (2, 73, K.EOL, 0, "\n"),
]


def _kinds(text: str, **flags: bool) -> list[TokenKind]:
    return [token.kind for token in scan(text, **flags)]


def test_report_file_head_matches_golden_tokens() -> None:
    source = REPORT.read_bytes()
    tokens = scan(source)
    debug_dump_tokens("report_file_head", source.decode(), tokens)

    assert len(tokens) >= len(REPORT_HEAD)
    for index, (line, column, kind, trailing, text) in enumerate(REPORT_HEAD):
        token = tokens[index]
        assert (token.line, token.column) == (line, column), index
        assert token.kind == kind, index
        assert token.text == text, index
        assert token.length == len(text), index
        assert len(token.leading_trivia) == 0, index
        assert len(token.trailing_trivia) == trailing, index


def test_report_file_round_trips_and_lines_never_go_backwards() -> None:
    source = REPORT.read_bytes()
    tokens = scan(source)

    assert encode_source(to_source(tokens)) == source
    previous_line = 0
    for token in tokens:
        assert token.line >= previous_line
        previous_line = token.line
    assert tokens[-1].kind == TokenKind.EOL
    assert tokens[-1].line == 18


def test_movement_line_without_movement_keywords_lexes_as_text() -> None:
    tokens = scan("Tribe Movement: Move N-PR, \\NE-GH, , L NE, N\\\n")

    assert [(token.kind, token.text) for token in tokens[:8]] == [
        (K.TRIBE, "Tribe"),
        (K.TEXT, "Movement"),
        (K.COLON, ":"),
        (K.TEXT, "Move"),
        (K.TEXT, "N"),
        (K.DASH, "-"),
        (K.GRID, "PR"),
        (K.COMMA, ","),
    ]
    assert tokens[8].kind == K.BACKSLASH
    assert tokens[8].column == 28
    assert tokens[-2].kind == K.BACKSLASH
    assert tokens[-1].kind == K.EOL
    assert tokens[-1].column == 46


def test_movement_keywords_flag_adds_movement_kinds() -> None:
    kinds = _kinds("Tribe Goes To QQ 1510\nTribe Movement: Move \\\n", movement_keywords=True)

    assert kinds == [
        K.TRIBE,
        K.GOES,
        K.TO,
        K.GRID,
        K.NUMBER,
        K.EOL,
        K.TRIBE,
        K.MOVEMENT,
        K.COLON,
        K.MOVE,
        K.BACKSLASH,
        K.EOL,
    ]


def test_empty_input_yields_no_tokens() -> None:
    assert scan("") == []
    assert scan(b"") == []


def test_whitespace_only_input_hangs_off_eof_token() -> None:
    tokens = scan("  \t")

    assert len(tokens) == 1
    eof = tokens[0]
    assert eof.kind == TokenKind.EOF
    assert eof.text == ""
    assert [span.text for span in eof.leading_trivia] == ["  \t"]
    assert to_source(tokens) == "  \t"


def test_trailing_trivia_after_final_newline_goes_to_eof() -> None:
    tokens = scan("Tribe\n   ")

    assert [token.kind for token in tokens] == [K.TRIBE, K.EOL, K.EOF]
    assert tokens[-1].leading_trivia[0].text == "   "
    assert tokens[-1].leading_trivia[0].column == 1
    assert tokens[-1].line == 2
    assert tokens[-1].column == 4


def test_trivia_boundary_only_first_token_on_a_line_has_leading_trivia() -> None:
    src = "  Tribe 0987 ,\t,\n\r\n    Scout 1:Scout  N\n"
    tokens = scan(src)
    debug_dump_tokens("trivia_boundary", src, tokens)

    line_start = True
    for token in tokens:
        if not line_start:
            assert token.leading_trivia == (), token
        if token.kind == TokenKind.EOL:
            assert token.trailing_trivia == ()
        for span in (*token.leading_trivia, *token.trailing_trivia):
            assert "\n" not in span.text
            assert set(span.text) <= {" ", "\t", "\r"}
        line_start = token.kind == TokenKind.EOL
    assert to_source(tokens) == src


def test_carriage_return_is_trivia_before_eol() -> None:
    tokens = scan("Tribe 0987\r\n")

    assert [token.kind for token in tokens] == [K.TRIBE, K.NUMBER, K.EOL]
    assert tokens[1].trailing_trivia[0].text == "\r"
    assert tokens[2].column == 12


def test_double_hash_is_one_grid_token() -> None:
    tokens = scan("## 1214 # ###")

    assert [(token.kind, token.text) for token in tokens] == [
        (K.GRID, "##"),
        (K.NUMBER, "1214"),
        (K.HASH, "#"),
        (K.GRID, "##"),
        (K.HASH, "#"),
    ]


@pytest.mark.parametrize(
    ("text", "kind"),
    [
        ("QQ", K.GRID),
        ("Qq", K.TEXT),
        ("QQQ", K.TEXT),
        ("0987", K.NUMBER),
        ("0987e1", K.TEXT),
        ("Spring", K.SEASON),
        ("Winter", K.SEASON),
        ("FINE", K.WEATHER),
        ("fine", K.TEXT),
        ("Goes", K.TEXT),
        ("Status", K.STATUS),
        ("Garrison", K.GARRISON),
    ],
)
def test_word_classification(text: str, kind: TokenKind) -> None:
    tokens = scan(text)

    assert len(tokens) == 1
    assert tokens[0].kind == kind


def test_other_punctuation_is_a_generic_delimiter() -> None:
    tokens = scan("$.\"'*+")

    assert [token.kind for token in tokens] == [K.DELIMITER] * 6
    assert "".join(token.text for token in tokens) == "$.\"'*+"


def test_na_is_split_unless_composite_flag_is_set() -> None:
    assert _kinds("N/A)") == [K.TEXT, K.SLASH, K.TEXT, K.RIGHT_PAREN]
    assert _kinds("N/A)", composite_na=True) == [K.NA, K.RIGHT_PAREN]
    assert _kinds("N/AB", composite_na=True) == [K.TEXT, K.SLASH, K.GRID]


def test_composite_na_at_end_of_input_and_before_nul() -> None:
    assert _kinds("N/A", composite_na=True) == [K.NA]
    assert _kinds("N/A\0", composite_na=True) == [K.TEXT, K.SLASH, K.TEXT]


def test_bytes_round_trip_including_invalid_utf8() -> None:
    source = b"Tribe \xff\xfe 0987\n\xe2\x82\xac\n"
    tokens = scan(source)

    assert encode_source(to_source(tokens)) == source
    assert tokens[1].kind == TokenKind.TEXT


def test_token_ranges_slice_back_to_text() -> None:
    source = REPORT.read_text()
    tokens = scan(source)

    for token in tokens:
        assert slice_text_range(source, token.range) == token.text
        assert slice_text_range(source, token.full_range) == token.source()


def test_columns_count_characters_not_bytes() -> None:
    tokens = scan("Zoë Tribe")

    assert tokens[0].text == "Zoë"
    assert tokens[1].column == 5


def test_merge_tokens_keeps_inner_trivia_and_source() -> None:
    tokens = scan("Tribe 0987, my  note ,")
    note = merge_tokens(TokenKind.NOTE, tokens[3:5])

    assert note.kind == TokenKind.NOTE
    assert note.text == "my  note"
    assert note.column == 13
    assert note.source() == "my  note "
    assert to_source([*tokens[:3], note, *tokens[5:]]) == "Tribe 0987, my  note ,"


def test_merge_tokens_requires_tokens() -> None:
    with pytest.raises(ValueError):
        merge_tokens(TokenKind.NOTE, [])


def test_lexer_class_and_token_text_helpers() -> None:
    lexer = Lexer("Tribe ")
    tokens = lexer.lex()

    assert lexer.is_eof
    assert token_text(tokens[0]) == "Tribe"
    assert token_text(scan(" ")[0], null_char_on_eof=True) == "\0"


def test_dump_tokens_prints_one_line_per_token(capsys: pytest.CaptureFixture[str]) -> None:
    dump_tokens(scan("Tribe 0987\n"))

    lines = capsys.readouterr().out.splitlines()
    assert len(lines) == 3
    assert lines[0].startswith("000 TRIBE")
    assert "text='0987'" in lines[1]
