"""Turn report grammar routines that build CST nodes.

Every routine starts at the parser's current token and returns a node, even
on bad input. A required token that is missing inside a line records a
diagnostic, skips through the end of that line and returns the partial node;
the skipped tokens (EOL included) belong to the node that gave up.
"""

import re
from typing import TypeVar

from ottoparse.cst import (
    Coords,
    CstNode,
    EpilogueSection,
    ErrorCoords,
    GridCoords,
    LandMovement,
    LandMovementLine,
    LandStep,
    Line,
    NACoords,
    ObscuredCoords,
    PrologueSection,
    ReportDate,
    ScoutLine,
    StatusLine,
    TurnLine,
    TurnNumber,
    TurnReport,
    UnitGoesToLine,
    UnitLine,
    UnitSection,
    YearMonth,
)
from ottoparse.diagnostics import (
    PARSER_MALFORMED_COORDS,
    PARSER_MALFORMED_NOTE,
    PARSER_MALFORMED_UNIT_ID,
    PARSER_UNEXPECTED_TOKEN,
    PARSER_UNKNOWN_PREFIX,
)
from ottoparse.hexes import DIRECTION_NAMES, NA_LABEL
from ottoparse.lexer import UNIT_KEYWORDS, Token, TokenKind, merge_tokens
from ottoparse.parser.parse_lists import ParseLineList
from ottoparse.parser.parser import Parser
from ottoparse.syntax import ReportSyntaxKind

N = TypeVar("N", bound=CstNode)

UNIT_ID_PATTERN = re.compile(r"\d{4}[cefg]\d")
UNIT_ID_TOKENS: frozenset[TokenKind] = frozenset({TokenKind.NUMBER, TokenKind.TEXT})
WORD_TOKENS: frozenset[TokenKind] = frozenset({TokenKind.TEXT, TokenKind.GRID})
BLANK_TOKENS: frozenset[TokenKind] = frozenset({TokenKind.EOL, TokenKind.EOF})
OBSCURED_GRID = "##"


# ---- report structure ----


def parse_turn_report(p: Parser) -> TurnReport:
    """turn_report = { prologue_line } , { unit_section } , { epilogue_line } , EOF"""
    report = TurnReport(position=p.start_position())

    if not p.at_trailing_blank_lines() and not p.at_unit_keyword():
        report.prologue = report.absorb(parse_prologue(p))

    sections = ParseLineList(
        is_at_list_end=Parser.at_trailing_blank_lines,
        parse_line=parse_unit_section,
    ).parse_list(p)
    for section in sections:
        report.sections.append(report.absorb(section))

    if p.position < len(p.tokens):
        report.epilogue = report.absorb(parse_epilogue(p))

    return report


def parse_prologue(p: Parser) -> PrologueSection:
    node = PrologueSection(position=p.start_position())
    node.lines = _split_lines(node.extend(p.sync_to_unit_keyword()))
    content = next((token for token in node.tokens if token.kind not in BLANK_TOKENS), None)
    if content is not None:
        node.error(p.diagnostic(PARSER_UNKNOWN_PREFIX, token=content))
    return node


def parse_epilogue(p: Parser) -> EpilogueSection:
    node = EpilogueSection(position=p.start_position())
    node.lines = _split_lines(node.extend(p.take_rest()))
    return node


def parse_unit_section(p: Parser) -> UnitSection:
    """unit_section = unit_line , [ turn_line ] , [ unit_movement_line ] , { line }"""
    section = UnitSection(position=p.start_position())
    section.unit_line = section.absorb(parse_unit_line(p))

    if p.pattern(TokenKind.CURRENT, TokenKind.TURN):
        section.turn_line = section.absorb(parse_turn_line(p))

    if p.pattern(TokenKind.TRIBE, TokenKind.GOES):
        section.movement_line = section.absorb(parse_unit_goes_to_line(p))
    elif p.pattern(TokenKind.TRIBE, TokenKind.MOVEMENT):
        section.movement_line = section.absorb(parse_land_movement_line(p))

    lines = ParseLineList(
        is_at_list_end=_at_section_end,
        parse_line=parse_section_line,
    ).parse_list(p)
    for line in lines:
        section.absorb(line)
        match line:
            case ScoutLine():
                section.scout_lines.append(line)
            case StatusLine():
                section.status_lines.append(line)
            case Line():
                section.lines.append(line)

    return section


def parse_section_line(p: Parser) -> ScoutLine | StatusLine | Line:
    if p.pattern(TokenKind.SCOUT, TokenKind.NUMBER, TokenKind.COLON):
        return parse_scout_line(p)
    if p.pattern(UNIT_ID_TOKENS, TokenKind.STATUS, TokenKind.COLON):
        return parse_status_line(p)
    return parse_line(p)


def parse_line(p: Parser) -> Line:
    return Line(position=p.start_position(), tokens=p.sync_to_next_line())


def parse_scout_line(p: Parser) -> ScoutLine:
    """scout_line = "Scout" , NUMBER , ":" , { any } , EOL"""
    node = ScoutLine(position=p.start_position())
    if not _expect_all(p, node, ("scout", TokenKind.SCOUT), ("number", TokenKind.NUMBER), ("colon", TokenKind.COLON)):
        return _recover_line(p, node)
    node.rest = _rest_of_line(p, node)
    return node


def parse_status_line(p: Parser) -> StatusLine:
    """status_line = unit_id , "Status" , ":" , { any } , EOL"""
    node = StatusLine(position=p.start_position())
    node.unit_id = _eat(p, node, *UNIT_ID_TOKENS)
    if not _expect_all(p, node, ("status", TokenKind.STATUS), ("colon", TokenKind.COLON)):
        return _recover_line(p, node)
    node.rest = _rest_of_line(p, node)
    return node


# ---- unit line ----


def parse_unit_line(p: Parser) -> UnitLine:
    """unit_line = unit_keyword , unit_id , "," , [ note ] , "," ,
    "Current" , "Hex" , "=" , coords , "," ,
    "(" , "Previous" , "Hex" , "=" , coords , ")" , EOL
    """
    node = UnitLine(position=p.start_position())

    node.keyword = _eat(p, node, *UNIT_KEYWORDS)
    if node.keyword is None:
        node.error(
            p.diagnostic(
                PARSER_UNEXPECTED_TOKEN,
                f"expected unit keyword, got {p.peek_kind().display_name}",
            )
        )
        return _recover_line(p, node)

    if not _parse_unit_id(p, node):
        return _recover_line(p, node)

    if not _expect_all(p, node, ("comma1", TokenKind.COMMA)):
        return _recover_line(p, node)

    note, found = p.advance_to(TokenKind.COMMA, TokenKind.EOL)
    if note:
        node.note = node.add(merge_tokens(TokenKind.NOTE, note))
    if not found or p.at(TokenKind.EOL):
        node.error(p.diagnostic(PARSER_MALFORMED_NOTE))
        return _recover_line(p, node)

    if not _expect_all(
        p,
        node,
        ("comma2", TokenKind.COMMA),
        ("current", TokenKind.CURRENT),
        ("hex1", TokenKind.HEX),
        ("equals1", TokenKind.EQUALS),
    ):
        return _recover_line(p, node)

    node.current_hex = node.absorb(parse_coords(p))

    if not _expect_all(
        p,
        node,
        ("comma3", TokenKind.COMMA),
        ("left_paren", TokenKind.LEFT_PAREN),
        ("previous", TokenKind.PREVIOUS),
        ("hex2", TokenKind.HEX),
        ("equals2", TokenKind.EQUALS),
    ):
        return _recover_line(p, node)

    node.previous_hex = node.absorb(parse_coords(p))

    if not _expect_all(p, node, ("right_paren", TokenKind.RIGHT_PAREN), ("eol", TokenKind.EOL)):
        return _recover_line(p, node)

    return node


def _parse_unit_id(p: Parser, node: UnitLine) -> bool:
    # `Tribe Movement:` without movement keywords still lands here, with the
    # word stored as the unit id so the section stays recognizable.
    token = p.peek()
    if token is not None and token.kind == TokenKind.NUMBER:
        node.unit_id = node.add(token)
        p.advance()
        return True
    if token is not None and token.kind == TokenKind.TEXT:
        node.unit_id = node.add(token)
        p.advance()
        if UNIT_ID_PATTERN.fullmatch(token.text):
            return True
        node.error(p.diagnostic(PARSER_MALFORMED_UNIT_ID, f"expected unit id, got {token.text!r}", token=token))
        return False
    node.error(p.diagnostic(PARSER_MALFORMED_UNIT_ID, f"expected unit id, got {p.peek_kind().display_name}"))
    return False


# ---- coordinates ----


def parse_coords(p: Parser) -> Coords:
    """coords = grid_coords | na_coords | obscured_coords"""
    token = p.peek()
    kind = p.peek_kind()

    if token is not None and kind == TokenKind.GRID:
        grid_node = ObscuredCoords if token.text == OBSCURED_GRID else GridCoords
        node = grid_node(position=token.position)
        node.grid = _eat(p, node, TokenKind.GRID)
        return _parse_grid_number(p, node)

    if token is not None and p.pattern(TokenKind.HASH, TokenKind.HASH) and not token.trailing_trivia:
        # Two adjacent hashes from a token stream that was not built by `scan`.
        node = ObscuredCoords(position=token.position)
        node.grid = node.add(merge_tokens(TokenKind.GRID, [p.advance(), p.advance()]))
        return _parse_grid_number(p, node)

    if token is not None and kind == TokenKind.NA:
        na = NACoords(position=token.position)
        na.na = _eat(p, na, TokenKind.NA)
        return na

    if token is not None and kind == TokenKind.TEXT and token.text == "N":
        return _parse_split_na(p)

    message = f"expected coordinates, got {kind.display_name}"
    error = ErrorCoords(position=p.start_position(), message=message)
    error.error(p.diagnostic(PARSER_MALFORMED_COORDS, message))
    return error


def _parse_grid_number(p: Parser, node: GridCoords) -> GridCoords:
    node.number = p.expect(TokenKind.NUMBER, node)
    if node.number is not None and p.options.validate_coords:
        _validate_grid_coords(p, node)
    return node


def _parse_split_na(p: Parser) -> NACoords:
    """na_coords = "N" , "/" , "A" """
    node = NACoords(position=p.start_position())
    node.n = _eat(p, node, TokenKind.TEXT)
    node.slash = p.expect(TokenKind.SLASH, node)
    if node.slash is None:
        return node

    token = p.peek()
    if token is not None and token.kind == TokenKind.TEXT and token.text == "A":
        node.a = _eat(p, node, TokenKind.TEXT)
    else:
        node.error(
            p.diagnostic(
                PARSER_MALFORMED_COORDS,
                f'expected "A" to complete {NA_LABEL}, got {p.peek_kind().display_name}',
            )
        )
    return node


def _validate_grid_coords(p: Parser, node: GridCoords) -> None:
    _, error = node.to_coord()
    if error is None:
        return
    first = node.tokens[0] if node.tokens else None
    node.error(p.diagnostic(PARSER_MALFORMED_COORDS, f"{node.label!r}: {error}", token=first))


# ---- turn line ----


def parse_turn_line(p: Parser) -> TurnLine:
    """turn_line = "Current" , "Turn" , year_month , turn_number , "," , season , "," , weather ,
    [ "Next" , "Turn" , year_month , turn_number , "," , report_date ] , EOL
    """
    node = TurnLine(position=p.start_position())

    if not _expect_all(p, node, ("current", TokenKind.CURRENT), ("turn1", TokenKind.TURN)):
        return _recover_line(p, node)

    node.year_month1 = node.absorb(parse_year_month(p))
    if node.year_month1.has_errors:
        return _recover_line(p, node)

    node.turn_number1 = node.absorb(parse_turn_number(p))

    if not _expect_all(
        p,
        node,
        ("comma1", TokenKind.COMMA),
        ("season", TokenKind.SEASON),
        ("comma2", TokenKind.COMMA),
        ("weather", TokenKind.WEATHER),
    ):
        return _recover_line(p, node)

    node.next = _eat(p, node, TokenKind.NEXT)
    if node.next is not None:
        if not _expect_all(p, node, ("turn2", TokenKind.TURN)):
            return _recover_line(p, node)

        node.year_month2 = node.absorb(parse_year_month(p))
        if node.year_month2.has_errors:
            return _recover_line(p, node)

        node.turn_number2 = node.absorb(parse_turn_number(p))

        if not _expect_all(p, node, ("comma3", TokenKind.COMMA)):
            return _recover_line(p, node)

        node.report_date = node.absorb(parse_report_date(p))

    if not _expect_all(p, node, ("eol", TokenKind.EOL)):
        return _recover_line(p, node)

    return node


def parse_year_month(p: Parser) -> YearMonth:
    """year_month = NUMBER , "-" , NUMBER"""
    node = YearMonth(position=p.start_position())
    _expect_all(
        p,
        node,
        ("year", TokenKind.NUMBER),
        ("dash", TokenKind.DASH),
        ("month", TokenKind.NUMBER),
    )
    return node


def parse_turn_number(p: Parser) -> TurnNumber:
    """turn_number = "(" , "#" , NUMBER , ")" """
    node = TurnNumber(position=p.start_position())
    _expect_all(
        p,
        node,
        ("left_paren", TokenKind.LEFT_PAREN),
        ("hash", TokenKind.HASH),
        ("number", TokenKind.NUMBER),
        ("right_paren", TokenKind.RIGHT_PAREN),
    )
    return node


def parse_report_date(p: Parser) -> ReportDate:
    """report_date = NUMBER , "/" , NUMBER , "/" , NUMBER"""
    node = ReportDate(position=p.start_position())
    _expect_all(
        p,
        node,
        ("day", TokenKind.NUMBER),
        ("slash1", TokenKind.SLASH),
        ("month", TokenKind.NUMBER),
        ("slash2", TokenKind.SLASH),
        ("year", TokenKind.NUMBER),
    )
    return node


# ---- movement ----


def parse_unit_goes_to_line(p: Parser) -> UnitGoesToLine:
    """unit_goes_to = "Tribe" , "Goes" , "To" , grid_coords , EOL"""
    node = UnitGoesToLine(position=p.start_position())

    if not _expect_all(p, node, ("tribe", TokenKind.TRIBE), ("goes", TokenKind.GOES), ("to", TokenKind.TO)):
        return _recover_line(p, node)

    coords = node.absorb(parse_coords(p))
    if isinstance(coords, GridCoords) and coords.kind == ReportSyntaxKind.GRID_COORDS:
        node.coords = coords
    elif not isinstance(coords, ErrorCoords):
        node.error(
            p.diagnostic(
                PARSER_MALFORMED_COORDS,
                f"expected grid coordinates, got {coords.kind.display_name}",
                token=coords.tokens[0] if coords.tokens else None,
            )
        )

    if not _expect_all(p, node, ("eol", TokenKind.EOL)):
        return _recover_line(p, node)

    return node


def parse_land_movement_line(p: Parser) -> LandMovementLine:
    """land_movement_line = "Tribe" , "Movement" , ":" , land_movement , EOL"""
    node = LandMovementLine(position=p.start_position())

    if not _expect_all(
        p,
        node,
        ("tribe", TokenKind.TRIBE),
        ("movement", TokenKind.MOVEMENT),
        ("colon", TokenKind.COLON),
    ):
        return _recover_line(p, node)

    node.land_movement = node.absorb(parse_land_movement(p))

    if not _expect_all(p, node, ("eol", TokenKind.EOL)):
        return _recover_line(p, node)

    return node


def parse_land_movement(p: Parser) -> LandMovement:
    """land_movement = "Move" , land_step , { "\\" , land_step }"""
    node = LandMovement(position=p.start_position())

    node.move = p.expect(TokenKind.MOVE, node)
    if node.move is None:
        return node

    node.steps.append(node.absorb(parse_land_step(p)))
    while (separator := _eat(p, node, TokenKind.BACKSLASH)) is not None:
        node.separators.append(separator)
        node.steps.append(node.absorb(parse_land_step(p)))

    return node


def parse_land_step(p: Parser) -> LandStep:
    """land_step = [ direction , "-" , terrain , "," ] , [ remainder ]

    An empty step (at `\\` or EOL) is legal. Free text after the step, such
    as `L NE, N` or `Can't Move on Ocean`, is kept as one NOTE token.
    """
    node = LandStep(position=p.start_position())
    if p.at_end() or p.at(TokenKind.EOL) or p.at(TokenKind.BACKSLASH):
        return node

    token = p.peek()
    if token is not None and p.pattern(WORD_TOKENS, TokenKind.DASH) and token.text in DIRECTION_NAMES:
        node.direction = _eat(p, node, *WORD_TOKENS)
        node.dash = _eat(p, node, TokenKind.DASH)
        node.terrain = _eat(p, node, *WORD_TOKENS)
        if node.terrain is None:
            node.error(p.diagnostic(PARSER_UNEXPECTED_TOKEN, f"expected terrain, got {p.peek_kind().display_name}"))
            return node
        if not _expect_all(p, node, ("comma", TokenKind.COMMA)):
            return node
    else:
        node.comma = _eat(p, node, TokenKind.COMMA)

    remainder, _ = p.advance_to(TokenKind.BACKSLASH, TokenKind.EOL)
    if remainder:
        node.remainder = node.add(merge_tokens(TokenKind.NOTE, remainder))
    return node


# ---- helpers ----


def _eat(p: Parser, node: CstNode, *kinds: TokenKind) -> Token | None:
    token = p.match(*kinds)
    return node.add(token) if token is not None else None


def _expect_all(p: Parser, node: CstNode, *slots: tuple[str, TokenKind]) -> bool:
    """Expect each kind in turn, storing tokens in the named slots.

    Stops at the first missing token, which `expect` has already reported.
    """
    for slot, kind in slots:
        token = p.expect(kind, node)
        if token is None:
            return False
        setattr(node, slot, token)
    return True


def _recover_line(p: Parser, node: N) -> N:
    node.extend(p.sync_to_next_line())
    return node


def _rest_of_line(p: Parser, node: CstNode) -> list[Token]:
    rest, _ = p.advance_to(TokenKind.EOL)
    node.extend(rest)
    _eat(p, node, TokenKind.EOL)
    return rest


def _at_section_end(p: Parser) -> bool:
    return (p.at_line_start() and p.at_unit_keyword()) or p.at_trailing_blank_lines()


def _split_lines(tokens: list[Token]) -> list[Line]:
    lines: list[Line] = []
    current: list[Token] = []
    for token in tokens:
        current.append(token)
        if token.kind == TokenKind.EOL:
            lines.append(Line(position=current[0].position, tokens=current))
            current = []
    if current:
        lines.append(Line(position=current[0].position, tokens=current))
    return lines
