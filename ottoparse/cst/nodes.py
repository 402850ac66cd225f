"""Concrete syntax tree for turn reports.

Every node keeps the flat list of tokens it consumed, so `node.source()`
rebuilds the exact input it covers, and the diagnostics recorded while it was
built. Typed slots point at the interesting tokens; a slot is None when the
token was missing.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import ClassVar, TypeAlias, TypeVar

from ottoparse.diagnostics import Diagnostic
from ottoparse.hexes import NA_LABEL, CoordError, Direction, WorldMapCoord, parse_label
from ottoparse.lexer import Token, to_source
from ottoparse.syntax import ReportSyntaxKind
from ottoparse.text import TextPosition

N = TypeVar("N", bound="CstNode")


@dataclass(slots=True)
class CstNode:
    KIND: ClassVar[ReportSyntaxKind]

    position: TextPosition | None = None
    tokens: list[Token] = field(default_factory=list)
    errors: list[Diagnostic] = field(default_factory=list)

    @property
    def kind(self) -> ReportSyntaxKind:
        return self.KIND

    @property
    def line(self) -> int:
        return self.position.line if self.position is not None else 0

    @property
    def column(self) -> int:
        return self.position.column if self.position is not None else 0

    @property
    def has_errors(self) -> bool:
        return bool(self.errors)

    def source(self) -> str:
        return to_source(self.tokens)

    def add(self, token: Token) -> Token:
        self.tokens.append(token)
        return token

    def extend(self, tokens: list[Token]) -> list[Token]:
        self.tokens.extend(tokens)
        return tokens

    def absorb(self, child: N) -> N:
        """Take over a child's tokens and errors, keeping token order."""
        self.tokens.extend(child.tokens)
        self.errors.extend(child.errors)
        return child

    def error(self, diagnostic: Diagnostic) -> None:
        self.errors.append(diagnostic)


# ---- Lines and sections ----


@dataclass(slots=True)
class Line(CstNode):
    """Tokens of one input line that no rule claimed, EOL included."""

    KIND = ReportSyntaxKind.LINE


@dataclass(slots=True)
class PrologueSection(CstNode):
    KIND = ReportSyntaxKind.PROLOGUE_SECTION

    lines: list[Line] = field(default_factory=list)


@dataclass(slots=True)
class EpilogueSection(CstNode):
    KIND = ReportSyntaxKind.EPILOGUE_SECTION

    lines: list[Line] = field(default_factory=list)


@dataclass(slots=True)
class ScoutLine(CstNode):
    """`Scout 1:Scout N-PR, ...`"""

    KIND = ReportSyntaxKind.SCOUT_LINE

    scout: Token | None = None
    number: Token | None = None
    colon: Token | None = None
    rest: list[Token] = field(default_factory=list)


@dataclass(slots=True)
class StatusLine(CstNode):
    """`0987e1 Status: PRAIRIE, ...`"""

    KIND = ReportSyntaxKind.STATUS_LINE

    unit_id: Token | None = None
    status: Token | None = None
    colon: Token | None = None
    rest: list[Token] = field(default_factory=list)


# ---- Coordinates ----


@dataclass(slots=True)
class GridCoords(CstNode):
    KIND = ReportSyntaxKind.GRID_COORDS

    grid: Token | None = None
    number: Token | None = None

    @property
    def label(self) -> str | None:
        if self.grid is None or self.number is None:
            return None
        return f"{self.grid.text} {self.number.text}"

    def to_coord(self) -> tuple[WorldMapCoord | None, CoordError | None]:
        label = self.label
        if label is None:
            return None, CoordError.BAD_SHAPE
        return parse_label(label)


@dataclass(slots=True)
class ObscuredCoords(GridCoords):
    """`## 1315`; `grid` is a single `##` token even when lexed as two hashes."""

    KIND = ReportSyntaxKind.OBSCURED_COORDS


@dataclass(slots=True)
class NACoords(CstNode):
    """`N/A`, either one composite token or `N`, `/`, `A`."""

    KIND = ReportSyntaxKind.NA_COORDS

    na: Token | None = None
    n: Token | None = None
    slash: Token | None = None
    a: Token | None = None

    @property
    def label(self) -> str:
        return NA_LABEL

    def to_coord(self) -> tuple[WorldMapCoord | None, CoordError | None]:
        return parse_label(NA_LABEL)


@dataclass(slots=True)
class ErrorCoords(CstNode):
    KIND = ReportSyntaxKind.ERROR_COORDS

    message: str = ""

    @property
    def label(self) -> None:
        return None


Coords: TypeAlias = GridCoords | ObscuredCoords | NACoords | ErrorCoords


# ---- Unit line ----


@dataclass(slots=True)
class UnitLine(CstNode):
    """`Tribe 0987, note, Current Hex = QQ 1509, (Previous Hex = QQ 1410)`"""

    KIND = ReportSyntaxKind.UNIT_LINE

    keyword: Token | None = None
    unit_id: Token | None = None
    comma1: Token | None = None
    note: Token | None = None
    comma2: Token | None = None
    current: Token | None = None
    hex1: Token | None = None
    equals1: Token | None = None
    current_hex: Coords | None = None
    comma3: Token | None = None
    left_paren: Token | None = None
    previous: Token | None = None
    hex2: Token | None = None
    equals2: Token | None = None
    previous_hex: Coords | None = None
    right_paren: Token | None = None
    eol: Token | None = None


# ---- Turn line ----


@dataclass(slots=True)
class YearMonth(CstNode):
    KIND = ReportSyntaxKind.YEAR_MONTH

    year: Token | None = None
    dash: Token | None = None
    month: Token | None = None

    @property
    def text(self) -> str | None:
        if self.year is None or self.month is None:
            return None
        return f"{self.year.text}-{self.month.text}"


@dataclass(slots=True)
class TurnNumber(CstNode):
    KIND = ReportSyntaxKind.TURN_NUMBER

    left_paren: Token | None = None
    hash: Token | None = None
    number: Token | None = None
    right_paren: Token | None = None

    @property
    def value(self) -> int | None:
        return int(self.number.text) if self.number is not None else None


@dataclass(slots=True)
class ReportDate(CstNode):
    KIND = ReportSyntaxKind.REPORT_DATE

    day: Token | None = None
    slash1: Token | None = None
    month: Token | None = None
    slash2: Token | None = None
    year: Token | None = None

    @property
    def text(self) -> str:
        parts = (self.day, self.month, self.year)
        return "/".join(part.text if part is not None else "<nil>" for part in parts)


@dataclass(slots=True)
class TurnLine(CstNode):
    """`Current Turn 900-01 (#1), Spring, FINE Next Turn 900-02 (#2), 12/12/2025`"""

    KIND = ReportSyntaxKind.TURN_LINE

    current: Token | None = None
    turn1: Token | None = None
    year_month1: YearMonth | None = None
    turn_number1: TurnNumber | None = None
    comma1: Token | None = None
    season: Token | None = None
    comma2: Token | None = None
    weather: Token | None = None
    next: Token | None = None
    turn2: Token | None = None
    year_month2: YearMonth | None = None
    turn_number2: TurnNumber | None = None
    comma3: Token | None = None
    report_date: ReportDate | None = None
    eol: Token | None = None


# ---- Movement ----


@dataclass(slots=True)
class LandStep(CstNode):
    """`NE-GH,` optionally followed by free text; empty means no movement."""

    KIND = ReportSyntaxKind.LAND_STEP

    direction: Token | None = None
    dash: Token | None = None
    terrain: Token | None = None
    comma: Token | None = None
    remainder: Token | None = None

    @property
    def is_empty(self) -> bool:
        return not self.tokens

    @property
    def heading(self) -> Direction | None:
        return Direction(self.direction.text) if self.direction is not None else None


@dataclass(slots=True)
class LandMovement(CstNode):
    KIND = ReportSyntaxKind.LAND_MOVEMENT

    move: Token | None = None
    steps: list[LandStep] = field(default_factory=list)
    separators: list[Token] = field(default_factory=list)


@dataclass(slots=True)
class LandMovementLine(CstNode):
    """`Tribe Movement: Move N-PR, \\NE-GH,`"""

    KIND = ReportSyntaxKind.LAND_MOVEMENT_LINE

    tribe: Token | None = None
    movement: Token | None = None
    colon: Token | None = None
    land_movement: LandMovement | None = None
    eol: Token | None = None


@dataclass(slots=True)
class UnitGoesToLine(CstNode):
    """`Tribe Goes To QQ 1510`"""

    KIND = ReportSyntaxKind.UNIT_GOES_TO_LINE

    tribe: Token | None = None
    goes: Token | None = None
    to: Token | None = None
    coords: GridCoords | None = None
    eol: Token | None = None


UnitMovementLine: TypeAlias = UnitGoesToLine | LandMovementLine


# ---- Sections ----


@dataclass(slots=True)
class UnitSection(CstNode):
    KIND = ReportSyntaxKind.UNIT_SECTION

    unit_line: UnitLine | None = None
    turn_line: TurnLine | None = None
    movement_line: UnitMovementLine | None = None
    scout_lines: list[ScoutLine] = field(default_factory=list)
    status_lines: list[StatusLine] = field(default_factory=list)
    lines: list[Line] = field(default_factory=list)


@dataclass(slots=True)
class TurnReport(CstNode):
    KIND = ReportSyntaxKind.TURN_REPORT

    prologue: PrologueSection | None = None
    sections: list[UnitSection] = field(default_factory=list)
    epilogue: EpilogueSection | None = None


__all__ = [
    "Coords",
    "CstNode",
    "EpilogueSection",
    "ErrorCoords",
    "GridCoords",
    "LandMovement",
    "LandMovementLine",
    "LandStep",
    "Line",
    "NACoords",
    "ObscuredCoords",
    "PrologueSection",
    "ReportDate",
    "ScoutLine",
    "StatusLine",
    "TurnLine",
    "TurnNumber",
    "TurnReport",
    "UnitGoesToLine",
    "UnitLine",
    "UnitMovementLine",
    "UnitSection",
    "YearMonth",
]
