"""Concrete syntax tree nodes and printer."""

from ottoparse.cst.nodes import (
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
    UnitMovementLine,
    UnitSection,
    YearMonth,
)
from ottoparse.cst.printer import pretty_print

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
    "pretty_print",
]
