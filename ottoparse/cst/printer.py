"""Deterministic indented dump of a turn report tree, used by golden tests."""

from __future__ import annotations

import json
from collections.abc import Sequence

from ottoparse.cst.nodes import (
    Coords,
    CstNode,
    ErrorCoords,
    LandMovement,
    LandMovementLine,
    LandStep,
    Line,
    NACoords,
    ReportDate,
    TurnLine,
    TurnNumber,
    TurnReport,
    UnitGoesToLine,
    UnitLine,
    UnitMovementLine,
    UnitSection,
    YearMonth,
)
from ottoparse.lexer import Token

_INDENT = "  "


def pretty_print(
    report: TurnReport,
    *,
    name: str | None = None,
    show_line_no: bool = False,
    show_col_no: bool = False,
    show_token_kind: bool = False,
) -> str:
    printer = _Printer(
        show_line_no=show_line_no,
        show_col_no=show_col_no,
        show_token_kind=show_token_kind,
    )
    if name:
        printer.emit(f"// source {_quote(name)}")
    printer.print_turn_report(report)
    return printer.finish()


class _Printer:
    def __init__(self, *, show_line_no: bool, show_col_no: bool, show_token_kind: bool) -> None:
        self._show_line_no = show_line_no
        self._show_col_no = show_col_no
        self._show_token_kind = show_token_kind
        self._indent = 0
        self._lines: list[str] = []

    def finish(self) -> str:
        return "\n".join(self._lines) + "\n"

    def emit(self, text: str) -> None:
        self._lines.append(_INDENT * self._indent + text)

    def open(self, header: str) -> None:
        self.emit(f"{header} {{")
        self._indent += 1

    def close(self) -> None:
        self._indent -= 1
        self.emit("}")

    # ---- nodes ----

    def print_turn_report(self, report: TurnReport) -> None:
        self.open("TurnReport")
        if report.prologue is not None:
            self.open("Prologue")
            self._print_lines("Line", report.prologue.lines)
            self._print_errors(report.prologue, report.prologue.lines)
            self.close()
        for index, section in enumerate(report.sections):
            self.print_unit_section(index, section)
        if report.epilogue is not None:
            self.open("Epilogue")
            self._print_lines("Line", report.epilogue.lines)
            self.close()
        children: list[CstNode | None] = [report.prologue, *report.sections, report.epilogue]
        self._print_errors(report, children)
        self.close()

    def print_unit_section(self, index: int, section: UnitSection) -> None:
        self.open(f"UnitSection[{index}]")
        self._print_line_no(section.line)
        if section.unit_line is not None:
            self.print_unit_line(section.unit_line)
        else:
            self.emit("UnitLine: <nil>")
        if section.turn_line is not None:
            self.print_turn_line(section.turn_line)
        else:
            self.emit("TurnLine: <nil>")
        if section.movement_line is not None:
            self.print_movement_line(section.movement_line)
        self._print_lines("ScoutLine", section.scout_lines)
        self._print_lines("StatusLine", section.status_lines)
        self._print_lines("Line", section.lines)
        children: list[CstNode | None] = [
            section.unit_line,
            section.turn_line,
            section.movement_line,
            *section.scout_lines,
            *section.status_lines,
            *section.lines,
        ]
        self._print_errors(section, children)
        self.close()

    def print_unit_line(self, node: UnitLine) -> None:
        self.open("UnitLine")
        self._print_token("Keyword", node.keyword)
        self._print_token("UnitID", node.unit_id)
        self._print_token("Note", node.note)
        self._print_coords("CurrentHex", node.current_hex)
        self._print_coords("PreviousHex", node.previous_hex)
        self._print_errors(node, [node.current_hex, node.previous_hex])
        self.close()

    def print_turn_line(self, node: TurnLine) -> None:
        self.open("TurnLine")
        self._print_year_month("TurnYearMonth", node.year_month1)
        self._print_turn_number("TurnNumber", node.turn_number1)
        self._print_token("Season", node.season)
        self._print_token("Weather", node.weather)
        if node.next is not None:
            self._print_year_month("NextTurnYearMonth", node.year_month2)
            self._print_turn_number("NextTurnNumber", node.turn_number2)
            if node.report_date is not None:
                self._print_report_date(node.report_date)
        self._print_errors(node, [])
        self.close()

    def print_movement_line(self, node: UnitMovementLine) -> None:
        match node:
            case UnitGoesToLine():
                self.open("UnitGoesToLine")
                self._print_line_no(node.line)
                self._print_token("Tribe", node.tribe)
                if node.coords is not None:
                    self._print_coords("Coords", node.coords)
                self._print_errors(node, [node.coords])
                self.close()
            case LandMovementLine():
                self.open("LandMovementLine")
                self._print_token("Tribe", node.tribe)
                if node.land_movement is not None:
                    self._print_land_movement(node.land_movement)
                self._print_errors(node, [node.land_movement])
                self.close()

    def _print_land_movement(self, node: LandMovement) -> None:
        self.open("LandMovement")
        self._print_token("Move", node.move)
        for index, step in enumerate(node.steps):
            self._print_land_step(index, step)
        self._print_errors(node, node.steps)
        self.close()

    def _print_land_step(self, index: int, node: LandStep) -> None:
        if node.is_empty:
            self.emit(f"Step[{index}]: <empty>")
            return
        self.open(f"Step[{index}]")
        self._print_token("Direction", node.direction)
        self._print_token("Terrain", node.terrain)
        self._print_token("Remainder", node.remainder)
        self._print_errors(node, [])
        self.close()

    # ---- leaves ----

    def _print_lines(self, label: str, lines: Sequence[CstNode]) -> None:
        for index, line in enumerate(lines):
            text = line.source().rstrip("\n").strip(" \t\r")
            self._print_label_value(line.line, line.column, f"{label}[{index}]", text, line.kind.display_name)
            if isinstance(line, Line):
                self._print_errors(line, [])

    def _print_token(self, label: str, token: Token | None) -> None:
        if token is None:
            return
        self._print_label_value(token.line, token.column, label, token.text, token.kind.display_name)

    def _print_year_month(self, label: str, node: YearMonth | None) -> None:
        if node is None or node.year is None:
            return
        value = node.text if node.text is not None else f"{node.year.text}-<nil>"
        kind = " ".join(token.kind.display_name for token in node.tokens)
        self._print_label_value(node.year.line, node.year.column, label, value, kind)

    def _print_turn_number(self, label: str, node: TurnNumber | None) -> None:
        if node is None or node.number is None:
            return
        number = node.number
        self._print_label_value(number.line, number.column, label, f"#{number.text}", number.kind.display_name)

    def _print_report_date(self, node: ReportDate) -> None:
        parts = (node.day, node.month, node.year)
        first = next((part for part in parts if part is not None), None)
        line, column = (first.line, first.column) if first is not None else (0, 0)
        kind = " ".join(part.kind.display_name if part is not None else "<nil>" for part in parts)
        self._print_label_value(line, column, "Report Date", node.text, kind)

    def _print_coords(self, label: str, node: Coords | None) -> None:
        if node is None:
            self.emit(f"{label}: <nil>")
            return
        match node:
            case ErrorCoords():
                self._print_label_value(node.line, node.column, label, f"<error: {node.message}>", "<ErrorCoords>")
            case NACoords():
                kind = " ".join(token.kind.display_name for token in node.tokens) or "<nil>"
                self._print_label_value(node.line, node.column, label, node.label, kind)
                self._print_errors(node, [])
            case _:
                grid = node.grid.text if node.grid is not None else "<nil>"
                number = node.number.text if node.number is not None else "<nil>"
                kind = " ".join(
                    token.kind.display_name if token is not None else "<nil>"
                    for token in (node.grid, node.number)
                )
                self._print_label_value(node.line, node.column, label, f"{grid} {number}", kind)
                self._print_errors(node, [])

    def _print_label_value(self, line: int, column: int, label: str, value: str, kind: str) -> None:
        text = f"{label}: {_quote(value)}"
        if self._show_line_no or self._show_col_no or self._show_token_kind:
            if self._show_col_no:
                where = f"{line}:{column}"
            elif self._show_line_no:
                where = f"{line}"
            else:
                where = ""
            if self._show_token_kind:
                where = f"{where}:{kind}" if where else kind
            text = f"{text}  ({where})"
        self.emit(text)

    def _print_line_no(self, line: int) -> None:
        if self._show_line_no:
            self.emit(f"Line: {line}")

    def _print_errors(self, node: CstNode, children: Sequence[CstNode | None]) -> None:
        # Parents carry their children's errors too; print each one once, at
        # the deepest node that is printed.
        inherited = {id(error) for child in children if child is not None for error in child.errors}
        for error in node.errors:
            if id(error) not in inherited:
                self.emit(f"error: {_quote(error.message)}")


def _quote(value: str) -> str:
    return json.dumps(value, ensure_ascii=False)
