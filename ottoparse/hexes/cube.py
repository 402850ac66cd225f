"""Cube and odd-q offset hex coordinates.

The world map uses flat-top hexes in an "odd-q" layout: vertical columns with
odd (0-based) columns shoved down half a hex. See
https://www.redblobgames.com/grids/hexagons/ for the conversions.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Final

COLUMNS_PER_GRID: Final[int] = 30
ROWS_PER_GRID: Final[int] = 21
GRID_LETTERS: Final[int] = 26

_ODD: Final[int] = -1


@dataclass(frozen=True, slots=True)
class CubeCoord:
    """Hex in cube coordinates; `q + r + s == 0` always holds."""

    q: int
    r: int
    s: int

    def __post_init__(self):
        if self.q + self.r + self.s != 0:
            raise ValueError(f"CubeCoord invariant violated: {self.q} + {self.r} + {self.s} != 0")

    def __add__(self, other: CubeCoord) -> CubeCoord:
        return CubeCoord(self.q + other.q, self.r + other.r, self.s + other.s)

    def neighbor(self, direction: int) -> CubeCoord:
        """Adjacent hex; the direction index wraps modulo 6."""
        return self + CUBE_DIRECTIONS[direction % 6]

    def to_oddq(self) -> OddQCoord:
        parity = self.q & 1
        # q + ODD * parity is always even, so the division is exact.
        return OddQCoord(col=self.q, row=self.r + (self.q + _ODD * parity) // 2)

    def to_label(self) -> str:
        """World map label, with `<`/`>` and `<<`/`>>` marking off-map parts."""
        oddq = self.to_oddq()
        grid_row = _truncating_div(oddq.row, ROWS_PER_GRID)
        grid_column = _truncating_div(oddq.col, COLUMNS_PER_GRID)
        sub_column = oddq.col - grid_column * COLUMNS_PER_GRID + 1
        sub_row = oddq.row - grid_row * ROWS_PER_GRID + 1
        return (
            f"{_grid_code(grid_row)}{_grid_code(grid_column)} "
            f"{_sub_grid_code(sub_column, COLUMNS_PER_GRID)}{_sub_grid_code(sub_row, ROWS_PER_GRID)}"
        )


ORIGIN: Final[CubeCoord] = CubeCoord(0, 0, 0)

CUBE_DIRECTIONS: Final[tuple[CubeCoord, ...]] = (
    CubeCoord(+1, 0, -1),
    CubeCoord(+1, -1, 0),
    CubeCoord(0, -1, +1),
    CubeCoord(-1, 0, +1),
    CubeCoord(-1, +1, 0),
    CubeCoord(0, +1, -1),
)


@dataclass(frozen=True, slots=True)
class OddQCoord:
    """0-based offset coordinate over the whole world map."""

    col: int
    row: int

    def to_cube(self) -> CubeCoord:
        parity = self.col & 1
        q = self.col
        r = self.row - (self.col + _ODD * parity) // 2
        return CubeCoord(q, r, -q - r)


def _truncating_div(numerator: int, denominator: int) -> int:
    # Off-map rows and columns round toward zero so that the sub-grid part
    # falls outside 1..N and renders as a placeholder.
    quotient = abs(numerator) // denominator
    return quotient if numerator >= 0 else -quotient


def _grid_code(index: int) -> str:
    if index < 0:
        return "<"
    if index >= GRID_LETTERS:
        return ">"
    return chr(ord("A") + index)


def _sub_grid_code(value: int, limit: int) -> str:
    if value < 1:
        return "<<"
    if value > limit:
        return ">>"
    return f"{value:02d}"
