"""TribeNet world map coordinates.

Labels look like "AB 0102":

- "A"  is the grid row,        A .. Z
- "B"  is the grid column,     A .. Z
- "01" is the sub-grid column, 1 .. 30
- "02" is the sub-grid row,    1 .. 21

"AA 0101" is the origin. "N/A" is the null coordinate and "## 0102" is an
obscured grid, which is placed in grid "QQ" for arithmetic.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum

from ottoparse.hexes.cube import (
    COLUMNS_PER_GRID,
    ORIGIN,
    ROWS_PER_GRID,
    CubeCoord,
    OddQCoord,
)
from ottoparse.hexes.directions import Direction, Sense, step

NA_LABEL = "N/A"
OBSCURED_GRID = "##"
_OBSCURED_STAND_IN = "QQ"


class CoordError(StrEnum):
    """Why a label was rejected by `parse_label`."""

    BAD_SHAPE = "invalid grid coordinates: expected `LL CCRR` or `N/A`"
    BAD_GRID = "invalid grid coordinates: grid letters must be A-Z or ##"
    BAD_COLUMN = "invalid grid coordinates: column must be 01-30"
    BAD_ROW = "invalid grid coordinates: row must be 01-21"


@dataclass(frozen=True, slots=True, eq=False)
class WorldMapCoord:
    """A location on the world map.

    `label` is what the report said (upper-cased); an empty label means the
    coordinate was never assigned. Equality compares labels, not hexes, so
    "## 0101" and "QQ 0101" stay distinct even though they share a cube.
    """

    label: str = ""
    cube: CubeCoord = ORIGIN

    @staticmethod
    def from_cube(cube: CubeCoord) -> WorldMapCoord:
        return WorldMapCoord(label=cube.to_label(), cube=cube)

    @property
    def id(self) -> str:
        """Canonical label; keeps N/A and obscured labels as written."""
        if self.label == "":
            return NA_LABEL
        if self.label == NA_LABEL or self.label.startswith(OBSCURED_GRID):
            return self.label
        return self.cube.to_label()

    @property
    def is_na(self) -> bool:
        return self.label == NA_LABEL

    @property
    def is_zero(self) -> bool:
        return self.label == ""

    @property
    def is_obscured(self) -> bool:
        return self.label.startswith(OBSCURED_GRID)

    def equals(self, other: WorldMapCoord) -> bool:
        return self.label == other.label

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, WorldMapCoord):
            return NotImplemented
        return self.equals(other)

    def __hash__(self) -> int:
        return hash(self.label)

    def __str__(self) -> str:
        # Always computed from the cube; N/A prints as the origin.
        return self.cube.to_label()

    def move(self, *directions: Direction | str) -> WorldMapCoord:
        cube = self.cube
        for direction in directions:
            cube = step(cube, direction, Sense.FORWARD)
        return WorldMapCoord.from_cube(cube)

    def move_reverse(self, *directions: Direction | str) -> WorldMapCoord:
        cube = self.cube
        for direction in directions:
            cube = step(cube, direction, Sense.REVERSE)
        return WorldMapCoord.from_cube(cube)

    def to_json(self) -> str | None:
        if self.is_zero:
            return None
        return self.id

    @staticmethod
    def from_json(value: str | None) -> WorldMapCoord:
        if value is None:
            return WorldMapCoord()
        coord, error = parse_label(value)
        if error is not None or coord is None:
            raise ValueError(f"invalid WorldMapCoord JSON: {value!r}")
        return coord


def parse_label(label: str) -> tuple[WorldMapCoord | None, CoordError | None]:
    """Parse a grid label; errors are returned, never raised."""
    label = label.upper()
    if label == NA_LABEL:
        return WorldMapCoord(label=label, cube=ORIGIN), None
    if len(label) != 7 or label[2] != " ":
        return None, CoordError.BAD_SHAPE

    grid = label[:2]
    if grid == OBSCURED_GRID:
        grid = _OBSCURED_STAND_IN
    elif not all("A" <= ch <= "Z" for ch in grid):
        return None, CoordError.BAD_GRID

    digits = label[3:]
    if not (digits.isascii() and digits.isdigit()):
        return None, CoordError.BAD_SHAPE
    column, row = int(digits[:2]), int(digits[2:])
    if not 1 <= column <= COLUMNS_PER_GRID:
        return None, CoordError.BAD_COLUMN
    if not 1 <= row <= ROWS_PER_GRID:
        return None, CoordError.BAD_ROW

    grid_row, grid_column = ord(grid[0]) - ord("A"), ord(grid[1]) - ord("A")
    offset = OddQCoord(
        col=grid_column * COLUMNS_PER_GRID + column - 1,
        row=grid_row * ROWS_PER_GRID + row - 1,
    )
    return WorldMapCoord(label=label, cube=offset.to_cube()), None
