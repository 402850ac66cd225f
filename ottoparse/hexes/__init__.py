"""Hex coordinates for the TribeNet world map."""

from ottoparse.hexes.cube import (
    COLUMNS_PER_GRID,
    CUBE_DIRECTIONS,
    GRID_LETTERS,
    ORIGIN,
    ROWS_PER_GRID,
    CubeCoord,
    OddQCoord,
)
from ottoparse.hexes.directions import (
    DIRECTION_NAMES,
    FORWARD_STEPS,
    REVERSE_STEPS,
    Direction,
    Sense,
    step,
)
from ottoparse.hexes.worldmap import NA_LABEL, CoordError, WorldMapCoord, parse_label

__all__ = [
    "COLUMNS_PER_GRID",
    "CUBE_DIRECTIONS",
    "DIRECTION_NAMES",
    "FORWARD_STEPS",
    "GRID_LETTERS",
    "NA_LABEL",
    "ORIGIN",
    "REVERSE_STEPS",
    "ROWS_PER_GRID",
    "CoordError",
    "CubeCoord",
    "Direction",
    "OddQCoord",
    "Sense",
    "WorldMapCoord",
    "parse_label",
    "step",
]
