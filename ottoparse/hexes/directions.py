"""Compass directions and step tables for flat-top hexes."""

from __future__ import annotations

from collections.abc import Mapping
from enum import StrEnum
from types import MappingProxyType
from typing import Final

from ottoparse.hexes.cube import CubeCoord


class Direction(StrEnum):
    N = "N"
    NE = "NE"
    SE = "SE"
    S = "S"
    SW = "SW"
    NW = "NW"


class Sense(StrEnum):
    """FORWARD follows a reported move; REVERSE walks back to where it started."""

    FORWARD = "forward"
    REVERSE = "reverse"


FORWARD_STEPS: Final[Mapping[Direction, int]] = MappingProxyType(
    {
        Direction.N: 2,
        Direction.NE: 1,
        Direction.SE: 0,
        Direction.S: 5,
        Direction.SW: 4,
        Direction.NW: 3,
    }
)

REVERSE_STEPS: Final[Mapping[Direction, int]] = MappingProxyType(
    {
        Direction.N: 5,
        Direction.NE: 4,
        Direction.SE: 3,
        Direction.S: 2,
        Direction.SW: 1,
        Direction.NW: 0,
    }
)

DIRECTION_NAMES: Final[frozenset[str]] = frozenset(direction.value for direction in Direction)


def step(cube: CubeCoord, direction: Direction | str, sense: Sense = Sense.FORWARD) -> CubeCoord:
    """Neighbor of `cube` in the named direction.

    Raises ValueError for a name that is not one of N, NE, SE, S, SW, NW.
    """
    table = FORWARD_STEPS if sense == Sense.FORWARD else REVERSE_STEPS
    return cube.neighbor(table[Direction(direction)])
