"""Node kinds of the turn report syntax tree."""

from enum import IntEnum


class ReportSyntaxKind(IntEnum):
    """Kind tags for every CST node variant."""

    TURN_REPORT = 100
    PROLOGUE_SECTION = 101
    EPILOGUE_SECTION = 102
    LINE = 103
    UNIT_SECTION = 104

    # Lines
    UNIT_LINE = 110
    TURN_LINE = 111
    UNIT_GOES_TO_LINE = 112
    LAND_MOVEMENT_LINE = 113
    SCOUT_LINE = 114
    STATUS_LINE = 115

    # Line parts
    YEAR_MONTH = 120
    TURN_NUMBER = 121
    REPORT_DATE = 122
    LAND_MOVEMENT = 123
    LAND_STEP = 124

    # Coordinates
    GRID_COORDS = 130
    NA_COORDS = 131
    OBSCURED_COORDS = 132
    ERROR_COORDS = 133

    @property
    def display_name(self) -> str:
        if self == ReportSyntaxKind.NA_COORDS:
            return "NACoords"
        return "".join(part.capitalize() for part in self.name.split("_"))
