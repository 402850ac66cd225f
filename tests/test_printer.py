import textwrap

from ottoparse.cst import pretty_print
from ottoparse.parser import ParseMode, parse_text

UNIT_LINE = "Tribe 0987, , Current Hex = QQ 1509, (Previous Hex = QQ 1410)\n"
TURN_LINE = "Current Turn 900-01 (#1), Spring, FINE Next Turn 900-02 (#2), 12/12/2025\n"


def _golden(text: str) -> str:
    return textwrap.dedent(text).lstrip("\n")


def test_unit_and_turn_line() -> None:
    report = parse_text(UNIT_LINE + TURN_LINE)

    assert pretty_print(report) == _golden(
        """
        TurnReport {
          UnitSection[0] {
            UnitLine {
              Keyword: "Tribe"
              UnitID: "0987"
              CurrentHex: "QQ 1509"
              PreviousHex: "QQ 1410"
            }
            TurnLine {
              TurnYearMonth: "900-01"
              TurnNumber: "#1"
              Season: "Spring"
              Weather: "FINE"
              NextTurnYearMonth: "900-02"
              NextTurnNumber: "#2"
              Report Date: "12/12/2025"
            }
          }
        }
        """
    )


def test_column_and_kind_annotations() -> None:
    report = parse_text(UNIT_LINE)

    assert pretty_print(report, show_col_no=True, show_token_kind=True) == _golden(
        """
        TurnReport {
          UnitSection[0] {
            UnitLine {
              Keyword: "Tribe"  (1:1:Tribe)
              UnitID: "0987"  (1:7:Number)
              CurrentHex: "QQ 1509"  (1:29:Grid Number)
              PreviousHex: "QQ 1410"  (1:54:Grid Number)
            }
            TurnLine: <nil>
          }
        }
        """
    )


def test_line_numbers() -> None:
    report = parse_text(UNIT_LINE + TURN_LINE)

    output = pretty_print(report, show_line_no=True)
    assert "    Line: 1\n" in output
    assert '      Keyword: "Tribe"  (1)\n' in output
    assert '      Season: "Spring"  (2)\n' in output
    assert '      Report Date: "12/12/2025"  (2)\n' in output


def test_kind_only_annotation() -> None:
    report = parse_text("Tribe 1234, , Current Hex = ## 1214, (Previous Hex = N/A)\n")

    output = pretty_print(report, show_token_kind=True)
    assert '      CurrentHex: "## 1214"  (Grid Number)\n' in output
    assert '      PreviousHex: "N/A"  (Text Slash Text)\n' in output


def test_errors_are_printed_once_at_the_deepest_node() -> None:
    report = parse_text("Tribe 0987, , Current Hex = 1509, (Previous Hex = QQ 1410)\n")

    assert pretty_print(report, show_token_kind=True) == _golden(
        """
        TurnReport {
          UnitSection[0] {
            UnitLine {
              Keyword: "Tribe"  (Tribe)
              UnitID: "0987"  (Number)
              CurrentHex: "<error: expected coordinates, got Number>"  (<ErrorCoords>)
              PreviousHex: <nil>
              error: "expected Comma, got Number"
            }
            TurnLine: <nil>
          }
        }
        """
    )


def test_coordinate_errors_follow_their_coordinates() -> None:
    report = parse_text("Tribe 0987, , Current Hex = N/B, (Previous Hex = QQ 1410)\n")

    assert pretty_print(report) == _golden(
        """
        TurnReport {
          UnitSection[0] {
            UnitLine {
              Keyword: "Tribe"
              UnitID: "0987"
              CurrentHex: "N/A"
              error: "expected \\"A\\" to complete N/A, got Text"
              PreviousHex: <nil>
              error: "expected Comma, got Text"
            }
            TurnLine: <nil>
          }
        }
        """
    )


def test_prologue_epilogue_and_free_lines() -> None:
    source = "junk before\n" + UNIT_LINE + "Scout 1:Scout N-PR, Nothing\n0987 Status: PRAIRIE, 0987\nhello\n\n"
    report = parse_text(source)

    assert pretty_print(report, name="0900-01.0987.txt") == _golden(
        """
        // source "0900-01.0987.txt"
        TurnReport {
          Prologue {
            Line[0]: "junk before"
            error: "unexpected tokens before unit section"
          }
          UnitSection[0] {
            UnitLine {
              Keyword: "Tribe"
              UnitID: "0987"
              CurrentHex: "QQ 1509"
              PreviousHex: "QQ 1410"
            }
            TurnLine: <nil>
            ScoutLine[0]: "Scout 1:Scout N-PR, Nothing"
            StatusLine[0]: "0987 Status: PRAIRIE, 0987"
            Line[0]: "hello"
          }
          Epilogue {
            Line[0]: ""
          }
        }
        """
    )


def test_land_movement() -> None:
    source = UNIT_LINE + "Tribe Movement: Move N-PR, \\NE-GH, , L NE, N\\\n"
    report = parse_text(source, mode=ParseMode.EXTENDED)

    assert pretty_print(report) == _golden(
        """
        TurnReport {
          UnitSection[0] {
            UnitLine {
              Keyword: "Tribe"
              UnitID: "0987"
              CurrentHex: "QQ 1509"
              PreviousHex: "QQ 1410"
            }
            TurnLine: <nil>
            LandMovementLine {
              Tribe: "Tribe"
              LandMovement {
                Move: "Move"
                Step[0] {
                  Direction: "N"
                  Terrain: "PR"
                }
                Step[1] {
                  Direction: "NE"
                  Terrain: "GH"
                  Remainder: ", L NE, N"
                }
                Step[2]: <empty>
              }
            }
          }
        }
        """
    )


def test_unit_goes_to_line() -> None:
    source = UNIT_LINE + "Tribe Goes To QQ 1510\n"
    report = parse_text(source, mode=ParseMode.EXTENDED)

    output = pretty_print(report, show_col_no=True)
    assert (
        "    UnitGoesToLine {\n"
        '      Tribe: "Tribe"  (2:1)\n'
        '      Coords: "QQ 1510"  (2:15)\n'
        "    }\n"
    ) in output


def test_output_is_deterministic() -> None:
    source = UNIT_LINE + TURN_LINE + "Tribe Movement: Move \\\n"

    first = pretty_print(parse_text(source, mode=ParseMode.EXTENDED), show_col_no=True, show_token_kind=True)
    second = pretty_print(parse_text(source, mode=ParseMode.EXTENDED), show_col_no=True, show_token_kind=True)
    assert first == second
