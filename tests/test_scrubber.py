import pytest

from ottoparse.scrubbers import LineClass, classify_line, normalize_line, scrub, scrub_text

RAW_REPORT = (
    "Tribe 0987, , Current Hex = QQ 1509, (Previous Hex = QQ 1410)\n"
    "Current Turn 900-01 (#1), Spring, FINE\tNext Turn 900-02 (#2), 12/12/2025\n"
    "\n"
    "Tribe Activities: \n"
    "Tribe Movement: Move N-PR, \\NE-GH,\n"
    "Scout 1:Scout N-PR, Nothing of interest found\n"
    "0987 Status: PRAIRIE, River S, 0987\n"
    "Humans 1000\n"
    "  Element   0987e1, , Current Hex = QQ 1510, (Previous Hex = N/A)  \n"
)


@pytest.mark.parametrize(
    ("line", "want"),
    [
        ("  Tribe\t\t0987,   ,  x  ", "Tribe 0987, , x"),
        ("\t \tScout 1:Scout", "Scout 1:Scout"),
        ("", ""),
    ],
)
def test_normalize_line(line: str, want: str) -> None:
    assert normalize_line(line) == want


@pytest.mark.parametrize(
    ("line", "want"),
    [
        ("Tribe 0987, , Current Hex = QQ 1509, (Previous Hex = QQ 1410)", LineClass.UNIT_LOCATION),
        ("Courier 0987c1, , Current Hex = QQ 1509", LineClass.UNIT_LOCATION),
        ("Element 0987e1, , Current Hex = QQ 1509", LineClass.UNIT_LOCATION),
        ("Fleet 0987f1, , Current Hex = QQ 1509", LineClass.UNIT_LOCATION),
        ("Garrison 0987g1, , Current Hex = QQ 1509", LineClass.UNIT_LOCATION),
        ("Current Turn 900-01 (#1), Spring, FINE Next Turn 900-02 (#2), 12/12/2025", LineClass.CURRENT_TURN),
        ("Tribe Movement: Move N-PR,", LineClass.TRIBE_MOVEMENT),
        ("Scout 8:Scout N-PR,", LineClass.SCOUT),
        ("0987 Status: PRAIRIE", LineClass.STATUS),
        ("0987e1 Status: PRAIRIE", LineClass.STATUS),
        ("Element 0987e0, , Current Hex = QQ 1509", None),
        ("Current Turn 900-01 (#1), Spring, FINE", None),
        ("Scout 9:Scout N-PR,", None),
        ("Tribe Activities:", None),
        ("Humans 1000", None),
    ],
)
def test_classify_line(line: str, want: LineClass | None) -> None:
    assert classify_line(line) == want


def test_scrub_keeps_parseable_lines_and_patches_missing_previous_hex() -> None:
    assert scrub(RAW_REPORT.split("\n")) == [
        "Tribe 0987, , Current Hex = QQ 1509, (Previous Hex = QQ 1410)",
        "Current Turn 900-01 (#1), Spring, FINE Next Turn 900-02 (#2), 12/12/2025",
        "Tribe Movement: Move N-PR, \\NE-GH,",
        "Scout 1:Scout N-PR, Nothing of interest found",
        "0987 Status: PRAIRIE, River S, 0987",
        "Element 0987e1, , Current Hex = QQ 1510, (Previous Hex = QQ 1510)",
    ]


def test_scrub_leaves_obscured_na_alone() -> None:
    line = "Tribe 0987, , Current Hex = ## 1509, (Previous Hex = N/A)"

    assert scrub([line]) == [line]


def test_scrub_text_accepts_bytes_and_crlf() -> None:
    raw = b"Tribe 0987, , Current Hex = QQ 1509, (Previous Hex = QQ 1410)\r\nnoise\r\n"

    assert scrub_text(raw) == "Tribe 0987, , Current Hex = QQ 1509, (Previous Hex = QQ 1410)\n"


def test_scrub_text_of_nothing_is_empty() -> None:
    assert scrub_text("only noise\nand more\n") == ""
    assert scrub_text(b"") == ""
