import pytest

from contracts.label_dto import OcrLine
from src.label_parsing.extraction.flag_extractor import extract_flags


def lines(*texts: str) -> list[OcrLine]:
    return [OcrLine(text=t) for t in texts]


def test_partial_detected():
    flags = extract_flags(lines("SHIP TO", "** partial shipment **"))
    assert flags.partial is True


def test_partial_absent_is_none_not_false():
    flags = extract_flags(lines("SHIP TO", "PARTIALLY FILLED"))
    assert flags.partial is None


@pytest.mark.parametrize("text, lane", [
    ("LANE B", "B"),
    ("lane-7", "7"),
    ("LANE – C", "C"),
    ("LANEA", "A"),
    ("lane b", "B"),
])
def test_lane_detected(text, lane):
    assert extract_flags(lines(text)).lane == lane


def test_lane_absent():
    flags = extract_flags(lines("LANE 12", "PLANE X"))
    assert flags.lane is None


def test_empty_lines():
    flags = extract_flags([])
    assert flags.partial is None
    assert flags.lane is None
