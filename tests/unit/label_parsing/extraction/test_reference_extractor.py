import pytest

from contracts.label_dto import OcrLine
from src.label_parsing.extraction.reference_extractor import (
    extract_po_from_ocr,
    extract_references,
    split_ref1,
)


def lines(*texts: str) -> list[OcrLine]:
    return [OcrLine(text=t) for t in texts]


@pytest.mark.parametrize("text, expected", [
    ("PO: 82427365A", "82427365A"),
    ("PO 4500-1234", "4500-1234"),
    ("P.O. 998877", "998877"),
    ("PURCHASE ORDER: X12-99", "X12-99"),
    ("PO#778899", "778899"),
    ("PO4500123", "4500123"),
    ("ship ref:PO:AB12", "AB12"),
])
def test_po_pattern_cascade(text, expected):
    result = extract_references(lines("UPS GROUND", text))
    assert result.po_number == expected


def test_po_first_pattern_beats_later_lines():
    # Строгий паттерн проверяется по всем строкам раньше свободных
    result = extract_references(lines("PURCHASE ORDER 111111", "PO: 222222"))
    assert result.po_number == "222222"


def test_po_not_found():
    result = extract_references(lines("UPS GROUND", "TRACKING: 1Z1Y798F0301700550"))
    assert result.po_number is None


def test_po_too_short_ignored():
    result = extract_references(lines("PO: A1"))
    assert result.po_number is None


def test_references_custom_ink_label():
    result = extract_references(lines(
        "UPS GROUND",
        "TRACKING #: 1Z 1Y7 98F 03 0170 0550",
        "BILLING: P/P",
        "REF1: 82427365A",
        "REF2: SO-152023056",
        "REF3: LP0149928586",
        "PO: 82427365A",
    ))
    assert result.po_number == "82427365A"
    assert result.ref1 == "82427365A"
    assert result.ref2 == "SO-152023056"
    assert result.ref3 == "LP0149928586"


def test_ref1_without_number():
    result = extract_references(lines("REF: FEDEX-REF"))
    assert result.ref1 == "FEDEX-REF"
    assert result.ref2 is None


def test_ref1_with_prefix():
    result = extract_references(lines("REF1: ci/8242-7365"))
    assert result.ref1 == "ci/8242-7365"
    assert split_ref1(result.ref1) == ("CI", "82427365")


@pytest.mark.parametrize("raw, expected", [
    (None, (None, None)),
    ("82427365A", (None, None)),
    ("AB/", ("AB", None)),
    ("/123", (None, "123")),
    ("a-b/c d/e", ("AB", "CD")),
])
def test_split_ref1(raw, expected):
    assert split_ref1(raw) == expected


class TestPoRecapture:
    """Отдельный снимок поля PO."""

    def test_colon_form(self):
        assert extract_po_from_ocr(lines("PO: 4500123456")) == "4500123456"

    def test_longest_candidate_wins(self):
        assert extract_po_from_ocr(lines("P.O. # 12345", "PURCHASE ORDER 12345-678")) == "12345-678"

    def test_lowercase_input(self):
        assert extract_po_from_ocr(lines("po# ab-991")) == "AB-991"

    def test_nothing_found(self):
        assert extract_po_from_ocr(lines("SHIP TO", "ACME CORP")) is None

    def test_empty_lines(self):
        assert extract_po_from_ocr([]) is None
