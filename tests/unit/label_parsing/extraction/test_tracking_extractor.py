import pytest

from contracts.label_dto import Carrier, DetectedBarcode, OcrLine, Symbology
from src.label_parsing.extraction.tracking_extractor import (
    extract_tracking,
    normalize_fedex_tracking,
    normalize_ups_tracking,
)


def barcode(value: str, symbology: Symbology = Symbology.CODE_128) -> DetectedBarcode:
    return DetectedBarcode(value=value, symbology=symbology)


def lines(*texts: str) -> list[OcrLine]:
    return [OcrLine(text=t) for t in texts]


@pytest.mark.parametrize("raw", [
    "1Z1Y798F0301700550",
    "1Z 1Y7 98F 03 0170 0550",
    "1z-1y7-98f-03-0170-0550",
    ">1Z1Y798F0301700550<",
])
def test_ups_canonicalization(raw):
    assert normalize_ups_tracking(raw) == "1Z1Y798F0301700550"


def test_ups_too_short_rejected():
    assert normalize_ups_tracking("1Z1Y798F03017") is None
    assert normalize_ups_tracking("") is None
    assert normalize_ups_tracking(None) is None


@pytest.mark.parametrize("raw, expected", [
    ("123456789012", "123456789012"),
    ("1234 5678 9012", "123456789012"),
    ("12345678901234", "12345678901234"),
    ("123456789012345", "123456789012345"),
    ("96110000000000000001", "96110000000000000001"),
    ("9611000000000000000123", "9611000000000000000123"),
])
def test_fedex_valid_lengths(raw, expected):
    assert normalize_fedex_tracking(raw) == expected


@pytest.mark.parametrize("raw", ["12345678901", "1234567890123", "12345678901234567", "ABC"])
def test_fedex_invalid_lengths(raw):
    assert normalize_fedex_tracking(raw) is None


def test_ups_barcode_wins_over_fedex_barcode():
    # FedEx-форма идёт первой, но UPS проверяется по всем штрихкодам раньше
    result = extract_tracking([barcode("123456789012"), barcode("1Z1Y798F0301700550")], [])
    assert result.tracking == "1Z1Y798F0301700550"
    assert result.carrier == Carrier.UPS
    assert result.source == "barcode"


def test_fedex_from_barcode():
    result = extract_tracking([barcode("123456789012")], lines("FEDEX EXPRESS"))
    assert result.tracking == "123456789012"
    assert result.carrier == Carrier.FEDEX


def test_barcode_beats_ocr():
    result = extract_tracking(
        [barcode("1Z1Y798F0301700550")],
        lines("TRACKING #: 1Z 999 99A 99 9999 9999"),
    )
    assert result.tracking == "1Z1Y798F0301700550"


def test_ocr_fallback_ups():
    result = extract_tracking([barcode("ABC", Symbology.QR)], lines("UPS GROUND", "TRACKING #: 1Z 1Y7 98F 03 0170 0550"))
    assert result.tracking == "1Z1Y798F0301700550"
    assert result.carrier == Carrier.UPS
    assert result.source == "ocr"


def test_ocr_fallback_fedex():
    result = extract_tracking([], lines("TRK NOTHING", "TRACKING NUMBER: 1234 5678 9012"))
    assert result.tracking == "123456789012"
    assert result.carrier == Carrier.FEDEX


def test_nothing_found():
    result = extract_tracking([], lines("SOME LABEL", "PO: ABC123"))
    assert result.tracking is None
    assert result.carrier == Carrier.UNKNOWN
    assert result.source is None
