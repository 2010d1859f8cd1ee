import pytest

from contracts.label_dto import Carrier, ParsedLabelPayload
from src.label_parsing.profiles import ScanProfile
from src.label_parsing.validation import (
    ScanVerdict,
    evaluate_scan,
    has_valid_po,
    has_valid_tracking,
    sample_status,
)

UPS_TRACKING = "1Z1Y798F0301700550"

SINGLE = ScanProfile(name="single_scan", missing_po_action="prompt")
BATCH = ScanProfile(name="batch", missing_po_action="reject")
TRAINING = ScanProfile(name="training", missing_po_action="reject", verify_threshold=0.8)


def payload(**kwargs) -> ParsedLabelPayload:
    return ParsedLabelPayload(**kwargs)


@pytest.mark.parametrize("carrier, tracking, expected", [
    (Carrier.UPS, UPS_TRACKING, True),
    (Carrier.UPS, "1Z1Y798F03017005", False),
    (Carrier.FEDEX, "123456789012", True),
    (Carrier.FEDEX, "1234567890123456789012", True),
    (Carrier.FEDEX, "12345678901", False),
    (Carrier.UNKNOWN, "ABCD1234", True),
    (Carrier.UNKNOWN, "ABC1234", False),
    (Carrier.UNKNOWN, None, False),
])
def test_has_valid_tracking(carrier, tracking, expected):
    assert has_valid_tracking(payload(carrier=carrier, tracking=tracking)) is expected


def test_unknown_carrier_min_length_configurable():
    p = payload(tracking="ABC12")
    assert has_valid_tracking(p, unknown_min_length=5)
    assert not has_valid_tracking(p, unknown_min_length=6)


@pytest.mark.parametrize("po, expected", [
    ("ABC", True),
    ("AB", False),
    (None, False),
    ("82427365A", True),
])
def test_has_valid_po(po, expected):
    assert has_valid_po(payload(po_number=po)) is expected


@pytest.mark.parametrize("confidence, threshold, expected", [
    (0.825, 0.8, "verified"),
    (0.8, 0.8, "verified"),
    (0.45, 0.8, "pending"),
    (0.99, None, None),
])
def test_sample_status(confidence, threshold, expected):
    assert sample_status(confidence, threshold) == expected


def test_accepted_scan():
    p = payload(carrier=Carrier.UPS, tracking=UPS_TRACKING, po_number="82427365A", confidence=0.9)
    evaluation = evaluate_scan(p, BATCH)

    assert evaluation.accepted
    assert evaluation.verdict == ScanVerdict.ACCEPTED
    assert evaluation.error_type is None
    assert evaluation.sample_status is None


def test_invalid_tracking_rejected_in_every_profile():
    p = payload(carrier=Carrier.UNKNOWN, tracking="ABC", po_number="82427365A")
    for profile in (SINGLE, BATCH, TRAINING):
        evaluation = evaluate_scan(p, profile)
        assert evaluation.verdict == ScanVerdict.REJECTED
        assert evaluation.error_type == "invalid_tracking"
        assert evaluation.message.endswith("Found: ABC")


def test_missing_tracking_message():
    evaluation = evaluate_scan(payload(po_number="ABC123"), SINGLE)
    assert evaluation.message == (
        "Invalid tracking number. Expected: UPS (1Z...) or FedEx (12-22 digits). Found: None"
    )


def test_missing_po_prompts_in_single_scan():
    p = payload(carrier=Carrier.UPS, tracking=UPS_TRACKING)
    evaluation = evaluate_scan(p, SINGLE)

    assert evaluation.verdict == ScanVerdict.NEEDS_PO
    assert evaluation.error_type == "missing_po"
    assert not evaluation.accepted


def test_missing_po_rejected_in_batch():
    p = payload(carrier=Carrier.UPS, tracking=UPS_TRACKING, po_number="AB")
    evaluation = evaluate_scan(p, BATCH)

    assert evaluation.verdict == ScanVerdict.REJECTED
    assert evaluation.error_type == "missing_po"
    assert evaluation.message == (
        "Missing PO number. Please ensure PO field is clearly visible. Found: AB"
    )


def test_training_marks_sample_status():
    good = payload(carrier=Carrier.UPS, tracking=UPS_TRACKING, po_number="PO123", confidence=0.825)
    weak = payload(carrier=Carrier.UPS, tracking=UPS_TRACKING, confidence=0.45)

    assert evaluate_scan(good, TRAINING).sample_status == "verified"
    assert evaluate_scan(weak, TRAINING).sample_status == "pending"


def test_evaluation_to_dict():
    evaluation = evaluate_scan(payload(carrier=Carrier.UPS, tracking=UPS_TRACKING), SINGLE)
    assert evaluation.to_dict() == {
        "verdict": "NEEDS_PO",
        "error_type": "missing_po",
        "message": "Missing PO number. Please ensure PO field is clearly visible. Found: None",
        "sample_status": None,
    }


@pytest.mark.parametrize("carrier, tracking", [
    (Carrier.UPS, UPS_TRACKING + "\n"),
    (Carrier.FEDEX, "123456789012\n"),
    (Carrier.FEDEX, "١٢٣٤٥٦٧٨٩٠١٢"),
])
def test_tracking_must_match_whole_value(carrier, tracking):
    assert not has_valid_tracking(payload(carrier=carrier, tracking=tracking))
