"""
Проверка скана на стороне экрана.

Парсер только извлекает данные; решение принять / запросить PO /
отклонить принимает экран по профилю строгости.
"""

import re
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from loguru import logger

from config.settings import MIN_PO_LENGTH, UNKNOWN_CARRIER_MIN_TRACKING_LENGTH
from contracts.label_dto import Carrier, ParsedLabelPayload

from ..profiles import ScanProfile

# Только fullmatch, только ASCII-цифры
UPS_STRICT_PATTERN = re.compile(r"1Z[A-Z0-9]{16}")
FEDEX_STRICT_PATTERN = re.compile(r"[0-9]{12,22}")


class ScanVerdict(str, Enum):
    ACCEPTED = "ACCEPTED"
    NEEDS_PO = "NEEDS_PO"       # попросить ввести PO вручную
    REJECTED = "REJECTED"


@dataclass
class ScanEvaluation:
    """Решение по скану."""
    verdict: ScanVerdict
    error_type: Optional[str] = None        # "invalid_tracking" | "missing_po"
    message: Optional[str] = None
    sample_status: Optional[str] = None     # "verified" | "pending" (режим обучения)

    @property
    def accepted(self) -> bool:
        return self.verdict == ScanVerdict.ACCEPTED

    def to_dict(self) -> dict:
        return {
            "verdict": self.verdict.value,
            "error_type": self.error_type,
            "message": self.message,
            "sample_status": self.sample_status,
        }


def has_valid_tracking(
    payload: ParsedLabelPayload,
    unknown_min_length: int = UNKNOWN_CARRIER_MIN_TRACKING_LENGTH,
) -> bool:
    """Трекинг соответствует строгому формату своего перевозчика."""
    tracking = payload.tracking
    if not tracking:
        return False
    if payload.carrier == Carrier.UPS:
        return bool(UPS_STRICT_PATTERN.fullmatch(tracking))
    if payload.carrier == Carrier.FEDEX:
        return bool(FEDEX_STRICT_PATTERN.fullmatch(tracking))
    return len(tracking) >= unknown_min_length


def has_valid_po(payload: ParsedLabelPayload, min_length: int = MIN_PO_LENGTH) -> bool:
    return bool(payload.po_number) and len(payload.po_number) >= min_length


def sample_status(confidence: float, threshold: Optional[float]) -> Optional[str]:
    """Статус обучающего сэмпла: verified если confidence >= порога."""
    if threshold is None:
        return None
    return "verified" if confidence >= threshold else "pending"


def evaluate_scan(payload: ParsedLabelPayload, profile: ScanProfile) -> ScanEvaluation:
    """
    Проверяет скан по профилю экрана.

    Порядок: сначала трекинг (без него скан всегда отклоняется),
    потом PO (prompt или reject в зависимости от профиля).
    """
    status = sample_status(payload.confidence, profile.verify_threshold)

    if not has_valid_tracking(payload, profile.unknown_carrier_min_length):
        logger.info(f"[ScanValidator:{profile.name}] Отклонено: невалидный трекинг {payload.tracking}")
        return ScanEvaluation(
            verdict=ScanVerdict.REJECTED,
            error_type="invalid_tracking",
            message=(
                "Invalid tracking number. Expected: UPS (1Z...) or FedEx (12-22 digits). "
                f"Found: {payload.tracking or 'None'}"
            ),
            sample_status=status,
        )

    if not has_valid_po(payload, profile.min_po_length):
        verdict = ScanVerdict.NEEDS_PO if profile.missing_po_action == "prompt" else ScanVerdict.REJECTED
        logger.info(f"[ScanValidator:{profile.name}] Нет PO -> {verdict.value}")
        return ScanEvaluation(
            verdict=verdict,
            error_type="missing_po",
            message=(
                "Missing PO number. Please ensure PO field is clearly visible. "
                f"Found: {payload.po_number or 'None'}"
            ),
            sample_status=status,
        )

    return ScanEvaluation(verdict=ScanVerdict.ACCEPTED, sample_status=status)
