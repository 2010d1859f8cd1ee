"""
Извлечение трекинг-номера и перевозчика.

Приоритет строгий, первое совпадение выигрывает:
1. UPS в штрихкодах (префикс 1Z)
2. FedEx в штрихкодах (только цифры, фиксированные длины)
3. Строка OCR вида "TRACKING #: ..." -> UPS, затем FedEx
4. Ничего не найдено -> UNKNOWN
"""

import re
from dataclasses import dataclass
from typing import Optional, Sequence

from loguru import logger

from config.settings import FEDEX_TRACKING_LENGTHS
from contracts.label_dto import Carrier, DetectedBarcode, OcrLine

from .common import find_in_ocr

UPS_TRACKING_PATTERN = re.compile(r"1Z[A-Z0-9]{16}")

TRACKING_LINE_PATTERNS = (
    re.compile(r"(?:TRACKING|TRACK)\s*(?:#|NUM|NUMBER)?\s*:?\s*([A-Z0-9\s\-]{10,})", re.IGNORECASE),
)

_SEPARATORS = re.compile(r"[\s\-]+")
_NON_DIGITS = re.compile(r"[^0-9]")


@dataclass
class TrackingResult:
    """Результат извлечения трекинга."""
    tracking: Optional[str] = None
    carrier: Carrier = Carrier.UNKNOWN
    source: Optional[str] = None    # "barcode" | "ocr"


def normalize_ups_tracking(value: Optional[str]) -> Optional[str]:
    """
    Канонизирует трекинг UPS.

    Убирает пробелы/дефисы, переводит в верхний регистр и ищет
    '1Z' + 16 символов в любом месте строки.

    >>> normalize_ups_tracking("1z 1y7 98f-03 0170 0550")
    '1Z1Y798F0301700550'
    """
    if not value:
        return None

    cleaned = _SEPARATORS.sub("", value).upper()
    match = UPS_TRACKING_PATTERN.search(cleaned)
    return match.group(0) if match else None


def normalize_fedex_tracking(value: Optional[str]) -> Optional[str]:
    """Оставляет только цифры; валидно если длина из FEDEX_TRACKING_LENGTHS."""
    if not value:
        return None

    digits = _NON_DIGITS.sub("", value)
    if len(digits) in FEDEX_TRACKING_LENGTHS:
        return digits
    return None


def _canonicalize(candidate: str) -> TrackingResult:
    ups = normalize_ups_tracking(candidate)
    if ups:
        return TrackingResult(tracking=ups, carrier=Carrier.UPS)

    fedex = normalize_fedex_tracking(candidate)
    if fedex:
        return TrackingResult(tracking=fedex, carrier=Carrier.FEDEX)

    return TrackingResult()


def extract_tracking(
    barcodes: Sequence[DetectedBarcode],
    ocr_lines: Sequence[OcrLine],
) -> TrackingResult:
    """
    Ищет трекинг-номер: сначала штрихкоды, потом OCR.

    Args:
        barcodes: Штрихкоды этикетки
        ocr_lines: Строки OCR

    Returns:
        TrackingResult (tracking=None, carrier=UNKNOWN если не найдено)
    """
    for barcode in barcodes:
        ups = normalize_ups_tracking(barcode.value)
        if ups:
            logger.debug(f"[TrackingExtractor] UPS в штрихкоде: {ups}")
            return TrackingResult(tracking=ups, carrier=Carrier.UPS, source="barcode")

    for barcode in barcodes:
        fedex = normalize_fedex_tracking(barcode.value)
        if fedex:
            logger.debug(f"[TrackingExtractor] FedEx в штрихкоде: {fedex}")
            return TrackingResult(tracking=fedex, carrier=Carrier.FEDEX, source="barcode")

    tracking_text = find_in_ocr(ocr_lines, TRACKING_LINE_PATTERNS)
    if tracking_text:
        result = _canonicalize(tracking_text)
        if result.tracking:
            result.source = "ocr"
            logger.debug(f"[TrackingExtractor] {result.carrier.value} в OCR: {result.tracking}")
            return result
        logger.trace(f"[TrackingExtractor] Строка TRACKING не распознана: '{tracking_text}'")

    return TrackingResult()
