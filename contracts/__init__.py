"""
Контракты DTO проекта Label Scan OCR.

Все контракты используют Pydantic v2 для валидации.

Контракты:
- Capture -> Parsing: DetectedBarcode, OcrLine, LabelCapture
- Parsing -> Screens: ParsedLabelPayload, LabelFlags

См. label_dto.py для детальной документации.
"""

from .label_dto import (
    BoundingBox,
    Carrier,
    DetectedBarcode,
    LabelCapture,
    LabelFlags,
    OcrLine,
    ParsedLabelPayload,
    Symbology,
)

__all__ = [
    # Capture -> Parsing
    "BoundingBox",
    "Symbology",
    "DetectedBarcode",
    "OcrLine",
    "LabelCapture",
    # Parsing -> Screens
    "Carrier",
    "LabelFlags",
    "ParsedLabelPayload",
]
