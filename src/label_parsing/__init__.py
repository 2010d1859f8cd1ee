"""
Домен Label Parsing: разбор фото транспортной этикетки.

Вход: штрихкоды + строки OCR (contracts.DetectedBarcode / contracts.OcrLine)
Выход: contracts.ParsedLabelPayload

Компоненты:
- extraction: трекинг, PO/REF, нижний код коробки, флаги
- scoring: confidence
- parser: parse_label (точка входа, никогда не бросает исключений)
- validation + profiles: проверка скана по профилю экрана
- infrastructure: файлы захватов
"""

from src.label_parsing.parser import LabelParser, parse_barcode_only, parse_label
from src.label_parsing.extraction import extract_po_from_ocr
from src.label_parsing.profiles import ScanProfile, ScanProfileLoader
from src.label_parsing.validation import ScanEvaluation, ScanVerdict, evaluate_scan

__all__ = [
    # Parser
    "LabelParser",
    "parse_label",
    "parse_barcode_only",
    "extract_po_from_ocr",
    # Validation
    "ScanProfile",
    "ScanProfileLoader",
    "ScanEvaluation",
    "ScanVerdict",
    "evaluate_scan",
]
