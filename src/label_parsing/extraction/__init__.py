"""
Экстракторы полей этикетки.

Чистые функции над списками штрихкодов и строк OCR.
"""

from .bottom_code_extractor import (
    BottomCodeResult,
    extract_bottom_code,
    parse_bottom_human,
    pick_lowest_code128,
)
from .flag_extractor import extract_flags
from .reference_extractor import (
    ReferenceResult,
    extract_po_from_ocr,
    extract_references,
    split_ref1,
)
from .tracking_extractor import (
    TrackingResult,
    extract_tracking,
    normalize_fedex_tracking,
    normalize_ups_tracking,
)

__all__ = [
    # Tracking
    "TrackingResult",
    "extract_tracking",
    "normalize_ups_tracking",
    "normalize_fedex_tracking",
    # PO / REF
    "ReferenceResult",
    "extract_references",
    "extract_po_from_ocr",
    "split_ref1",
    # Bottom code
    "BottomCodeResult",
    "extract_bottom_code",
    "parse_bottom_human",
    "pick_lowest_code128",
    # Flags
    "extract_flags",
]
