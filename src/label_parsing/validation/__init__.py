"""Проверка скана по профилю экрана."""

from .scan_validator import (
    ScanEvaluation,
    ScanVerdict,
    evaluate_scan,
    has_valid_po,
    has_valid_tracking,
    sample_status,
)

__all__ = [
    "ScanEvaluation",
    "ScanVerdict",
    "evaluate_scan",
    "has_valid_po",
    "has_valid_tracking",
    "sample_status",
]
