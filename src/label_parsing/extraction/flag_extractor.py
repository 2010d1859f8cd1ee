"""Маркеры этикетки: частичная отгрузка и линия сортировки."""

import re
from typing import Sequence

from contracts.label_dto import LabelFlags, OcrLine

from .common import join_lines

PARTIAL_PATTERN = re.compile(r"\bPARTIAL\b", re.IGNORECASE)
LANE_PATTERN = re.compile(r"\bLANE\s*[-–]?\s*([A-Z0-9])\b", re.IGNORECASE)


def extract_flags(ocr_lines: Sequence[OcrLine]) -> LabelFlags:
    all_text = join_lines(ocr_lines)
    lane_match = LANE_PATTERN.search(all_text)
    return LabelFlags(
        # True или отсутствует, False не выставляется
        partial=True if PARTIAL_PATTERN.search(all_text) else None,
        lane=lane_match.group(1).upper() if lane_match else None,
    )
