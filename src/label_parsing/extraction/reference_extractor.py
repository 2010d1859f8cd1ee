"""
Извлечение номера заказа (PO) и референсов REF1/REF2/REF3.

Работает только по строкам OCR, штрихкоды здесь не используются.
Каскад жадный: найденное значение экран показывает пользователю
для подтверждения.
"""

import re
from dataclasses import dataclass
from typing import List, Optional, Sequence

from loguru import logger

from config.settings import MIN_REFERENCE_LENGTH
from contracts.label_dto import OcrLine

from .common import find_in_ocr, nospace

_MIN = MIN_REFERENCE_LENGTH

# Порядок важен: от строгого "PO:" к самому свободному
PO_PATTERNS = (
    re.compile(rf"\bPO\s*:?\s*([A-Z0-9\-]{{{_MIN},}})", re.IGNORECASE),
    re.compile(rf"\b(?:PURCHASE\s*ORDER|P\.O\.|PO#)\s*:?\s*([A-Z0-9\-]{{{_MIN},}})", re.IGNORECASE),
    re.compile(rf"\bPO([A-Z0-9\-]{{{_MIN},}})", re.IGNORECASE),     # PO сразу за номером
    re.compile(rf":?\s*PO\s*:?\s*([A-Z0-9\-]{{{_MIN},}})", re.IGNORECASE),
)

# REF1 допускает префикс через '/', например "REF1: CI/82427365"
REF1_PATTERNS = (
    re.compile(rf"\bREF\s*1?\s*:?\s*([A-Z0-9/\-]{{{_MIN},}})", re.IGNORECASE),
)
REF2_PATTERNS = (
    re.compile(rf"\bREF\s*2\s*:?\s*([A-Z0-9\-]{{{_MIN},}})", re.IGNORECASE),
)
REF3_PATTERNS = (
    re.compile(rf"\bREF\s*3\s*:?\s*([A-Z0-9\-]{{{_MIN},}})", re.IGNORECASE),
)

# Отдельный поток "сфотографировать PO" (повторный захват только PO)
PO_RECAPTURE_PATTERNS = (
    re.compile(r"\bP\s*O\s*#?\s*[:\-]?\s*([A-Z0-9\-]{3,24})\b", re.IGNORECASE),
    re.compile(r"\bP\.\s*O\.\s*#?\s*[:\-]?\s*([A-Z0-9\-]{3,24})\b", re.IGNORECASE),
    re.compile(r"\bPURCHASE\s+ORDER\s*#?\s*[:\-]?\s*([A-Z0-9\-]{3,24})\b", re.IGNORECASE),
    re.compile(r"\bPO#\s*([A-Z0-9\-]{3,24})\b", re.IGNORECASE),
    re.compile(r"\bPO\s*[:\-]?\s*([A-Z0-9\-]{3,24})\b", re.IGNORECASE),
)
_PO_MARKER_LINE = re.compile(r"\b(P\s*O|P\.\s*O\.|PURCHASE\s+ORDER)\b")
_PO_MARKER_TOKEN = re.compile(r"^(PO|P\.?O\.?|PO#|P\s*O)$")
_PO_VALUE_TOKEN = re.compile(r"^[A-Z0-9][A-Z0-9\-]{2,23}$")
_NON_TOKEN_CHARS = re.compile(r"[^A-Z0-9#:\-]")


@dataclass
class ReferenceResult:
    """Сырые (не нормализованные) PO и референсы."""
    po_number: Optional[str] = None
    ref1: Optional[str] = None
    ref2: Optional[str] = None
    ref3: Optional[str] = None


def extract_references(ocr_lines: Sequence[OcrLine]) -> ReferenceResult:
    """
    Ищет PO и REF1/REF2/REF3 в строках OCR.

    Returns:
        ReferenceResult с сырыми значениями (пробелы схлопнуты)
    """
    result = ReferenceResult(
        po_number=find_in_ocr(ocr_lines, PO_PATTERNS),
        ref1=find_in_ocr(ocr_lines, REF1_PATTERNS),
        ref2=find_in_ocr(ocr_lines, REF2_PATTERNS),
        ref3=find_in_ocr(ocr_lines, REF3_PATTERNS),
    )
    logger.debug(
        f"[ReferenceExtractor] PO={result.po_number}, "
        f"REF1={result.ref1}, REF2={result.ref2}, REF3={result.ref3}"
    )
    return result


def split_ref1(ref1: Optional[str]) -> tuple[Optional[str], Optional[str]]:
    """
    Делит REF1 вида 'PREFIX/ID' на (prefix, id).

    Обе части нормализуются (верхний регистр, без пробелов и дефисов).
    Пустая часть -> None. Без '/' -> (None, None).
    """
    if not ref1 or "/" not in ref1:
        return None, None

    parts = ref1.split("/")
    prefix = nospace(parts[0])
    ref_id = nospace(parts[1])
    return prefix or None, ref_id or None


def extract_po_from_ocr(ocr_lines: Sequence[OcrLine]) -> Optional[str]:
    """
    Извлекает PO из отдельного снимка поля PO.

    Собирает кандидатов по всем паттернам, затем (если пусто) ищет
    токен в строках с упоминанием PO. Побеждает самый длинный.
    """
    text_lines = [line.text for line in ocr_lines if line.text]
    ocr_text = " ".join(text_lines).upper()

    candidates: List[str] = []
    for pattern in PO_RECAPTURE_PATTERNS:
        match = pattern.search(ocr_text)
        if match and match.group(1):
            candidates.append(match.group(1).upper())

    if not candidates:
        for raw_line in text_lines:
            line = raw_line.upper()
            if not _PO_MARKER_LINE.search(line):
                continue
            tokens = _NON_TOKEN_CHARS.sub(" ", line).split()
            token = next(
                (t for t in tokens if not _PO_MARKER_TOKEN.match(t) and _PO_VALUE_TOKEN.match(t)),
                None,
            )
            if token:
                candidates.append(token)

    unique = [c for c in dict.fromkeys(candidates) if len(c) >= MIN_REFERENCE_LENGTH]
    if not unique:
        logger.info("[ReferenceExtractor] PO на снимке не найден")
        return None

    # sorted стабилен: при равной длине остаётся порядок паттернов
    best = sorted(unique, key=len, reverse=True)[0]
    logger.info(f"[ReferenceExtractor] PO со снимка: {best} (кандидатов: {len(unique)})")
    return best
