"""
Извлечение нижнего кода коробки (base id + индекс коробки).

Маленький CODE_128 + цифры внизу этикетки. Поставщики печатают его
по-разному: '87355595.001', '08698 0656 001' или россыпью цифр,
поэтому три уровня fallback.
"""

import re
from dataclasses import dataclass
from typing import Optional, Sequence

from loguru import logger

from config.settings import BOTTOM_OCR_TAIL_LINES
from contracts.label_dto import DetectedBarcode, OcrLine, Symbology

from .common import join_lines

DOTTED_PATTERN = re.compile(r"\b(\d{7,})\.(\d{3})\b")
SPACED_PATTERN = re.compile(r"\b(\d{4,})\s+(\d{4,})\s+(\d{3})\b")
_NUMBER_TOKEN = re.compile(r"\d+")


@dataclass
class BottomCodeResult:
    """Результат разбора нижнего кода."""
    package_base_id: Optional[str] = None
    carton_index: Optional[str] = None

    @property
    def is_complete(self) -> bool:
        return bool(self.package_base_id and self.carton_index)

    @property
    def bottom_raw(self) -> Optional[str]:
        """'<base>.<carton>' только если найдены обе части."""
        if not self.is_complete:
            return None
        return f"{self.package_base_id}.{self.carton_index}"


def pick_lowest_code128(barcodes: Sequence[DetectedBarcode]) -> Optional[DetectedBarcode]:
    """
    Самый нижний CODE_128 на изображении.

    При равной позиции выигрывает первый по порядку.
    """
    code128s = [b for b in barcodes if b.symbology == Symbology.CODE_128]
    if not code128s:
        return None
    return max(code128s, key=lambda b: b.sort_y)


def parse_bottom_human(text: str) -> BottomCodeResult:
    """
    Разбирает строку с кодом коробки.

    1. '87355595.001'    -> ('87355595', '001')
    2. '08698 0656 001'  -> ('086980656', '001')
    3. первый токен >= 7 цифр + первый токен ровно из 3 цифр
    """
    if not text:
        return BottomCodeResult()

    match = DOTTED_PATTERN.search(text)
    if match:
        return BottomCodeResult(package_base_id=match.group(1), carton_index=match.group(2))

    match = SPACED_PATTERN.search(text)
    if match:
        return BottomCodeResult(
            package_base_id=match.group(1) + match.group(2),
            carton_index=match.group(3),
        )

    numbers = _NUMBER_TOKEN.findall(text)
    base_id = next((n for n in numbers if len(n) >= 7), None)
    carton = next((n for n in numbers if len(n) == 3), None)
    if base_id and carton:
        return BottomCodeResult(package_base_id=base_id, carton_index=carton)

    return BottomCodeResult()


def extract_bottom_code(
    barcodes: Sequence[DetectedBarcode],
    ocr_lines: Sequence[OcrLine],
) -> BottomCodeResult:
    """Ищет код коробки в нижнем штрихкоде и последних строках OCR."""
    lowest = pick_lowest_code128(barcodes)
    tail = join_lines(ocr_lines[-BOTTOM_OCR_TAIL_LINES:])
    bottom_text = f"{lowest.value if lowest else ''} {tail}"

    result = parse_bottom_human(bottom_text)
    logger.debug(
        f"[BottomCodeExtractor] text='{bottom_text[:50]}', "
        f"base={result.package_base_id}, carton={result.carton_index}"
    )
    return result
