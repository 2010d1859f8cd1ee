"""
Общие помощники для извлечения полей из текста этикетки.

Каскад паттернов: упорядоченный список regex, первый успешный
выигрывает. Новый формат этикетки = новый элемент списка.
"""

import re
from typing import Optional, Sequence

from contracts.label_dto import OcrLine

_DASHES_AND_SPACES = re.compile(r"[\s\-]+")
_WHITESPACE = re.compile(r"\s+")


def upper(s: Optional[str]) -> str:
    return (s or "").upper()


def nospace(s: Optional[str]) -> str:
    """Верхний регистр без пробелов и дефисов: 'so-152 023' -> 'SO152023'."""
    return _DASHES_AND_SPACES.sub("", upper(s))


def clean_spaces(s: Optional[str]) -> str:
    """Схлопывает пробелы и обрезает края."""
    return _WHITESPACE.sub(" ", s or "").strip()


def join_lines(lines: Sequence[OcrLine]) -> str:
    """Весь текст OCR одной строкой (через пробел)."""
    return " ".join(line.text for line in lines)


def find_in_ocr(lines: Sequence[OcrLine], patterns: Sequence[re.Pattern]) -> Optional[str]:
    """
    Ищет первое совпадение каскада паттернов в строках OCR.

    Каждый паттерн сначала пробуется построчно, затем по всему тексту,
    и только потом берётся следующий паттерн.

    Args:
        lines: Строки OCR
        patterns: Скомпилированные паттерны с одной группой захвата

    Returns:
        Первая непустая группа (с нормализованными пробелами) или None
    """
    all_text = join_lines(lines)

    for pattern in patterns:
        for line in lines:
            match = pattern.search(line.text)
            if match and match.group(1):
                return clean_spaces(match.group(1))

        match = pattern.search(all_text)
        if match and match.group(1):
            return clean_spaces(match.group(1))

    return None
