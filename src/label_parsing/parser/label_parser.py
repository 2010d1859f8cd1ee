"""
Парсер этикеток (точка входа домена Label Parsing).

Порядок:
1. Трекинг (штрихкоды -> OCR)
2. PO и референсы
3. Нижний код коробки
4. Флаги
5. Confidence

Парсер никогда не бросает исключений. Отсутствие данных = пустые
поля + низкий confidence.
"""

import re
from collections.abc import Iterable as IterableABC
from typing import Any, Dict, Iterable, List, Optional, Sequence, Type, TypeVar

from loguru import logger
from pydantic import BaseModel, ValidationError

from config.settings import BARCODE_ONLY_CONFIDENCE
from contracts.label_dto import (
    Carrier,
    DetectedBarcode,
    OcrLine,
    ParsedLabelPayload,
)

from ..extraction import (
    extract_bottom_code,
    extract_flags,
    extract_references,
    extract_tracking,
    split_ref1,
)
from ..extraction.common import nospace
from ..scoring import score_confidence

# Строгие форматы для скана только штрихкода (без канонизации), только ASCII
STRICT_UPS = re.compile(r"1Z[A-Z0-9]{16}", re.IGNORECASE | re.ASCII)
STRICT_FEDEX = re.compile(r"[0-9]{12,22}")

# Обязательные и вспомогательные ключи записей (имя поля и alias)
_BARCODE_REQUIRED = ("value", "symbology")
_BARCODE_OPTIONAL = ("bbox", "bounding_box", "yCenter", "vertical_center")
_OCR_REQUIRED = ("text",)
_OCR_OPTIONAL = ("conf", "confidence", "bbox", "bounding_box")

ModelT = TypeVar("ModelT", bound=BaseModel)


def _as_items(collection: Any, name: str) -> List[Any]:
    """None и не-коллекции -> пустой список."""
    if collection is None:
        return []
    if isinstance(collection, (str, bytes, dict)) or not isinstance(collection, IterableABC):
        logger.warning(f"[LabelParser] {name}: ожидался список, получен {type(collection).__name__}")
        return []
    return list(collection)


def _salvage(
    model: Type[ModelT],
    item: Any,
    required: Sequence[str],
    optional: Sequence[str],
) -> Optional[ModelT]:
    """
    Собирает модель только из обязательных полей и тех
    вспомогательных, которые проходят валидацию.
    """
    if not isinstance(item, dict):
        return None

    data: Dict[str, Any] = {key: item[key] for key in required if key in item}
    try:
        model.model_validate(data)
    except ValidationError:
        return None

    for key in optional:
        if key not in item:
            continue
        try:
            model.model_validate({**data, key: item[key]})
        except ValidationError:
            continue
        data[key] = item[key]

    return model.model_validate(data)


def _coerce_barcodes(barcodes: Any) -> List[DetectedBarcode]:
    """Приводит вход к списку DetectedBarcode, битые записи пропускаются."""
    result: List[DetectedBarcode] = []
    for i, item in enumerate(_as_items(barcodes, "barcodes")):
        if isinstance(item, DetectedBarcode):
            result.append(item)
            continue
        try:
            result.append(DetectedBarcode.model_validate(item))
        except ValidationError as e:
            salvaged = _salvage(DetectedBarcode, item, _BARCODE_REQUIRED, _BARCODE_OPTIONAL)
            if salvaged is not None:
                logger.warning(f"[LabelParser] Штрихкод #{i}: некорректные поля позиции отброшены")
                result.append(salvaged)
            else:
                logger.warning(f"[LabelParser] Штрихкод #{i} пропущен: {e.error_count()} ошибок валидации")
    return result


def _coerce_ocr_lines(ocr_lines: Any) -> List[OcrLine]:
    """Приводит вход к списку OcrLine; принимает также просто строки."""
    result: List[OcrLine] = []
    for i, item in enumerate(_as_items(ocr_lines, "ocr_lines")):
        if isinstance(item, OcrLine):
            result.append(item)
            continue
        if isinstance(item, str):
            result.append(OcrLine(text=item))
            continue
        try:
            result.append(OcrLine.model_validate(item))
        except ValidationError as e:
            salvaged = _salvage(OcrLine, item, _OCR_REQUIRED, _OCR_OPTIONAL)
            if salvaged is not None:
                logger.warning(f"[LabelParser] Строка OCR #{i}: некорректные поля conf/bbox отброшены")
                result.append(salvaged)
            else:
                logger.warning(f"[LabelParser] Строка OCR #{i} пропущена: {e.error_count()} ошибок валидации")
    return result


def parse_label(
    barcodes: Optional[Iterable[Any]],
    ocr_lines: Optional[Iterable[Any]],
    image_uri: Optional[str] = None,
) -> ParsedLabelPayload:
    """
    Разбирает этикетку по штрихкодам и строкам OCR.

    Args:
        barcodes: Штрихкоды (DetectedBarcode или dict); None = пусто
        ocr_lines: Строки OCR (OcrLine, dict или str); None = пусто
        image_uri: Ссылка на изображение, только возвращается обратно

    Returns:
        ParsedLabelPayload (всегда, без исключений)
    """
    raw_barcodes = _coerce_barcodes(barcodes)
    lines = _coerce_ocr_lines(ocr_lines)

    logger.debug(
        f"[LabelParser] Вход: {len(raw_barcodes)} штрихкодов "
        f"{[(b.value, b.symbology.value) for b in raw_barcodes]}, {len(lines)} строк OCR"
    )

    # 1. Трекинг
    tracking = extract_tracking(raw_barcodes, lines)
    if not tracking.tracking:
        logger.warning("[LabelParser] Трекинг не найден")

    # 2. PO и референсы
    refs = extract_references(lines)
    ref1_prefix, ref1_id = split_ref1(refs.ref1)

    # 3. Нижний код коробки
    bottom = extract_bottom_code(raw_barcodes, lines)

    # 4. Флаги
    flags = extract_flags(lines)

    # 5. Confidence
    confidence = score_confidence(
        tracking=tracking.tracking,
        po_number=refs.po_number,
        ref2=refs.ref2,
        bottom_complete=bottom.is_complete,
        ref1=refs.ref1,
    )

    result = ParsedLabelPayload(
        carrier=tracking.carrier,
        tracking=tracking.tracking,
        po_number=nospace(refs.po_number) or None,
        reference=nospace(refs.ref1) or None,
        ref1_prefix=ref1_prefix,
        ref1_id=ref1_id,
        ref2=nospace(refs.ref2) or None,
        bottom_raw=bottom.bottom_raw,
        package_base_id=bottom.package_base_id,
        carton_index=bottom.carton_index,
        flags=flags,
        confidence=confidence,
        raw_barcodes=raw_barcodes,
        ocr_lines=lines,
        image_uri=image_uri,
    )

    logger.info(
        f"[LabelParser] Результат: carrier={result.carrier.value}, tracking={result.tracking}, "
        f"PO={result.po_number}, confidence={result.confidence:.3f}"
    )
    return result


def parse_barcode_only(data: Optional[str], image_uri: Optional[str] = None) -> ParsedLabelPayload:
    """
    Результат для скана одного штрихкода (аппаратный сканер, без OCR).

    Перевозчик определяется строгими форматами (вся строка целиком),
    PO вводится пользователем отдельно. Суффикс сканера (CR/LF, пробелы)
    по краям отрезается.
    """
    value = str(data).strip() if data else ""
    if not value:
        return ParsedLabelPayload(image_uri=image_uri)

    if STRICT_UPS.fullmatch(value):
        carrier = Carrier.UPS
    elif STRICT_FEDEX.fullmatch(value):
        carrier = Carrier.FEDEX
    else:
        carrier = Carrier.UNKNOWN

    logger.info(f"[LabelParser] Скан штрихкода: {value} ({carrier.value})")
    return ParsedLabelPayload(
        carrier=carrier,
        tracking=value.upper(),
        confidence=BARCODE_ONLY_CONFIDENCE,
        image_uri=image_uri,
    )


class LabelParser:
    """
    Обёртка над parse_label для внедрения зависимостей.

    Экраны и CLI держат экземпляр и вызывают parse().
    """

    def parse(
        self,
        barcodes: Optional[Iterable[Any]],
        ocr_lines: Optional[Iterable[Any]],
        image_uri: Optional[str] = None,
    ) -> ParsedLabelPayload:
        return parse_label(barcodes, ocr_lines, image_uri)

    def parse_barcode(self, data: Optional[str], image_uri: Optional[str] = None) -> ParsedLabelPayload:
        return parse_barcode_only(data, image_uri)
