"""
DTO контракт: Capture (камера + OCR) -> Label Parsing -> экраны сканирования

Вход: штрихкоды и строки OCR одной фотографии этикетки.
Выход: ParsedLabelPayload, структура, которую экраны показывают пользователю.

ВАЖНО: Имена полей в JSON (camelCase) совпадают с форматом мобильного
приложения. В Python используются snake_case имена, оба варианта принимаются.
"""

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Symbology(str, Enum):
    """Тип штрихкода / 2D-кода."""

    CODE_128 = "CODE_128"
    CODE_39 = "CODE_39"
    QR = "QR"
    PDF_417 = "PDF_417"
    DATAMATRIX = "DATAMATRIX"
    EAN_13 = "EAN_13"
    UPC_A = "UPC_A"


class Carrier(str, Enum):
    """Перевозчик, определённый по форме трекинг-номера."""

    UPS = "UPS"
    FEDEX = "FEDEX"
    UNKNOWN = "UNKNOWN"


class BoundingBox(BaseModel):
    """Координаты на изображении."""

    x: float = 0.0
    y: float = 0.0
    w: float = 0.0
    h: float = 0.0

    model_config = ConfigDict(frozen=True)


class DetectedBarcode(BaseModel):
    """
    Один штрихкод, прочитанный с этикетки.

    Позиция нужна только для сортировки по вертикали
    (самый нижний = физически внизу этикетки).
    """

    value: str = Field(..., description="Декодированное содержимое")
    symbology: Symbology = Field(..., description="Тип штрихкода")
    bounding_box: BoundingBox | None = Field(None, alias="bbox", description="Рамка на изображении")
    vertical_center: float | None = Field(None, alias="yCenter", description="Центр по Y")

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    @field_validator("value", mode="before")
    @classmethod
    def coerce_value(cls, v: Any) -> Any:
        # Числовые штрихкоды иногда приходят из JSON как int
        if isinstance(v, (int, float)) and not isinstance(v, bool):
            return str(v)
        return v

    @field_validator("symbology", mode="before")
    @classmethod
    def normalize_symbology(cls, v: Any) -> Any:
        if isinstance(v, str):
            return v.strip().upper()
        return v

    @property
    def sort_y(self) -> float:
        """Ключ сортировки по вертикали: yCenter, затем bbox.y, затем 0."""
        if self.vertical_center is not None:
            return self.vertical_center
        if self.bounding_box is not None:
            return self.bounding_box.y
        return 0.0


class OcrLine(BaseModel):
    """Одна строка распознанного текста."""

    text: str = Field(..., description="Текст строки")
    confidence: float | None = Field(None, alias="conf", description="Уверенность OCR")
    bounding_box: BoundingBox | None = Field(None, alias="bbox", description="Рамка строки")

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    @field_validator("text", mode="before")
    @classmethod
    def coerce_text(cls, v: Any) -> Any:
        if isinstance(v, (int, float)) and not isinstance(v, bool):
            return str(v)
        return v


class LabelFlags(BaseModel):
    """Вспомогательные маркеры этикетки."""

    partial: bool | None = Field(None, description="Частичная отгрузка (PARTIAL)")
    lane: str | None = Field(None, description="Буква линии (LANE X)")

    model_config = ConfigDict(frozen=True)


class ParsedLabelPayload(BaseModel):
    """
    Результат парсинга этикетки.

    Value object: парсер его не сохраняет, экраны решают
    принять / исправить / отклонить скан по полям и confidence.
    """

    carrier: Carrier = Field(Carrier.UNKNOWN, description="UPS / FEDEX / UNKNOWN")
    tracking: str | None = Field(None, description="Канонический трекинг-номер")
    po_number: str | None = Field(None, alias="poNumber", description="Номер заказа (PO)")

    reference: str | None = Field(None, description="REF1 без пробелов и дефисов")
    ref1_prefix: str | None = Field(None, alias="ref1Prefix", description="Часть REF1 до '/'")
    ref1_id: str | None = Field(None, alias="ref1Id", description="Часть REF1 после '/'")
    ref2: str | None = Field(None, description="REF2 без пробелов и дефисов")

    bottom_raw: str | None = Field(None, alias="bottomRaw", description="'<base>.<carton>'")
    package_base_id: str | None = Field(None, alias="packageBaseId")
    carton_index: str | None = Field(None, alias="cartonIndex")

    flags: LabelFlags = Field(default_factory=LabelFlags)
    confidence: float = Field(0.0, ge=0.0, le=1.0, description="Качество извлечения")

    # Эхо входных данных (для отображения и отладки)
    raw_barcodes: list[DetectedBarcode] = Field(default_factory=list, alias="rawBarcodes")
    ocr_lines: list[OcrLine] = Field(default_factory=list, alias="ocrLines")
    image_uri: str | None = Field(None, alias="imageUri")

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    def to_dict(self) -> dict[str, Any]:
        """JSON-совместимый словарь в формате мобильного приложения (camelCase)."""
        return self.model_dump(mode="json", by_alias=True)


class LabelCapture(BaseModel):
    """
    Сырые данные одного захвата этикетки (файл capture JSON).

    Элементы списков не валидируются здесь, это делает парсер,
    пропуская битые записи вместо падения.
    """

    barcodes: list[Any] = Field(default_factory=list, alias="rawBarcodes")
    ocr_lines: list[Any] = Field(default_factory=list, alias="ocrLines")
    image_uri: str | None = Field(None, alias="imageUri")
    source_file: str | None = Field(None, description="Имя файла, из которого загружен захват")

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    @field_validator("barcodes", "ocr_lines", mode="before")
    @classmethod
    def none_as_empty(cls, v: Any) -> Any:
        return [] if v is None else v
