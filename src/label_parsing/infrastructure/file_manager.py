"""
Менеджер файлов для домена Label Parsing.

Захваты этикеток (capture JSON) читаются отсюда, результаты
парсинга пишутся сюда же. Сам парсер с файлами не работает.
"""

import json
from pathlib import Path
from typing import Any, Dict, List

from loguru import logger
from pydantic import ValidationError

from contracts.label_dto import LabelCapture

from ..domain.exceptions import (
    LabelDataFormatError,
    LabelFileNotFoundError,
    LabelFileWriteError,
)

# Имя файла результата рядом с захватом
PARSED_RESULT_SUFFIX = "_parsed.json"


class LabelFileManager:
    """Менеджер файлов для домена Label Parsing."""

    def save_json(self, data: Dict[str, Any], file_path: Path) -> Path:
        """
        Сохраняет данные в JSON файл.

        Raises:
            LabelFileWriteError: Если не удалось сохранить файл
        """
        try:
            file_path.parent.mkdir(parents=True, exist_ok=True)

            with open(file_path, 'w', encoding='utf-8') as f:
                json.dump(data, f, ensure_ascii=False, indent=2)

            logger.debug(f"[LabelFiles] Файл сохранен: {file_path}")
            return file_path

        except (OSError, TypeError) as e:
            raise LabelFileWriteError(
                message=f"Не удалось сохранить JSON файл: {file_path}",
                component="LabelFileManager",
                original_error=e
            )

    def load_json(self, file_path: Path) -> Any:
        """
        Загружает данные из JSON файла.

        Raises:
            LabelFileNotFoundError: Если файл не существует
            LabelFileWriteError: Если не удалось прочитать/разобрать файл
        """
        if not file_path.exists():
            raise LabelFileNotFoundError(
                message=f"Файл не найден: {file_path}",
                component="LabelFileManager"
            )

        try:
            with open(file_path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise LabelFileWriteError(
                message=f"Не удалось загрузить JSON файл: {file_path}",
                component="LabelFileManager",
                original_error=e
            )

        logger.debug(f"[LabelFiles] Файл загружен: {file_path}")
        return data

    def load_capture(self, file_path: Path) -> LabelCapture:
        """
        Загружает захват этикетки.

        Формат: {"rawBarcodes": [...], "ocrLines": [...], "imageUri": "..."}
        (snake_case ключи barcodes / ocr_lines / image_uri тоже принимаются).

        Raises:
            LabelDataFormatError: Если структура файла неожиданная
        """
        data = self.load_json(file_path)
        if not isinstance(data, dict):
            raise LabelDataFormatError(
                message=f"Ожидался JSON объект, получен {type(data).__name__}: {file_path}",
                component="LabelFileManager"
            )

        try:
            capture = LabelCapture.model_validate({"source_file": file_path.stem, **data})
        except ValidationError as e:
            raise LabelDataFormatError(
                message=f"Некорректный формат захвата: {file_path}",
                component="LabelFileManager",
                original_error=e
            )

        logger.debug(
            f"[LabelFiles] Захват {file_path.name}: "
            f"{len(capture.barcodes)} штрихкодов, {len(capture.ocr_lines)} строк OCR"
        )
        return capture

    def save_parsed_result(self, result_data: Dict[str, Any], source_file: str, output_dir: Path) -> Path:
        """Сохраняет результат парсинга как <source_file>_parsed.json."""
        return self.save_json(result_data, output_dir / f"{source_file}{PARSED_RESULT_SUFFIX}")

    def get_capture_files(self, directory_path: Path) -> List[Path]:
        """
        Список файлов захватов в директории (рекурсивно).

        Собственные результаты (*_parsed.json) пропускаются.
        """
        if not directory_path.exists():
            return []

        return sorted(
            p for p in directory_path.rglob('*.json')
            if not p.name.endswith(PARSED_RESULT_SUFFIX)
        )
