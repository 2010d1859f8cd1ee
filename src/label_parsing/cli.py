"""
CLI домена Label Parsing.

Использование:
    # Разобрать один захват
    label-parse path/to/capture.json

    # Разобрать все захваты директории, проверить по профилю batch
    label-parse path/to/captures --profile batch --output out/

    # Скан только штрихкода (без OCR)
    label-parse --barcode 1Z1Y798F0301700550
"""

import argparse
import json
import sys
from pathlib import Path
from typing import List, Optional

from loguru import logger

from config.settings import (
    DEFAULT_SCAN_PROFILE,
    INPUT_DIR,
    LOG_FORMAT,
    LOG_LEVEL,
    OUTPUT_DIR,
    validate_config,
)

from .domain.exceptions import LabelParsingError
from .infrastructure.file_manager import LabelFileManager
from .parser.label_parser import LabelParser
from .profiles import ScanProfile, ScanProfileLoader
from .validation import evaluate_scan


def configure_logging(level: str = LOG_LEVEL) -> None:
    """Перенастраивает loguru: один sink в stderr."""
    logger.remove()
    logger.add(sys.stderr, format=LOG_FORMAT, level=level.upper())


def parse_capture_file(
    capture_file: Path,
    output_dir: Optional[Path],
    profile: ScanProfile,
    parser: LabelParser,
    file_manager: LabelFileManager,
) -> bool:
    """
    Разбирает один файл захвата и сохраняет результат.

    Returns:
        True если успешно, False если файл не удалось загрузить/сохранить
    """
    try:
        capture = file_manager.load_capture(capture_file)
        parsed = parser.parse(capture.barcodes, capture.ocr_lines, capture.image_uri)
        evaluation = evaluate_scan(parsed, profile)

        result = {**parsed.to_dict(), "evaluation": evaluation.to_dict()}
        target_dir = output_dir or capture_file.parent
        saved = file_manager.save_parsed_result(result, capture.source_file or capture_file.stem, target_dir)

        print(
            f"  [{evaluation.verdict.value}] {capture_file.name}: "
            f"tracking={parsed.tracking or '-'} ({parsed.carrier.value}), "
            f"PO={parsed.po_number or '-'}, confidence={parsed.confidence:.2f}"
        )
        print(f"  [SAVED] {saved}")
        return True

    except LabelParsingError as e:
        logger.error(f"[CLI] {e}")
        print(f"  [ERROR] {capture_file.name}: {e.message}")
        return False


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Label Scan OCR - разбор транспортных этикеток")
    parser.add_argument("path", nargs="?", help="Файл захвата (JSON) или директория с захватами")
    parser.add_argument("--barcode", help="Разобрать одиночный штрихкод (без OCR)")
    parser.add_argument("--profile", default=DEFAULT_SCAN_PROFILE, help="Профиль проверки скана")
    parser.add_argument("--profiles-file", help="YAML с профилями (по умолчанию из настроек)")
    parser.add_argument("--output", help="Директория для результатов (по умолчанию рядом с захватом)")
    parser.add_argument("--log-level", default=LOG_LEVEL, help="Уровень логирования loguru")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Главная функция CLI. Возвращает код выхода."""
    args = build_arg_parser().parse_args(argv)
    configure_logging(args.log_level)

    try:
        loader = ScanProfileLoader(Path(args.profiles_file) if args.profiles_file else None)
        profile = loader.load(args.profile)
    except LabelParsingError as e:
        print(f"[ERROR] {e.message}")
        return 2

    parser = LabelParser()

    if args.barcode:
        parsed = parser.parse_barcode(args.barcode)
        evaluation = evaluate_scan(parsed, profile)
        print(json.dumps({**parsed.to_dict(), "evaluation": evaluation.to_dict()}, ensure_ascii=False, indent=2))
        return 0

    file_manager = LabelFileManager()
    output_dir = Path(args.output) if args.output else None

    if args.path:
        input_path = Path(args.path)
    else:
        # Без пути работаем с директориями данных проекта
        try:
            validate_config()
        except ValueError as e:
            print(f"[ERROR] {e}")
            return 2
        input_path = INPUT_DIR
        output_dir = output_dir or OUTPUT_DIR

    if input_path.is_file():
        capture_files = [input_path]
    elif input_path.is_dir():
        capture_files = file_manager.get_capture_files(input_path)
    else:
        print(f"[ERROR] Неверный путь: {input_path}")
        return 1

    if not capture_files:
        print(f"[WARNING] В {input_path} не найдены файлы захватов")
        return 0

    print(f"\n[PROCESSING] {len(capture_files)} захватов, профиль '{profile.name}'")

    success_count = 0
    for i, capture_file in enumerate(capture_files, 1):
        print(f"\n[{i}/{len(capture_files)}] {capture_file.name}")
        if parse_capture_file(capture_file, output_dir, profile, parser, file_manager):
            success_count += 1

    print(f"\n  ИТОГИ: {success_count}/{len(capture_files)} успешно обработано")
    return 0 if success_count == len(capture_files) else 1


if __name__ == "__main__":
    sys.exit(main())
