"""
Настройки проекта Label Scan OCR.

Все пороги и веса парсера этикеток собраны здесь.
Часть значений можно переопределить через переменные окружения.
"""

import os
from pathlib import Path

# =============================================================================
# ПУТИ ПРОЕКТА
# =============================================================================
PROJECT_ROOT = Path(__file__).parent.parent
DATA_DIR = Path(os.getenv("LABEL_PARSER_DATA_DIR", str(PROJECT_ROOT / "data")))
INPUT_DIR = DATA_DIR / "input"
OUTPUT_DIR = DATA_DIR / "output"

# Файл с профилями строгости экранов (single_scan / batch / training)
SCAN_PROFILES_FILE = os.getenv(
    "LABEL_PARSER_SCAN_PROFILES",
    str(PROJECT_ROOT / "src" / "label_parsing" / "profiles" / "scan_profiles.yaml")
)

# Профиль по умолчанию для CLI
DEFAULT_SCAN_PROFILE = "single_scan"

# =============================================================================
# ЛОГИРОВАНИЕ
# =============================================================================
LOG_LEVEL = os.getenv("LABEL_PARSER_LOG_LEVEL", "INFO").upper()
LOG_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | "
    "<level>{level: <8}</level> | "
    "<level>{message}</level>"
)

# =============================================================================
# НАСТРОЙКИ ПАРСЕРА ЭТИКЕТОК
# =============================================================================
# Допустимые длины трекинга FedEx (только цифры)
FEDEX_TRACKING_LENGTHS = (12, 14, 15, 20, 22)

# Сколько последних строк OCR добавлять к нижнему штрихкоду
BOTTOM_OCR_TAIL_LINES = 5

# Минимальная длина PO / REF значений в паттернах
MIN_REFERENCE_LENGTH = 3

# =============================================================================
# ВЕСА CONFIDENCE
# =============================================================================
# Шкала откалибрована под порог 0.8 профиля training
TRACKING_WEIGHT = 1.0
PO_WEIGHT = 1.0
REF2_AS_PO_WEIGHT = 0.7     # REF2 иногда содержит PO
BOTTOM_CODE_WEIGHT = 0.8
REF1_WEIGHT = 0.5

MISSING_TRACKING_PENALTY = 0.3
MISSING_PO_PENALTY = 0.5

# =============================================================================
# ПОРОГИ ВАЛИДАЦИИ (на стороне экранов)
# =============================================================================
MIN_PO_LENGTH = 3
UNKNOWN_CARRIER_MIN_TRACKING_LENGTH = 8

# Confidence для скана только штрихкода (аппаратный сканер, без OCR)
BARCODE_ONLY_CONFIDENCE = 0.99


# =============================================================================
# ПРОВЕРКА КОНФИГУРАЦИИ
# =============================================================================
def validate_config():
    """Проверяет корректность конфигурации."""
    errors = []

    if not SCAN_PROFILES_FILE:
        errors.append(
            "LABEL_PARSER_SCAN_PROFILES не указан!\n"
            "Укажите путь к YAML с профилями через переменную окружения."
        )
    elif not Path(SCAN_PROFILES_FILE).exists():
        errors.append(f"Файл профилей не найден: {SCAN_PROFILES_FILE}")

    if LOG_LEVEL not in ("TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL"):
        errors.append(f"Неизвестный уровень логирования: {LOG_LEVEL}")

    if errors:
        raise ValueError("\n".join(errors))

    # Создаём директории если не существуют
    INPUT_DIR.mkdir(parents=True, exist_ok=True)
    OUTPUT_DIR.mkdir(parents=True, exist_ok=True)

    return True
