#!/usr/bin/env python3
"""
Точка входа для разбора захватов этикеток без установки пакета.

Использование:
    # Обработать все захваты из data/input/
    python scripts/parse_label.py

    # Обработать конкретный захват
    python scripts/parse_label.py path/to/capture.json --profile training
"""

import sys
from pathlib import Path

# Добавляем корень проекта в путь
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from src.label_parsing.cli import main


if __name__ == "__main__":
    sys.exit(main())
