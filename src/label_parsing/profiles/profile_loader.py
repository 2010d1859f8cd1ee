"""
Загрузчик профилей сканирования.

ЦКП: ScanProfile для экрана (single_scan / batch / training).

Пороги приёмки задают экраны, а не парсер: разные экраны
применяют разную строгость. Профили лежат в YAML, новый экран =
новая секция в scan_profiles.yaml, 0 изменений в коде.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import ClassVar, Dict, Optional

import yaml
from loguru import logger

from config.settings import (
    MIN_PO_LENGTH,
    SCAN_PROFILES_FILE,
    UNKNOWN_CARRIER_MIN_TRACKING_LENGTH,
)

from ..domain.exceptions import ScanProfileConfigurationError

MISSING_PO_ACTIONS = ("prompt", "reject")


@dataclass(frozen=True)
class ScanProfile:
    """Строгость проверки скана для одного экрана."""
    name: str
    missing_po_action: str = "prompt"
    min_po_length: int = MIN_PO_LENGTH
    unknown_carrier_min_length: int = UNKNOWN_CARRIER_MIN_TRACKING_LENGTH
    verify_threshold: Optional[float] = None
    description: str = ""


class ScanProfileLoader:
    """
    Загружает профили из YAML с кешированием по пути файла.
    """

    _cache: ClassVar[Dict[str, Dict[str, ScanProfile]]] = {}

    def __init__(self, profiles_file: Optional[Path] = None):
        self.profiles_file = Path(profiles_file or SCAN_PROFILES_FILE)

    def load_all(self) -> Dict[str, ScanProfile]:
        """Все профили файла."""
        key = str(self.profiles_file)
        if key not in self._cache:
            self._cache[key] = self._load_yaml(self.profiles_file)
            logger.debug(f"[ScanProfileLoader] Загружено {len(self._cache[key])} профилей из {key}")
        return self._cache[key]

    def load(self, name: str) -> ScanProfile:
        """
        Профиль по имени.

        Raises:
            ScanProfileConfigurationError: Профиль не найден или файл некорректен
        """
        profiles = self.load_all()
        if name not in profiles:
            raise ScanProfileConfigurationError(
                message=f"Профиль '{name}' не найден (доступны: {', '.join(sorted(profiles))})",
                component="ScanProfileLoader",
            )
        return profiles[name]

    @classmethod
    def clear_cache(cls) -> None:
        cls._cache.clear()

    @staticmethod
    def _load_yaml(profiles_file: Path) -> Dict[str, ScanProfile]:
        if not profiles_file.exists():
            raise ScanProfileConfigurationError(
                message=f"Файл профилей не найден: {profiles_file}",
                component="ScanProfileLoader",
            )

        try:
            with open(profiles_file, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError) as e:
            raise ScanProfileConfigurationError(
                message=f"Не удалось прочитать файл профилей: {profiles_file}",
                component="ScanProfileLoader",
                original_error=e,
            )

        if not isinstance(data, dict):
            raise ScanProfileConfigurationError(
                message=f"Ожидался YAML словарь, получен {type(data).__name__}: {profiles_file}",
                component="ScanProfileLoader",
            )

        raw_profiles = data.get("profiles")
        if not isinstance(raw_profiles, dict) or not raw_profiles:
            raise ScanProfileConfigurationError(
                message=f"Отсутствует секция profiles в {profiles_file}",
                component="ScanProfileLoader",
            )

        defaults = data.get("defaults") or {}
        if not isinstance(defaults, dict):
            raise ScanProfileConfigurationError(
                message=f"Секция defaults должна быть словарём в {profiles_file}",
                component="ScanProfileLoader",
            )

        profiles: Dict[str, ScanProfile] = {}

        for name, section in raw_profiles.items():
            section = section or {}
            if not isinstance(section, dict):
                raise ScanProfileConfigurationError(
                    message=f"Профиль '{name}' должен быть словарём",
                    component="ScanProfileLoader",
                )

            merged = {**defaults, **section}
            action = merged.get("missing_po_action", "prompt")
            if action not in MISSING_PO_ACTIONS:
                raise ScanProfileConfigurationError(
                    message=f"Неизвестный missing_po_action '{action}' в профиле '{name}'",
                    component="ScanProfileLoader",
                )

            threshold = merged.get("verify_threshold")
            try:
                profiles[name] = ScanProfile(
                    name=name,
                    missing_po_action=action,
                    min_po_length=int(merged.get("min_po_length", MIN_PO_LENGTH)),
                    unknown_carrier_min_length=int(
                        merged.get("unknown_carrier_min_length", UNKNOWN_CARRIER_MIN_TRACKING_LENGTH)
                    ),
                    verify_threshold=float(threshold) if threshold is not None else None,
                    description=str(merged.get("description", "")),
                )
            except (TypeError, ValueError) as e:
                raise ScanProfileConfigurationError(
                    message=f"Некорректные значения в профиле '{name}'",
                    component="ScanProfileLoader",
                    original_error=e,
                )

        return profiles
