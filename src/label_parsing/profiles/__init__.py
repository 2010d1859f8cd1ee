"""Профили строгости экранов сканирования (YAML)."""

from .profile_loader import ScanProfile, ScanProfileLoader

__all__ = ["ScanProfile", "ScanProfileLoader"]
