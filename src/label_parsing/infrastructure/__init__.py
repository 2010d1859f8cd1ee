"""Инфраструктура домена Label Parsing (файлы захватов и результатов)."""

from .file_manager import LabelFileManager

__all__ = ["LabelFileManager"]
