"""Точка входа парсинга этикеток."""

from .label_parser import LabelParser, parse_barcode_only, parse_label

__all__ = ["LabelParser", "parse_label", "parse_barcode_only"]
