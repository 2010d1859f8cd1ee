"""Оценка качества извлечения."""

from .confidence import score_confidence

__all__ = ["score_confidence"]
