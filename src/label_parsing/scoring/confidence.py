"""
Confidence скана этикетки.

Кластеры значений:
- >= 0.8      хороший скан (есть трекинг и PO)
- 0.5 .. 0.8  частичный (одного из двух нет или он слабый)
- < 0.5       отказ (нет трекинга)

Веса фиксированы: порог 0.8 профиля training в scan_profiles.yaml
откалиброван именно под эту шкалу.
"""

from typing import Optional

from config.settings import (
    BOTTOM_CODE_WEIGHT,
    MISSING_PO_PENALTY,
    MISSING_TRACKING_PENALTY,
    PO_WEIGHT,
    REF1_WEIGHT,
    REF2_AS_PO_WEIGHT,
    TRACKING_WEIGHT,
)


def score_confidence(
    tracking: Optional[str],
    po_number: Optional[str],
    ref2: Optional[str],
    bottom_complete: bool,
    ref1: Optional[str],
) -> float:
    """
    Считает confidence по найденным полям.

    Args:
        tracking: Трекинг-номер
        po_number: PO (сырой или нормализованный)
        ref2: REF2 (сырой)
        bottom_complete: Найдены ли обе части нижнего кода
        ref1: REF1 (сырой)

    Returns:
        Значение в [0, 1]
    """
    score = 0.0
    factors = 0

    if tracking:
        score += TRACKING_WEIGHT
        factors += 1

    if po_number:
        score += PO_WEIGHT
        factors += 1
    elif ref2:
        score += REF2_AS_PO_WEIGHT
        factors += 1

    if bottom_complete:
        score += BOTTOM_CODE_WEIGHT
        factors += 1

    if ref1:
        score += REF1_WEIGHT
        factors += 1

    confidence = score / factors if factors > 0 else 0.0

    # Штрафы за отсутствие обязательных полей
    if not tracking:
        confidence *= MISSING_TRACKING_PENALTY
    if not po_number and not ref2:
        confidence *= MISSING_PO_PENALTY

    return confidence
