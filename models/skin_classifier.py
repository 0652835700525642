# models/skin_classifier.py
"""Skin-type classification and skincare recommendations"""

from enum import Enum
from typing import Dict, List

from models.skin_metrics import SkinMetrics

# Classification thresholds (evaluated in order, first match wins)
SENSITIVE_REDNESS = 0.6
OILY_OILINESS = 0.5
DRY_BRIGHTNESS = 0.4
COMBINATION_CENTER = 0.5
COMBINATION_BAND = 0.1


class SkinType(str, Enum):
    """Skin-type labels"""
    SENSITIVE = "Sensitive"
    OILY = "Oily"
    DRY = "Dry"
    COMBINATION = "Combination"
    NORMAL = "Normal"


RECOMMENDATIONS: Dict[SkinType, List[str]] = {
    SkinType.SENSITIVE: [
        "Use gentle, fragrance-free products",
        "Avoid harsh exfoliants",
        "Always patch test new products",
        "Use sunscreen daily",
    ],
    SkinType.OILY: [
        "Use oil-free products",
        "Try salicylic acid cleansers",
        "Don't skip moisturizer",
        "Use clay masks weekly",
    ],
    SkinType.DRY: [
        "Use cream-based cleansers",
        "Apply moisturizer to damp skin",
        "Consider using facial oils",
        "Avoid hot water when washing",
    ],
    SkinType.COMBINATION: [
        "Use different products for different areas",
        "Focus on balance",
        "Try gel-based moisturizers",
        "Use mild cleansers",
    ],
    SkinType.NORMAL: [
        "Maintain current routine",
        "Use sunscreen daily",
        "Stay hydrated",
        "Regular gentle exfoliation",
    ],
}


def classify_skin_type(brightness: float, redness: float, oiliness: float) -> SkinType:
    """
    Map averaged skin metrics to a skin-type label

    Rule order matters: oiliness in (0.4, 0.5] satisfies the Combination band
    but anything above 0.5 is caught by Oily first.
    """
    if redness > SENSITIVE_REDNESS:
        return SkinType.SENSITIVE
    if oiliness > OILY_OILINESS:
        return SkinType.OILY
    if brightness < DRY_BRIGHTNESS:
        return SkinType.DRY
    if abs(oiliness - COMBINATION_CENTER) < COMBINATION_BAND:
        return SkinType.COMBINATION
    return SkinType.NORMAL


def classify_metrics(metrics: SkinMetrics) -> SkinType:
    return classify_skin_type(metrics.brightness, metrics.redness, metrics.oiliness)


def get_recommendations(skin_type: SkinType) -> List[str]:
    """Fixed recommendation list for a label (returns a copy)"""
    return list(RECOMMENDATIONS[SkinType(skin_type)])
