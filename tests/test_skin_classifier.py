"""Tests for skin-type classification and recommendations"""

import pytest

from models.skin_classifier import (
    RECOMMENDATIONS,
    SkinType,
    classify_metrics,
    classify_skin_type,
    get_recommendations,
)
from models.skin_metrics import SkinMetrics


class TestClassifySkinType:
    """Rule order: Sensitive > Oily > Dry > Combination > Normal"""

    @pytest.mark.parametrize("brightness,redness,oiliness,expected", [
        (0.5, 0.7, 0.3, SkinType.SENSITIVE),
        (0.5, 0.2, 0.6, SkinType.OILY),
        (0.3, 0.1, 0.2, SkinType.DRY),
        (0.5, 0.1, 0.45, SkinType.COMBINATION),
        (0.5, 0.1, 0.2, SkinType.NORMAL),
    ])
    def test_scenarios(self, brightness, redness, oiliness, expected):
        assert classify_skin_type(brightness, redness, oiliness) == expected

    def test_oiliness_exactly_half_is_combination(self):
        """0.5 > 0.5 is false, |0.5 - 0.5| < 0.1 holds"""
        assert classify_skin_type(0.5, 0.1, 0.5) == SkinType.COMBINATION

    def test_redness_exactly_threshold_is_not_sensitive(self):
        assert classify_skin_type(0.5, 0.6, 0.2) == SkinType.NORMAL

    def test_brightness_exactly_threshold_is_not_dry(self):
        assert classify_skin_type(0.4, 0.1, 0.2) == SkinType.NORMAL

    def test_sensitive_wins_over_oily(self):
        assert classify_skin_type(0.5, 0.9, 0.9) == SkinType.SENSITIVE

    def test_oily_wins_over_dry(self):
        assert classify_skin_type(0.1, 0.1, 0.55) == SkinType.OILY

    def test_dry_wins_over_combination(self):
        assert classify_skin_type(0.2, 0.1, 0.45) == SkinType.DRY

    def test_combination_band_lower_edge(self):
        assert classify_skin_type(0.5, 0.1, 0.41) == SkinType.COMBINATION
        assert classify_skin_type(0.5, 0.1, 0.39) == SkinType.NORMAL

    def test_redness_above_one_is_sensitive(self):
        assert classify_skin_type(0.5, 1.7, 0.2) == SkinType.SENSITIVE

    def test_deterministic(self):
        results = {classify_skin_type(0.45, 0.3, 0.47) for _ in range(50)}
        assert results == {SkinType.COMBINATION}

    def test_classify_metrics(self):
        metrics = SkinMetrics(brightness=0.5, redness=0.2, oiliness=0.6)
        assert classify_metrics(metrics) == SkinType.OILY


class TestRecommendations:
    """Fixed four-item recommendation lists"""

    def test_every_label_has_four_items(self):
        for skin_type in SkinType:
            assert len(get_recommendations(skin_type)) == 4

    def test_sensitive_list(self):
        assert get_recommendations(SkinType.SENSITIVE) == [
            "Use gentle, fragrance-free products",
            "Avoid harsh exfoliants",
            "Always patch test new products",
            "Use sunscreen daily",
        ]

    def test_oily_list(self):
        assert get_recommendations(SkinType.OILY) == [
            "Use oil-free products",
            "Try salicylic acid cleansers",
            "Don't skip moisturizer",
            "Use clay masks weekly",
        ]

    def test_dry_list(self):
        assert get_recommendations(SkinType.DRY) == [
            "Use cream-based cleansers",
            "Apply moisturizer to damp skin",
            "Consider using facial oils",
            "Avoid hot water when washing",
        ]

    def test_combination_list(self):
        assert get_recommendations(SkinType.COMBINATION) == [
            "Use different products for different areas",
            "Focus on balance",
            "Try gel-based moisturizers",
            "Use mild cleansers",
        ]

    def test_normal_list(self):
        assert get_recommendations(SkinType.NORMAL) == [
            "Maintain current routine",
            "Use sunscreen daily",
            "Stay hydrated",
            "Regular gentle exfoliation",
        ]

    def test_lookup_by_label_string(self):
        assert get_recommendations("Dry") == RECOMMENDATIONS[SkinType.DRY]

    def test_returned_list_is_a_copy(self):
        recs = get_recommendations(SkinType.NORMAL)
        recs.append("extra")
        assert len(get_recommendations(SkinType.NORMAL)) == 4

    def test_label_values(self):
        assert [t.value for t in SkinType] == ["Sensitive", "Oily", "Dry", "Combination", "Normal"]
