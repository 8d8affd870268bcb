"""Tests for the immutable scoring policy.

Tests cover:
- Default weights and thresholds
- Exact weight sum (decimal arithmetic)
- Rejection of weights that do not sum to 1.00
- Immutability
- Tier ordering validation
"""

from decimal import Decimal

import pytest
from pydantic import ValidationError

from authenticity_system.config.scoring_policy import (
    DEFAULT_POLICY,
    QUALITY_SCORES,
    DimensionWeights,
    ScoringPolicy,
)


class TestDefaultPolicy:
    def test_default_weights(self) -> None:
        weights = DEFAULT_POLICY.weights
        assert weights.image_quality == 0.15
        assert weights.packaging_quality == 0.25
        assert weights.text_clarity == 0.15
        assert weights.brand_legitimacy == 0.25
        assert weights.web_presence == 0.20

    def test_weights_sum_exactly_one(self) -> None:
        total = sum(DEFAULT_POLICY.weights.as_decimals().values(), Decimal("0"))
        assert total == Decimal("1")

    def test_risk_thresholds(self) -> None:
        assert DEFAULT_POLICY.low_risk_min_score == 80
        assert DEFAULT_POLICY.low_risk_max_suspicious == 0
        assert DEFAULT_POLICY.medium_risk_min_score == 60
        assert DEFAULT_POLICY.medium_risk_max_suspicious == 1
        assert DEFAULT_POLICY.reward_min_score == 70

    def test_quality_table(self) -> None:
        assert QUALITY_SCORES == {
            "poor": 25,
            "average": 50,
            "good": 75,
            "excellent": 95,
        }
        assert DEFAULT_POLICY.default_quality_score == 50


class TestPolicyValidation:
    def test_weights_not_summing_to_one_rejected(self) -> None:
        with pytest.raises(ValidationError, match="sum to 1.00"):
            DimensionWeights(web_presence=0.25)

    def test_rebalanced_weights_accepted(self) -> None:
        weights = DimensionWeights(
            image_quality=0.1,
            packaging_quality=0.3,
            text_clarity=0.1,
            brand_legitimacy=0.3,
            web_presence=0.2,
        )
        assert weights.packaging_quality == 0.3

    def test_low_below_medium_rejected(self) -> None:
        with pytest.raises(ValidationError):
            ScoringPolicy(low_risk_min_score=50, medium_risk_min_score=60)

    @pytest.mark.parametrize("score", [150, -1, 101])
    def test_quality_score_out_of_range_rejected(self, score: int) -> None:
        with pytest.raises(ValidationError, match="Quality scores must be within"):
            ScoringPolicy(quality_scores={"excellent": score})

    def test_quality_table_bounded_by_max_score(self) -> None:
        with pytest.raises(ValidationError):
            ScoringPolicy(quality_scores={"excellent": 95}, max_score=90)

    def test_default_quality_above_max_rejected(self) -> None:
        with pytest.raises(ValidationError, match="default_quality_score"):
            ScoringPolicy(
                quality_scores={"poor": 10}, default_quality_score=100, max_score=90
            )

    def test_quality_table_keys_lower_cased(self) -> None:
        policy = ScoringPolicy(quality_scores={"Good": 80, " POOR ": 10})
        assert policy.quality_scores == {"good": 80, "poor": 10}

    def test_policy_is_frozen(self) -> None:
        with pytest.raises(ValidationError):
            DEFAULT_POLICY.low_risk_min_score = 10

    def test_alternate_policy_leaves_default_untouched(self) -> None:
        lenient = ScoringPolicy(low_risk_min_score=70)
        assert lenient.low_risk_min_score == 70
        assert DEFAULT_POLICY.low_risk_min_score == 80
