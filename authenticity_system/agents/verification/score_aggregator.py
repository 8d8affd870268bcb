"""Weighted aggregation of dimension scores into one confidence score.

overall = round_half_up(sum(weight_i * score_i))

Default weights (fixed policy, not learned):
- Image quality: 0.15
- Packaging quality: 0.25
- Text clarity: 0.15
- Brand legitimacy: 0.25
- Web presence: 0.20

The sum is computed in decimal arithmetic so a weighted total that lands
exactly on .5 rounds up instead of depending on float representation.
"""

from decimal import ROUND_HALF_UP, Decimal
from typing import Optional

import structlog

from authenticity_system.config.scoring_policy import DEFAULT_POLICY, ScoringPolicy
from authenticity_system.data_management.schemas import ScoreBreakdown, SignalScores


class ScoreAggregator:
    """Combines the five dimension scores into an overall 0-100 score.

    Pure and deterministic: the same scores and policy always give the
    same overall, so the value can be reproduced from a ScoreBreakdown.
    """

    def __init__(self, policy: Optional[ScoringPolicy] = None) -> None:
        """Initialize ScoreAggregator.

        Args:
            policy: Scoring policy supplying the weights.
        """
        self.policy = policy or DEFAULT_POLICY
        self._logger = structlog.get_logger().bind(component="ScoreAggregator")

    def weighted_total(self, scores: SignalScores) -> Decimal:
        """Exact weighted sum of the dimension scores, before rounding."""
        weights = self.policy.weights.as_decimals()
        return sum(
            (weights[name] * Decimal(score)
             for name, score in scores.dimension_scores().items()),
            Decimal("0"),
        )

    def aggregate(self, scores: SignalScores) -> int:
        """Compute the overall confidence score.

        Args:
            scores: Dimension scores (a ScoreBreakdown is accepted too).

        Returns:
            Overall score, rounded half-up, clamped to 0-100.
        """
        total = self.weighted_total(scores)
        overall = int(total.quantize(Decimal("1"), rounding=ROUND_HALF_UP))
        overall = max(0, min(self.policy.max_score, overall))

        self._logger.debug(
            "scores_aggregated",
            weighted_total=str(total),
            overall=overall,
        )
        return overall

    def build_breakdown(self, scores: SignalScores) -> ScoreBreakdown:
        """Attach the overall score to the dimension scores."""
        return ScoreBreakdown.from_signals(scores, self.aggregate(scores))
