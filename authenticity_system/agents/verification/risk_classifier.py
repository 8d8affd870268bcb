"""Risk tier classification from overall score and suspicious element count.

Rules are evaluated in order, first match wins:
1. overall >= 80 AND suspicious == 0 -> LOW
2. overall >= 60 AND suspicious <= 1 -> MEDIUM
3. otherwise -> HIGH

The suspicious element count is a hard gate: a product scoring 85 with two
suspicious elements is HIGH.

Usage:
    from authenticity_system.agents.verification.risk_classifier import RiskClassifier

    classifier = RiskClassifier()
    assessment = classifier.classify(overall=85, suspicious_count=0)
"""

from typing import Optional

import structlog

from authenticity_system.config.scoring_policy import DEFAULT_POLICY, ScoringPolicy
from authenticity_system.data_management.schemas import RiskAssessment, RiskLevel

RISK_DESCRIPTIONS: dict[RiskLevel, str] = {
    RiskLevel.LOW: "Product appears authentic with high confidence",
    RiskLevel.MEDIUM: "Product authenticity uncertain, proceed with caution",
    RiskLevel.HIGH: "High risk of counterfeit, verification strongly recommended",
}


class RiskClassifier:
    """Maps (overall score, suspicious count) to a risk tier.

    Total over all inputs: every pair lands in exactly one tier.
    """

    def __init__(self, policy: Optional[ScoringPolicy] = None) -> None:
        self.policy = policy or DEFAULT_POLICY
        self._logger = structlog.get_logger().bind(component="RiskClassifier")

    def classify(self, overall: int, suspicious_count: int) -> RiskAssessment:
        """Classify a verification into a risk tier.

        Args:
            overall: Overall confidence score (0-100).
            suspicious_count: Number of suspicious elements found.

        Returns:
            RiskAssessment with level and fixed description.
        """
        level = self._level_for(overall, suspicious_count)
        self._logger.debug(
            "risk_classified",
            overall=overall,
            suspicious_count=suspicious_count,
            level=level.value,
        )
        return RiskAssessment(level=level, description=RISK_DESCRIPTIONS[level])

    def _level_for(self, overall: int, suspicious_count: int) -> RiskLevel:
        policy = self.policy
        if (
            overall >= policy.low_risk_min_score
            and suspicious_count <= policy.low_risk_max_suspicious
        ):
            return RiskLevel.LOW
        if (
            overall >= policy.medium_risk_min_score
            and suspicious_count <= policy.medium_risk_max_suspicious
        ):
            return RiskLevel.MEDIUM
        return RiskLevel.HIGH

    def is_reward_eligible(self, level: RiskLevel, overall: int) -> bool:
        """Low risk AND overall at or above the reward minimum.

        With the default policy the score clause never rejects a LOW
        verdict (LOW already needs 80); it only bites when
        low_risk_min_score < reward_min_score.
        """
        return level == RiskLevel.LOW and overall >= self.policy.reward_min_score
