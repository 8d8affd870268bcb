"""Human-readable warnings, recommendations and verdict messages.

Warnings are appended in a fixed order, each only when its condition holds:
1. Poor image quality
2. Below-standard packaging
3. One entry per suspicious element ("⚠️ " prefixed)
4. No official website
5. Limited online presence
6. No batch/lot number

Recommendations are chosen wholesale by risk tier. Only the LOW tier list
varies, quoting the batch number when one was read.
"""

from typing import Optional

from authenticity_system.config.scoring_policy import DEFAULT_POLICY, ScoringPolicy
from authenticity_system.data_management.schemas import (
    ExtractedAttributes,
    PresenceResult,
    RiskLevel,
    SignalScores,
)

HIGH_RISK_RECOMMENDATIONS = (
    "⚠️ Do not use this product until verified",
    "Contact the manufacturer directly for verification",
    "Purchase only from authorized retailers",
    "Report suspected counterfeit to authorities",
)

MEDIUM_RISK_RECOMMENDATIONS = (
    "Verify batch number on manufacturer website if available",
    "Look for QR code and scan for definitive verification",
    "Compare with known authentic products",
    "Purchase from verified retailers when possible",
)

LOW_RISK_HEADLINE = "✅ Product appears authentic"
LOW_RISK_BATCH_TEMPLATE = (
    'Verify batch number "{batch}" on official website for 100% confirmation'
)
LOW_RISK_CLOSING = (
    "Always prefer QR code verification when available",
    "Keep receipt and packaging for warranty purposes",
)

VERDICT_MESSAGES: dict[RiskLevel, str] = {
    RiskLevel.LOW: "✅ Product verified with {confidence}% confidence! Likely authentic.",
    RiskLevel.MEDIUM: (
        "⚠️ Verification uncertain ({confidence}% confidence). "
        "Please verify through other means."
    ),
    RiskLevel.HIGH: (
        "❌ High risk of counterfeit ({confidence}% confidence). "
        "Do not use without further verification."
    ),
}


class Explainer:
    """Turns scores and findings into user-facing text."""

    def __init__(self, policy: Optional[ScoringPolicy] = None):
        self.policy = policy or DEFAULT_POLICY

    def explain(
        self,
        attributes: ExtractedAttributes,
        presence: PresenceResult,
        scores: SignalScores,
        risk_level: RiskLevel,
    ) -> tuple[list[str], list[str]]:
        """Return (warnings, recommendations) for one verification."""
        warnings = self.generate_warnings(attributes, presence, scores)
        recommendations = self.generate_recommendations(risk_level, attributes)
        return warnings, recommendations

    def generate_warnings(
        self,
        attributes: ExtractedAttributes,
        presence: PresenceResult,
        scores: SignalScores,
    ) -> list[str]:
        policy = self.policy
        warnings: list[str] = []

        if scores.image_quality < policy.poor_image_threshold:
            warnings.append("Image quality is poor - results may be inaccurate")

        if scores.packaging_quality < policy.poor_packaging_threshold:
            warnings.append("Packaging quality appears below standard")

        for element in attributes.suspicious_elements:
            warnings.append(f"⚠️ {element}")

        if not presence.has_official_website:
            warnings.append("No official website found for this brand")

        if presence.total_results < policy.limited_presence_threshold:
            warnings.append("Limited online presence for this product")

        if not attributes.has_batch_number:
            warnings.append("No batch/lot number visible on packaging")

        return warnings

    def generate_recommendations(
        self,
        risk_level: RiskLevel,
        attributes: ExtractedAttributes,
    ) -> list[str]:
        if risk_level == RiskLevel.HIGH:
            return list(HIGH_RISK_RECOMMENDATIONS)
        if risk_level == RiskLevel.MEDIUM:
            return list(MEDIUM_RISK_RECOMMENDATIONS)

        recommendations = [LOW_RISK_HEADLINE]
        if attributes.has_batch_number:
            recommendations.append(
                LOW_RISK_BATCH_TEMPLATE.format(batch=attributes.batch_number)
            )
        recommendations.extend(LOW_RISK_CLOSING)
        return recommendations

    @staticmethod
    def generate_message(risk_level: RiskLevel, confidence: int) -> str:
        """One-line verdict, prefixed ✅ / ⚠️ / ❌ by tier."""
        return VERDICT_MESSAGES[risk_level].format(confidence=confidence)
