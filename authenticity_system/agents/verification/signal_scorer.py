"""Dimension scoring for product authenticity.

Computes five independent 0-100 scores from the extracted attributes and
the web presence probe:
- image_quality / packaging_quality / text_clarity: quality table lookup
- brand_legitimacy: identified brand, suspicious elements, legitimacy indicators
- web_presence: probe success, official website, result volume

Analysis notes are produced alongside the scores. Their order is part of
the output contract: brand notes, then web presence notes, then the
packaging note.
"""

from typing import Optional

from authenticity_system.agents.verification.quality_mapper import score_quality
from authenticity_system.config.logging import get_logger
from authenticity_system.config.scoring_policy import DEFAULT_POLICY, ScoringPolicy
from authenticity_system.data_management.schemas import (
    ExtractedAttributes,
    PresenceResult,
    QualityRating,
    SignalScores,
)


class SignalScorer:
    """
    Scores the independent authenticity signals for one product.

    Usage:
        scorer = SignalScorer()
        signals = scorer.score_signals(attributes, presence)

    Attributes:
        policy: Scoring policy supplying tables and constants
    """

    def __init__(self, policy: Optional[ScoringPolicy] = None):
        self.policy = policy or DEFAULT_POLICY
        self.logger = get_logger("SignalScorer")

    def score_signals(
        self,
        attributes: ExtractedAttributes,
        presence: PresenceResult,
    ) -> SignalScores:
        """
        Compute all five dimension scores and their analysis notes.

        Args:
            attributes: Attributes extracted from the product image
            presence: Web presence probe outcome

        Returns:
            SignalScores with notes in brand, web, packaging order
        """
        analysis: list[str] = []

        brand_legitimacy = self._score_brand_legitimacy(attributes, analysis)
        web_presence = self._score_web_presence(presence, analysis)
        self._note_packaging(attributes.packaging_quality, analysis)

        signals = SignalScores(
            image_quality=score_quality(attributes.image_quality, self.policy),
            packaging_quality=score_quality(attributes.packaging_quality, self.policy),
            text_clarity=score_quality(attributes.text_clarity, self.policy),
            brand_legitimacy=brand_legitimacy,
            web_presence=web_presence,
            analysis=analysis,
        )

        self.logger.debug(
            "Signals scored",
            brand=attributes.brand_name,
            scores=signals.dimension_scores(),
        )
        return signals

    def _score_brand_legitimacy(
        self,
        attributes: ExtractedAttributes,
        analysis: list[str],
    ) -> int:
        """
        Score how convincingly the brand is identified.

        Unidentified brand scores 0. An identified brand starts at the
        identified score, rises to the clean score when no suspicious
        elements were found, then gains a bonus per legitimacy indicator
        up to max_score.
        """
        policy = self.policy

        if not attributes.has_identified_brand:
            analysis.append("Brand name not clearly identifiable")
            return 0

        score = policy.brand_identified_score
        analysis.append(f"Brand identified: {attributes.brand_name}")

        suspicious_count = attributes.suspicious_count
        if suspicious_count == 0:
            score = policy.brand_clean_score
            analysis.append("No suspicious elements detected")
        else:
            analysis.append(f"{suspicious_count} suspicious element(s) found")

        indicator_count = len(attributes.legitimacy_indicators)
        if indicator_count > 0:
            score = min(
                policy.max_score,
                score + indicator_count * policy.legitimacy_indicator_bonus,
            )
            analysis.append(f"{indicator_count} legitimacy indicator(s) present")

        return score

    def _score_web_presence(
        self,
        presence: PresenceResult,
        analysis: list[str],
    ) -> int:
        """
        Score online corroboration of the brand.

        A probe that did not complete scores 0; it is supplementary
        evidence, so its absence lowers confidence without failing anything.
        """
        policy = self.policy

        if not presence.success:
            analysis.append("Limited online verification available")
            return 0

        score = policy.web_presence_base_score
        if presence.has_official_website:
            score = policy.official_website_score
            analysis.append("Official brand website found")

        if presence.total_results > policy.strong_presence_min_results:
            score = min(policy.max_score, score + policy.strong_presence_bonus)
            analysis.append(
                f"Strong online presence ({presence.total_results} results)"
            )

        return score

    @staticmethod
    def _note_packaging(rating: QualityRating, analysis: list[str]) -> None:
        if rating in (QualityRating.EXCELLENT, QualityRating.GOOD):
            analysis.append("High quality packaging detected")
        elif rating == QualityRating.POOR:
            analysis.append("Low packaging quality - potential concern")
