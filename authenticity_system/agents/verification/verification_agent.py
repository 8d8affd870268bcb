"""Verification agent orchestrating one product authenticity check.

Verification flow:
1. Extract attributes from the image (VisionExtractor)
   - FailedExtraction stops here with a VerificationFailure
2. Probe the web for the brand (PresenceProber; never raises)
3. Score the five signals (SignalScorer)
4. Aggregate into the overall confidence (ScoreAggregator)
5. Classify the risk tier (RiskClassifier)
6. Explain: warnings, recommendations, message (Explainer)
7. Assemble the immutable VerificationResult

Each call is independent: no state is shared between verifications and
nothing is persisted. Unexpected collaborator errors become a
VerificationFailure; cancelling the awaiting task cancels whichever
collaborator call is in flight.

Usage:
    from authenticity_system.agents.verification import VerificationAgent

    agent = VerificationAgent()
    result = await agent.verify(image_base64)
    if result.success:
        print(result.message)
"""

from typing import Optional, Union

import structlog

from authenticity_system.agents.verification.explainer import Explainer
from authenticity_system.agents.verification.presence_prober import PresenceProber
from authenticity_system.agents.verification.risk_classifier import RiskClassifier
from authenticity_system.agents.verification.score_aggregator import ScoreAggregator
from authenticity_system.agents.verification.signal_scorer import SignalScorer
from authenticity_system.agents.verification.vision_extractor import (
    ImageInput,
    VisionExtractor,
)
from authenticity_system.config.scoring_policy import DEFAULT_POLICY, ScoringPolicy
from authenticity_system.data_management.schemas import (
    DegradedExtraction,
    ExtractedAttributes,
    ExtractedInfo,
    FailedExtraction,
    PresenceResult,
    RiskLevel,
    VerificationFailure,
    VerificationResult,
    WebSearchSummary,
)
from authenticity_system.utils.logging import (
    bind_verification_context,
    clear_verification_context,
)

EXTRACTION_FAILED_ERROR = "Failed to extract product information from image"


class VerificationAgent:
    """Orchestrates extraction, probing, scoring and explanation.

    Every collaborator can be injected; the scoring components share one
    ScoringPolicy so alternate policies apply consistently.
    """

    def __init__(
        self,
        vision_extractor: Optional[VisionExtractor] = None,
        presence_prober: Optional[PresenceProber] = None,
        policy: Optional[ScoringPolicy] = None,
        signal_scorer: Optional[SignalScorer] = None,
        score_aggregator: Optional[ScoreAggregator] = None,
        risk_classifier: Optional[RiskClassifier] = None,
        explainer: Optional[Explainer] = None,
    ) -> None:
        """Initialize VerificationAgent.

        Args:
            vision_extractor: Image -> attributes collaborator.
            presence_prober: Web presence collaborator.
            policy: Scoring policy for components created here.
            signal_scorer: Dimension scorer.
            score_aggregator: Weighted aggregator.
            risk_classifier: Risk tier classifier.
            explainer: Warning/recommendation generator.
        """
        self.policy = policy or DEFAULT_POLICY
        self.vision_extractor = vision_extractor or VisionExtractor()
        self.presence_prober = presence_prober or PresenceProber()
        self.signal_scorer = signal_scorer or SignalScorer(self.policy)
        self.score_aggregator = score_aggregator or ScoreAggregator(self.policy)
        self.risk_classifier = risk_classifier or RiskClassifier(self.policy)
        self.explainer = explainer or Explainer(self.policy)
        self._logger = structlog.get_logger().bind(component="VerificationAgent")

    async def verify(
        self, image: ImageInput
    ) -> Union[VerificationResult, VerificationFailure]:
        """Verify one product photograph.

        Args:
            image: Raw image bytes, or base64 text (data URI prefix allowed).

        Returns:
            VerificationResult, or VerificationFailure when extraction failed
            or a collaborator raised unexpectedly.
        """
        verification_id = bind_verification_context()
        try:
            self._logger.info("verification_started")

            extraction = await self.vision_extractor.extract(image)
            if isinstance(extraction, FailedExtraction):
                self._logger.warning(
                    "verification_aborted", reason=extraction.reason
                )
                return VerificationFailure(
                    error=EXTRACTION_FAILED_ERROR,
                    details=extraction.reason,
                )

            attributes = extraction.attributes
            presence = await self.presence_prober.probe(
                attributes.brand_name, attributes.product_name
            )

            result = self.assess(
                attributes,
                presence,
                degraded=isinstance(extraction, DegradedExtraction),
            )

            self._logger.info(
                "verification_complete",
                verification_id=verification_id,
                confidence=result.confidence,
                risk_level=result.risk_level.value,
                reward_eligible=result.reward_eligible,
                degraded=result.degraded_extraction,
            )
            return result
        except Exception as e:
            self._logger.error(
                "verification_failed",
                error=str(e),
                error_type=type(e).__name__,
                exc_info=True,
            )
            return VerificationFailure(error=str(e) or type(e).__name__)
        finally:
            clear_verification_context()

    def assess(
        self,
        attributes: ExtractedAttributes,
        presence: PresenceResult,
        degraded: bool = False,
    ) -> VerificationResult:
        """Score, classify and explain already-collected signals.

        Pure function of its inputs and the policy; verify() calls it once
        both collaborators have returned.
        """
        signals = self.signal_scorer.score_signals(attributes, presence)
        breakdown = self.score_aggregator.build_breakdown(signals)
        overall = breakdown.overall

        risk = self.risk_classifier.classify(overall, attributes.suspicious_count)
        warnings, recommendations = self.explainer.explain(
            attributes, presence, breakdown, risk.level
        )

        return VerificationResult(
            verified=risk.level == RiskLevel.LOW,
            confidence=overall,
            risk_level=risk.level,
            risk_description=risk.description,
            extracted_info=ExtractedInfo.from_attributes(attributes),
            scoring=breakdown,
            analysis=breakdown.analysis,
            web_search_results=WebSearchSummary.from_presence(presence),
            warnings=warnings,
            recommendations=recommendations,
            reward_eligible=self.risk_classifier.is_reward_eligible(risk.level, overall),
            message=self.explainer.generate_message(risk.level, overall),
            degraded_extraction=degraded,
        )


async def verify_product(
    image: ImageInput,
    agent: Optional[VerificationAgent] = None,
) -> Union[VerificationResult, VerificationFailure]:
    """Verify one product image with a default (or given) agent."""
    agent = agent or VerificationAgent()
    return await agent.verify(image)
