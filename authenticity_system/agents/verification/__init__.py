"""Product authenticity verification.

Core workflow:
1. VisionExtractor reads packaging attributes off the photograph
2. PresenceProber checks the web for an official brand presence
3. SignalScorer computes five 0-100 dimension scores
4. ScoreAggregator combines them with fixed weights
5. RiskClassifier assigns low/medium/high risk
6. Explainer produces warnings, recommendations and the verdict message

VerificationAgent sequences the steps and returns a VerificationResult,
or a VerificationFailure when nothing could be extracted.
"""

from authenticity_system.agents.verification.explainer import Explainer
from authenticity_system.agents.verification.presence_prober import PresenceProber
from authenticity_system.agents.verification.quality_mapper import score_quality
from authenticity_system.agents.verification.risk_classifier import RiskClassifier
from authenticity_system.agents.verification.score_aggregator import ScoreAggregator
from authenticity_system.agents.verification.signal_scorer import SignalScorer
from authenticity_system.agents.verification.verification_agent import (
    EXTRACTION_FAILED_ERROR,
    VerificationAgent,
    verify_product,
)
from authenticity_system.agents.verification.vision_extractor import VisionExtractor

__all__ = [
    "EXTRACTION_FAILED_ERROR",
    "Explainer",
    "PresenceProber",
    "RiskClassifier",
    "ScoreAggregator",
    "SignalScorer",
    "VerificationAgent",
    "VisionExtractor",
    "score_quality",
    "verify_product",
]
