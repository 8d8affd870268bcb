"""Schema package for product authenticity verification.

Pydantic models for the three stages of a verification:
- Extraction: attributes read off the product photograph, with a tagged
  outcome (parsed / degraded / failed)
- Presence: web corroboration of an official brand presence
- Verification: dimension scores, risk tier and the final verdict

Usage:
    from authenticity_system.data_management.schemas import ExtractedAttributes
    attrs = ExtractedAttributes.model_validate({"brandName": "Acme"})

    from authenticity_system.data_management.schemas import PresenceResult
    presence = PresenceResult.failed("timeout")
"""

from authenticity_system.data_management.schemas.extraction_schema import (
    NOT_VISIBLE,
    UNKNOWN,
    DegradedExtraction,
    ExtractedAttributes,
    ExtractionResult,
    FailedExtraction,
    ParsedExtraction,
    QualityRating,
)

from authenticity_system.data_management.schemas.presence_schema import (
    PresenceResult,
    SearchHit,
)

from authenticity_system.data_management.schemas.verification_schema import (
    RELEVANT_LINK_LIMIT,
    ExtractedInfo,
    RiskAssessment,
    RiskLevel,
    ScoreBreakdown,
    SignalScores,
    VerificationFailure,
    VerificationResult,
    WebSearchSummary,
)

__all__ = [
    # Extraction
    "NOT_VISIBLE",
    "UNKNOWN",
    "QualityRating",
    "ExtractedAttributes",
    "ExtractionResult",
    "ParsedExtraction",
    "DegradedExtraction",
    "FailedExtraction",
    # Presence
    "SearchHit",
    "PresenceResult",
    # Verification
    "RELEVANT_LINK_LIMIT",
    "RiskLevel",
    "SignalScores",
    "ScoreBreakdown",
    "RiskAssessment",
    "ExtractedInfo",
    "WebSearchSummary",
    "VerificationResult",
    "VerificationFailure",
]
