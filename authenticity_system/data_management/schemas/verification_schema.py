"""Verification schemas: dimension scores, risk tiers and final verdicts.

A VerificationResult is built once per request and never mutated: models
are frozen and sequence fields are tuples.
It is not persisted here; callers decide what to store.

to_response() produces the camelCase wire shape consumed by the app:
scores nested under scoring.breakdown and at most three relevant links.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Any, Literal, Optional

from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel

from authenticity_system.data_management.schemas.extraction_schema import (
    ExtractedAttributes,
    QualityRating,
)
from authenticity_system.data_management.schemas.presence_schema import (
    PresenceResult,
    SearchHit,
)

# Links surfaced to the caller per verification
RELEVANT_LINK_LIMIT = 3


class RiskLevel(str, Enum):
    """Counterfeit risk tier.

    LOW: High confidence and no suspicious elements.
    MEDIUM: Moderate confidence, at most one suspicious element.
    HIGH: Everything else.
    """

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class SignalScores(BaseModel):
    """The five dimension scores (0-100) plus the analysis notes produced
    while computing them, in evaluation order."""

    image_quality: int = Field(..., ge=0, le=100)
    packaging_quality: int = Field(..., ge=0, le=100)
    text_clarity: int = Field(..., ge=0, le=100)
    brand_legitimacy: int = Field(..., ge=0, le=100)
    web_presence: int = Field(..., ge=0, le=100)
    analysis: tuple[str, ...] = Field(default=())

    model_config = {"frozen": True}

    def dimension_scores(self) -> dict[str, int]:
        """Dimension name -> score, without the analysis notes."""
        return {
            "image_quality": self.image_quality,
            "packaging_quality": self.packaging_quality,
            "text_clarity": self.text_clarity,
            "brand_legitimacy": self.brand_legitimacy,
            "web_presence": self.web_presence,
        }


class ScoreBreakdown(SignalScores):
    """Dimension scores with the aggregated overall confidence."""

    overall: int = Field(..., ge=0, le=100)

    @classmethod
    def from_signals(cls, signals: SignalScores, overall: int) -> "ScoreBreakdown":
        return cls(**signals.model_dump(), overall=overall)


class RiskAssessment(BaseModel):
    level: RiskLevel
    description: str

    model_config = {"frozen": True}


class ExtractedInfo(BaseModel):
    """Subset of the extracted attributes echoed back to the caller."""

    brand_name: str
    product_name: str
    category: str
    packaging_quality: QualityRating
    batch_number: Optional[str] = None
    manufacturing_date: Optional[str] = None
    expiry_date: Optional[str] = None
    suspicious_elements: tuple[str, ...] = Field(default=())
    legitimacy_indicators: tuple[str, ...] = Field(default=())

    model_config = {
        "alias_generator": to_camel,
        "populate_by_name": True,
        "frozen": True,
    }

    @classmethod
    def from_attributes(cls, attributes: ExtractedAttributes) -> "ExtractedInfo":
        return cls(
            brand_name=attributes.brand_name,
            product_name=attributes.product_name,
            category=attributes.category,
            packaging_quality=attributes.packaging_quality,
            batch_number=attributes.batch_number,
            manufacturing_date=attributes.manufacturing_date,
            expiry_date=attributes.expiry_date,
            suspicious_elements=attributes.suspicious_elements,
            legitimacy_indicators=attributes.legitimacy_indicators,
        )


class WebSearchSummary(BaseModel):
    success: bool
    has_official_website: bool
    total_results: int = Field(..., ge=0)
    relevant_links: tuple[SearchHit, ...] = Field(default=())

    model_config = {
        "alias_generator": to_camel,
        "populate_by_name": True,
        "frozen": True,
    }

    @classmethod
    def from_presence(cls, presence: PresenceResult) -> "WebSearchSummary":
        return cls(
            success=presence.success,
            has_official_website=presence.has_official_website,
            total_results=presence.total_results,
            relevant_links=presence.results[:RELEVANT_LINK_LIMIT],
        )


class VerificationResult(BaseModel):
    """Complete authenticity verdict for one product photograph.

    verified is True iff risk_level is LOW. reward_eligible additionally
    requires the overall confidence to reach the policy's reward minimum.
    """

    success: Literal[True] = True
    verified: bool
    confidence: int = Field(..., ge=0, le=100, description="Overall score")
    risk_level: RiskLevel
    risk_description: str
    extracted_info: ExtractedInfo
    scoring: ScoreBreakdown
    analysis: tuple[str, ...] = Field(default=())
    web_search_results: WebSearchSummary
    warnings: tuple[str, ...] = Field(default=())
    recommendations: tuple[str, ...] = Field(default=())
    reward_eligible: bool
    message: str
    degraded_extraction: bool = Field(
        default=False,
        description="True when attributes were scraped from unparseable output",
    )
    verified_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
    )

    model_config = {"frozen": True}

    def to_response(self) -> dict[str, Any]:
        """Serialize to the camelCase response shape."""
        scoring = self.scoring
        return {
            "success": True,
            "verified": self.verified,
            "confidence": self.confidence,
            "riskLevel": self.risk_level.value,
            "riskDescription": self.risk_description,
            "extractedInfo": self.extracted_info.model_dump(mode="json", by_alias=True),
            "scoring": {
                "overall": scoring.overall,
                "breakdown": {
                    "imageQuality": scoring.image_quality,
                    "packagingQuality": scoring.packaging_quality,
                    "brandLegitimacy": scoring.brand_legitimacy,
                    "webPresence": scoring.web_presence,
                    "textClarity": scoring.text_clarity,
                },
            },
            "analysis": list(self.analysis),
            "webSearchResults": self.web_search_results.model_dump(
                mode="json", by_alias=True
            ),
            "warnings": list(self.warnings),
            "recommendations": list(self.recommendations),
            "rewardEligible": self.reward_eligible,
            "message": self.message,
            "degradedExtraction": self.degraded_extraction,
            "verifiedAt": self.verified_at.isoformat(),
        }


class VerificationFailure(BaseModel):
    """Returned instead of a VerificationResult when extraction failed.

    Carries no scoring fields: no partial score is ever produced.
    """

    success: Literal[False] = False
    error: str
    details: Optional[str] = None

    model_config = {"frozen": True}

    def to_response(self) -> dict[str, Any]:
        return self.model_dump(mode="json")
