"""Scoring policy for the authenticity scoring engine.

All weights and thresholds that change product behaviour live here, in one
immutable object that is passed into the scorer, aggregator, classifier and
explainer. Tests substitute alternate policies by constructing a new
ScoringPolicy (or calling model_copy(update=...)) instead of patching
module constants.

Default policy:
- Quality table: poor 25, average 50, good 75, excellent 95 (unknown -> 50)
- Weights: image 0.15, packaging 0.25, text 0.15, brand 0.25, web 0.20
- Low risk: overall >= 80 AND 0 suspicious elements
- Medium risk: overall >= 60 AND <= 1 suspicious element
- Reward: low risk AND overall >= 70
"""

from decimal import Decimal
from typing import Dict

from pydantic import BaseModel, Field, field_validator, model_validator

# Rating -> sub-score lookup. Keys are lower-case.
QUALITY_SCORES: Dict[str, int] = {
    "poor": 25,
    "average": 50,
    "good": 75,
    "excellent": 95,
}

# Score used for any rating not in QUALITY_SCORES
DEFAULT_QUALITY_SCORE = 50


class DimensionWeights(BaseModel):
    """Weights of the five dimension scores in the overall confidence.

    Must sum to exactly 1.00. The check uses decimal arithmetic on the
    string form of each weight so 0.15 + 0.25 + ... is not subject to
    binary float drift.
    """

    image_quality: float = Field(default=0.15, ge=0.0, le=1.0)
    packaging_quality: float = Field(default=0.25, ge=0.0, le=1.0)
    text_clarity: float = Field(default=0.15, ge=0.0, le=1.0)
    brand_legitimacy: float = Field(default=0.25, ge=0.0, le=1.0)
    web_presence: float = Field(default=0.20, ge=0.0, le=1.0)

    model_config = {"frozen": True}

    @model_validator(mode="after")
    def check_sum(self) -> "DimensionWeights":
        total = sum(self.as_decimals().values(), Decimal("0"))
        if total != Decimal("1"):
            raise ValueError(f"Dimension weights must sum to 1.00, got {total}")
        return self

    def as_decimals(self) -> Dict[str, Decimal]:
        """Weights keyed by dimension name, as exact decimals."""
        return {
            name: Decimal(str(value))
            for name, value in self.model_dump().items()
        }


class ScoringPolicy(BaseModel):
    """Immutable scoring configuration.

    Attributes:
        quality_scores: Rating -> sub-score table (lower-case keys)
        default_quality_score: Sub-score for unrecognised ratings
        weights: Dimension weights for the overall score
        low_risk_min_score: Minimum overall score for the low tier
        low_risk_max_suspicious: Maximum suspicious elements for the low tier
        medium_risk_min_score: Minimum overall score for the medium tier
        medium_risk_max_suspicious: Maximum suspicious elements for the medium tier
        reward_min_score: Minimum overall score for reward eligibility
        brand_identified_score: Brand legitimacy when a brand is identified
        brand_clean_score: Brand legitimacy when no suspicious elements exist
        legitimacy_indicator_bonus: Bonus per legitimacy indicator
        web_presence_base_score: Web presence when the probe succeeded
        official_website_score: Web presence when an official site was found
        strong_presence_bonus: Bonus when results exceed strong_presence_min_results
        strong_presence_min_results: Result count that must be exceeded for the bonus
        poor_image_threshold: Image score below which a warning is raised
        poor_packaging_threshold: Packaging score below which a warning is raised
        limited_presence_threshold: Result count below which a warning is raised
        max_score: Upper bound for every sub-score
    """

    quality_scores: Dict[str, int] = Field(
        default_factory=lambda: dict(QUALITY_SCORES)
    )
    default_quality_score: int = Field(default=DEFAULT_QUALITY_SCORE, ge=0, le=100)
    weights: DimensionWeights = Field(default_factory=DimensionWeights)

    low_risk_min_score: int = Field(default=80, ge=0, le=100)
    low_risk_max_suspicious: int = Field(default=0, ge=0)
    medium_risk_min_score: int = Field(default=60, ge=0, le=100)
    medium_risk_max_suspicious: int = Field(default=1, ge=0)
    reward_min_score: int = Field(default=70, ge=0, le=100)

    brand_identified_score: int = Field(default=70, ge=0, le=100)
    brand_clean_score: int = Field(default=85, ge=0, le=100)
    legitimacy_indicator_bonus: int = Field(default=5, ge=0)

    web_presence_base_score: int = Field(default=50, ge=0, le=100)
    official_website_score: int = Field(default=85, ge=0, le=100)
    strong_presence_bonus: int = Field(default=15, ge=0)
    strong_presence_min_results: int = Field(default=5, ge=0)

    poor_image_threshold: int = Field(default=50, ge=0, le=100)
    poor_packaging_threshold: int = Field(default=60, ge=0, le=100)
    limited_presence_threshold: int = Field(default=3, ge=0)

    max_score: int = Field(default=100, ge=1)

    model_config = {"frozen": True}

    @field_validator("quality_scores")
    @classmethod
    def lower_case_ratings(cls, value: Dict[str, int]) -> Dict[str, int]:
        return {rating.strip().lower(): score for rating, score in value.items()}

    @model_validator(mode="after")
    def check_quality_table(self) -> "ScoringPolicy":
        out_of_range = {
            rating: score
            for rating, score in self.quality_scores.items()
            if not 0 <= score <= self.max_score
        }
        if out_of_range:
            raise ValueError(
                f"Quality scores must be within 0..{self.max_score}, got {out_of_range}"
            )
        if self.default_quality_score > self.max_score:
            raise ValueError("default_quality_score must not exceed max_score")
        return self

    @model_validator(mode="after")
    def check_tier_order(self) -> "ScoringPolicy":
        if self.low_risk_min_score < self.medium_risk_min_score:
            raise ValueError(
                "low_risk_min_score must not be below medium_risk_min_score"
            )
        return self


DEFAULT_POLICY = ScoringPolicy()
