"""Extraction schema for attributes read off a product photograph.

The vision extractor's vocabulary is not strictly enforced, so this schema
coerces instead of rejecting:
- Missing text fields become "Unknown" (identity) or None (batch/dates)
- Quality ratings are case-insensitive; anything unrecognised is "average"
- Finding lists accept None, a single string, or a list; blanks are dropped

Extraction outcomes are a tagged union so callers branch on what actually
happened instead of probing for missing keys:
- ParsedExtraction: model output parsed as the expected JSON object
- DegradedExtraction: output was not JSON; fields scraped best-effort
- FailedExtraction: nothing usable (API failure, invalid image, no key)
"""

from enum import Enum
from typing import Annotated, Any, Literal, Optional, Union

from pydantic import BaseModel, Field, field_validator
from pydantic.alias_generators import to_camel

UNKNOWN = "Unknown"
NOT_VISIBLE = "Not visible"


class QualityRating(str, Enum):
    """Four-level qualitative rating used for packaging, image and text."""

    POOR = "poor"
    AVERAGE = "average"
    GOOD = "good"
    EXCELLENT = "excellent"

    @classmethod
    def coerce(cls, value: Any) -> "QualityRating":
        """Lenient lookup: case-insensitive, unknown values map to AVERAGE."""
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            try:
                return cls(value.strip().lower())
            except ValueError:
                pass
        return cls.AVERAGE


class ExtractedAttributes(BaseModel):
    """Structured attributes extracted from a product photograph.

    Field aliases are camelCase so the model validates the extractor's JSON
    directly; snake_case names are accepted too.
    """

    brand_name: str = Field(default=UNKNOWN, description="Brand name visible on packaging")
    product_name: str = Field(default=UNKNOWN, description="Product name or model")
    category: str = Field(default=UNKNOWN, description="Product category")

    packaging_quality: QualityRating = Field(default=QualityRating.AVERAGE)
    image_quality: QualityRating = Field(default=QualityRating.AVERAGE)
    text_clarity: QualityRating = Field(
        default=QualityRating.AVERAGE,
        description="How legible the text on the packaging is",
    )

    batch_number: Optional[str] = Field(default=None, description="Batch/lot number")
    manufacturing_date: Optional[str] = Field(default=None)
    expiry_date: Optional[str] = Field(default=None)

    suspicious_elements: tuple[str, ...] = Field(
        default=(),
        description="Flaws such as misspellings, poor printing, misaligned labels",
    )
    legitimacy_indicators: tuple[str, ...] = Field(
        default=(),
        description="Positive signals such as holograms, seals, QR codes",
    )

    overall_impression: Optional[str] = Field(default=None)
    raw_response: Optional[str] = Field(
        default=None,
        description="Unparsed model output, kept only for degraded extractions",
    )

    model_config = {
        "alias_generator": to_camel,
        "populate_by_name": True,
        "frozen": True,
        "extra": "ignore",
    }

    @field_validator("brand_name", "product_name", "category", mode="before")
    @classmethod
    def default_unknown(cls, value: Any) -> str:
        if value is None or isinstance(value, (list, dict)):
            return UNKNOWN
        text = str(value).strip()
        return text or UNKNOWN

    @field_validator("packaging_quality", "image_quality", "text_clarity", mode="before")
    @classmethod
    def lenient_rating(cls, value: Any) -> QualityRating:
        return QualityRating.coerce(value)

    @field_validator(
        "batch_number", "manufacturing_date", "expiry_date", "overall_impression",
        mode="before",
    )
    @classmethod
    def optional_text(cls, value: Any) -> Optional[str]:
        if value is None or isinstance(value, (list, dict)):
            return None
        text = str(value).strip()
        return text or None

    @field_validator("suspicious_elements", "legitimacy_indicators", mode="before")
    @classmethod
    def finding_list(cls, value: Any) -> tuple[str, ...]:
        if value is None:
            return ()
        if isinstance(value, str):
            value = [value]
        if not isinstance(value, (list, tuple)):
            return ()
        findings = []
        for item in value:
            if item is None:
                continue
            text = str(item).strip()
            if text:
                findings.append(text)
        return tuple(findings)

    @property
    def has_identified_brand(self) -> bool:
        """True unless the brand is blank or the "Unknown" sentinel."""
        return bool(self.brand_name) and self.brand_name.lower() != UNKNOWN.lower()

    @property
    def has_batch_number(self) -> bool:
        """True when a real batch number was read (not absent, not "Not visible")."""
        return (
            self.batch_number is not None
            and self.batch_number.lower() != NOT_VISIBLE.lower()
        )

    @property
    def suspicious_count(self) -> int:
        return len(self.suspicious_elements)


class ParsedExtraction(BaseModel):
    """Model output parsed into the expected schema."""

    status: Literal["parsed"] = "parsed"
    attributes: ExtractedAttributes

    model_config = {"frozen": True}


class DegradedExtraction(BaseModel):
    """Model output could not be parsed; identity fields scraped from raw text."""

    status: Literal["degraded"] = "degraded"
    attributes: ExtractedAttributes
    raw_text: str = ""

    model_config = {"frozen": True}


class FailedExtraction(BaseModel):
    """No usable attributes. Scoring must not run on this outcome."""

    status: Literal["failed"] = "failed"
    reason: str

    model_config = {"frozen": True}


ExtractionResult = Annotated[
    Union[ParsedExtraction, DegradedExtraction, FailedExtraction],
    Field(discriminator="status"),
]
