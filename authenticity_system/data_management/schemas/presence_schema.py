"""Web presence schema for brand corroboration probes.

A probe that did not complete (timeout, API error, missing key) is still a
PresenceResult: success=False, no official website, zero results. The
model validator enforces that shape so downstream scoring never sees a
failed probe claiming results.
"""

from typing import Any, Optional

from pydantic import BaseModel, Field, model_validator
from pydantic.alias_generators import to_camel


class SearchHit(BaseModel):
    """Single organic search result."""

    title: str = Field(..., description="Result title")
    link: str = Field(..., description="Result URL")
    snippet: str = Field(default="", description="Result snippet text")

    model_config = {"frozen": True}


class PresenceResult(BaseModel):
    """Outcome of probing the web for an official brand presence."""

    success: bool = Field(..., description="Whether the probe itself completed")
    has_official_website: bool = Field(default=False)
    total_results: int = Field(default=0, ge=0)
    results: tuple[SearchHit, ...] = Field(
        default=(),
        description="Up to 5 organic results, in ranking order",
    )
    query: Optional[str] = Field(default=None, description="Search query used")
    error: Optional[str] = Field(default=None, description="Why the probe failed")

    model_config = {
        "alias_generator": to_camel,
        "populate_by_name": True,
        "frozen": True,
    }

    @model_validator(mode="before")
    @classmethod
    def clear_failed_probe(cls, data: Any) -> Any:
        """A failed probe reports no website and no results."""
        if isinstance(data, dict) and not data.get("success", False):
            data = dict(data)
            for key in ("has_official_website", "hasOfficialWebsite"):
                data.pop(key, None)
            for key in ("total_results", "totalResults", "results"):
                data.pop(key, None)
        return data

    @classmethod
    def failed(cls, error: str, query: Optional[str] = None) -> "PresenceResult":
        """Build the degraded result for a probe that did not complete."""
        return cls(success=False, error=error, query=query)
