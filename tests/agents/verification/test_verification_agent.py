"""Tests for VerificationAgent.

Tests cover:
- End-to-end low, medium and high risk verifications with fake collaborators
- Extraction failure short-circuits (no probe, no scores)
- Degraded extraction flag
- Probe arguments taken from extracted attributes
- Alternate scoring policy applied to all components
- verify_product convenience wrapper
- Unexpected collaborator errors and cancellation
- Produced results cannot be changed in place
"""

import asyncio
from unittest.mock import AsyncMock

import pytest
from pydantic import ValidationError

from authenticity_system.agents.verification import (
    EXTRACTION_FAILED_ERROR,
    VerificationAgent,
    verify_product,
)
from authenticity_system.config.scoring_policy import ScoringPolicy
from authenticity_system.data_management.schemas import (
    DegradedExtraction,
    ExtractedAttributes,
    FailedExtraction,
    ParsedExtraction,
    PresenceResult,
    RiskLevel,
    SearchHit,
    VerificationFailure,
    VerificationResult,
)

IMAGE = b"\xff\xd8\xff\xe0fake-jpeg"


def _hits(count: int) -> list[SearchHit]:
    return [
        SearchHit(title=f"Acme result {i}", link=f"https://acme{i}.example.com")
        for i in range(count)
    ]


def _agent(extraction, presence: PresenceResult, **kwargs) -> VerificationAgent:
    extractor = AsyncMock()
    extractor.extract = AsyncMock(return_value=extraction)
    prober = AsyncMock()
    prober.probe = AsyncMock(return_value=presence)
    return VerificationAgent(
        vision_extractor=extractor, presence_prober=prober, **kwargs
    )


# ── Fixtures ──────────────────────────────────────────────────────────────


@pytest.fixture
def authentic_attributes() -> ExtractedAttributes:
    return ExtractedAttributes.model_validate(
        {
            "brandName": "Acme",
            "productName": "Pain Relief 500mg",
            "category": "medicine",
            "packagingQuality": "excellent",
            "imageQuality": "good",
            "textClarity": "good",
            "batchNumber": "LOT123",
            "suspiciousElements": [],
            "legitimacyIndicators": ["hologram"],
        }
    )


@pytest.fixture
def counterfeit_attributes() -> ExtractedAttributes:
    return ExtractedAttributes.model_validate(
        {
            "brandName": "Unknown",
            "productName": "Unknown",
            "packagingQuality": "poor",
            "suspiciousElements": ["misspelled brand", "blurred print"],
        }
    )


@pytest.fixture
def strong_presence() -> PresenceResult:
    return PresenceResult(
        success=True, has_official_website=True, total_results=10, results=_hits(5)
    )


# ── Verdicts ─────────────────────────────────────────────────────────────


class TestVerdicts:
    @pytest.mark.asyncio
    async def test_authentic_product(self, authentic_attributes, strong_presence) -> None:
        agent = _agent(ParsedExtraction(attributes=authentic_attributes), strong_presence)
        result = await agent.verify(IMAGE)

        assert isinstance(result, VerificationResult)
        assert result.success is True
        assert result.confidence == 89
        assert result.risk_level == RiskLevel.LOW
        assert result.verified is True
        assert result.reward_eligible is True
        assert result.scoring.dimension_scores() == {
            "image_quality": 75,
            "packaging_quality": 95,
            "text_clarity": 75,
            "brand_legitimacy": 90,
            "web_presence": 100,
        }
        assert list(result.analysis) == [
            "Brand identified: Acme",
            "No suspicious elements detected",
            "1 legitimacy indicator(s) present",
            "Official brand website found",
            "Strong online presence (10 results)",
            "High quality packaging detected",
        ]
        assert result.warnings == ()
        assert result.recommendations[1] == (
            'Verify batch number "LOT123" on official website for 100% confirmation'
        )
        assert result.message == "✅ Product verified with 89% confidence! Likely authentic."
        assert result.degraded_extraction is False
        assert len(result.web_search_results.relevant_links) == 3

    @pytest.mark.asyncio
    async def test_counterfeit_product(self, counterfeit_attributes) -> None:
        agent = _agent(
            ParsedExtraction(attributes=counterfeit_attributes),
            PresenceResult.failed("timeout"),
        )
        result = await agent.verify(IMAGE)

        assert result.confidence == 21
        assert result.risk_level == RiskLevel.HIGH
        assert result.verified is False
        assert result.reward_eligible is False
        assert list(result.warnings) == [
            "Packaging quality appears below standard",
            "⚠️ misspelled brand",
            "⚠️ blurred print",
            "No official website found for this brand",
            "Limited online presence for this product",
            "No batch/lot number visible on packaging",
        ]
        assert result.recommendations[0] == "⚠️ Do not use this product until verified"
        assert result.message.startswith("❌ High risk of counterfeit (21% confidence)")

    @pytest.mark.asyncio
    async def test_uncertain_product(self) -> None:
        attrs = ExtractedAttributes.model_validate(
            {
                "brandName": "Acme",
                "productName": "Tonic",
                "packagingQuality": "good",
                "imageQuality": "good",
                "textClarity": "good",
                "batchNumber": "B-77",
                "suspiciousElements": ["uneven seal"],
            }
        )
        presence = PresenceResult(success=True, total_results=3, results=_hits(3))
        result = await _agent(ParsedExtraction(attributes=attrs), presence).verify(IMAGE)

        assert result.confidence == 69
        assert result.risk_level == RiskLevel.MEDIUM
        assert result.reward_eligible is False
        assert list(result.warnings) == [
            "⚠️ uneven seal",
            "No official website found for this brand",
        ]

    @pytest.mark.asyncio
    async def test_response_shape(self, authentic_attributes, strong_presence) -> None:
        agent = _agent(ParsedExtraction(attributes=authentic_attributes), strong_presence)
        response = (await agent.verify(IMAGE)).to_response()

        assert response["riskLevel"] == "low"
        assert response["scoring"]["overall"] == 89
        assert response["scoring"]["breakdown"]["brandLegitimacy"] == 90
        assert response["extractedInfo"]["brandName"] == "Acme"


# ── Flow ─────────────────────────────────────────────────────────────────


class TestFlow:
    @pytest.mark.asyncio
    async def test_extraction_failure_short_circuits(self) -> None:
        agent = _agent(FailedExtraction(reason="API down"), PresenceResult(success=True))
        result = await agent.verify(IMAGE)

        assert isinstance(result, VerificationFailure)
        assert result.success is False
        assert result.error == EXTRACTION_FAILED_ERROR
        assert result.details == "API down"
        agent.presence_prober.probe.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_search_uses_extracted_names(self, authentic_attributes, strong_presence) -> None:
        agent = _agent(ParsedExtraction(attributes=authentic_attributes), strong_presence)
        await agent.verify(IMAGE)

        agent.vision_extractor.extract.assert_awaited_once_with(IMAGE)
        agent.presence_prober.probe.assert_awaited_once_with("Acme", "Pain Relief 500mg")

    @pytest.mark.asyncio
    async def test_unexpected_collaborator_error(self, authentic_attributes) -> None:
        agent = _agent(
            ParsedExtraction(attributes=authentic_attributes), PresenceResult(success=True)
        )
        agent.presence_prober.probe = AsyncMock(side_effect=RuntimeError("boom"))
        result = await agent.verify(IMAGE)

        assert isinstance(result, VerificationFailure)
        assert result.error == "boom"
        assert "scoring" not in result.to_response()

    @pytest.mark.asyncio
    async def test_cancellation_not_converted(self) -> None:
        agent = _agent(FailedExtraction(reason="unused"), PresenceResult(success=True))
        agent.vision_extractor.extract = AsyncMock(side_effect=asyncio.CancelledError())

        with pytest.raises(asyncio.CancelledError):
            await agent.verify(IMAGE)

    @pytest.mark.asyncio
    async def test_degraded_extraction_flagged(self) -> None:
        extraction = DegradedExtraction(
            attributes=ExtractedAttributes(brandName="Acme"),
            raw_text="Acme something",
        )
        result = await _agent(extraction, PresenceResult.failed("timeout")).verify(IMAGE)

        assert isinstance(result, VerificationResult)
        assert result.degraded_extraction is True
        assert result.to_response()["degradedExtraction"] is True

    @pytest.mark.asyncio
    async def test_alternate_policy(self, authentic_attributes, strong_presence) -> None:
        strict = ScoringPolicy(low_risk_min_score=95, medium_risk_min_score=90)
        agent = _agent(
            ParsedExtraction(attributes=authentic_attributes), strong_presence, policy=strict
        )
        result = await agent.verify(IMAGE)

        assert result.confidence == 89
        assert result.risk_level == RiskLevel.HIGH
        assert result.reward_eligible is False

    @pytest.mark.asyncio
    async def test_verify_product_wrapper(self, authentic_attributes, strong_presence) -> None:
        agent = _agent(ParsedExtraction(attributes=authentic_attributes), strong_presence)
        result = await verify_product(IMAGE, agent=agent)
        assert result.confidence == 89

    def test_assess_is_deterministic(self, authentic_attributes, strong_presence) -> None:
        agent = _agent(ParsedExtraction(attributes=authentic_attributes), strong_presence)
        first = agent.assess(authentic_attributes, strong_presence)
        second = agent.assess(authentic_attributes, strong_presence)
        assert first.model_dump(exclude={"verified_at"}) == second.model_dump(
            exclude={"verified_at"}
        )


# ── Immutability ─────────────────────────────────────────────────────────


class TestImmutability:
    def test_result_sequences_cannot_change(self, counterfeit_attributes) -> None:
        agent = _agent(
            ParsedExtraction(attributes=counterfeit_attributes),
            PresenceResult.failed("timeout"),
        )
        result = agent.assess(counterfeit_attributes, PresenceResult.failed("timeout"))

        with pytest.raises(AttributeError):
            result.warnings.append("tampered")
        with pytest.raises(AttributeError):
            result.scoring.analysis.clear()
        with pytest.raises(AttributeError):
            result.extracted_info.suspicious_elements.append("tampered")
        assert result.analysis == result.scoring.analysis
        assert len(result.warnings) == 6

    def test_result_fields_cannot_be_reassigned(self, counterfeit_attributes) -> None:
        agent = _agent(
            ParsedExtraction(attributes=counterfeit_attributes),
            PresenceResult.failed("timeout"),
        )
        result = agent.assess(counterfeit_attributes, PresenceResult.failed("timeout"))

        with pytest.raises(ValidationError):
            result.warnings = ()

    def test_response_lists_are_copies(self, counterfeit_attributes) -> None:
        agent = _agent(
            ParsedExtraction(attributes=counterfeit_attributes),
            PresenceResult.failed("timeout"),
        )
        result = agent.assess(counterfeit_attributes, PresenceResult.failed("timeout"))
        response = result.to_response()

        response["warnings"].clear()
        response["extractedInfo"]["suspiciousElements"].clear()
        assert len(result.warnings) == 6
        assert len(result.extracted_info.suspicious_elements) == 2
        assert isinstance(response["analysis"], list)
