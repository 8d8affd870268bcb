"""Vision extractor: product photograph -> ExtractedAttributes.

Wraps the Gemini vision client and turns whatever comes back into a tagged
ExtractionResult. This module never raises for expected failures:
- Invalid image input, missing API key, API errors -> FailedExtraction
- Response that is not a JSON object -> DegradedExtraction with
  brandName/productName/category scraped from the raw text
- JSON object -> ParsedExtraction (fields coerced by the schema)

Usage:
    from authenticity_system.agents.verification.vision_extractor import VisionExtractor

    extractor = VisionExtractor()
    outcome = await extractor.extract(image_base64)
"""

import base64
import binascii
import json
import re
from typing import Any, Optional, Union

import structlog
from pydantic import ValidationError

from authenticity_system.config.prompts import PRODUCT_EXTRACTION_PROMPT
from authenticity_system.data_management.schemas import (
    UNKNOWN,
    DegradedExtraction,
    ExtractedAttributes,
    ExtractionResult,
    FailedExtraction,
    ParsedExtraction,
)

_DATA_URI_PREFIX = re.compile(r"^data:image/[\w.+-]+;base64,", re.IGNORECASE)

# Fields recoverable from unparseable output
_SCRAPED_FIELDS = ("brandName", "productName", "category")

ImageInput = Union[bytes, bytearray, str]


def decode_image(image: ImageInput) -> bytes:
    """Normalize raw bytes or a base64 string (optionally a data URI) to bytes.

    Raises:
        ValueError: If the input is empty, of the wrong type, or not valid base64.
    """
    if isinstance(image, (bytes, bytearray)):
        if not image:
            raise ValueError("Empty image")
        return bytes(image)

    if not isinstance(image, str):
        raise ValueError(
            "Invalid image format. Please provide image bytes or a base64 encoded image."
        )

    encoded = "".join(_DATA_URI_PREFIX.sub("", image.strip()).split())
    if not encoded:
        raise ValueError("Empty image")

    try:
        decoded = base64.b64decode(encoded, validate=True)
    except (binascii.Error, ValueError) as e:
        raise ValueError(f"Invalid base64 image data: {e}") from e

    if not decoded:
        raise ValueError("Empty image")
    return decoded


def sniff_mime_type(image_bytes: bytes) -> str:
    """Guess the image MIME type from magic bytes; JPEG when unrecognised."""
    if image_bytes.startswith(b"\x89PNG\r\n\x1a\n"):
        return "image/png"
    if image_bytes.startswith((b"GIF87a", b"GIF89a")):
        return "image/gif"
    if image_bytes[:4] == b"RIFF" and image_bytes[8:12] == b"WEBP":
        return "image/webp"
    return "image/jpeg"


def extract_field(text: str, field_name: str) -> Optional[str]:
    """Scrape a `"field": "value"` pair out of text that is not valid JSON."""
    match = re.search(
        rf'"{re.escape(field_name)}"\s*:\s*"([^"]*)"', text, re.IGNORECASE
    )
    return match.group(1) if match else None


class VisionExtractor:
    """Extracts packaging attributes from a product photograph."""

    def __init__(
        self,
        client: Optional[Any] = None,
        prompt: str = PRODUCT_EXTRACTION_PROMPT,
    ) -> None:
        """Initialize VisionExtractor.

        Args:
            client: Object with an async generate_from_image(prompt, bytes, mime)
                    method. A GeminiVisionClient is created lazily if None.
            prompt: Extraction prompt sent with the image.
        """
        self._client = client
        self.prompt = prompt
        self._logger = structlog.get_logger().bind(component="VisionExtractor")

    def _get_client(self) -> Any:
        """Lazy-init the Gemini vision client (raises ValueError without a key)."""
        if self._client is None:
            from authenticity_system.llm.gemini_client import GeminiVisionClient

            self._client = GeminiVisionClient()
        return self._client

    async def extract(self, image: ImageInput) -> ExtractionResult:
        """Run extraction on one image.

        Args:
            image: Raw image bytes, or base64 text (data URI prefix allowed).

        Returns:
            ParsedExtraction, DegradedExtraction or FailedExtraction.
        """
        try:
            image_bytes = decode_image(image)
        except ValueError as e:
            self._logger.warning("invalid_image", error=str(e))
            return FailedExtraction(reason=str(e))

        mime_type = sniff_mime_type(image_bytes)

        try:
            client = self._get_client()
            response_text = await client.generate_from_image(
                self.prompt, image_bytes, mime_type
            )
        except Exception as e:
            self._logger.error(
                "vision_extraction_failed",
                error=str(e),
                error_type=type(e).__name__,
            )
            return FailedExtraction(reason=str(e) or type(e).__name__)

        outcome = self.parse_response(response_text or "")
        self._logger.info(
            "vision_extraction_complete",
            status=outcome.status,
            brand=outcome.attributes.brand_name,
            image_bytes=len(image_bytes),
            mime_type=mime_type,
        )
        return outcome

    def parse_response(
        self, response_text: str
    ) -> Union[ParsedExtraction, DegradedExtraction]:
        """Parse model output into attributes, degrading instead of failing."""
        raw = self._extract_json_object(response_text)

        if raw is not None:
            try:
                return ParsedExtraction(
                    attributes=ExtractedAttributes.model_validate(raw)
                )
            except ValidationError as e:
                self._logger.warning(
                    "attribute_validation_failed", errors=e.error_count()
                )

        return self._degraded(response_text)

    def _extract_json_object(self, response_text: str) -> Optional[dict]:
        """
        Extract a JSON object from model output, handling markdown blocks.

        Tries, in order: a ```json fenced block, any fenced block, the
        outermost {...} span, then the whole text.
        """
        text = response_text.strip()
        if not text:
            return None

        fence_match = re.search(r"```json\s*([\s\S]*?)```", text, re.IGNORECASE)
        if fence_match is None:
            fence_match = re.search(r"```\s*([\s\S]*?)```", text)
        if fence_match:
            text = fence_match.group(1).strip()
        else:
            object_match = re.search(r"\{[\s\S]*\}", text)
            if object_match:
                text = object_match.group(0)

        try:
            parsed = json.loads(text)
        except (json.JSONDecodeError, RecursionError) as e:
            self._logger.warning(
                "json_parse_failed", error=str(e), error_type=type(e).__name__
            )
            return None

        if isinstance(parsed, dict):
            return parsed
        if isinstance(parsed, list) and parsed and isinstance(parsed[0], dict):
            return parsed[0]
        return None

    def _degraded(self, response_text: str) -> DegradedExtraction:
        """Best-effort attributes scraped from unparseable output."""
        scraped = {
            name: extract_field(response_text, name) or UNKNOWN
            for name in _SCRAPED_FIELDS
        }
        attributes = ExtractedAttributes.model_validate(
            {
                **scraped,
                "overallImpression": response_text,
                "rawResponse": response_text,
            }
        )
        return DegradedExtraction(attributes=attributes, raw_text=response_text)
