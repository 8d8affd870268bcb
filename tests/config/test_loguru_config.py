"""Tests for the loguru configuration.

Tests cover:
- Image payload redaction (data URIs, long base64 runs)
- verification_id shared with the structlog context
- Level override
"""

import base64

import pytest
from loguru import logger

from authenticity_system.config.logging import (
    configure_logging,
    get_logger,
    redact_image_payloads,
)
from authenticity_system.utils.logging import (
    bind_verification_context,
    clear_verification_context,
)

IMAGE_B64 = base64.b64encode(b"\xff\xd8\xff\xe0" + bytes(range(256)) * 2).decode()


@pytest.fixture
def captured():
    configure_logging(level="DEBUG", log_format="json")
    messages: list[str] = []
    logger.add(
        messages.append,
        format="{extra[verification_id]}|{extra[component]}|{message}",
        level="DEBUG",
    )
    yield messages
    configure_logging()


class TestRedaction:
    def test_data_uri_redacted(self) -> None:
        text = redact_image_payloads(f"got data:image/jpeg;base64,{IMAGE_B64} done")
        assert IMAGE_B64 not in text
        assert text.startswith("got <image data: ")
        assert text.endswith(" done")

    def test_bare_base64_redacted(self) -> None:
        assert IMAGE_B64 not in redact_image_payloads(f"payload={IMAGE_B64}")

    def test_ordinary_text_untouched(self) -> None:
        message = "Verifying product.jpg (Acme, LOT123)"
        assert redact_image_payloads(message) == message


class TestLoguruSinks:
    def test_messages_redacted_at_sink(self, captured: list[str]) -> None:
        get_logger("cli").info(f"Received image {IMAGE_B64}")
        assert len(captured) == 1
        assert IMAGE_B64 not in captured[0]
        assert "|cli|Received image <image data:" in captured[0]

    def test_verification_id_attached(self, captured: list[str]) -> None:
        verification_id = bind_verification_context("ver-42")
        try:
            get_logger("SignalScorer").debug("Signals scored")
        finally:
            clear_verification_context()
        get_logger("SignalScorer").debug("Outside verification")

        assert captured[0].startswith(f"{verification_id}|SignalScorer|")
        assert captured[1].startswith("-|SignalScorer|")

    def test_level_override(self, captured: list[str]) -> None:
        configure_logging(level="WARNING", log_format="json")
        logger.add(captured.append, format="{message}", level="WARNING")
        get_logger("cli").info("hidden")
        get_logger("cli").warning("shown")
        assert captured == ["shown\n"]
