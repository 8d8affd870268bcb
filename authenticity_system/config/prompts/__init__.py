"""Prompt templates for LLM-powered extraction.

Modules:
    vision_prompts: Product packaging extraction prompt
"""

from authenticity_system.config.prompts.vision_prompts import (
    PRODUCT_EXTRACTION_PROMPT,
)

__all__ = [
    "PRODUCT_EXTRACTION_PROMPT",
]
