"""Gemini vision client with exponential backoff."""

import asyncio
import functools
import random
from typing import Any, Awaitable, Callable, Optional

import google.generativeai as genai
from google.generativeai.types.generation_types import BlockedPromptException

from authenticity_system.config.logging import get_logger
from authenticity_system.config.settings import settings

logger = get_logger("GeminiVisionClient")

MAX_RETRIES = 3
BASE_DELAY = 1.0


def _exponential_backoff(func: Callable[..., Awaitable[Any]]) -> Callable[..., Awaitable[Any]]:
    """
    Decorator implementing exponential backoff with jitter for async API calls.

    Retries failed requests up to MAX_RETRIES times with exponentially
    increasing delays. Base delay: 1.0s, exponential factor: 2,
    jitter: 0-10% of delay. Blocked prompts are not retried.

    Args:
        func: Coroutine function to wrap with retry logic

    Returns:
        Wrapped coroutine function with exponential backoff
    """
    @functools.wraps(func)
    async def wrapper(*args, **kwargs) -> Any:
        for retry in range(MAX_RETRIES):
            try:
                return await func(*args, **kwargs)
            except BlockedPromptException:
                raise
            except Exception as e:
                if retry == MAX_RETRIES - 1:
                    logger.error(f"Max retries exceeded for {func.__name__}: {e}")
                    raise

                delay = BASE_DELAY * (2 ** retry)
                jitter = random.uniform(0, delay * 0.1)
                total_delay = delay + jitter

                logger.warning(
                    f"Retry {retry + 1}/{MAX_RETRIES} for {func.__name__} "
                    f"after {total_delay:.2f}s: {e}"
                )
                await asyncio.sleep(total_delay)

        raise RuntimeError(f"Unexpected retry loop exit in {func.__name__}")

    return wrapper


class GeminiVisionClient:
    """
    Google Gemini client for multimodal (image + text) prompts.

    Attributes:
        model: Configured Gemini generative model instance
        max_output_tokens: Output budget per request
        temperature: Sampling temperature
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        model_name: Optional[str] = None,
        max_output_tokens: Optional[int] = None,
        temperature: Optional[float] = None,
    ):
        """
        Initialize the client with settings, overridable per argument.

        Raises:
            ValueError: If no API key is configured
        """
        api_key = api_key or settings.gemini_api_key
        if not api_key:
            raise ValueError("GEMINI_API_KEY not configured in environment")

        genai.configure(api_key=api_key)

        self.model_name = model_name or settings.gemini_model
        self.model = genai.GenerativeModel(self.model_name)
        self.max_output_tokens = max_output_tokens or settings.vision_max_output_tokens
        self.temperature = (
            settings.vision_temperature if temperature is None else temperature
        )

        logger.info(f"Gemini vision client initialized with model {self.model_name}")

    @_exponential_backoff
    async def generate_from_image(
        self,
        prompt: str,
        image_bytes: bytes,
        mime_type: str = "image/jpeg",
    ) -> str:
        """
        Send a prompt together with an image and return the text response.

        Args:
            prompt: Instruction text
            image_bytes: Raw image content
            mime_type: MIME type of the image

        Returns:
            Generated text content

        Raises:
            BlockedPromptException: If the request violates safety policies
            Exception: For other API errors after retries are exhausted
        """
        try:
            response = await self.model.generate_content_async(
                [prompt, {"mime_type": mime_type, "data": image_bytes}],
                generation_config=genai.types.GenerationConfig(
                    temperature=self.temperature,
                    max_output_tokens=self.max_output_tokens,
                ),
            )
            return response.text
        except BlockedPromptException as e:
            logger.error(f"Prompt blocked by safety filters: {e}")
            raise
