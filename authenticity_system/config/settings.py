"""Application settings using Pydantic BaseSettings for environment variable management."""

from pydantic_settings import BaseSettings
from pydantic import Field


class Settings(BaseSettings):
    """
    Global application settings loaded from environment variables.

    Scoring weights and risk thresholds live in the immutable ScoringPolicy
    (config/scoring_policy.py).

    Attributes:
        gemini_api_key: Google Gemini API key used by the vision extractor
        gemini_model: Gemini model used for packaging analysis
        vision_max_output_tokens: Output token budget for one extraction
        vision_temperature: Sampling temperature for extraction
        serper_api_key: Serper API key used by the presence prober
        presence_timeout_seconds: Bounded wait for the web presence probe
        presence_max_results: Maximum organic results kept per probe
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_format: Log output format (json for production, console for dev)
    """

    gemini_api_key: str = Field(
        default="",
        description="Google Gemini API key"
    )
    gemini_model: str = Field(
        default="gemini-1.5-flash",
        description="Gemini model identifier used for image analysis"
    )
    vision_max_output_tokens: int = Field(
        default=800,
        description="Maximum output tokens for one extraction response"
    )
    vision_temperature: float = Field(
        default=0.2,
        description="Sampling temperature for extraction"
    )
    serper_api_key: str = Field(
        default="",
        description="Serper.dev API key for web presence probing"
    )
    presence_timeout_seconds: float = Field(
        default=5.0,
        description="Timeout budget for the presence probe, in seconds"
    )
    presence_max_results: int = Field(
        default=5,
        description="Maximum search results kept per presence probe"
    )
    log_level: str = Field(
        default="INFO",
        description="Logging level"
    )
    log_format: str = Field(
        default="json",
        description="Log output format: json or console"
    )

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,
        "extra": "ignore",
    }


# Singleton instance - import this throughout the application
settings = Settings()
