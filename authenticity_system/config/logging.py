"""Logging configuration using loguru with automatic dev/prod detection.

Every record passes through a patcher before it reaches a sink:
- base64 image payloads and data URIs in the message are replaced with a
  short placeholder, so product photos never end up in the logs
- the verification_id bound by utils.logging (structlog contextvars) is
  copied into record["extra"], so loguru and structlog lines from one
  verification share the same id
"""

import re
import sys
from typing import Optional

import structlog
from loguru import logger

from authenticity_system.config.settings import settings

# data:image/...;base64,.... or any long unbroken base64 run
_IMAGE_PAYLOAD = re.compile(
    r"data:image/[\w.+-]+;base64,[A-Za-z0-9+/=]+|[A-Za-z0-9+/]{200,}={0,2}"
)

CONSOLE_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | "
    "<cyan>{extra[component]}</cyan> | <dim>{extra[verification_id]}</dim> | "
    "<level>{message}</level>"
)


def redact_image_payloads(message: str) -> str:
    """Replace embedded image data with a length-only placeholder."""
    return _IMAGE_PAYLOAD.sub(
        lambda match: f"<image data: {len(match.group(0))} chars>", message
    )


def _patch_record(record) -> None:
    record["message"] = redact_image_payloads(record["message"])
    verification_id = structlog.contextvars.get_contextvars().get("verification_id")
    record["extra"]["verification_id"] = verification_id or "-"


def configure_logging(
    level: Optional[str] = None,
    log_format: Optional[str] = None,
) -> None:
    """
    Configure loguru based on environment settings.

    Behavior:
    - Development (TTY + console format): Colorized, human-readable output
    - Production (non-TTY or json format): JSON-structured logs to stderr
    - Respects LOG_LEVEL from settings

    Args:
        level: Overrides settings.log_level (e.g. "DEBUG" for one CLI run)
        log_format: Overrides settings.log_format ("console" or "json")
    """
    level = (level or settings.log_level).upper()
    log_format = (log_format or settings.log_format).lower()

    logger.remove()
    logger.configure(
        extra={"component": "authenticity", "verification_id": "-"},
        patcher=_patch_record,
    )

    if sys.stderr.isatty() and log_format == "console":
        logger.add(sys.stderr, format=CONSOLE_FORMAT, level=level, colorize=True)
    else:
        # diagnose=False: image bytes can sit in frame locals
        logger.add(
            sys.stderr,
            format="{message}",
            level=level,
            serialize=True,
            diagnose=False,
        )


def get_logger(component: str):
    """
    Get a logger instance bound to a specific component name.

    Example:
        >>> log = get_logger("verification.scorer")
        >>> log.info("Scoring signals")
    """
    return logger.bind(component=component)


configure_logging()

__all__ = ["logger", "get_logger", "configure_logging", "redact_image_payloads"]
