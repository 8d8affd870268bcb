"""Structured logging utilities using structlog for pipeline context and tracing."""

import os
import sys
import uuid
from typing import Optional
import structlog
from structlog.processors import JSONRenderer
from structlog.contextvars import merge_contextvars

IS_TTY = sys.stderr.isatty()
LOG_FORMAT = os.getenv("LOG_FORMAT", "console").lower()
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()


def configure_structured_logging() -> None:
    """
    Configure structured logging with appropriate processors and renderers.

    Uses:
    - Console renderer for development (colorized, human-readable)
    - JSON renderer for production (structured, machine-readable)
    - Context variables so a verification_id bound once reaches every
      component that logs during that verification
    """
    processors = [
        merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]

    if IS_TTY and LOG_FORMAT == "console":
        processors.append(
            structlog.dev.ConsoleRenderer(
                colors=True,
                exception_formatter=structlog.dev.plain_traceback,
            )
        )
    else:
        processors.append(JSONRenderer())

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(LOG_LEVEL),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=True,
    )


def get_correlation_id() -> str:
    """
    Generate a correlation ID for tracing a single verification.

    Returns:
        UUID string for correlation
    """
    return str(uuid.uuid4())


def bind_verification_context(verification_id: Optional[str] = None) -> str:
    """
    Bind a verification_id into structlog's context variables.

    Every structlog logger used while the context is bound picks the id up
    through merge_contextvars. Call clear_verification_context() when done.

    Args:
        verification_id: Existing id to bind; a new one is generated if None

    Returns:
        The bound verification id
    """
    verification_id = verification_id or get_correlation_id()
    structlog.contextvars.bind_contextvars(verification_id=verification_id)
    return verification_id


def clear_verification_context() -> None:
    """Remove the verification_id bound by bind_verification_context()."""
    structlog.contextvars.unbind_contextvars("verification_id")


configure_structured_logging()


__all__ = [
    "get_correlation_id",
    "bind_verification_context",
    "clear_verification_context",
    "configure_structured_logging",
]
