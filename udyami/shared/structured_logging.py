"""
Structured Logging Utilities

Context-carrying loggers for the storage and notification services, plus the
logging setup used by the operator scripts.
"""

from __future__ import annotations

import logging
from typing import Any

LOG_FORMAT = "%(asctime)s [%(levelname)s] [%(name)s] %(message)s"


def format_context(context: dict[str, Any]) -> str:
    """
    Format context fields as ``key=value`` pairs joined by `` | ``.

    Fields whose value is None are left out.

    Args:
        context: Context fields

    Returns:
        Formatted context string, or an empty string when nothing is set
    """
    return " | ".join(f"{key}={value}" for key, value in context.items() if value is not None)


class StructuredLoggerAdapter(logging.LoggerAdapter):
    """
    Logger adapter that prefixes every message with its context.

    Usage:
        logger = get_structured_logger(__name__, store="local", job_id="402")
        logger.info("Job created")  # -> "[store=local | job_id=402] Job created"
    """

    def __init__(self, logger: logging.Logger, **context: Any):
        super().__init__(logger, context)

    def process(self, msg: str, kwargs: dict[str, Any]) -> tuple[str, dict[str, Any]]:
        context_str = format_context(dict(self.extra))
        if context_str:
            msg = f"[{context_str}] {msg}"
        return msg, kwargs

    def bind(self, **context: Any) -> StructuredLoggerAdapter:
        """Return a new adapter with additional context fields."""
        merged = {**self.extra, **context}
        return StructuredLoggerAdapter(self.logger, **merged)


def get_structured_logger(name: str, **context: Any) -> StructuredLoggerAdapter:
    """
    Get a structured logger with context.

    Args:
        name: Logger name (typically __name__)
        **context: Context fields (e.g., store="remote", job_id="402")

    Returns:
        StructuredLoggerAdapter instance
    """
    return StructuredLoggerAdapter(logging.getLogger(name), **context)


def configure_logging(level: str | int = "INFO") -> None:
    """
    Configure root logging for scripts and local runs.

    Args:
        level: Log level name or number
    """
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO
    logging.basicConfig(level=level, format=LOG_FORMAT, force=True)
