"""
Structured Logging Utilities

Attaches key=value context (user_id, job_id, ...) to log lines emitted by
the board services.
"""

from __future__ import annotations

import logging
from typing import Any

STRUCTURED_FORMAT = "%(asctime)s [%(levelname)s] [%(name)s] %(message)s"


def _format_context(context: dict[str, Any]) -> str:
    parts = [f"{key}={value}" for key, value in context.items() if value is not None]
    return " | ".join(parts)


class StructuredLoggerAdapter(logging.LoggerAdapter):
    """
    Logger adapter that prefixes every message with its bound context.

    Usage:
        logger = get_structured_logger(__name__, user_id=42)
        logger.info("Scored 12 postings")  # "[user_id=42] Scored 12 postings"
    """

    def __init__(self, logger: logging.Logger, **context: Any):
        super().__init__(logger, context)

    def bind(self, **context: Any) -> StructuredLoggerAdapter:
        """Return a new adapter carrying this adapter's context plus ``context``."""
        merged = {**self.extra, **context}
        return StructuredLoggerAdapter(self.logger, **merged)

    def process(self, msg: str, kwargs: dict[str, Any]) -> tuple[str, dict[str, Any]]:
        context_str = _format_context(self.extra)
        kwargs.setdefault("extra", {})["context"] = context_str or "none"
        if context_str:
            msg = f"[{context_str}] {msg}"
        return msg, kwargs


def get_structured_logger(name: str, **context: Any) -> StructuredLoggerAdapter:
    """
    Get a structured logger with context.

    Args:
        name: Logger name (typically __name__)
        **context: Context fields (e.g., user_id=123, job_id="abc")

    Returns:
        StructuredLoggerAdapter instance
    """
    return StructuredLoggerAdapter(logging.getLogger(name), **context)


def configure_logging(level: int = logging.INFO) -> None:
    """Configure root logging with the structured format."""
    logging.basicConfig(level=level, format=STRUCTURED_FORMAT)
