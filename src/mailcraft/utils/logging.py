"""Structured logging setup for Mailcraft."""

import structlog
from pathlib import Path
from typing import Any
import os


def configure_logging() -> None:
    """
    Configure structlog for JSON logging to ~/.cache/mailcraft/logs/mailcraft.log.

    Log level can be controlled via MAILCRAFT_LOG_LEVEL environment variable:
    - Set to "DEBUG" to see LLM payloads and every state snapshot
    - Defaults to "INFO" if not set

    Log levels:
    - DEBUG: LLM request payloads, parsed chunks, listener notifications
    - INFO: Submissions, replies, resets, template changes
    - WARNING: Skipped chunks, stale completions, retries
    - ERROR: Generation failures, editor callback failures

    Example:
        MAILCRAFT_LOG_LEVEL=DEBUG mailcraft chat
        tail -f ~/.cache/mailcraft/logs/mailcraft.log | jq .
    """
    log_dir = Path.home() / ".cache" / "mailcraft" / "logs"
    log_dir.mkdir(parents=True, exist_ok=True)
    log_file = log_dir / "mailcraft.log"

    log_level = os.environ.get("MAILCRAFT_LOG_LEVEL", "INFO").upper()
    if log_level not in ("DEBUG", "INFO", "WARNING", "ERROR"):
        log_level = "INFO"

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        context_class=dict,
        logger_factory=structlog.WriteLoggerFactory(file=open(log_file, "a")),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str) -> Any:
    """
    Get a structured logger instance.

    Args:
        name: Logger name (typically __name__ of calling module)

    Returns:
        Structured logger instance

    Example:
        >>> logger = get_logger(__name__)
        >>> logger.info("utterance_submitted", length=42)
    """
    return structlog.get_logger(name)
