"""LoggerProtocol definition for structured logging.

Backend-agnostic structured logging port. Log calls are a short
snake_case message plus key-value context; never interpolate values into
the message.

Log Levels:
    - DEBUG: Detailed diagnostic info (dev only)
    - INFO: Normal operational events (visit confirmed, appointment booked)
    - WARNING: Rejected operations (wrong status, unsigned protocols)
    - ERROR: Operation partly failed, system continues (blob cleanup)
    - CRITICAL: Invariant violations and unrecoverable failures

Usage:
    from src.core.container import get_logger

    logger = get_logger()
    logger.info("visit_confirmed", visit_id=str(visit.id), studio_id=str(studio_id))

    request_logger = logger.bind(trace_id=trace_id)
    request_logger.warning("visit_confirm_rejected", error=error)
"""

from __future__ import annotations

from typing import Any, Protocol


class LoggerProtocol(Protocol):
    """Protocol for structured logging adapters."""

    def debug(self, message: str, /, **context: Any) -> None:
        """Log a debug-level message."""
        ...

    def info(self, message: str, /, **context: Any) -> None:
        """Log an info-level message."""
        ...

    def warning(self, message: str, /, **context: Any) -> None:
        """Log a warning-level message."""
        ...

    def error(
        self, message: str, /, *, error: Exception | None = None, **context: Any
    ) -> None:
        """Log an error-level message with optional exception details.

        Args:
            message: Event name.
            error: Optional exception instance; implementations add
                error_type and error_message fields.
            **context: Structured key-value context fields.
        """
        ...

    def critical(
        self, message: str, /, *, error: Exception | None = None, **context: Any
    ) -> None:
        """Log a critical-level message with optional exception details."""
        ...

    def bind(self, **context: Any) -> LoggerProtocol:
        """Return new logger with permanently bound context.

        The original logger is unchanged.

        Args:
            **context: Context included in every subsequent log call.

        Returns:
            New logger instance with bound context.
        """
        ...

    def with_context(self, **context: Any) -> LoggerProtocol:
        """Alias for bind()."""
        ...
