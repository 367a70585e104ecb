"""Correlation-aware logging for SLA parsing.

Every record carries the emitting component and an optional correlation ID in
its ``extra`` data so parses running side by side can be told apart. Failed
parses additionally carry the error kind and source position as separate
fields.
"""

import logging
from typing import Any, Dict, Optional

from .errors import SlaParseError

PACKAGE_LOGGER_NAME = "sla_parser"


class CorrelationLogger:
    """Logger that automatically includes correlation ID and component information."""

    def __init__(
        self,
        name: str,
        correlation_id: Optional[str] = None,
        component: Optional[str] = None
    ) -> None:
        """Initialize correlation logger.

        Args:
            name: Logger name (typically __name__)
            correlation_id: Optional correlation ID for request tracking
            component: Component name, defaults to the last part of ``name``
        """
        self.logger = logging.getLogger(name)
        self.correlation_id = correlation_id
        self.component = component or name.rsplit(".", 1)[-1]

    def for_component(self, name: str, component: str) -> "CorrelationLogger":
        """Create a logger for another component sharing this correlation ID."""
        return CorrelationLogger(name, self.correlation_id, component)

    def _with_context(self, extra: Optional[Dict[str, Any]]) -> Dict[str, Any]:
        fields: Dict[str, Any] = {
            "component": self.component,
            "correlation_id": self.correlation_id,
        }
        if extra:
            fields.update(extra)
        return fields

    def is_enabled_for(self, level: int) -> bool:
        return self.logger.isEnabledFor(level)

    def debug(self, message: str, extra: Optional[Dict[str, Any]] = None) -> None:
        self.logger.debug(message, extra=self._with_context(extra))

    def info(self, message: str, extra: Optional[Dict[str, Any]] = None) -> None:
        self.logger.info(message, extra=self._with_context(extra))

    def warning(self, message: str, extra: Optional[Dict[str, Any]] = None) -> None:
        self.logger.warning(message, extra=self._with_context(extra))

    def error(
        self,
        message: str,
        extra: Optional[Dict[str, Any]] = None,
        exc_info: bool = True
    ) -> None:
        """Log error message with correlation info and, by default, the traceback."""
        self.logger.error(message, extra=self._with_context(extra), exc_info=exc_info)


def parse_error_fields(error: SlaParseError) -> Dict[str, Any]:
    """Flatten a parse error into ``extra`` fields.

    ``message`` is a reserved ``LogRecord`` attribute, so the text is logged
    as ``error_message``.
    """
    position = error.position
    return {
        "error_kind": error.kind.name,
        "error_message": error.message,
        "line": position.line if position else None,
        "column": position.column if position else None,
    }


def get_logger(
    name: str,
    correlation_id: Optional[str] = None,
    component: Optional[str] = None
) -> CorrelationLogger:
    """Get a correlation-aware logger instance.

    Args:
        name: Logger name (typically __name__)
        correlation_id: Optional correlation ID for request tracking
        component: Component name for structured logging

    Returns:
        CorrelationLogger instance
    """
    return CorrelationLogger(name, correlation_id, component)


def configure_level(level_name: str) -> None:
    """Apply a level name such as ``"DEBUG"`` to the package logger."""
    logging.getLogger(PACKAGE_LOGGER_NAME).setLevel(getattr(logging, level_name))
