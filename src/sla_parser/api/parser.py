"""Public parsing API for SLA documents.

Two levels are offered: the module-level ``parse`` function, which returns a
document or raises the first ``SlaParseError``, and the reusable
``SlaParser`` class, whose ``parse_with_metrics`` captures the error in a
``ParseOutcome`` together with the parse metrics.
"""

import time
from typing import Any, Dict, Optional

from sla_parser.model import Document
from sla_parser.parsing import ParseContext, parse_document
from sla_parser.scanning import TagScanner
from sla_parser.shared import (
    LimitExceededError,
    ParseMetrics,
    ParseOutcome,
    ParserConfig,
    SlaParseError,
    configure_level,
    get_logger,
    parse_error_fields,
)

MS_PER_SECOND = 1000  # Milliseconds per second conversion


def parse(
    text: str,
    config: Optional[ParserConfig] = None,
    correlation_id: Optional[str] = None,
) -> Document:
    """Parse a complete SLA document.

    Args:
        text: Document text, from the root ``<sleigh>`` tag to its closing tag
        config: Parser configuration (defaults to ``ParserConfig()``)
        correlation_id: Optional correlation ID for request tracking

    Returns:
        The parsed document tree

    Raises:
        SlaParseError: The first structural, encoding, cardinality or limit
            violation found in the input
        TypeError: If ``text`` is not a ``str``

    Examples:
        >>> document = parse(sla_text)
        >>> document.spaces.default_space
        'ram'
    """
    return SlaParser(config, correlation_id).parse(text)


def parse_with_metrics(
    text: str,
    config: Optional[ParserConfig] = None,
    correlation_id: Optional[str] = None,
) -> ParseOutcome:
    """Parse a document, returning the document or error together with metrics."""
    return SlaParser(config, correlation_id).parse_with_metrics(text)


class SlaParser:
    """Reusable SLA parser bound to one configuration.

    Each call builds its own scanner and parse context, so a single instance
    may serve parses running on several threads; only the usage statistics
    are shared.

    Examples:
        >>> parser = SlaParser(ParserConfig.strict())
        >>> outcome = parser.parse_with_metrics(sla_text)
        >>> outcome.success
        True
        >>> outcome.metrics.symbols_parsed > 0
        True
    """

    def __init__(
        self,
        config: Optional[ParserConfig] = None,
        correlation_id: Optional[str] = None,
    ) -> None:
        """Initialize the parser.

        Args:
            config: Parser configuration (defaults to ``ParserConfig()``)
            correlation_id: Correlation ID, overriding the configuration's
        """
        self.config = config or ParserConfig()
        self.correlation_id = correlation_id or self.config.correlation_id
        if self.config.logging_level is not None:
            configure_level(self.config.logging_level)
        self.logger = get_logger(__name__, self.correlation_id, "sla_parser")

        self._parse_count = 0
        self._successful_parses = 0
        self._total_processing_time = 0.0

    def parse(self, text: str) -> Document:
        """Parse ``text``, raising the first ``SlaParseError`` on failure."""
        return self.parse_with_metrics(text).unwrap()

    def parse_with_metrics(self, text: str) -> ParseOutcome:
        """Parse ``text`` without raising parse errors.

        Returns:
            ParseOutcome holding either the document or the error, plus
            metrics for the attempt

        Raises:
            TypeError: If ``text`` is not a ``str``
        """
        if not isinstance(text, str):
            raise TypeError(f"SLA input must be str, not {type(text).__name__}")

        start_time = time.time()
        self.logger.info(
            "Starting SLA parse",
            extra={"content_length": len(text), "parse_count": self._parse_count + 1},
        )

        context = ParseContext(
            TagScanner(text, max_depth=self.config.max_depth),
            self.config,
            self.logger.for_component("sla_parser.parsing", "node_parsers"),
        )
        document: Optional[Document] = None
        error: Optional[SlaParseError] = None
        try:
            self._check_input_size(text)
            document = parse_document(context)
        except SlaParseError as parse_error:
            error = parse_error

        processing_time = (time.time() - start_time) * MS_PER_SECOND
        metrics = self._collect_metrics(context, processing_time)
        self._parse_count += 1
        self._total_processing_time += processing_time

        if error is not None:
            failure = parse_error_fields(error)
            failure["processing_time_ms"] = processing_time
            self.logger.warning("SLA parse failed", extra=failure)
            return ParseOutcome(
                error=error, metrics=metrics, correlation_id=self.correlation_id
            )

        self._successful_parses += 1
        self.logger.info("SLA parse completed", extra=metrics.to_dict())
        return ParseOutcome(
            document=document, metrics=metrics, correlation_id=self.correlation_id
        )

    def _check_input_size(self, text: str) -> None:
        maximum = self.config.max_input_size_bytes
        if maximum is None:
            return
        size = len(text.encode("utf-8"))
        if size > maximum:
            raise LimitExceededError("input size in bytes", size, maximum)

    def _collect_metrics(self, context: ParseContext, processing_time: float) -> ParseMetrics:
        if not self.config.enable_metrics:
            return ParseMetrics()
        metrics = context.snapshot_metrics()
        metrics.processing_time_ms = processing_time
        return metrics

    @property
    def statistics(self) -> Dict[str, Any]:
        """Get parser usage statistics."""
        return {
            "total_parses": self._parse_count,
            "successful_parses": self._successful_parses,
            "success_rate": (
                self._successful_parses / self._parse_count
                if self._parse_count > 0 else 0.0
            ),
            "total_processing_time_ms": self._total_processing_time,
            "average_processing_time_ms": (
                self._total_processing_time / self._parse_count
                if self._parse_count > 0 else 0.0
            ),
            "correlation_id": self.correlation_id,
        }

    def reset_statistics(self) -> None:
        """Reset parser usage statistics."""
        self._parse_count = 0
        self._successful_parses = 0
        self._total_processing_time = 0.0
        self.logger.info("Parser statistics reset")
