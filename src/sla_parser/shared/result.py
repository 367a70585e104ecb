"""Result objects and metrics for SLA parsing operations."""

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Dict, Optional, cast

from .errors import SlaParseError

if TYPE_CHECKING:
    from sla_parser.model import Document


@dataclass
class ParseMetrics:
    """Counters collected during a single parse."""

    processing_time_ms: float = 0.0
    characters_processed: int = 0
    elements_parsed: int = 0
    max_depth: int = 0
    symbols_parsed: int = 0
    constructors_parsed: int = 0

    @property
    def characters_per_second(self) -> float:
        """Calculate characters processed per second."""
        if self.processing_time_ms <= 0:
            return 0.0
        return (self.characters_processed * 1000.0) / self.processing_time_ms

    @property
    def elements_per_second(self) -> float:
        """Calculate elements parsed per second."""
        if self.processing_time_ms <= 0:
            return 0.0
        return (self.elements_parsed * 1000.0) / self.processing_time_ms

    def to_dict(self) -> Dict[str, Any]:
        return {
            "processing_time_ms": self.processing_time_ms,
            "characters_processed": self.characters_processed,
            "elements_parsed": self.elements_parsed,
            "max_depth": self.max_depth,
            "symbols_parsed": self.symbols_parsed,
            "constructors_parsed": self.constructors_parsed,
            "characters_per_second": self.characters_per_second,
        }


@dataclass
class ParseOutcome:
    """Outcome of a parse: either a document or the first error, plus metrics."""

    document: Optional["Document"] = None
    error: Optional[SlaParseError] = None
    metrics: ParseMetrics = field(default_factory=ParseMetrics)
    correlation_id: Optional[str] = None

    def __post_init__(self) -> None:
        """Validate that exactly one of document and error is set."""
        if (self.document is None) == (self.error is None):
            raise ValueError("ParseOutcome requires exactly one of document or error")

    @property
    def success(self) -> bool:
        """Check whether the parse produced a document."""
        return self.document is not None

    def unwrap(self) -> "Document":
        """Return the document, re-raising the parse error on failure."""
        if self.error is not None:
            raise self.error
        return cast("Document", self.document)
