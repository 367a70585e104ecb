"""Performance profiling tools for the SLA parser.

Records timing, memory and parse metrics for individual parses and builds
synthetic deeply nested documents to check that parse time grows linearly
with nesting depth.
"""

import json
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional

import psutil

from sla_parser.api import SlaParser
from sla_parser.shared.logging import get_logger
from sla_parser.shared.result import ParseMetrics, ParseOutcome

NESTED_DOCUMENT_HEAD = (
    '<sleigh bigendian="false" align="1" uniqbase="0x0">'
    '<spaces defaultspace="ram">'
    '<space_base name="ram" index="1" bigendian="false" delay="1" size="4" physical="true"/>'
    "</spaces>"
    '<symbol_table scopesize="1" symbolsize="1">'
    '<scope id="0x0" parent="0x0"/>'
    '<operand_sym_head name="op" id="0x0" scope="0x0"/>'
    '<operand_sym name="op" id="0x0" scope="0x0" off="0" base="-1" minlen="0" index="0">'
    '<operand_exp index="0" table="0x0" ct="0x0"/>'
)
NESTED_DOCUMENT_TAIL = "</operand_sym></symbol_table></sleigh>"
LEAF = '<intb val="1"/>'


@dataclass
class ProfilingSession:
    """Measurements for one profiled parse."""

    session_id: str
    start_time: float
    end_time: float
    input_size: int  # bytes
    memory_start: int = 0  # bytes
    memory_end: int = 0  # bytes
    success: Optional[bool] = None
    error_kind: Optional[str] = None
    metrics: Optional[ParseMetrics] = None
    metadata: Dict[str, Any] = field(default_factory=dict)

    @property
    def total_duration_ms(self) -> float:
        """Total session duration in milliseconds."""
        return (self.end_time - self.start_time) * 1000

    @property
    def memory_delta(self) -> int:
        """Memory usage change in bytes."""
        return self.memory_end - self.memory_start

    @property
    def throughput_mb_per_s(self) -> float:
        """Processing throughput in MB/s."""
        duration_s = self.end_time - self.start_time
        if duration_s <= 0:
            return 0.0
        return (self.input_size / (1024 * 1024)) / duration_s

    def to_dict(self) -> Dict[str, Any]:
        return {
            "session_id": self.session_id,
            "input_size": self.input_size,
            "total_duration_ms": self.total_duration_ms,
            "throughput_mb_s": self.throughput_mb_per_s,
            "memory_delta": self.memory_delta,
            "success": self.success,
            "error_kind": self.error_kind,
            "metrics": self.metrics.to_dict() if self.metrics else None,
            "metadata": self.metadata,
        }


@dataclass
class ProfilingReport:
    """Summary of a set of profiling sessions."""

    sessions: List[ProfilingSession]
    generation_time: float

    @property
    def session_count(self) -> int:
        return len(self.sessions)

    @property
    def average_duration_ms(self) -> float:
        """Average processing duration across sessions."""
        if not self.sessions:
            return 0.0
        return sum(s.total_duration_ms for s in self.sessions) / len(self.sessions)

    @property
    def average_throughput_mb_per_s(self) -> float:
        """Average throughput across sessions."""
        if not self.sessions:
            return 0.0
        return sum(s.throughput_mb_per_s for s in self.sessions) / len(self.sessions)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "generation_time": self.generation_time,
            "summary": {
                "session_count": self.session_count,
                "average_duration_ms": self.average_duration_ms,
                "average_throughput_mb_s": self.average_throughput_mb_per_s,
            },
            "sessions": [session.to_dict() for session in self.sessions],
        }


class ParseProfiler:
    """Profiler for SLA parse operations.

    Examples:
        >>> profiler = ParseProfiler()
        >>> outcome = profiler.profile_parse("x86", sla_text)
        >>> report = profiler.generate_report()
        >>> report.session_count
        1
    """

    def __init__(
        self,
        parser: Optional[SlaParser] = None,
        enable_memory_tracking: bool = True,
    ) -> None:
        """Initialize the profiler.

        Args:
            parser: Parser to profile (defaults to ``SlaParser()``)
            enable_memory_tracking: Whether to sample resident memory
        """
        self.parser = parser or SlaParser()
        self.enable_memory_tracking = enable_memory_tracking
        self.sessions: List[ProfilingSession] = []
        self.logger = get_logger(__name__, None, "parse_profiler")
        self._process = psutil.Process() if enable_memory_tracking else None

    def _memory_rss(self) -> int:
        if self._process is None:
            return 0
        return self._process.memory_info().rss

    def profile_parse(
        self, session_id: str, text: str, metadata: Optional[Dict[str, Any]] = None
    ) -> ParseOutcome:
        """Parse ``text`` and record a session for it.

        Returns:
            The outcome of the parse; failures are recorded, not raised
        """
        session = ProfilingSession(
            session_id=session_id,
            start_time=time.time(),
            end_time=0.0,
            input_size=len(text.encode("utf-8")),
            memory_start=self._memory_rss(),
            metadata=dict(metadata or {}),
        )
        outcome = self.parser.parse_with_metrics(text)
        session.end_time = time.time()
        session.memory_end = self._memory_rss()
        session.success = outcome.success
        session.metrics = outcome.metrics
        if outcome.error is not None:
            session.error_kind = outcome.error.kind.name
        self.sessions.append(session)

        self.logger.info(
            "Profiled parse",
            extra={
                "session_id": session_id,
                "duration_ms": session.total_duration_ms,
                "throughput_mb_s": session.throughput_mb_per_s,
                "success": session.success,
            },
        )
        return outcome

    def generate_report(self) -> ProfilingReport:
        return ProfilingReport(sessions=self.sessions.copy(), generation_time=time.time())

    def save_report(self, report: ProfilingReport, output_path: Path) -> None:
        """Write ``report`` to ``output_path`` as JSON."""
        output_path.write_text(json.dumps(report.to_dict(), indent=2))
        self.logger.info(
            "Saved profiling report",
            extra={"output_path": str(output_path), "session_count": report.session_count},
        )

    def clear_sessions(self) -> None:
        session_count = len(self.sessions)
        self.sessions.clear()
        self.logger.info("Cleared profiling sessions", extra={"cleared_count": session_count})


def build_nested_expression_document(depth: int) -> str:
    """Build a valid document holding a left-nested chain of ``depth`` additions.

    The chain is the defining expression of the document's only operand
    symbol.
    """
    if depth < 0:
        raise ValueError("depth must be >= 0")
    expression = "<plus_exp>" * depth + LEAF + (LEAF + "</plus_exp>") * depth
    return NESTED_DOCUMENT_HEAD + expression + NESTED_DOCUMENT_TAIL


def benchmark_nesting_depth(
    depths: Iterable[int],
    iterations: int = 3,
    parser: Optional[SlaParser] = None,
) -> Dict[int, float]:
    """Time parses of nested-expression documents.

    Args:
        depths: Nesting depths to measure
        iterations: Parses per depth; the fastest is reported
        parser: Parser to use (defaults to ``SlaParser()``)

    Returns:
        Mapping of depth to best parse time in milliseconds
    """
    profiler = ParseProfiler(parser, enable_memory_tracking=False)
    results: Dict[int, float] = {}
    for depth in depths:
        text = build_nested_expression_document(depth)
        timings = []
        for iteration in range(iterations):
            profiler.profile_parse(
                f"depth_{depth}_iteration_{iteration}",
                text,
                metadata={"depth": depth, "iteration": iteration},
            )
            timings.append(profiler.sessions[-1].total_duration_ms)
        results[depth] = min(timings)
    return results
