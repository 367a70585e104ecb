"""Configuration for SLA document parsing.

The configuration is an immutable dataclass so a single instance can be shared
between parsers running on different threads.
"""

import json
from dataclasses import dataclass, fields, replace
from enum import Enum, auto
from typing import Any, Dict, List, Optional

VALID_LOGGING_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class BooleanStyle(Enum):
    """Which boolean token pairs an attribute may use."""

    LETTER = auto()  # "y" / "n"
    WORD = auto()    # "true" / "false"
    ANY = auto()     # either pair


class ConfigError(Exception):
    """Base exception for configuration errors."""


class ConfigValidationError(ConfigError):
    """Exception raised when configuration validation fails."""

    def __init__(self, message: str, field_name: Optional[str] = None,
                 suggestions: Optional[List[str]] = None):
        super().__init__(message)
        self.field_name = field_name
        self.suggestions = suggestions or []


@dataclass(frozen=True)
class ParserConfig:
    """Settings controlling how strictly an SLA document is read.

    Attributes:
        boolean_style: Accepted boolean token pairs
        strict_attributes: Reject attributes an element does not define
        allow_xml_declaration: Skip a leading ``<?xml ...?>`` declaration
        max_input_size_bytes: Reject larger inputs before scanning
        max_depth: Maximum element nesting depth, unlimited when None
        enable_metrics: Collect counters and timings for each parse
        logging_level: Level name applied to the package logger by each
            parser; when None the host application's level is left alone
        correlation_id: Identifier attached to every log record
    """

    boolean_style: BooleanStyle = BooleanStyle.ANY
    strict_attributes: bool = False
    allow_xml_declaration: bool = True
    max_input_size_bytes: Optional[int] = None
    max_depth: Optional[int] = None
    enable_metrics: bool = True
    logging_level: Optional[str] = None
    correlation_id: Optional[str] = None

    def __post_init__(self) -> None:
        """Validate configuration values."""
        if not isinstance(self.boolean_style, BooleanStyle):
            raise ConfigValidationError(
                "boolean_style must be a BooleanStyle member",
                field_name="boolean_style",
                suggestions=[member.name for member in BooleanStyle],
            )
        if self.max_input_size_bytes is not None and self.max_input_size_bytes <= 0:
            raise ConfigValidationError(
                "max_input_size_bytes must be > 0 or None",
                field_name="max_input_size_bytes",
            )
        if self.max_depth is not None and self.max_depth <= 0:
            raise ConfigValidationError(
                "max_depth must be > 0 or None", field_name="max_depth"
            )
        if self.logging_level is not None and self.logging_level not in VALID_LOGGING_LEVELS:
            raise ConfigValidationError(
                f"logging_level must be one of {VALID_LOGGING_LEVELS}",
                field_name="logging_level",
                suggestions=VALID_LOGGING_LEVELS,
            )

    @classmethod
    def strict(cls) -> "ParserConfig":
        """Create a configuration that rejects anything beyond the core format."""
        return cls(
            boolean_style=BooleanStyle.WORD,
            strict_attributes=True,
            allow_xml_declaration=False,
        )

    @classmethod
    def lenient(cls) -> "ParserConfig":
        """Create the most permissive configuration."""
        return cls(
            boolean_style=BooleanStyle.ANY,
            strict_attributes=False,
            allow_xml_declaration=True,
        )

    def override(self, **kwargs: Any) -> "ParserConfig":
        """Create a new configuration with specific overrides.

        Example:
            >>> config = ParserConfig().override(max_depth=512)
            >>> config.max_depth
            512
        """
        known = {f.name for f in fields(self)}
        unknown = sorted(set(kwargs) - known)
        if unknown:
            raise ConfigValidationError(
                f"Unknown configuration fields: {', '.join(unknown)}",
                field_name=unknown[0],
                suggestions=sorted(known),
            )
        return replace(self, **kwargs)

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary format."""
        result: Dict[str, Any] = {}
        for f in fields(self):
            value = getattr(self, f.name)
            result[f.name] = value.name if isinstance(value, Enum) else value
        return result

    def to_json(self, indent: int = 2) -> str:
        return json.dumps(self.to_dict(), indent=indent)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ParserConfig":
        """Create configuration from dictionary."""
        values = dict(data)
        style = values.get("boolean_style")
        if isinstance(style, str):
            try:
                values["boolean_style"] = BooleanStyle[style]
            except KeyError as e:
                raise ConfigValidationError(
                    f"Unknown boolean_style {style!r}",
                    field_name="boolean_style",
                    suggestions=[member.name for member in BooleanStyle],
                ) from e
        return cls().override(**values)

    @classmethod
    def from_json(cls, json_str: str) -> "ParserConfig":
        return cls.from_dict(json.loads(json_str))
