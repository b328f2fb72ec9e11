"""typeindex error types with typed error codes.

Error code ranges:
- 2xxx: Config
- 3xxx: Discovery

The registry itself never raises: absence is reported as ``None`` or an empty
result. These errors cover the layers around it (settings, source discovery,
fact files).
"""

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any


class ErrorCode(IntEnum):
    """Typed error codes for programmatic handling."""

    # Config (2xxx)
    CONFIG_PARSE_ERROR = 2001
    CONFIG_INVALID_VALUE = 2002
    CONFIG_FILE_NOT_FOUND = 2003

    # Discovery (3xxx)
    DISCOVERY_SOURCE_UNREADABLE = 3001
    DISCOVERY_GRAMMAR_UNAVAILABLE = 3002
    DISCOVERY_MALFORMED_FACTS = 3003


@dataclass(frozen=True, slots=True)
class TypeIndexError(Exception):
    """Base error with structured context."""

    code: ErrorCode
    message: str
    retryable: bool = False
    details: dict[str, Any] = field(default_factory=dict)

    @property
    def error_name(self) -> str:
        """String identifier for logging (e.g., 'CONFIG_PARSE_ERROR')."""
        return self.code.name

    def to_dict(self) -> dict[str, Any]:
        """Serialize for JSON output."""
        return {
            "code": self.code.value,
            "error": self.error_name,
            "message": self.message,
            "retryable": self.retryable,
            "details": self.details,
        }

    def __str__(self) -> str:
        return f"[{self.code.value}] {self.error_name}: {self.message}"


class ConfigError(TypeIndexError):
    """Configuration-related errors."""

    @classmethod
    def parse_error(cls, path: str, reason: str) -> "ConfigError":
        return cls(
            code=ErrorCode.CONFIG_PARSE_ERROR,
            message=f"Failed to parse config at {path}: {reason}",
            details={"path": path, "reason": reason},
        )

    @classmethod
    def invalid_value(cls, field: str, value: Any, reason: str) -> "ConfigError":
        return cls(
            code=ErrorCode.CONFIG_INVALID_VALUE,
            message=f"Invalid value for '{field}': {reason}",
            details={"field": field, "value": str(value), "reason": reason},
        )

    @classmethod
    def file_not_found(cls, path: str) -> "ConfigError":
        return cls(
            code=ErrorCode.CONFIG_FILE_NOT_FOUND,
            message=f"Config file not found: {path}",
            details={"path": path},
        )


class DiscoveryError(TypeIndexError):
    """Errors raised while turning sources or fact files into TypeFacts."""

    @classmethod
    def source_unreadable(cls, path: str, reason: str) -> "DiscoveryError":
        return cls(
            code=ErrorCode.DISCOVERY_SOURCE_UNREADABLE,
            message=f"Cannot read source {path}: {reason}",
            details={"path": path, "reason": reason},
        )

    @classmethod
    def grammar_unavailable(cls, language: str) -> "DiscoveryError":
        return cls(
            code=ErrorCode.DISCOVERY_GRAMMAR_UNAVAILABLE,
            message=f"Tree-sitter grammar not available: {language}",
            details={"language": language},
        )

    @classmethod
    def malformed_facts(cls, path: str, reason: str) -> "DiscoveryError":
        return cls(
            code=ErrorCode.DISCOVERY_MALFORMED_FACTS,
            message=f"Malformed fact file {path}: {reason}",
            details={"path": path, "reason": reason},
        )
