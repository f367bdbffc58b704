"""tsmatchup error types with typed error codes.

Error code ranges:
- 2xxx: Config
- 3xxx: Matching (options, documents)
"""

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any


class ErrorCode(IntEnum):
    """Typed error codes for programmatic handling."""

    # Config (2xxx)
    CONFIG_PARSE_ERROR = 2001
    CONFIG_INVALID_VALUE = 2002

    # Options (30xx)
    INVALID_OPTION = 3001

    # Documents (31xx)
    DOCUMENT_NOT_FOUND = 3101
    LANGUAGE_UNAVAILABLE = 3102


@dataclass(frozen=True, slots=True)
class MatchupError(Exception):
    """Base error with structured context."""

    code: ErrorCode
    message: str
    retryable: bool = False
    details: dict[str, Any] = field(default_factory=dict)

    @property
    def error_name(self) -> str:
        """String identifier for logging (e.g., 'INVALID_OPTION')."""
        return self.code.name

    def to_dict(self) -> dict[str, Any]:
        return {
            "code": self.code.value,
            "error": self.error_name,
            "message": self.message,
            "retryable": self.retryable,
            "details": self.details,
        }

    def __str__(self) -> str:
        return f"[{self.code.value}] {self.error_name}: {self.message}"


class ConfigError(MatchupError):
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


class InvalidOptionError(MatchupError):
    """A locate request that cannot be turned into options."""

    @classmethod
    def unknown(cls, option: str, value: Any, allowed: list[str]) -> "InvalidOptionError":
        return cls(
            code=ErrorCode.INVALID_OPTION,
            message=f"Invalid {option} '{value}', expected one of: {', '.join(allowed)}",
            details={"option": option, "value": str(value), "allowed": allowed},
        )

    @classmethod
    def unexpected_keys(cls, keys: list[str], allowed: list[str]) -> "InvalidOptionError":
        return cls(
            code=ErrorCode.INVALID_OPTION,
            message=f"Unknown option(s) {', '.join(keys)}, expected: {', '.join(allowed)}",
            details={"option": keys, "allowed": allowed},
        )

    @classmethod
    def missing(cls, option: str) -> "InvalidOptionError":
        return cls(
            code=ErrorCode.INVALID_OPTION,
            message=f"Missing required option '{option}'",
            details={"option": option},
        )

    @classmethod
    def malformed(cls, option: str, value: Any, reason: str) -> "InvalidOptionError":
        return cls(
            code=ErrorCode.INVALID_OPTION,
            message=f"Invalid {option} {value!r}: {reason}",
            details={"option": option, "value": str(value), "reason": reason},
        )


class DocumentError(MatchupError):
    """Document store errors."""

    @classmethod
    def not_found(cls, document_id: str) -> "DocumentError":
        return cls(
            code=ErrorCode.DOCUMENT_NOT_FOUND,
            message=f"Document not attached: {document_id}",
            details={"document_id": document_id},
        )

    @classmethod
    def language_unavailable(cls, language: str, reason: str) -> "DocumentError":
        return cls(
            code=ErrorCode.LANGUAGE_UNAVAILABLE,
            message=f"Language not available: {language} ({reason})",
            details={"language": language, "reason": reason},
        )

