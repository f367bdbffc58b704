"""Pydantic configuration models with env var support.

Configuration Hierarchy (highest to lowest precedence):
1. Direct kwargs to load_config()
2. Environment variables (TSMATCHUP__SECTION__KEY)
3. Repo YAML (.tsmatchup/config.yaml)
4. Global YAML (~/.config/tsmatchup/config.yaml)
5. Built-in defaults (this file)

Environment Variable Format:
    TSMATCHUP__<SECTION>__<KEY>=<VALUE>

Examples:
    TSMATCHUP__LOGGING__LEVEL=DEBUG
    TSMATCHUP__MATCHING__SUPPRESS_MID_MARKERS=true
    TSMATCHUP__MATCHING__CACHE_CAPACITY=300
"""

from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field, field_validator

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class LogOutputConfig(BaseModel):
    """Single logging output configuration."""

    format: Literal["json", "console"] = "console"
    destination: str = "stderr"  # stderr, stdout, or absolute file path
    level: LogLevel | None = None  # Inherits from parent if None

    @field_validator("destination")
    @classmethod
    def validate_destination(cls, v: str) -> str:
        if v in ("stderr", "stdout"):
            return v
        path = Path(v).expanduser()
        if not path.is_absolute():
            raise ValueError(f"File destination must be absolute path: {v}")
        return str(path)


class LoggingConfig(BaseModel):
    """Logging configuration.

    Env vars:
        TSMATCHUP__LOGGING__LEVEL: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    """

    level: LogLevel = Field(
        default="WARNING",
        description="Root log level. DEBUG traces every locate/match request.",
    )
    outputs: list[LogOutputConfig] = Field(default_factory=lambda: [LogOutputConfig()])


class MatchingConfig(BaseModel):
    """Delimiter matching configuration.

    Env vars:
        TSMATCHUP__MATCHING__SUPPRESS_MID_MARKERS: Ignore mid delimiters (else, elseif, ...)
        TSMATCHUP__MATCHING__CACHE_CAPACITY: Number of located delimiters kept for matching
        TSMATCHUP__MATCHING__MAX_LINE_LENGTH: Column bound used to order positions
    """

    suppress_mid_markers: bool = Field(
        default=False,
        description="Skip mid delimiters when locating and when matching.",
    )
    cache_capacity: int = Field(
        default=150,
        description="Located delimiters remembered for later matching (LRU).",
    )
    max_line_length: int = Field(
        default=100_000,
        description="Assumed upper bound on line length for next/prev ordering. "
        "Longer lines can make distinct positions compare equal.",
    )
    ruleset: str = Field(
        default="matchup",
        description="Name of the bundled query ruleset to run.",
    )

    @field_validator("cache_capacity", "max_line_length")
    @classmethod
    def validate_positive(cls, v: int) -> int:
        if v <= 0:
            raise ValueError(f"Must be positive, got {v}")
        return v


class LanguagesConfig(BaseModel):
    """Per-language enablement.

    Env vars:
        TSMATCHUP__LANGUAGES__DISABLED: JSON list of languages to turn off
    """

    enabled: list[str] | None = Field(
        default=None,
        description="Languages to enable. None enables every bundled ruleset.",
    )
    disabled: list[str] = Field(default_factory=list)

    def is_enabled(self, language: str) -> bool:
        if language in self.disabled:
            return False
        return self.enabled is None or language in self.enabled


class MatchupConfig(BaseModel):
    """Root configuration model."""

    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    matching: MatchingConfig = Field(default_factory=MatchingConfig)
    languages: LanguagesConfig = Field(default_factory=LanguagesConfig)
