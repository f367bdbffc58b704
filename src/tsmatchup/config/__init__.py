"""Config module exports."""

from tsmatchup.config.loader import load_config
from tsmatchup.config.models import (
    LanguagesConfig,
    LoggingConfig,
    LogOutputConfig,
    MatchingConfig,
    MatchupConfig,
)

__all__ = [
    "load_config",
    "LanguagesConfig",
    "LoggingConfig",
    "LogOutputConfig",
    "MatchingConfig",
    "MatchupConfig",
]
