"""Core module exports."""

from tsmatchup.core.errors import (
    ConfigError,
    DocumentError,
    ErrorCode,
    InvalidOptionError,
    MatchupError,
)
from tsmatchup.core.logging import (
    clear_request_id,
    configure_logging,
    get_logger,
    get_request_id,
    set_request_id,
)

__all__ = [
    # Errors
    "ConfigError",
    "DocumentError",
    "ErrorCode",
    "InvalidOptionError",
    "MatchupError",
    # Logging
    "clear_request_id",
    "configure_logging",
    "get_logger",
    "get_request_id",
    "set_request_id",
]
