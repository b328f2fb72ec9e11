"""Core module exports."""

from typeindex.core.errors import (
    ConfigError,
    DiscoveryError,
    ErrorCode,
    TypeIndexError,
)
from typeindex.core.logging import (
    clear_scan_id,
    configure_logging,
    get_logger,
    get_scan_id,
    set_scan_id,
)

__all__ = [
    # Errors
    "ConfigError",
    "DiscoveryError",
    "ErrorCode",
    "TypeIndexError",
    # Logging
    "clear_scan_id",
    "configure_logging",
    "get_logger",
    "get_scan_id",
    "set_scan_id",
]
