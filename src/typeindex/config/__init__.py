"""Config module exports."""

from typeindex.config.loader import load_config
from typeindex.config.models import (
    DiscoveryConfig,
    LoggingConfig,
    LogOutputConfig,
    RenderConfig,
    TypeIndexConfig,
)

__all__ = [
    "load_config",
    "TypeIndexConfig",
    "DiscoveryConfig",
    "LoggingConfig",
    "LogOutputConfig",
    "RenderConfig",
]
