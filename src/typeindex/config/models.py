"""Pydantic configuration models with env var support.

Configuration Hierarchy (highest to lowest precedence):
1. Direct kwargs to load_config()
2. Environment variables (TYPEINDEX__SECTION__KEY)
3. Project YAML (.typeindex/config.yaml)
4. Global YAML (~/.config/typeindex/config.yaml)
5. Built-in defaults (this file)

Environment Variable Format:
    TYPEINDEX__<SECTION>__<KEY>=<VALUE>

Examples:
    TYPEINDEX__LOGGING__LEVEL=DEBUG
    TYPEINDEX__DISCOVERY__INCLUDE_PRIVATE=true
    TYPEINDEX__RENDER__INDENT=4
"""

from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field, field_validator

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class LogOutputConfig(BaseModel):
    """Single logging output configuration.

    Env vars: Not directly configurable via env (use YAML for multi-output).
    """

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
        TYPEINDEX__LOGGING__LEVEL: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    """

    level: LogLevel = Field(
        default="WARNING",
        description="Root log level. DEBUG logs every registered type.",
    )
    outputs: list[LogOutputConfig] = Field(default_factory=lambda: [LogOutputConfig()])


class DiscoveryConfig(BaseModel):
    """Source discovery configuration.

    Env vars:
        TYPEINDEX__DISCOVERY__INCLUDE_PRIVATE: Also record _private classes and members
        TYPEINDEX__DISCOVERY__MAX_FILE_SIZE_KB: Skip larger source files
    """

    include_private: bool = Field(
        default=False,
        description="Record classes, methods and properties whose names start with '_'.",
    )
    mixin_suffixes: list[str] = Field(
        default_factory=lambda: ["Mixin"],
        description="Base names ending with one of these suffixes are recorded as mixins.",
    )
    marker_bases: list[str] = Field(
        default_factory=lambda: ["object", "Generic", "Protocol", "ABC"],
        description="Bases that are never recorded as relations. "
        "Generic[...] and Protocol[...] still contribute type parameters.",
    )
    exclude_dirs: list[str] = Field(
        default_factory=lambda: [
            ".git",
            "__pycache__",
            ".venv",
            "venv",
            "node_modules",
            "build",
            "dist",
            ".tox",
        ],
        description="Directory names skipped while walking a source tree.",
    )
    max_file_size_kb: int = Field(
        default=1024,
        description="Skip source files larger than this (KB).",
    )

    @field_validator("max_file_size_kb")
    @classmethod
    def validate_max_file_size(cls, v: int) -> int:
        if v <= 0:
            raise ValueError(f"max_file_size_kb must be positive, got {v}")
        return v


class RenderConfig(BaseModel):
    """Output rendering configuration.

    Env vars:
        TYPEINDEX__RENDER__INDENT: JSON indent for exports
    """

    indent: int = Field(
        default=2,
        description="Indentation used when writing JSON exports.",
    )

    @field_validator("indent")
    @classmethod
    def validate_indent(cls, v: int) -> int:
        if v < 0:
            raise ValueError(f"indent must be >= 0, got {v}")
        return v


class TypeIndexConfig(BaseModel):
    """Root configuration."""

    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    discovery: DiscoveryConfig = Field(default_factory=DiscoveryConfig)
    render: RenderConfig = Field(default_factory=RenderConfig)
