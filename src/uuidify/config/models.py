"""Configuration models describing uuidify settings."""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class UuidifyBaseModel(BaseModel):
    """Shared configuration for uuidify Pydantic models."""

    model_config = ConfigDict(extra="forbid")


class NamingOptions(UuidifyBaseModel):
    """Options controlling generated file names.

    Attributes:
        uppercase: Render generated identifiers in uppercase hex.
        max_attempts: Random draws allowed before falling back to a numeric
            disambiguator when every candidate collides.
    """

    uppercase: bool = True
    max_attempts: int = Field(default=16, ge=1)


class TraversalOptions(UuidifyBaseModel):
    """Options governing how dropped directories are expanded.

    Attributes:
        include_hidden: Whether dot-files below a dropped directory are renamed.
        follow_symlinks: Whether to descend into symlinked directories.
    """

    include_hidden: bool = True
    follow_symlinks: bool = False


class LoggingSettings(UuidifyBaseModel):
    """Runtime logging configuration.

    Attributes:
        level: Logging verbosity level.
        file: Optional log file path; rotation applies when set.
        max_size_mb: Maximum log size before rotation.
        backup_count: Number of historical log files to retain.
    """

    level: str = "WARNING"
    file: Optional[str] = None
    max_size_mb: int = 10
    backup_count: int = 3


class CLIOptions(UuidifyBaseModel):
    """CLI behavior defaults and presentation preferences.

    Attributes:
        quiet_default: Whether commands suppress non-error output by default.
        summary_default: Whether commands only print summary lines by default.
        recent_limit: Number of renamed files listed after a batch.
    """

    quiet_default: bool = False
    summary_default: bool = False
    recent_limit: int = Field(default=5, ge=0)


class UuidifyConfig(UuidifyBaseModel):
    """Top-level configuration struct for uuidify.

    Attributes:
        naming: Generated-name settings.
        traversal: Directory expansion settings.
        logging: Logging configuration.
        cli: CLI presentation defaults.
    """

    naming: NamingOptions = Field(default_factory=NamingOptions)
    traversal: TraversalOptions = Field(default_factory=TraversalOptions)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)
    cli: CLIOptions = Field(default_factory=CLIOptions)


__all__ = [
    "UuidifyBaseModel",
    "NamingOptions",
    "TraversalOptions",
    "LoggingSettings",
    "CLIOptions",
    "UuidifyConfig",
]
