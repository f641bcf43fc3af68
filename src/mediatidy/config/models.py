"""Configuration models describing mediatidy settings."""

from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class MediaTidyBaseModel(BaseModel):
    """Shared configuration for mediatidy Pydantic models."""

    model_config = ConfigDict(extra="forbid")


class WalkerSettings(MediaTidyBaseModel):
    """Options governing directory traversal.

    Attributes:
        max_workers: Upper bound on directories processed concurrently.
        follow_symlinks: Whether symlinked directories are descended into.
    """

    max_workers: int = Field(default=8, ge=1)
    follow_symlinks: bool = False


class LoggingSettings(MediaTidyBaseModel):
    """Runtime logging configuration.

    Attributes:
        level: Logging verbosity level.
        file: Optional log file path; rotated when it grows past ``max_size_mb``.
        max_size_mb: Maximum log size before rotation.
        backup_count: Number of historical log files to retain.
    """

    level: str = "WARNING"
    file: Optional[str] = None
    max_size_mb: int = Field(default=10, ge=1)
    backup_count: int = Field(default=3, ge=0)

    @field_validator("level", mode="before")
    @classmethod
    def validate_level(cls, v: str) -> str:
        """Normalize the level name and reject unknown levels."""
        level = str(v).upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"Unknown log level {v!r}. Valid options: {', '.join(LOG_LEVELS)}")
        return level


class CLIOptions(MediaTidyBaseModel):
    """CLI behavior defaults.

    Attributes:
        quiet_default: Whether commands suppress non-error output by default.
        summary_default: Whether commands only print summary lines by default.
    """

    quiet_default: bool = False
    summary_default: bool = False


class MediaTidyConfig(MediaTidyBaseModel):
    """Top-level configuration struct for mediatidy.

    Attributes:
        default_args: Task flags (``-s`` style) used when the CLI receives none.
        target_dirs: Root directories to walk.
        video_extensions: Extensions counted as video files in snapshots.
        image_extensions: Extensions counted as image files in snapshots.
        ignored_directories: Raw ignore rules (absolute, ``.``-relative or bare names).
        season_dir_name: Season folder template; runs of ``X`` become the season number.
        walker: Traversal settings.
        logging: Logging configuration.
        cli: CLI presentation defaults.
    """

    default_args: List[str] = Field(default_factory=lambda: ["-s"])
    target_dirs: List[str] = Field(default_factory=list)
    video_extensions: List[str] = Field(
        default_factory=lambda: ["mkv", "mp4", "avi", "m4v", "mov", "wmv", "ts"]
    )
    image_extensions: List[str] = Field(default_factory=lambda: ["jpg", "jpeg", "png"])
    ignored_directories: List[str] = Field(default_factory=list)
    season_dir_name: str = Field(default="Season XX", min_length=1)
    walker: WalkerSettings = Field(default_factory=WalkerSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)
    cli: CLIOptions = Field(default_factory=CLIOptions)

    @field_validator("season_dir_name", mode="after")
    @classmethod
    def validate_season_dir_name(cls, v: str) -> str:
        """Require literal text next to the ``X`` placeholder.

        A bare placeholder such as ``XX`` would treat every all-digit folder
        (``2019``) as a season folder.
        """
        if not v.replace("X", "").strip():
            raise ValueError(
                f"season_dir_name {v!r} needs text besides the X placeholder, e.g. 'Season XX'"
            )
        return v


__all__ = [
    "LOG_LEVELS",
    "MediaTidyBaseModel",
    "WalkerSettings",
    "LoggingSettings",
    "CLIOptions",
    "MediaTidyConfig",
]
