"""Data models describing directory snapshots."""

from __future__ import annotations

from pathlib import Path
from typing import Mapping, Optional

from pydantic import BaseModel, ConfigDict


class FileInfo(BaseModel):
    """Metadata derived from a media file name.

    Attributes:
        show_name: Series name preceding the season/episode marker.
        season: Season number, when the name carries one.
        episode: Episode number, when the name carries one.
        extension: File extension without the leading dot.
    """

    model_config = ConfigDict(frozen=True)

    show_name: str = ""
    season: Optional[int] = None
    episode: Optional[int] = None
    extension: str = ""


FileSnapshot = Mapping[Path, FileInfo]
"""Listing of one directory at one instant, keyed by file path."""


__all__ = ["FileInfo", "FileSnapshot"]
