"""Directory snapshot building."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Callable, Iterable, Protocol, runtime_checkable

from mediatidy.config.models import MediaTidyConfig

from .models import FileInfo
from .parser import parse_filename

LOGGER = logging.getLogger(__name__)


@runtime_checkable
class SnapshotProvider(Protocol):
    """Build the file listing the walker hands to each task."""

    def snapshot(self, directory: Path) -> dict[Path, FileInfo]:
        """Return the media files directly inside ``directory``; never raises."""
        ...


class DirectorySnapshotter:
    """Snapshot the media files of a single directory (non-recursive)."""

    def __init__(
        self,
        *,
        video_extensions: Iterable[str],
        image_extensions: Iterable[str] = (),
        parser: Callable[[str], FileInfo] = parse_filename,
    ) -> None:
        self.extensions = {
            ext.lower().lstrip(".") for ext in (*video_extensions, *image_extensions)
        }
        self.parser = parser

    @classmethod
    def from_config(cls, config: MediaTidyConfig) -> "DirectorySnapshotter":
        """Create a snapshotter using the configured extension allow-lists."""
        return cls(
            video_extensions=config.video_extensions,
            image_extensions=config.image_extensions,
        )

    def snapshot(self, directory: Path) -> dict[Path, FileInfo]:
        """Return parsed metadata for allow-listed files in ``directory``.

        Unreadable directories produce an empty mapping.
        """
        files: dict[Path, FileInfo] = {}
        try:
            with os.scandir(directory) as entries:
                for entry in entries:
                    try:
                        if not entry.is_file():
                            continue
                    except OSError:
                        continue
                    extension = os.path.splitext(entry.name)[1].lstrip(".").lower()
                    if not extension or extension not in self.extensions:
                        continue
                    files[directory / entry.name] = self.parser(entry.name)
        except OSError as exc:
            LOGGER.debug("Could not read %s: %s", directory, exc)
            return {}
        return files


__all__ = ["SnapshotProvider", "DirectorySnapshotter"]
