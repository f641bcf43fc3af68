"""Directory snapshot building and filename parsing."""

from .models import FileInfo, FileSnapshot
from .parser import parse_filename
from .snapshot import DirectorySnapshotter, SnapshotProvider

__all__ = [
    "DirectorySnapshotter",
    "FileInfo",
    "FileSnapshot",
    "SnapshotProvider",
    "parse_filename",
]
