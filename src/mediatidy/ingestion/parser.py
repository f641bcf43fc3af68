"""Filename parsing for episode metadata."""

from __future__ import annotations

import re
from pathlib import PurePath

from .models import FileInfo

# Show.Name.S01E02.720p.mkv / Show Name - s1e2.mkv
_SEASON_EPISODE_PATTERN = re.compile(
    r"(?<![a-z0-9])s(?P<season>\d{1,3})[ ._-]?e(?P<episode>\d{1,4})(?!\d)",
    re.IGNORECASE,
)
# Show Name 1x02.mkv
_CROSS_PATTERN = re.compile(
    r"(?<![a-z0-9])(?P<season>\d{1,3})x(?P<episode>\d{1,4})(?!\d)",
    re.IGNORECASE,
)


def _clean_show_name(text: str) -> str:
    normalized = re.sub(r"[._]+", " ", text)
    normalized = re.sub(r"\s+", " ", normalized)
    return normalized.strip(" -[(")


def parse_filename(name: str) -> FileInfo:
    """Extract show, season and episode details from a file name.

    Args:
        name: Base name of the file, including its extension.

    Returns:
        FileInfo: Parsed metadata. ``season`` and ``episode`` are ``None`` when
        no marker is recognized, in which case the stem becomes the show name.
    """
    path = PurePath(name)
    stem = path.stem
    extension = path.suffix.lstrip(".")

    for pattern in (_SEASON_EPISODE_PATTERN, _CROSS_PATTERN):
        match = pattern.search(stem)
        if match is None:
            continue
        return FileInfo(
            show_name=_clean_show_name(stem[: match.start()]),
            season=int(match.group("season")),
            episode=int(match.group("episode")),
            extension=extension,
        )

    return FileInfo(show_name=_clean_show_name(stem), extension=extension)


__all__ = ["parse_filename"]
