"""Concurrent directory tree walking with per-directory task execution."""

from .engine import DEFAULT_MAX_WORKERS, TreeWalker, walk
from .ignore import (
    AbsolutePathRule,
    IgnoreFilter,
    IgnoreRule,
    NameRule,
    RelativePathRule,
    parse_rule,
)
from .models import DirectoryError, DirectoryVisit, WalkReport
from .paths import normalize_path

__all__ = [
    "AbsolutePathRule",
    "DEFAULT_MAX_WORKERS",
    "DirectoryError",
    "DirectoryVisit",
    "IgnoreFilter",
    "IgnoreRule",
    "NameRule",
    "RelativePathRule",
    "TreeWalker",
    "WalkReport",
    "normalize_path",
    "parse_rule",
    "walk",
]
