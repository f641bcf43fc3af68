"""Directory exclusion rules evaluated before descending into a subdirectory."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Union

from mediatidy.config.exceptions import ConfigError

from .paths import normalize_path


@dataclass(frozen=True, slots=True)
class AbsolutePathRule:
    """Ignore exactly one directory, named by its full path."""

    path: Path

    def matches(self, path: Path, name: str, roots: tuple[Path, ...]) -> bool:
        return path == self.path


@dataclass(frozen=True, slots=True)
class RelativePathRule:
    """Ignore ``root / remainder`` for every walked root."""

    remainder: str

    def matches(self, path: Path, name: str, roots: tuple[Path, ...]) -> bool:
        return any(path == root / self.remainder for root in roots)


@dataclass(frozen=True, slots=True)
class NameRule:
    """Ignore every directory whose base name equals ``name``."""

    name: str

    def matches(self, path: Path, name: str, roots: tuple[Path, ...]) -> bool:
        return name == self.name


IgnoreRule = Union[AbsolutePathRule, RelativePathRule, NameRule]


def parse_rule(raw: str) -> IgnoreRule:
    """Classify a configured ignore entry by its leading character.

    ``/media/tmp`` is an absolute rule, ``.cache`` (or ``./cache``) is resolved
    against each root, and anything else is matched against directory names.

    Raises:
        ConfigError: If the entry is empty or has nothing after its leading dots.
    """
    if not raw:
        raise ConfigError("Ignore rules must not be empty.")
    if raw.startswith(("/", os.sep)):
        return AbsolutePathRule(normalize_path(raw))
    if raw.startswith("."):
        remainder = raw.lstrip(".").lstrip("/" + os.sep)
        if not remainder:
            raise ConfigError(f"Relative ignore rule {raw!r} does not name a directory.")
        return RelativePathRule(remainder)
    return NameRule(raw)


class IgnoreFilter:
    """Decide whether a candidate subdirectory is excluded from the walk.

    Rules are checked in configured order and the first match wins. Matching is
    exact and case-sensitive; paths compare component-wise.
    """

    def __init__(self, rules: Iterable[IgnoreRule], roots: Iterable[Path] = ()) -> None:
        self.rules = tuple(rules)
        self.roots = tuple(normalize_path(root) for root in roots)

    @classmethod
    def from_config(cls, raw_rules: Iterable[str], roots: Iterable[Path | str]) -> "IgnoreFilter":
        """Build a filter from raw ``ignored_directories`` entries."""
        return cls((parse_rule(raw) for raw in raw_rules), (Path(root) for root in roots))

    def is_ignored(self, path: Path, name: str) -> bool:
        """Return True if the directory at ``path`` (base name ``name``) is excluded."""
        return any(rule.matches(path, name, self.roots) for rule in self.rules)


__all__ = [
    "AbsolutePathRule",
    "IgnoreFilter",
    "IgnoreRule",
    "NameRule",
    "RelativePathRule",
    "parse_rule",
]
