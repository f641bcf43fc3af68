"""Result types produced by the tree walker."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional


@dataclass(frozen=True, slots=True)
class DirectoryError:
    """A failure recorded for one directory.

    Attributes:
        path: Directory whose task list stopped early.
        task: Name of the failing task, if a task failed.
        message: Human-readable description.
    """

    path: Path
    task: Optional[str]
    message: str

    def __str__(self) -> str:
        prefix = f"{self.path} [{self.task}]" if self.task else str(self.path)
        return f"{prefix}: {self.message}"


@dataclass(slots=True)
class DirectoryVisit:
    """Outcome of processing a single directory (one work unit)."""

    path: Path
    tasks_run: int = 0
    error: Optional[DirectoryError] = None
    subdirectories: list[Path] = field(default_factory=list)


@dataclass(slots=True)
class WalkReport:
    """Aggregated outcome of a walk.

    Attributes:
        visited: Directories processed, in completion order.
        tasks_run: Total number of task invocations.
        errors: Per-directory failures.
        skipped_roots: Roots that were not existing directories.
    """

    visited: list[Path] = field(default_factory=list)
    tasks_run: int = 0
    errors: list[DirectoryError] = field(default_factory=list)
    skipped_roots: list[Path] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.errors

    def record(self, visit: DirectoryVisit) -> None:
        self.visited.append(visit.path)
        self.tasks_run += visit.tasks_run
        if visit.error is not None:
            self.errors.append(visit.error)

    def counts(self) -> dict[str, int]:
        return {
            "directories": len(self.visited),
            "tasks_run": self.tasks_run,
            "errors": len(self.errors),
            "skipped_roots": len(self.skipped_roots),
        }

    def to_payload(self) -> dict[str, Any]:
        """Return a JSON-ready representation."""
        return {
            "counts": self.counts(),
            "visited": sorted(path.as_posix() for path in self.visited),
            "errors": [
                {"path": error.path.as_posix(), "task": error.task, "message": error.message}
                for error in self.errors
            ],
            "skipped_roots": [path.as_posix() for path in self.skipped_roots],
        }


__all__ = ["DirectoryError", "DirectoryVisit", "WalkReport"]
