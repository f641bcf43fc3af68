"""Task contract consumed by the tree walker."""

from __future__ import annotations

from enum import Enum
from pathlib import Path
from typing import Callable, Protocol, runtime_checkable

from mediatidy.ingestion.models import FileSnapshot


class TaskResult(str, Enum):
    """Outcome reported by a task for one directory.

    ``FILES_CHANGED`` is a success that also tells the walker the directory
    contents were mutated, so the snapshot must be rebuilt before the next task.
    """

    OK = "ok"
    FILES_CHANGED = "files_changed"
    ERROR = "error"


@runtime_checkable
class Task(Protocol):
    """Directory-scoped unit of work.

    Tasks only touch files inside the directory they are invoked with and must
    report any mutation by returning ``TaskResult.FILES_CHANGED``.
    """

    name: str
    flag: str

    def run(self, directory: Path, snapshot: FileSnapshot) -> TaskResult:
        """Process ``directory`` given its current ``snapshot``."""
        ...


class FunctionTask:
    """Adapt a plain callable to the ``Task`` protocol."""

    def __init__(
        self,
        name: str,
        func: Callable[[Path, FileSnapshot], TaskResult],
        *,
        flag: str = "",
    ) -> None:
        self.name = name
        self.flag = flag
        self._func = func

    def run(self, directory: Path, snapshot: FileSnapshot) -> TaskResult:
        return self._func(directory, snapshot)

    def __repr__(self) -> str:
        return f"FunctionTask(name={self.name!r}, flag={self.flag!r})"


__all__ = ["FunctionTask", "Task", "TaskResult"]
