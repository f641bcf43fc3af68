"""Registry mapping single-character CLI flags to task factories."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Iterable

from mediatidy.config.models import MediaTidyConfig

from .base import Task
from .seasonize import SeasonizeTask

LOGGER = logging.getLogger(__name__)

TaskFactory = Callable[[MediaTidyConfig, bool], Task]


@dataclass(frozen=True, slots=True)
class TaskSpec:
    """Registration entry for a task.

    Attributes:
        name: Long name, also used as the ``--name`` CLI option.
        flag: Single character selecting the task (``-x``).
        description: One-line help text.
        factory: Builds the task from the loaded config and the dry-run switch.
    """

    name: str
    flag: str
    description: str
    factory: TaskFactory


class TaskRegistry:
    """Ordered collection of registered tasks."""

    def __init__(self) -> None:
        self._specs: dict[str, TaskSpec] = {}

    def register(self, spec: TaskSpec) -> None:
        """Add ``spec``; flags and names must be unique."""
        if len(spec.flag) != 1 or not spec.flag.isalpha():
            raise ValueError(f"Task flag must be a single letter, got {spec.flag!r}.")
        if spec.flag in self._specs:
            raise ValueError(f"Flag -{spec.flag} is already registered.")
        if any(existing.name == spec.name for existing in self._specs.values()):
            raise ValueError(f"Task {spec.name!r} is already registered.")
        self._specs[spec.flag] = spec

    def specs(self) -> list[TaskSpec]:
        """Return registered specs in registration order."""
        return list(self._specs.values())

    def get(self, flag: str) -> TaskSpec | None:
        return self._specs.get(flag)

    def build(self, flags: Iterable[str], config: MediaTidyConfig, dry_run: bool = False) -> list[Task]:
        """Instantiate tasks for ``flags`` in the given order.

        Unknown flags are logged and skipped; repeated flags run once.
        """
        tasks: list[Task] = []
        seen: set[str] = set()
        for flag in flags:
            if flag in seen:
                continue
            seen.add(flag)
            spec = self._specs.get(flag)
            if spec is None:
                LOGGER.warning("Ignoring unknown task flag -%s", flag)
                continue
            tasks.append(spec.factory(config, dry_run))
        return tasks


def parse_flag_args(args: Iterable[str]) -> list[str]:
    """Return the characters of ``-x`` shaped entries, dropping everything else."""
    return [arg[1] for arg in args if len(arg) == 2 and arg.startswith("-") and arg[1] != "-"]


def default_registry() -> TaskRegistry:
    """Return a registry populated with the built-in tasks."""
    registry = TaskRegistry()
    registry.register(
        TaskSpec(
            name="seasonize",
            flag="s",
            description="Move episodes into season folders named after season_dir_name.",
            factory=lambda config, dry_run: SeasonizeTask(config.season_dir_name, dry_run=dry_run),
        )
    )
    return registry


__all__ = ["TaskFactory", "TaskRegistry", "TaskSpec", "default_registry", "parse_flag_args"]
