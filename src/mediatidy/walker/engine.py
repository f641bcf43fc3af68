"""Concurrent directory tree walker.

Each directory is one work unit: its task list runs sequentially against a
snapshot of the directory (rebuilt whenever a task reports ``FILES_CHANGED``),
then its non-ignored subdirectories are scheduled as new units. Units run on a
bounded thread pool; the coordinating thread submits children as their parent
completes and returns once no unit is left in flight.
"""

from __future__ import annotations

import logging
import os
from concurrent.futures import FIRST_COMPLETED, Future, ThreadPoolExecutor, wait
from pathlib import Path
from typing import Iterable, Sequence

from mediatidy.ingestion.snapshot import SnapshotProvider
from mediatidy.tasks.base import Task, TaskResult

from .ignore import IgnoreFilter
from .models import DirectoryError, DirectoryVisit, WalkReport
from .paths import normalize_path

LOGGER = logging.getLogger(__name__)

DEFAULT_MAX_WORKERS = 8


class TreeWalker:
    """Run an ordered task list in every directory below the given roots."""

    def __init__(
        self,
        tasks: Sequence[Task],
        *,
        snapshotter: SnapshotProvider,
        ignore_filter: IgnoreFilter | None = None,
        max_workers: int = DEFAULT_MAX_WORKERS,
        follow_symlinks: bool = False,
    ) -> None:
        if max_workers < 1:
            raise ValueError("max_workers must be at least 1.")
        self.tasks = tuple(tasks)
        self.snapshotter = snapshotter
        self.ignore_filter = ignore_filter or IgnoreFilter(())
        self.max_workers = max_workers
        self.follow_symlinks = follow_symlinks

    def walk(self, roots: Iterable[Path | str]) -> WalkReport:
        """Process every directory reachable from ``roots``.

        Roots that are not existing directories are skipped and reported. Each
        directory is processed once even when roots repeat or nest.

        Returns:
            WalkReport: Visited directories, task counts and per-directory errors.
        """
        report = WalkReport()
        seen: set[Path] = set()
        start: list[Path] = []
        for root in roots:
            path = normalize_path(root)
            key = self._visit_key(path)
            if key in seen:
                continue
            seen.add(key)
            if not path.is_dir():
                LOGGER.warning("Skipping root %s: not a directory", path)
                report.skipped_roots.append(path)
                continue
            start.append(path)

        with ThreadPoolExecutor(
            max_workers=self.max_workers, thread_name_prefix="mediatidy-walk"
        ) as pool:
            pending: set[Future[DirectoryVisit]] = {
                pool.submit(self.process_directory, path) for path in start
            }
            while pending:
                done, pending = wait(pending, return_when=FIRST_COMPLETED)
                for future in done:
                    visit = future.result()
                    report.record(visit)
                    for child in visit.subdirectories:
                        key = self._visit_key(child)
                        if key in seen:
                            continue
                        seen.add(key)
                        pending.add(pool.submit(self.process_directory, child))

        LOGGER.debug(
            "Walk finished: %d directories, %d task runs, %d errors",
            len(report.visited),
            report.tasks_run,
            len(report.errors),
        )
        return report

    def process_directory(self, directory: Path) -> DirectoryVisit:
        """Run the task list in ``directory`` and list the subdirectories to descend into."""
        visit = DirectoryVisit(path=directory)
        try:
            self._run_tasks(visit)
        except Exception as exc:
            # Snapshot providers are expected not to raise.
            visit.error = DirectoryError(directory, None, f"snapshot failed: {exc}")
            LOGGER.error("%s", visit.error)
        visit.subdirectories = self.list_subdirectories(directory)
        return visit

    def list_subdirectories(self, directory: Path) -> list[Path]:
        """Return the immediate, non-ignored subdirectories of ``directory`` sorted by name."""
        subdirs: list[Path] = []
        try:
            with os.scandir(directory) as entries:
                candidates = sorted(entries, key=lambda entry: entry.name)
        except OSError as exc:
            LOGGER.warning("Could not list %s: %s", directory, exc)
            return subdirs

        for entry in candidates:
            try:
                is_dir = entry.is_dir(follow_symlinks=self.follow_symlinks)
            except OSError:
                continue
            if not is_dir:
                continue
            path = directory / entry.name
            if self.ignore_filter.is_ignored(path, entry.name):
                LOGGER.debug("Ignoring directory %s", path)
                continue
            subdirs.append(path)
        return subdirs

    def _run_tasks(self, visit: DirectoryVisit) -> None:
        directory = visit.path
        snapshot = self.snapshotter.snapshot(directory)
        for task in self.tasks:
            visit.tasks_run += 1
            try:
                result = task.run(directory, snapshot)
            except Exception as exc:
                visit.error = DirectoryError(directory, task.name, str(exc) or type(exc).__name__)
                LOGGER.error("Task %s raised in %s: %s", task.name, directory, exc)
                return

            if result is TaskResult.ERROR:
                visit.error = DirectoryError(directory, task.name, "task reported an error")
                LOGGER.error("Task %s failed in %s; skipping remaining tasks", task.name, directory)
                return
            if result is TaskResult.FILES_CHANGED:
                snapshot = self.snapshotter.snapshot(directory)

    def _visit_key(self, path: Path) -> Path:
        if self.follow_symlinks:
            return path.resolve()
        return path


def walk(
    roots: Iterable[Path | str],
    tasks: Sequence[Task],
    *,
    snapshotter: SnapshotProvider,
    ignore_filter: IgnoreFilter | None = None,
    max_workers: int = DEFAULT_MAX_WORKERS,
    follow_symlinks: bool = False,
) -> WalkReport:
    """Walk ``roots`` with ``tasks``; shorthand for ``TreeWalker(...).walk(roots)``."""
    walker = TreeWalker(
        tasks,
        snapshotter=snapshotter,
        ignore_filter=ignore_filter,
        max_workers=max_workers,
        follow_symlinks=follow_symlinks,
    )
    return walker.walk(roots)


__all__ = ["DEFAULT_MAX_WORKERS", "TreeWalker", "walk"]
