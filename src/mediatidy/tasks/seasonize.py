"""Move episodes into per-season folders."""

from __future__ import annotations

import logging
import re
from pathlib import Path

from mediatidy.ingestion.models import FileSnapshot
from mediatidy.organization import MoveExecutor, MoveOperation, OperationPlan

from .base import TaskResult

LOGGER = logging.getLogger(__name__)

_PLACEHOLDER = re.compile(r"X+")


def format_season_dir(template: str, season: int) -> str:
    """Render a season folder name from ``template``.

    Every run of ``X`` is replaced by the season number zero-padded to the
    length of the run, so ``"Season XX"`` becomes ``"Season 03"`` for season 3.
    Numbers wider than the run are never truncated.
    """
    return _PLACEHOLDER.sub(lambda match: f"{season:0{len(match.group())}d}", template)


def is_season_dir(template: str, name: str) -> bool:
    """Return True when ``name`` looks like a folder rendered from ``template``.

    Each run of ``X`` matches any number of digits, so a template without
    literal text matches every all-digit name.
    """
    parts = _PLACEHOLDER.split(template)
    pattern = r"\d+".join(re.escape(part) for part in parts)
    return re.fullmatch(pattern, name) is not None


class SeasonizeTask:
    """Group episode files of a directory into season folders.

    Files whose names carry no season marker are left in place, as is every
    file of a directory that already is a season folder.
    """

    name = "seasonize"
    flag = "s"

    def __init__(
        self,
        season_dir_name: str,
        *,
        dry_run: bool = False,
        executor: MoveExecutor | None = None,
    ) -> None:
        self.season_dir_name = season_dir_name
        self.dry_run = dry_run
        self.executor = executor or MoveExecutor()

    def plan(self, directory: Path, snapshot: FileSnapshot) -> OperationPlan:
        """Compute the moves needed to seasonize ``directory``."""
        plan = OperationPlan()
        if is_season_dir(self.season_dir_name, directory.name):
            plan.notes.append(f"{directory} is already a season folder.")
            return plan

        for path, info in sorted(snapshot.items(), key=lambda item: item[0]):
            if info.season is None:
                continue
            folder = format_season_dir(self.season_dir_name, info.season)
            plan.moves.append(
                MoveOperation(
                    source=path,
                    destination=directory / folder / path.name,
                    reasoning=f"season {info.season}",
                )
            )
        return plan

    def run(self, directory: Path, snapshot: FileSnapshot) -> TaskResult:
        plan = self.plan(directory, snapshot)
        if not plan.moves:
            return TaskResult.OK

        try:
            self.executor.apply(plan, directory, dry_run=self.dry_run)
        except (OSError, ValueError) as exc:
            LOGGER.error("Failed to seasonize %s: %s", directory, exc)
            return TaskResult.ERROR

        if self.dry_run:
            return TaskResult.OK
        return TaskResult.FILES_CHANGED


__all__ = ["SeasonizeTask", "format_season_dir", "is_season_dir"]
