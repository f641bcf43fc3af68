"""Executor for organization plans."""

from __future__ import annotations

import logging
from pathlib import Path

from .models import OperationPlan

LOGGER = logging.getLogger(__name__)


class MoveExecutor:
    """Apply move plans, creating destination folders as needed."""

    def apply(self, plan: OperationPlan, root: Path, dry_run: bool = False) -> list[Path]:
        """Execute every move in ``plan``.

        Args:
            plan: Operation plan computed by a task.
            root: Directory the plan was computed for; sources must live in it.
            dry_run: When true, only validate and log the moves.

        Returns:
            list[Path]: Destinations that were written, in plan order.

        Raises:
            OSError: When a folder cannot be created or a file cannot be moved.
                Moves applied before the failure are kept.
            ValueError: If a source lies outside ``root``.
        """
        for move in plan.moves:
            self._validate_path(move.source, root)

        if dry_run:
            for move in plan.moves:
                LOGGER.info("Would move %s to %s", move.source, move.destination)
            return []

        for directory in plan.destination_dirs():
            if directory.is_dir():
                continue
            directory.mkdir(parents=True, exist_ok=True)
            LOGGER.info("Created directory %s", directory)

        moved: list[Path] = []
        for move in plan.moves:
            if move.destination.exists() and move.destination != move.source:
                raise FileExistsError(f"Destination already exists: {move.destination}")
            move.source.rename(move.destination)
            LOGGER.info("Moved %s to %s", move.source, move.destination)
            moved.append(move.destination)
        return moved

    def _validate_path(self, source: Path, root: Path) -> None:
        if source.parent != root:
            raise ValueError(f"Source path {source} is outside directory {root}")
        if not source.exists():
            raise FileNotFoundError(f"Source path is missing: {source}")


__all__ = ["MoveExecutor"]
