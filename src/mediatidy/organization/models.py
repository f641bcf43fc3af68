"""Organization plan data models."""

from __future__ import annotations

from pathlib import Path
from typing import List, Optional

from pydantic import BaseModel, Field


class MoveOperation(BaseModel):
    """Represents moving a file to a new directory.

    Attributes:
        source: Starting file path before the move.
        destination: Destination path after the move.
        reasoning: Optional explanation for the move.
    """

    source: Path
    destination: Path
    reasoning: Optional[str] = None


class OperationPlan(BaseModel):
    """Aggregated organization plan for one directory."""

    moves: List[MoveOperation] = Field(default_factory=list)
    notes: List[str] = Field(default_factory=list)

    def destination_dirs(self) -> list[Path]:
        """Return the distinct destination directories in first-use order."""
        seen: dict[Path, None] = {}
        for move in self.moves:
            seen.setdefault(move.destination.parent, None)
        return list(seen)
