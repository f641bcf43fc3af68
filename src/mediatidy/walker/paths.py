"""Path normalization shared by the walker, the ignore filter and the CLI."""

from __future__ import annotations

import os
from pathlib import Path


def normalize_path(path: Path | str) -> Path:
    """Return ``path`` made absolute with ``~``, ``.`` and ``..`` collapsed.

    Symlinks are not resolved, so ``a/link/..`` collapses lexically to ``a``.
    """
    return Path(os.path.normpath(Path(path).expanduser().absolute()))


__all__ = ["normalize_path"]
