"""Directory-scoped tasks and their registry."""

from .base import FunctionTask, Task, TaskResult
from .registry import TaskRegistry, TaskSpec, default_registry, parse_flag_args
from .seasonize import SeasonizeTask, format_season_dir

__all__ = [
    "FunctionTask",
    "SeasonizeTask",
    "Task",
    "TaskRegistry",
    "TaskResult",
    "TaskSpec",
    "default_registry",
    "format_season_dir",
    "parse_flag_args",
]
