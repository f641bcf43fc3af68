"""Organization plans and their execution."""

from .executor import MoveExecutor
from .models import MoveOperation, OperationPlan

__all__ = ["MoveExecutor", "MoveOperation", "OperationPlan"]
