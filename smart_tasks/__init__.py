"""
Smart Tasks data layer.

Resilient task repository unifying a remote task API and a local snapshot
cache behind one CRUD contract with classified errors.
"""

__version__ = "1.0.0"

from .domain import ErrorKind, Result, Task, TaskDataError, TaskDraft
from .repositories import TaskRepository

__all__ = [
    "ErrorKind",
    "Result",
    "Task",
    "TaskDataError",
    "TaskDraft",
    "TaskRepository",
    "__version__",
]
