"""Domain layer: task entities, classified errors and operation results."""

from .entities import Task, TaskDraft, utc_now
from .exceptions import TRANSIENT_KINDS, ErrorKind, TaskDataError, validation_error
from .result import Result

__all__ = [
    "ErrorKind",
    "Result",
    "Task",
    "TaskDataError",
    "TaskDraft",
    "TRANSIENT_KINDS",
    "utc_now",
    "validation_error",
]
