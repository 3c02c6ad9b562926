"""Repository layer: source contracts and the task repository."""

from .task_repository import FALLBACK_KINDS, TaskRepository
from .task_source import ICacheSource, ITaskSource

__all__ = ["FALLBACK_KINDS", "ICacheSource", "ITaskSource", "TaskRepository"]
