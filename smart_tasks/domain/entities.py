"""
Domain entities for tasks.

Framework-agnostic representation of a task, independent of the JSON wire
format and of the cache's storage layout.
"""

import uuid
from dataclasses import dataclass, field, replace
from datetime import datetime, timezone


def utc_now() -> datetime:
    """Current time as a timezone-aware UTC datetime."""
    return datetime.now(timezone.utc)


def _as_aware(value: datetime) -> datetime:
    # Naive timestamps are taken to be UTC.
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


@dataclass(frozen=True)
class Task:
    """
    A persisted task.

    Immutable; two tasks are equal iff every field is equal. A Task always
    has a non-empty id: it only exists once a source has stored it.
    """

    id: str
    title: str
    description: str
    completed: bool
    created_at: datetime

    def __post_init__(self):
        """Validate task data on creation."""
        if not self.id or not self.id.strip():
            raise ValueError("Task id must not be empty")
        if not self.title or not self.title.strip():
            raise ValueError("Task title must not be empty")
        object.__setattr__(self, "created_at", _as_aware(self.created_at))

    def with_changes(self, **changes) -> "Task":
        """
        Return a copy with the given fields replaced.

        Args:
            **changes: New values for title, description or completed

        Returns:
            Modified copy of this task

        Raises:
            ValueError: If id or created_at is passed
        """
        frozen = {"id", "created_at"} & changes.keys()
        if frozen:
            raise ValueError(f"Cannot change immutable fields: {sorted(frozen)}")
        return replace(self, **changes)

    def mark_completed(self, done: bool = True) -> "Task":
        return self.with_changes(completed=done)


@dataclass(frozen=True)
class TaskDraft:
    """
    A task that has not been stored yet.

    local_id is provisional. The remote source assigns the authoritative id
    and the repository reconciles the two.
    """

    title: str
    description: str = ""
    completed: bool = False
    created_at: datetime = field(default_factory=utc_now)
    local_id: str = field(default_factory=lambda: uuid.uuid4().hex)

    def __post_init__(self):
        if not self.title or not self.title.strip():
            raise ValueError("Task title must not be empty")
        object.__setattr__(self, "created_at", _as_aware(self.created_at))

    def to_task(self, task_id: str) -> Task:
        """Materialise the draft under the given id."""
        return Task(
            id=task_id,
            title=self.title,
            description=self.description,
            completed=self.completed,
            created_at=self.created_at,
        )
