"""
JSON wire model for tasks.

Shared by the remote API client and the local snapshot cache. Keys follow
the API's camelCase layout: id, title, description, isCompleted, createdAt.
"""

from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, TypeAdapter, field_validator

from ..domain.entities import Task, TaskDraft

# createdAt of tasks whose backend does not send one
UNKNOWN_CREATED_AT = datetime(1970, 1, 1, tzinfo=timezone.utc)


class TaskPayload(BaseModel):
    """
    Serialized task as exchanged with the API and stored in the cache.

    Attributes:
        id: Task id; numeric ids from the backend are coerced to strings
        title: Task title
        description: Task description
        completed: Completion flag (``isCompleted`` on the wire)
        created_at: Creation timestamp (``createdAt`` on the wire);
            UNKNOWN_CREATED_AT when the backend omits it
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    id: Optional[str] = None
    title: str
    description: str = ""
    completed: bool = Field(
        default=False,
        validation_alias=AliasChoices("isCompleted", "completed"),
        serialization_alias="isCompleted",
    )
    created_at: datetime = Field(
        default=UNKNOWN_CREATED_AT,
        validation_alias=AliasChoices("createdAt", "created_at"),
        serialization_alias="createdAt",
    )

    @field_validator("id", mode="before")
    @classmethod
    def coerce_id(cls, value: Any) -> Optional[str]:
        """Accept integer ids, reject blank ones."""
        if value is None:
            return None
        if isinstance(value, bool):
            raise ValueError("id must be a string or integer")
        text = str(value).strip()
        return text or None

    @field_validator("description", mode="before")
    @classmethod
    def default_description(cls, value: Any) -> Any:
        return "" if value is None else value

    @classmethod
    def from_task(cls, task: Task) -> "TaskPayload":
        return cls(
            id=task.id,
            title=task.title,
            description=task.description,
            completed=task.completed,
            created_at=task.created_at,
        )

    @classmethod
    def from_draft(cls, draft: TaskDraft) -> "TaskPayload":
        return cls(
            id=draft.local_id,
            title=draft.title,
            description=draft.description,
            completed=draft.completed,
            created_at=draft.created_at,
        )

    def to_task(self) -> Task:
        """
        Convert to a domain Task.

        Raises:
            ValueError: If the payload has no id or an empty title
        """
        if not self.id:
            raise ValueError("Task payload has no id")
        return Task(
            id=self.id,
            title=self.title,
            description=self.description,
            completed=self.completed,
            created_at=self.created_at,
        )

    def to_json_dict(self) -> Dict[str, Any]:
        """Serialize using wire key names."""
        return self.model_dump(mode="json", by_alias=True)


TASK_LIST_ADAPTER: TypeAdapter[List[TaskPayload]] = TypeAdapter(List[TaskPayload])
