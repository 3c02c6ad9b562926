"""
Task source interfaces (Abstract Base Classes).

Define the CRUD contract shared by the remote API, the local cache and the
in-memory source, independent of transport or storage.
"""

from abc import ABC, abstractmethod
from typing import List

from ..domain.entities import Task, TaskDraft
from ..domain.result import Result


class ITaskSource(ABC):
    """
    CRUD provider for tasks.

    Implementations never raise for data failures: every failure is returned
    as Result.failure carrying a classified TaskDataError.
    """

    @abstractmethod
    async def list(self) -> Result[List[Task]]:
        """
        Fetch the complete collection.

        Returns:
            Result with every known task
        """
        pass

    @abstractmethod
    async def get(self, task_id: str) -> Result[Task]:
        """
        Fetch one task.

        Args:
            task_id: Task identifier

        Returns:
            Result with the task, NOT_FOUND failure if absent
        """
        pass

    @abstractmethod
    async def create(self, draft: TaskDraft) -> Result[Task]:
        """
        Store a new task.

        Args:
            draft: Task to create; its local id is not authoritative

        Returns:
            Result with the stored task carrying the source's id
        """
        pass

    @abstractmethod
    async def update(self, task: Task) -> Result[Task]:
        """
        Replace an existing task.

        Args:
            task: Task with its new field values

        Returns:
            Result with the task as stored
        """
        pass

    @abstractmethod
    async def delete(self, task_id: str) -> Result[None]:
        """
        Remove a task.

        Args:
            task_id: Task identifier

        Returns:
            Empty success, or a classified failure
        """
        pass


class ICacheSource(ITaskSource):
    """
    Task source that holds a local snapshot of the collection.

    Adds snapshot-level operations the repository uses to mirror remote
    results. create() stores a draft under its local id.
    """

    @abstractmethod
    async def upsert(self, task: Task) -> Result[Task]:
        """
        Insert or replace a task keeping its id.

        Args:
            task: Task to store

        Returns:
            Result with the stored task
        """
        pass

    @abstractmethod
    async def replace_all(self, tasks: List[Task]) -> Result[None]:
        """
        Overwrite the whole snapshot.

        Args:
            tasks: New snapshot contents, in order
        """
        pass
