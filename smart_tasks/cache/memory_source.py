"""
In-memory task source.

A dict-backed implementation of the source contract. Used as the backend
of the offline demo repository and as a stand-in for the remote API in
tests: it can assign server-style ids and fail operations on demand.
"""

import itertools
from typing import Dict, Iterable, List, Optional

import structlog

from ..domain.entities import Task, TaskDraft
from ..domain.exceptions import ErrorKind, TaskDataError
from ..domain.result import Result
from ..repositories.task_source import ITaskSource

logger = structlog.get_logger(__name__)

OPERATIONS = ("list", "get", "create", "update", "delete")


class InMemoryTaskSource(ITaskSource):
    """
    Task source holding tasks in a dict.

    Attributes:
        tasks: Stored tasks keyed by id, in insertion order
        calls: Names of the operations invoked, in order
        assign_ids: Give created tasks sequential ids instead of their local id
    """

    def __init__(self, tasks: Optional[Iterable[Task]] = None, assign_ids: bool = True):
        """
        Initialize in-memory source.

        Args:
            tasks: Initial contents
            assign_ids: Assign "1", "2", ... on create, as a backend would
        """
        self.tasks: Dict[str, Task] = {task.id: task for task in tasks or ()}
        self.assign_ids = assign_ids
        self.calls: List[str] = []
        self._failures: Dict[str, List[TaskDataError]] = {}
        self._id_counter = itertools.count(len(self.tasks) + 1)

    def fail_next(self, operation: str, error: TaskDataError, times: int = 1) -> None:
        """
        Make the next calls of an operation fail.

        Args:
            operation: One of list, get, create, update, delete
            error: Error to return
            times: Number of consecutive calls to fail
        """
        if operation not in OPERATIONS:
            raise ValueError(f"Unknown operation: {operation}")
        self._failures.setdefault(operation, []).extend([error] * times)

    def fail_with(self, operation: str, kind: ErrorKind, times: int = 1) -> None:
        """Shortcut for fail_next with a generic error of the given kind."""
        self.fail_next(operation, TaskDataError(kind, f"Injected {kind.value} failure"), times)

    def _pending_failure(self, operation: str) -> Optional[TaskDataError]:
        self.calls.append(operation)
        queued = self._failures.get(operation)
        if queued:
            return queued.pop(0)
        return None

    def _next_id(self) -> str:
        candidate = str(next(self._id_counter))
        while candidate in self.tasks:
            candidate = str(next(self._id_counter))
        return candidate

    @staticmethod
    def _not_found(task_id: str) -> Result:
        return Result.failure(
            TaskDataError(ErrorKind.NOT_FOUND, f"Task not found: {task_id}", status_code=404)
        )

    async def list(self) -> Result[List[Task]]:
        error = self._pending_failure("list")
        if error:
            return Result.failure(error)
        return Result.success(list(self.tasks.values()))

    async def get(self, task_id: str) -> Result[Task]:
        error = self._pending_failure("get")
        if error:
            return Result.failure(error)
        task = self.tasks.get(task_id)
        if task is None:
            return self._not_found(task_id)
        return Result.success(task)

    async def create(self, draft: TaskDraft) -> Result[Task]:
        error = self._pending_failure("create")
        if error:
            return Result.failure(error)
        task_id = self._next_id() if self.assign_ids else draft.local_id
        task = draft.to_task(task_id)
        self.tasks[task.id] = task
        logger.debug("memory_task_created", task_id=task.id, local_id=draft.local_id)
        return Result.success(task)

    async def update(self, task: Task) -> Result[Task]:
        error = self._pending_failure("update")
        if error:
            return Result.failure(error)
        if task.id not in self.tasks:
            return self._not_found(task.id)
        self.tasks[task.id] = task
        return Result.success(task)

    async def delete(self, task_id: str) -> Result[None]:
        error = self._pending_failure("delete")
        if error:
            return Result.failure(error)
        if self.tasks.pop(task_id, None) is None:
            return self._not_found(task_id)
        return Result.success(None)
