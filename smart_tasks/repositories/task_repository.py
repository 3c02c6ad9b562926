"""
Task repository: the single data-access contract for callers.

Orchestrates one remote source and one local cache source:
1. Reads go to the remote first and refresh the cache on success
2. Reads fall back to the cache when the remote is unreachable, timed out
   or failing server-side
3. Writes go to the remote only; the cache mirrors confirmed writes

Every call runs this policy on its own. There are no retries, no backoff
and no circuit breaker, so failures surface with the remote's own timing.
"""

from typing import Awaitable, List

import structlog

from ..domain.entities import Task, TaskDraft
from ..domain.exceptions import TRANSIENT_KINDS, ErrorKind, TaskDataError, validation_error
from ..domain.result import Result
from .task_source import ICacheSource, ITaskSource

logger = structlog.get_logger(__name__)

# Remote failures that allow answering a read from the cache.
FALLBACK_KINDS = TRANSIENT_KINDS


class TaskRepository:
    """
    Resilient task repository.

    Attributes:
        remote: Authoritative source (the task API)
        cache: Local snapshot of the last successful remote read
    """

    def __init__(self, remote: ITaskSource, cache: ICacheSource):
        """
        Initialize repository.

        Args:
            remote: Remote task source
            cache: Local cache source
        """
        self.remote = remote
        self.cache = cache

    async def aclose(self) -> None:
        """Release resources held by the sources."""
        for source in (self.remote, self.cache):
            closer = getattr(source, "aclose", None)
            if closer is not None:
                await closer()

    async def __aenter__(self) -> "TaskRepository":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def _mirror(self, operation: str, pending: Awaitable[Result], **context) -> None:
        """
        Apply a best-effort cache write.

        The remote already answered, so a cache failure is logged and dropped.
        A NOT_FOUND while removing an entry means there was nothing to mirror.
        """
        try:
            outcome = await pending
        except Exception as error:
            logger.warning(
                "cache_mirror_failed",
                operation=operation,
                kind=ErrorKind.UNKNOWN.value,
                error=str(error),
                **context,
            )
            return
        if outcome.is_success:
            return
        if operation == "delete" and outcome.kind == ErrorKind.NOT_FOUND:
            logger.debug("cache_mirror_nothing_to_delete", **context)
            return
        logger.warning(
            "cache_mirror_failed",
            operation=operation,
            kind=outcome.error.kind.value,
            error=outcome.error.message,
            **context,
        )

    @staticmethod
    def _should_fall_back(error: TaskDataError) -> bool:
        return error.kind in FALLBACK_KINDS

    async def get_tasks(self) -> Result[List[Task]]:
        """
        Fetch all tasks.

        Returns:
            The remote collection, or the cached snapshot when the remote
            failed transiently and the snapshot is not empty. Otherwise the
            remote failure.
        """
        remote_result = await self.remote.list()

        if remote_result.is_success:
            await self._mirror("replace_all", self.cache.replace_all(remote_result.value))
            return remote_result

        error = remote_result.error
        if not self._should_fall_back(error):
            logger.info("get_tasks_failed_without_fallback", kind=error.kind.value)
            return remote_result

        cached = await self.cache.list()
        if cached.is_success and cached.value:
            logger.warning(
                "get_tasks_served_from_cache",
                remote_kind=error.kind.value,
                count=len(cached.value),
            )
            return cached

        logger.warning(
            "get_tasks_fallback_unavailable",
            remote_kind=error.kind.value,
            cache_kind=cached.kind.value if cached.is_failure else None,
        )
        return remote_result

    async def get_task_by_id(self, task_id: str) -> Result[Task]:
        """
        Fetch one task.

        Args:
            task_id: Task identifier

        Returns:
            The remote task, or the cached one when the remote failed
            transiently. NOT_FOUND when the fallback snapshot lacks the id.
        """
        if not task_id or not task_id.strip():
            return Result.failure(validation_error("task_id", task_id, "Task id cannot be empty"))

        remote_result = await self.remote.get(task_id)

        if remote_result.is_success:
            await self._mirror("upsert", self.cache.upsert(remote_result.value), task_id=task_id)
            return remote_result

        error = remote_result.error
        if not self._should_fall_back(error):
            return remote_result

        cached = await self.cache.get(task_id)
        if cached.is_success:
            logger.warning(
                "get_task_served_from_cache",
                task_id=task_id,
                remote_kind=error.kind.value,
            )
            return cached

        if cached.kind == ErrorKind.NOT_FOUND:
            return Result.failure(
                TaskDataError(
                    ErrorKind.NOT_FOUND,
                    f"Task {task_id} is not available offline",
                    details={"task_id": task_id, "remote_kind": error.kind.value},
                )
            )

        logger.warning(
            "get_task_fallback_unavailable",
            task_id=task_id,
            remote_kind=error.kind.value,
            cache_kind=cached.kind.value,
        )
        return remote_result

    async def create_task(self, title: str, description: str = "") -> Result[Task]:
        """
        Create a task on the remote and mirror it into the cache.

        Args:
            title: Task title, must not be blank
            description: Task description

        Returns:
            The created task carrying the remote's id, or the remote failure
        """
        if not title or not title.strip():
            return Result.failure(validation_error("title", title, "Title cannot be empty"))

        draft = TaskDraft(title=title, description=description)
        created = await self.remote.create(draft)
        if created.is_failure:
            return created

        task = created.value
        await self._mirror("upsert", self.cache.upsert(task), task_id=task.id)
        if task.id != draft.local_id:
            # Reconcile: the backend id replaces the provisional local id
            await self._mirror("delete", self.cache.delete(draft.local_id), task_id=draft.local_id)
        return created

    async def update_task(self, task: Task) -> Result[Task]:
        """
        Update a task on the remote and mirror the result into the cache.

        Args:
            task: Task with new field values

        Returns:
            The task as stored remotely, or the remote failure
        """
        updated = await self.remote.update(task)
        if updated.is_failure:
            return updated

        await self._mirror("upsert", self.cache.upsert(updated.value), task_id=task.id)
        return updated

    async def delete_task(self, task_id: str) -> Result[None]:
        """
        Delete a task on the remote and drop it from the cache.

        Args:
            task_id: Task identifier

        Returns:
            Empty success, or the remote failure
        """
        if not task_id or not task_id.strip():
            return Result.failure(validation_error("task_id", task_id, "Task id cannot be empty"))

        deleted = await self.remote.delete(task_id)
        if deleted.is_failure:
            return deleted

        await self._mirror("delete", self.cache.delete(task_id), task_id=task_id)
        return deleted
