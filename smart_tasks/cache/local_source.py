"""
Local cache source backed by a persisted snapshot.

Stores the last-known-good image of the task collection as one JSON
document. Every mutation reads the full snapshot, changes it in memory and
writes it back while holding the instance lock, so overlapping mutations
never lose each other's changes.
"""

import asyncio
import json
from typing import Callable, Dict, List

import structlog

from ..domain.entities import Task, TaskDraft
from ..domain.exceptions import ErrorKind, TaskDataError
from ..domain.result import Result
from ..infrastructure.error_translator import translate_storage_error
from ..infrastructure.task_payload import TASK_LIST_ADAPTER, TaskPayload
from ..repositories.task_source import ICacheSource
from .snapshot_storage import ISnapshotStorage

logger = structlog.get_logger(__name__)

Snapshot = Dict[str, Task]


def _not_found(task_id: str) -> TaskDataError:
    return TaskDataError(
        ErrorKind.NOT_FOUND,
        f"Task not found in cache: {task_id}",
        details={"task_id": task_id, "source": "cache"},
    )


class TaskCacheSource(ICacheSource):
    """
    Task source over a local snapshot.

    Attributes:
        storage: Backend holding the serialized snapshot
    """

    def __init__(self, storage: ISnapshotStorage):
        """
        Initialize cache source.

        Args:
            storage: Snapshot persistence backend
        """
        self.storage = storage
        self._lock = asyncio.Lock()

    async def aclose(self) -> None:
        await self.storage.close()

    async def _load(self) -> Snapshot:
        document = await self.storage.read()
        if document is None:
            return {}
        payloads = TASK_LIST_ADAPTER.validate_json(document)
        snapshot: Snapshot = {}
        for payload in payloads:
            try:
                task = payload.to_task()
            except ValueError as error:
                raise TaskDataError(
                    ErrorKind.CORRUPT,
                    f"Cached snapshot holds an invalid task: {error}",
                ) from error
            snapshot[task.id] = task
        return snapshot

    async def _save(self, snapshot: Snapshot) -> None:
        document = json.dumps(
            [TaskPayload.from_task(task).to_json_dict() for task in snapshot.values()]
        )
        await self.storage.write(document)

    def _failure(self, operation: str, error: Exception) -> Result:
        classified = translate_storage_error(error, operation)
        log = logger.debug if classified.kind == ErrorKind.NOT_FOUND else logger.warning
        log(
            "cache_operation_failed",
            operation=operation,
            kind=classified.kind.value,
            error=classified.message,
        )
        return Result.failure(classified)

    async def _mutate(self, operation: str, change: Callable[[Snapshot], Result]) -> Result:
        """
        Run one read-modify-write cycle under the lock.

        The snapshot is only written back when change() succeeds.
        """
        async with self._lock:
            try:
                snapshot = await self._load()
                outcome = change(snapshot)
                if outcome.is_success:
                    await self._save(snapshot)
                    logger.debug("cache_snapshot_saved", operation=operation, size=len(snapshot))
                return outcome
            except Exception as error:
                return self._failure(operation, error)

    async def list(self) -> Result[List[Task]]:
        try:
            snapshot = await self._load()
        except Exception as error:
            return self._failure("list", error)
        return Result.success(list(snapshot.values()))

    async def get(self, task_id: str) -> Result[Task]:
        try:
            snapshot = await self._load()
        except Exception as error:
            return self._failure("get", error)
        task = snapshot.get(task_id)
        if task is None:
            return self._failure("get", _not_found(task_id))
        return Result.success(task)

    async def create(self, draft: TaskDraft) -> Result[Task]:
        """Store a draft under its local id."""
        return await self.upsert(draft.to_task(draft.local_id))

    async def upsert(self, task: Task) -> Result[Task]:
        def change(snapshot: Snapshot) -> Result:
            snapshot[task.id] = task
            return Result.success(task)

        return await self._mutate("upsert", change)

    async def update(self, task: Task) -> Result[Task]:
        def change(snapshot: Snapshot) -> Result:
            if task.id not in snapshot:
                raise _not_found(task.id)
            snapshot[task.id] = task
            return Result.success(task)

        return await self._mutate("update", change)

    async def delete(self, task_id: str) -> Result[None]:
        def change(snapshot: Snapshot) -> Result:
            if snapshot.pop(task_id, None) is None:
                raise _not_found(task_id)
            return Result.success(None)

        return await self._mutate("delete", change)

    async def replace_all(self, tasks: List[Task]) -> Result[None]:
        """Overwrite the snapshot without reading it, which also repairs a corrupt one."""
        snapshot: Snapshot = {task.id: task for task in tasks}
        async with self._lock:
            try:
                await self._save(snapshot)
            except Exception as error:
                return self._failure("replace_all", error)
        logger.info("cache_snapshot_replaced", size=len(snapshot))
        return Result.success(None)
