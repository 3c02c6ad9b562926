"""
Wiring of the task repository.

Builds repositories from settings. Every collaborator is created here and
passed in explicitly; nothing is shared through module-level state.
"""

from typing import Iterable, Optional

import httpx
import redis.asyncio as redis
import structlog

from .cache.local_source import TaskCacheSource
from .cache.memory_source import InMemoryTaskSource
from .cache.snapshot_storage import FileSnapshotStorage, ISnapshotStorage, RedisSnapshotStorage
from .config import Settings, settings as default_settings
from .domain.entities import Task
from .infrastructure.http_client import build_http_client
from .infrastructure.remote_source import TaskRemoteSource
from .repositories.task_repository import TaskRepository

logger = structlog.get_logger(__name__)


def build_snapshot_storage(settings: Settings) -> ISnapshotStorage:
    """
    Create the snapshot backend selected by CACHE_BACKEND.

    Args:
        settings: Application settings

    Returns:
        File or Redis snapshot storage
    """
    if settings.CACHE_BACKEND == "redis":
        client = redis.from_url(settings.REDIS_URL)
        return RedisSnapshotStorage(client, key=settings.CACHE_KEY)
    return FileSnapshotStorage(settings.CACHE_FILE_PATH)


def create_task_repository(
    settings: Optional[Settings] = None,
    http_client: Optional[httpx.AsyncClient] = None,
    storage: Optional[ISnapshotStorage] = None,
) -> TaskRepository:
    """
    Create a repository over the task API and the configured local cache.

    Args:
        settings: Settings to use (defaults to the global settings)
        http_client: Pre-built HTTP client; the repository does not close it
        storage: Pre-built snapshot storage

    Returns:
        Configured TaskRepository
    """
    settings = settings or default_settings
    owns_client = http_client is None
    client = http_client or build_http_client(settings)

    remote = TaskRemoteSource(client, endpoint=settings.TASKS_ENDPOINT, owns_client=owns_client)
    cache = TaskCacheSource(storage or build_snapshot_storage(settings))

    logger.info(
        "task_repository_created",
        environment=settings.ENVIRONMENT,
        api_url=settings.TASKS_API_URL,
        cache_backend=settings.CACHE_BACKEND,
    )
    return TaskRepository(remote=remote, cache=cache)


def create_offline_repository(
    tasks: Optional[Iterable[Task]] = None,
    storage: Optional[ISnapshotStorage] = None,
) -> TaskRepository:
    """
    Create a repository whose remote side is an in-memory source.

    Useful for demos and UI development without a backend.

    Args:
        tasks: Initial contents of the in-memory backend
        storage: Snapshot storage (defaults to a file under .local/)

    Returns:
        TaskRepository over InMemoryTaskSource
    """
    remote = InMemoryTaskSource(tasks)
    cache = TaskCacheSource(storage or FileSnapshotStorage(default_settings.CACHE_FILE_PATH))
    return TaskRepository(remote=remote, cache=cache)
