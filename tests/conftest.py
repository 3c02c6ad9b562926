"""
Test configuration and fixtures.

Provides sample tasks, sources and a repository wired with an in-memory
remote and a file-backed cache in a temporary directory.
"""

import pytest

from smart_tasks.cache.local_source import TaskCacheSource
from smart_tasks.cache.memory_source import InMemoryTaskSource
from smart_tasks.cache.snapshot_storage import FileSnapshotStorage
from smart_tasks.domain.entities import Task
from smart_tasks.repositories.task_repository import TaskRepository
from tests.factories import make_task


@pytest.fixture
def sample_task() -> Task:
    """A single persisted task."""
    return make_task()


@pytest.fixture
def sample_tasks() -> list:
    """Three persisted tasks."""
    return [
        make_task("1", "Write report"),
        make_task("2", "Review pull request", completed=True),
        make_task("3", "Plan sprint", description=""),
    ]


@pytest.fixture
def snapshot_path(tmp_path):
    """Location of the cache snapshot file."""
    return tmp_path / "cache" / "tasks.json"


@pytest.fixture
def cache_source(snapshot_path) -> TaskCacheSource:
    """Cache source over a file in a temporary directory."""
    return TaskCacheSource(FileSnapshotStorage(snapshot_path))


@pytest.fixture
def remote_source(sample_tasks) -> InMemoryTaskSource:
    """In-memory stand-in for the remote API, preloaded with sample tasks."""
    return InMemoryTaskSource(sample_tasks)


@pytest.fixture
def repository(remote_source, cache_source) -> TaskRepository:
    """Repository over the in-memory remote and the file cache."""
    return TaskRepository(remote=remote_source, cache=cache_source)
