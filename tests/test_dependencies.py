"""
Tests for repository wiring and the HTTP client factory.
"""

import httpx
import pytest

from smart_tasks.cache.local_source import TaskCacheSource
from smart_tasks.cache.memory_source import InMemoryTaskSource
from smart_tasks.cache.snapshot_storage import FileSnapshotStorage, RedisSnapshotStorage
from smart_tasks.config import Settings
from smart_tasks.dependencies import (
    build_snapshot_storage,
    create_offline_repository,
    create_task_repository,
)
from smart_tasks.infrastructure.http_client import build_headers, build_http_client
from smart_tasks.infrastructure.remote_source import TaskRemoteSource


@pytest.fixture
def settings(snapshot_path) -> Settings:
    return Settings(
        _env_file=None,
        TASKS_API_URL="https://api.example.com",
        TASKS_ENDPOINT="todos",
        CACHE_FILE_PATH=str(snapshot_path),
        API_TOKEN="secret",
    )


class TestBuildHeaders:
    """Test default headers."""

    def test_without_token(self):
        headers = build_headers("Smart Task Manager")

        assert headers["Accept"] == "application/json"
        assert headers["User-Agent"] == "Smart-Task-Manager/1.0"
        assert "Authorization" not in headers

    def test_with_token(self):
        assert build_headers("app", "abc")["Authorization"] == "Bearer abc"


class TestBuildHttpClient:
    """Test the HTTP client factory."""

    @pytest.mark.asyncio
    async def test_client_sends_configured_headers(self, settings):
        seen = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json=[])

        client = build_http_client(settings, transport=httpx.MockTransport(handler))
        async with client:
            await client.get("/todos")

        assert str(seen[0].url) == "https://api.example.com/todos"
        assert seen[0].headers["Authorization"] == "Bearer secret"
        assert client.timeout.read == settings.REQUEST_TIMEOUT


class TestWiring:
    """Test repository factories."""

    def test_file_backend_by_default(self, settings):
        storage = build_snapshot_storage(settings)

        assert isinstance(storage, FileSnapshotStorage)
        assert str(storage.path) == settings.CACHE_FILE_PATH

    def test_redis_backend(self, settings):
        settings.CACHE_BACKEND = "redis"
        settings.CACHE_KEY = "tasks:test"

        storage = build_snapshot_storage(settings)

        assert isinstance(storage, RedisSnapshotStorage)
        assert storage.key == "tasks:test"

    @pytest.mark.asyncio
    async def test_create_task_repository_owns_built_client(self, settings):
        repository = create_task_repository(settings)

        assert isinstance(repository.remote, TaskRemoteSource)
        assert isinstance(repository.cache, TaskCacheSource)
        assert repository.remote.endpoint == "/todos"

        await repository.aclose()
        assert repository.remote.client.is_closed

    @pytest.mark.asyncio
    async def test_create_task_repository_end_to_end(self, settings):
        def handler(request: httpx.Request) -> httpx.Response:
            if request.url.path == "/todos":
                return httpx.Response(
                    200,
                    json=[
                        {"id": 1, "title": "Write report", "completed": False},
                        {"id": 2, "title": "Review pull request", "completed": True},
                    ],
                )
            return httpx.Response(404)

        client = httpx.AsyncClient(
            base_url=settings.TASKS_API_URL, transport=httpx.MockTransport(handler)
        )
        async with create_task_repository(settings, http_client=client) as repository:
            listed = await repository.get_tasks()
            missing = await repository.get_task_by_id("9")

        assert [task.id for task in listed.value] == ["1", "2"]
        assert missing.is_failure
        assert not client.is_closed
        await client.aclose()

    @pytest.mark.asyncio
    async def test_offline_repository(self, sample_tasks, snapshot_path):
        repository = create_offline_repository(
            sample_tasks, storage=FileSnapshotStorage(snapshot_path)
        )

        assert isinstance(repository.remote, InMemoryTaskSource)
        created = await repository.create_task("Offline task")
        assert created.value.id == "4"
        assert snapshot_path.exists()
