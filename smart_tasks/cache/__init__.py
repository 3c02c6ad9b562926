"""Cache module initialization."""

from .local_source import TaskCacheSource
from .memory_source import InMemoryTaskSource
from .snapshot_storage import FileSnapshotStorage, ISnapshotStorage, RedisSnapshotStorage

__all__ = [
    "FileSnapshotStorage",
    "ISnapshotStorage",
    "InMemoryTaskSource",
    "RedisSnapshotStorage",
    "TaskCacheSource",
]
