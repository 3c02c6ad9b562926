"""
Persistence backends for the local task snapshot.

A backend stores one opaque JSON document. Encoding, decoding and locking
belong to the cache source; backends only read and write text.
"""

import asyncio
import os
import tempfile
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Optional, Union

import redis.asyncio as redis
import structlog

logger = structlog.get_logger(__name__)


class ISnapshotStorage(ABC):
    """Key-value slot holding the serialized snapshot."""

    @abstractmethod
    async def read(self) -> Optional[str]:
        """
        Read the stored document.

        Returns:
            Document text, or None if nothing has been stored yet
        """
        pass

    @abstractmethod
    async def write(self, document: str) -> None:
        """
        Replace the stored document.

        Args:
            document: Serialized snapshot
        """
        pass

    async def close(self) -> None:
        """Release backend resources."""
        return None


class FileSnapshotStorage(ISnapshotStorage):
    """
    Snapshot kept in a JSON file.

    Writes go to a temporary file in the same directory and are moved into
    place with os.replace, so readers never see a half-written file.
    """

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)

    def _read_sync(self) -> Optional[str]:
        if not self.path.exists():
            return None
        return self.path.read_text(encoding="utf-8")

    def _write_sync(self, document: str) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(
            dir=str(self.path.parent), prefix=f".{self.path.name}.", suffix=".tmp"
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as handle:
                handle.write(document)
            os.replace(tmp_name, self.path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise

    async def read(self) -> Optional[str]:
        return await asyncio.to_thread(self._read_sync)

    async def write(self, document: str) -> None:
        await asyncio.to_thread(self._write_sync, document)
        logger.debug("snapshot_file_written", path=str(self.path), size=len(document))


class RedisSnapshotStorage(ISnapshotStorage):
    """
    Snapshot kept under a single Redis key.

    No TTL: the snapshot is the last-known-good image and stays until the
    next successful remote read replaces it.
    """

    def __init__(self, redis_client: redis.Redis, key: str = "smart_tasks:snapshot"):
        """
        Initialize Redis storage.

        Args:
            redis_client: Async Redis client
            key: Key holding the snapshot document
        """
        self.redis = redis_client
        self.key = key

    async def read(self) -> Optional[str]:
        raw = await self.redis.get(self.key)
        if raw is None:
            return None
        if isinstance(raw, bytes):
            return raw.decode("utf-8")
        return raw

    async def write(self, document: str) -> None:
        await self.redis.set(self.key, document)
        logger.debug("snapshot_redis_written", key=self.key, size=len(document))

    async def close(self) -> None:
        await self.redis.aclose()
