import asyncio
import logging
import re
from pathlib import Path
from uuid import uuid4

from src.app.services.storage import IStorage, StorageError

logger = logging.getLogger(__name__)

_UNSAFE_CHARS = re.compile(r"[^A-Za-z0-9._-]+")


class LocalStorage(IStorage):
    """
    Stores documents as files under a single directory.

    Locators are generated file names; callers never see paths.
    """

    def __init__(self, root_dir: str):
        self.root = Path(root_dir)

    async def store(self, data: bytes, filename: str) -> str:
        safe_name = _UNSAFE_CHARS.sub("_", Path(filename).name)[-100:] or "document"
        locator = f"{uuid4().hex}_{safe_name}"
        await asyncio.to_thread(self._write, locator, data)
        logger.info(f"Stored {len(data)} bytes as {locator}")
        return locator

    async def retrieve(self, locator: str) -> bytes:
        path = self._path(locator)
        try:
            return await asyncio.to_thread(path.read_bytes)
        except OSError as e:
            raise StorageError(f"Cannot read {locator}: {e}") from e

    async def delete(self, locator: str) -> None:
        path = self._path(locator)
        await asyncio.to_thread(path.unlink, True)
        logger.info(f"Deleted stored file {locator}")

    def _write(self, locator: str, data: bytes) -> None:
        self.root.mkdir(parents=True, exist_ok=True)
        self._path(locator).write_bytes(data)

    def _path(self, locator: str) -> Path:
        # Locators are plain file names, never paths
        if Path(locator).name != locator:
            raise StorageError(f"Invalid locator: {locator}")
        return self.root / locator
