"""
Package repository backed by a dpkg status file.

Reads and parses the file on first use and serves every later query from
an in-memory cache. A failed load leaves the cache empty so the next call
tries again.
"""

import asyncio
import logging
from pathlib import Path
from typing import Awaitable, Callable

import aiofiles

from status_explorer.core.config import resolve_status_file
from status_explorer.core.result import ErrorKind, Failure, Result, failure, map_value, success
from status_explorer.models.package import Package
from status_explorer.parsers.status import parse_file

logger = logging.getLogger(__name__)

Reader = Callable[[Path], Awaitable[str]]


async def read_status_file(path: Path) -> str:
    """Read the whole status file."""
    async with aiofiles.open(path, encoding="utf-8") as f:
        return await f.read()


class PackageRepository:
    """
    Answers package queries from a lazily loaded, never invalidated cache.

    The load is guarded by a lock so concurrent first calls read the file
    only once.
    """

    def __init__(self, status_file: Path | None = None, reader: Reader | None = None):
        self.status_file = resolve_status_file(status_file)
        self._reader = reader or read_status_file
        self._cache: list[Package] | None = None
        self._lock = asyncio.Lock()

    @property
    def is_loaded(self) -> bool:
        return self._cache is not None

    async def list_packages(self) -> Result[list[Package]]:
        """Return all packages sorted by name."""
        if self._cache is not None:
            logger.debug("[REPO] Serving packages from cache")
            return success(self._cache)

        async with self._lock:
            if self._cache is not None:
                return success(self._cache)
            return await self._load()

    async def find_package(self, name: str) -> Result[Package | None]:
        """Look a package up by exact name; Success(None) when it is not installed."""
        result = await self.list_packages()
        return map_value(lambda packages: next((p for p in packages if p.name == name), None), result)

    async def _load(self) -> Result[list[Package]]:
        logger.info(f"[REPO] Loading {self.status_file}")
        try:
            content = await self._reader(self.status_file)
        except (OSError, UnicodeDecodeError) as e:
            logger.error(f"[REPO] Failed to read {self.status_file}: {e}")
            return failure(f"Could not read {self.status_file}: {e}", ErrorKind.IO)

        result = parse_file(content)
        if isinstance(result, Failure):
            logger.error(f"[REPO] Failed to parse {self.status_file}: {result.message}")
            return result

        self._cache = result.value
        return result
