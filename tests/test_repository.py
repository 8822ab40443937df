"""Tests for the cached package repository and its configuration."""

import asyncio
from pathlib import Path

import pytest

from status_explorer.core.config import DEFAULT_STATUS_FILE, STATUS_FILE_ENV, resolve_status_file
from status_explorer.core.repository import PackageRepository, read_status_file
from status_explorer.core.result import ErrorKind, Failure, Success


class CountingReader:
    """Async reader returning fixed content and counting calls."""

    def __init__(self, content: str):
        self.content = content
        self.calls = 0

    async def __call__(self, path: Path) -> str:
        self.calls += 1
        await asyncio.sleep(0)
        return self.content


class FlakyReader(CountingReader):
    """Fails with the given error on the first call only."""

    def __init__(self, content: str, error: Exception):
        super().__init__(content)
        self.error = error

    async def __call__(self, path: Path) -> str:
        self.calls += 1
        if self.calls == 1:
            raise self.error
        return self.content


# ═══════════════════════════════════════════
# Configuration
# ═══════════════════════════════════════════


class TestConfig:
    def test_explicit_path_wins(self, monkeypatch):
        monkeypatch.setenv(STATUS_FILE_ENV, "/from/env")
        assert resolve_status_file("/explicit") == Path("/explicit")

    def test_env_var(self, monkeypatch):
        monkeypatch.setenv(STATUS_FILE_ENV, "/from/env")
        assert resolve_status_file() == Path("/from/env")
        assert PackageRepository().status_file == Path("/from/env")

    def test_default(self, monkeypatch):
        monkeypatch.delenv(STATUS_FILE_ENV, raising=False)
        assert resolve_status_file() == DEFAULT_STATUS_FILE


# ═══════════════════════════════════════════
# Caching
# ═══════════════════════════════════════════


class TestListPackages:
    @pytest.mark.asyncio
    async def test_serves_from_cache(self, status_text):
        reader = CountingReader(status_text)
        repository = PackageRepository(Path("status"), reader=reader)

        first = await repository.list_packages()
        second = await repository.list_packages()

        assert isinstance(first, Success)
        assert second.value is first.value
        assert reader.calls == 1
        assert repository.is_loaded

    @pytest.mark.asyncio
    async def test_concurrent_first_access_reads_once(self, status_text):
        reader = CountingReader(status_text)
        repository = PackageRepository(Path("status"), reader=reader)

        results = await asyncio.gather(*(repository.list_packages() for _ in range(5)))

        assert all(isinstance(r, Success) for r in results)
        assert reader.calls == 1

    @pytest.mark.asyncio
    async def test_read_error_is_not_cached(self, status_text):
        reader = FlakyReader(status_text, FileNotFoundError("missing"))
        repository = PackageRepository(Path("status"), reader=reader)

        result = await repository.list_packages()
        assert isinstance(result, Failure)
        assert result.kind == ErrorKind.IO
        assert not repository.is_loaded

        retry = await repository.list_packages()
        assert isinstance(retry, Success)
        assert len(retry.value) == 3
        assert reader.calls == 2

    @pytest.mark.asyncio
    async def test_parse_error_is_not_cached(self):
        reader = CountingReader("Package: broken\nno separator here")
        repository = PackageRepository(Path("status"), reader=reader)

        assert isinstance(await repository.list_packages(), Failure)
        assert isinstance(await repository.list_packages(), Failure)
        assert reader.calls == 2

    @pytest.mark.asyncio
    async def test_independent_instances(self, status_text):
        reader = CountingReader(status_text)
        await PackageRepository(Path("status"), reader=reader).list_packages()
        await PackageRepository(Path("status"), reader=reader).list_packages()
        assert reader.calls == 2


# ═══════════════════════════════════════════
# Lookup
# ═══════════════════════════════════════════


class TestFindPackage:
    @pytest.mark.asyncio
    async def test_found(self, status_text):
        repository = PackageRepository(Path("status"), reader=CountingReader(status_text))
        result = await repository.find_package("lsb-release")
        assert isinstance(result, Success)
        assert result.value.name == "lsb-release"

    @pytest.mark.asyncio
    async def test_not_found_is_success(self, status_text):
        repository = PackageRepository(Path("status"), reader=CountingReader(status_text))
        assert await repository.find_package("not-installed") == Success(None)

    @pytest.mark.asyncio
    async def test_load_error_is_failure(self):
        repository = PackageRepository(Path("status"), reader=FlakyReader("", PermissionError("denied")))
        result = await repository.find_package("lsb-release")
        assert isinstance(result, Failure)
        assert result.kind == ErrorKind.IO


# ═══════════════════════════════════════════
# File Reading
# ═══════════════════════════════════════════


class TestReadStatusFile:
    @pytest.mark.asyncio
    async def test_reads_file(self, status_file, status_text):
        assert await read_status_file(status_file) == status_text

    @pytest.mark.asyncio
    async def test_default_reader(self, status_file):
        repository = PackageRepository(status_file)
        result = await repository.list_packages()
        assert isinstance(result, Success)
        assert [p.name for p in result.value][0] == "libws-commons-util-java"

    @pytest.mark.asyncio
    async def test_missing_file(self, tmp_path):
        repository = PackageRepository(tmp_path / "missing")
        result = await repository.list_packages()
        assert isinstance(result, Failure)
        assert result.kind == ErrorKind.IO
        assert "missing" in result.message
