"""Shared pytest fixtures for all tests."""

import random
from datetime import datetime, timedelta, timezone

import pytest

from cli.config import Config
from common.types import RawFile
from vault.backends import MemoryBackend
from vault.clock import Clock
from vault.context import build_context
from vault.exceptions import StorageUnavailable
from vault.scheduler import ManualScheduler


class FrozenClock(Clock):
    """Clock that only moves when told to."""

    def __init__(self, start: datetime):
        self.current = start

    def now(self) -> datetime:
        return self.current

    def advance(self, **kwargs) -> None:
        self.current = self.current + timedelta(**kwargs)


class FlakyBackend(MemoryBackend):
    """MemoryBackend whose reads or writes can be switched off."""

    def __init__(self, initial=None):
        super().__init__(initial)
        self.fail_loads = False
        self.fail_load_keys = set()
        self.fail_saves = False

    def load(self, key):
        if self.fail_loads or key in self.fail_load_keys:
            raise StorageUnavailable(f"Cannot read '{key}': medium offline")
        return super().load(key)

    def save(self, key, value):
        if self.fail_saves:
            raise StorageUnavailable(f"Cannot write '{key}': quota exceeded")
        super().save(key, value)


@pytest.fixture
def clock():
    return FrozenClock(datetime(2024, 3, 1, 12, 0, tzinfo=timezone.utc))


@pytest.fixture
def scheduler():
    return ManualScheduler()


@pytest.fixture
def backend():
    return FlakyBackend()


@pytest.fixture
def context(backend, scheduler, clock):
    """
    Opened VaultContext over an in-memory backend, a manual scheduler,
    a frozen clock and a seeded random generator.
    """
    ctx = build_context(
        backend=backend,
        scheduler=scheduler,
        clock=clock,
        rng=random.Random(42),
        root_name="My Files",
        tick_interval=0.5,
    )
    ctx.open()
    yield ctx
    ctx.close()


@pytest.fixture
def upload_file(context, scheduler):
    """
    Upload one file into the current folder and return its FileEntryResponse.
    """
    def _upload(name="report.pdf", size=2048, mime_type="application/pdf"):
        context.enqueue_uploads([RawFile(name=name, size=size, type=mime_type)])
        context.start_upload()
        scheduler.run_until_idle()
        return context.last_uploaded[0]
    return _upload


@pytest.fixture
def temp_config_dir(tmp_path):
    """
    Create temporary config directory.

    Returns:
        Path to temporary .dropvault directory
    """
    config_dir = tmp_path / '.dropvault'
    config_dir.mkdir()
    return config_dir


@pytest.fixture
def temp_config(temp_config_dir):
    """
    Create temporary config instance.

    Returns:
        Config instance with temp config file
    """
    return Config(temp_config_dir / 'config.json')


@pytest.fixture
def sample_file(tmp_path):
    """
    Create a sample file for testing uploads.

    Returns:
        Path to sample text file
    """
    file_path = tmp_path / 'test.txt'
    file_path.write_text('Sample content for testing')
    return file_path


@pytest.fixture
def multiple_sample_files(tmp_path):
    """
    Create multiple sample files for testing bulk operations.

    Returns:
        List of Paths to sample files
    """
    files = []
    for i in range(3):
        file_path = tmp_path / f'test{i}.txt'
        file_path.write_text(f'Sample content {i}')
        files.append(file_path)
    return files
