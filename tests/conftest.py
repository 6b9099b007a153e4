"""Shared fixtures: an in-memory stand-in for the storage boundary."""

from typing import Optional

import pytest

from day_planner.config import Settings, reset_settings
from day_planner.models import PlannerDay
from day_planner.storage import StorageError


class FakeStorage:
    """
    PlannerStorage that keeps files in a dict.

    Failures are injected per path: paths in `broken_checks` raise from
    check_file_exists, paths in `broken_reads` raise StorageError on read,
    and `fail_writes` makes every write raise.
    """

    def __init__(self) -> None:
        self.files: dict[str, PlannerDay] = {}
        self.broken_checks: set[str] = set()
        self.broken_reads: set[str] = set()
        self.fail_writes = False
        self.folder: Optional[str] = None
        self.writes: list[str] = []
        self.checks: list[str] = []

    async def check_file_exists(self, path: str) -> bool:
        self.checks.append(path)
        if path in self.broken_checks:
            raise OSError(f"permission denied: {path}")
        return path in self.files or path in self.broken_reads

    async def read_planner_file(self, path: str) -> PlannerDay:
        if path in self.broken_reads:
            raise StorageError(f"Failed to read file: {path}")
        return self.files[path].model_copy(deep=True)

    async def write_planner_file(self, path: str, day: PlannerDay) -> None:
        if self.fail_writes:
            raise StorageError(f"Failed to write file: {path}")
        self.files[path] = day.model_copy(deep=True)
        self.writes.append(path)

    async def select_folder(self) -> Optional[str]:
        return self.folder


@pytest.fixture
def storage() -> FakeStorage:
    return FakeStorage()


@pytest.fixture
def app_settings(tmp_path) -> Settings:
    return Settings(
        settings_file=tmp_path / "settings.json",
        default_working_directory=str(tmp_path / "default"),
        _env_file=None,
    )


@pytest.fixture(autouse=True)
def _fresh_settings():
    reset_settings()
    yield
    reset_settings()
