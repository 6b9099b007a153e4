"""
Storage module: every file system operation the planner performs.

ARCHITECTURE NOTES:
- This module handles ALL disk access: planner files, the folder chooser
  and the JSON settings store
- session.py, week_cache.py and controller.py talk to the PlannerStorage
  protocol; they never open a file themselves
- Uses formatters.py to turn PlannerDay objects into text and back
- Blocking calls run in a worker thread (asyncio.to_thread) so callers can
  await them and issue several at once

Single Responsibility: This file ONLY deals with persistence.
"""

import asyncio
import json
import logging
from pathlib import Path
from typing import Any, Callable, Optional, Protocol

from .formatters import format_as_planner, parse_planner
from .models import PlannerDay

logger = logging.getLogger(__name__)

WORKING_DIRECTORY_KEY = "workingDirectory"


class StorageError(Exception):
    """
    Raised when a planner file can't be read or written.

    LEARNING NOTE:
    Wrapping OSError/UnicodeDecodeError in our own exception lets callers
    catch ONE type and show `str(error)` to the user, which already says
    what failed and where.
    """
    pass


class PlannerStorage(Protocol):
    """
    The operations the planner needs from the outside world.

    LEARNING NOTE:
    A Protocol describes a shape, not a base class. FileSystemStorage
    matches it, and so does the in-memory fake in the tests - neither has
    to inherit from anything.
    """

    async def check_file_exists(self, path: str) -> bool: ...

    async def read_planner_file(self, path: str) -> PlannerDay: ...

    async def write_planner_file(self, path: str, day: PlannerDay) -> None: ...

    async def select_folder(self) -> Optional[str]: ...


# ============================================================================
# Settings Store
# ============================================================================

def get_settings_path() -> Path:
    """
    Get the default path to ~/.day-planner/settings.json.

    The directory is created lazily on the first write, not here.
    """
    return Path.home() / ".day-planner" / "settings.json"


class SettingsStore:
    """
    A JSON object on disk, read and written wholesale on every call.

    LEARNING NOTE:
    There's no locking: get/set are read-modify-write, so two processes
    changing settings at once can lose one change (last writer wins).
    For a single-user desktop tool that's an accepted trade.

    Example:
        store = SettingsStore(Path("/tmp/settings.json"))
        store.set("workingDirectory", "/home/me/todos")
        store.get("workingDirectory")  # -> "/home/me/todos"
    """

    def __init__(self, path: Path | None = None) -> None:
        self.path = Path(path) if path is not None else get_settings_path()

    def load(self) -> dict[str, Any]:
        """Return the whole mapping; missing or unreadable file -> {}."""
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError):
            return {}
        if not isinstance(data, dict):
            return {}
        return data

    def save(self, settings: dict[str, Any]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps(settings, indent=2), encoding="utf-8")

    def get(self, key: str, default: Any = None) -> Any:
        return self.load().get(key, default)

    def set(self, key: str, value: Any) -> bool:
        """
        Store one value.

        Returns:
            False if the file couldn't be written; the failure is logged
            and the caller carries on with the new value in memory
        """
        settings = self.load()
        settings[key] = value
        try:
            self.save(settings)
        except OSError as e:
            logger.warning("Failed to save settings to %s: %s", self.path, e)
            return False
        return True


# ============================================================================
# File System Storage
# ============================================================================

FolderChooser = Callable[[], Optional[str]]


class FileSystemStorage:
    """
    PlannerStorage backed by the local disk.

    Args:
        settings_store: Where a chosen folder gets remembered
        folder_chooser: Blocking callable that asks the user for a folder
                        and returns None if they cancel
    """

    def __init__(
        self,
        settings_store: SettingsStore,
        folder_chooser: FolderChooser | None = None,
    ) -> None:
        self.settings_store = settings_store
        self.folder_chooser = folder_chooser

    async def check_file_exists(self, path: str) -> bool:
        return await asyncio.to_thread(Path(path).is_file)

    async def read_planner_file(self, path: str) -> PlannerDay:
        """
        Read and parse a planner file.

        Raises:
            StorageError: If the file can't be read or isn't valid UTF-8
        """
        try:
            content = await asyncio.to_thread(Path(path).read_text, encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            logger.warning("Failed to read %s: %s", path, e)
            raise StorageError(f"Failed to read file: {path}: {e}") from e

        return parse_planner(content)

    async def write_planner_file(self, path: str, day: PlannerDay) -> None:
        """
        Serialize and write a planner file, replacing any existing content.

        Raises:
            StorageError: If the file can't be written
        """
        content = format_as_planner(day)
        try:
            await asyncio.to_thread(Path(path).write_text, content, encoding="utf-8")
        except OSError as e:
            logger.warning("Failed to write %s: %s", path, e)
            raise StorageError(f"Failed to write file: {path}: {e}") from e

        logger.debug("Wrote %s (%d events, %d tasks)", path, len(day.events), len(day.tasks))

    async def select_folder(self) -> Optional[str]:
        """
        Ask the user for a folder and remember it as the working directory.

        Returns:
            The chosen folder, or None if there's no chooser or the user
            cancelled. Cancelling leaves the saved setting untouched.
        """
        if self.folder_chooser is None:
            return None

        selected = await asyncio.to_thread(self.folder_chooser)
        if not selected:
            return None

        await asyncio.to_thread(self.settings_store.set, WORKING_DIRECTORY_KEY, selected)
        return selected
