"""
The currently selected day: load state, in-memory items and autosave.

LEARNING NOTES:
- This is the "heart" of the planner - where edits meet the disk
- The session is a small state machine:

      UNLOADED --navigate--> NOT_FOUND --create--> LOADED
                        \\-> LOADED
                        \\-> LOAD_ERROR

- The decision "which state comes next" lives in two pure functions
  (transition_after_check / transition_after_read) that never touch I/O
- DaySession calls the storage boundary at exactly three points:
  navigate (check + read), create (write) and after every mutation (write)

Every mutation rewrites the whole file. If that write fails we keep the
user's edit in memory and record the error - the disk copy just lags.
"""

import itertools
import logging
from datetime import date
from typing import Optional

from .dates import format_date_full, planner_path
from .formatters import is_valid_event_time
from .models import (
    ChecklistItem,
    PlannerDay,
    ScheduleItem,
    SessionStatus,
)
from .storage import PlannerStorage, StorageError

logger = logging.getLogger(__name__)


class SessionError(Exception):
    """
    Raised when the session is asked to do something it can't.

    Examples: editing a day that isn't loaded, pointing at an id that
    doesn't exist, adding an event with no description.
    """
    pass


# ============================================================================
# Pure Transitions
# ============================================================================

def transition_after_check(exists: bool) -> SessionStatus:
    """
    State after the existence check.

    LOADED here is provisional: the read can still fail, which is decided
    by transition_after_read().
    """
    return SessionStatus.LOADED if exists else SessionStatus.NOT_FOUND


def transition_after_read(read_ok: bool) -> SessionStatus:
    return SessionStatus.LOADED if read_ok else SessionStatus.LOAD_ERROR


# ============================================================================
# Day Session
# ============================================================================

class DaySession:
    """
    In-memory state of one selected day.

    The instance variables track the state:
    - status: one of SessionStatus
    - schedule / checklist: items with session-local ids
    - error: human-readable message from the last failed load or save
    - date / path: what's selected and where its file lives

    Example usage:
        session = DaySession(storage)
        await session.navigate(date(2025, 11, 10), "/home/me/todos")

        if session.status == SessionStatus.NOT_FOUND:
            await session.create()

        await session.add_task("Review PRs")
    """

    def __init__(self, storage: PlannerStorage) -> None:
        self.storage = storage

        self.status: SessionStatus = SessionStatus.UNLOADED
        self.date: Optional[date] = None
        self.path: Optional[str] = None
        self.day_label: str = ""
        self.schedule: list[ScheduleItem] = []
        self.checklist: list[ChecklistItem] = []
        self.error: Optional[str] = None

        # Ids keep counting across navigations so they're unique per session
        self._ids = itertools.count(1)

    @property
    def loaded(self) -> bool:
        return self.status == SessionStatus.LOADED

    def _next_id(self) -> int:
        return next(self._ids)

    def _clear(self) -> None:
        self.day_label = ""
        self.schedule = []
        self.checklist = []

    # -------------------------------------------------------------------------
    # Navigation
    # -------------------------------------------------------------------------

    async def navigate(self, day: date, working_directory: str) -> SessionStatus:
        """
        Select a date and load it from disk.

        Always starts over: nothing from a previous visit is reused.

        Args:
            day: The calendar date to show
            working_directory: Folder the planner files live in

        Returns:
            The resulting status
        """
        self.date = day
        self.path = planner_path(day, working_directory)
        self.error = None
        self._clear()

        try:
            exists = await self.storage.check_file_exists(self.path)
        except Exception as e:
            logger.warning("Existence check failed for %s: %s", self.path, e)
            self.status = SessionStatus.LOAD_ERROR
            self.error = f"Could not check {self.path}: {e}"
            return self.status

        self.status = transition_after_check(exists)
        if self.status == SessionStatus.NOT_FOUND:
            logger.info("No planner file at %s", self.path)
            return self.status

        try:
            planner_day = await self.storage.read_planner_file(self.path)
        except StorageError as e:
            self.status = transition_after_read(False)
            self.error = str(e)
            return self.status

        self.status = transition_after_read(True)
        self._populate(planner_day)
        logger.info(
            "Loaded %s (%d events, %d tasks)",
            self.path, len(self.schedule), len(self.checklist),
        )
        return self.status

    def _populate(self, planner_day: PlannerDay) -> None:
        self.day_label = planner_day.date
        self.schedule = [
            ScheduleItem(id=self._next_id(), time=e.time, description=e.description)
            for e in planner_day.events
        ]
        self.checklist = [
            ChecklistItem(id=self._next_id(), text=t.text, completed=t.completed)
            for t in planner_day.tasks
        ]

    async def create(self) -> SessionStatus:
        """
        Create an empty planner file for the selected date.

        Only valid from NOT_FOUND. On a write failure the session stays
        NOT_FOUND and `error` says why.

        Raises:
            SessionError: If there's no missing day to create
        """
        if self.status != SessionStatus.NOT_FOUND or self.date is None or self.path is None:
            raise SessionError(f"Cannot create a planner file while {self.status.value}")

        planner_day = PlannerDay(date=format_date_full(self.date))
        try:
            await self.storage.write_planner_file(self.path, planner_day)
        except StorageError as e:
            self.error = str(e)
            return self.status

        self.error = None
        self.status = SessionStatus.LOADED
        self._populate(planner_day)
        logger.info("Created %s", self.path)
        return self.status

    # -------------------------------------------------------------------------
    # Mutations
    # -------------------------------------------------------------------------
    # Each one changes memory first, then calls _save(). A failed save
    # never undoes the change.

    def _require_loaded(self) -> None:
        if not self.loaded:
            raise SessionError(f"No planner file is loaded ({self.status.value})")

    def to_planner_day(self) -> PlannerDay:
        """Current content with the session ids stripped off."""
        return PlannerDay(
            date=self.day_label,
            events=[item.to_event() for item in self.schedule],
            tasks=[item.to_task() for item in self.checklist],
        )

    async def _save(self) -> bool:
        """
        Rewrite the whole file from memory.

        Returns:
            True if the write succeeded; otherwise `error` is set
        """
        try:
            await self.storage.write_planner_file(self.path, self.to_planner_day())
        except StorageError as e:
            self.error = str(e)
            return False

        self.error = None
        return True

    def _find_event(self, item_id: int) -> ScheduleItem:
        for item in self.schedule:
            if item.id == item_id:
                return item
        raise SessionError(f"No schedule item with id {item_id}")

    def _find_task(self, item_id: int) -> ChecklistItem:
        for item in self.checklist:
            if item.id == item_id:
                return item
        raise SessionError(f"No checklist item with id {item_id}")

    @staticmethod
    def _reject_line_breaks(value: str, field: str) -> None:
        # One record per line: a line break would split the item on reload
        if "\n" in value or "\r" in value:
            raise SessionError(f"{field} cannot contain line breaks")

    @classmethod
    def _clean_task_text(cls, text: str) -> str:
        cls._reject_line_breaks(text, "Task text")
        text = text.strip()
        if not text:
            raise SessionError("Task text is required")
        return text

    @classmethod
    def _clean_event_fields(cls, time: str, description: str) -> tuple[str, str]:
        cls._reject_line_breaks(time, "Time")
        cls._reject_line_breaks(description, "Description")
        time = time.strip()
        description = description.strip()
        if not time or not description:
            raise SessionError("Both a time and a description are required")
        if not is_valid_event_time(time):
            raise SessionError(f"Time must look like 9:00am or 12:30pm, got {time!r}")
        return time, description

    async def add_event(self, time: str, description: str) -> ScheduleItem:
        self._require_loaded()
        time, description = self._clean_event_fields(time, description)

        item = ScheduleItem(id=self._next_id(), time=time, description=description)
        self.schedule.append(item)
        await self._save()
        return item

    async def add_task(self, text: str) -> ChecklistItem:
        self._require_loaded()
        text = self._clean_task_text(text)

        item = ChecklistItem(id=self._next_id(), text=text, completed=False)
        self.checklist.append(item)
        await self._save()
        return item

    async def toggle_task(self, item_id: int) -> ChecklistItem:
        self._require_loaded()
        item = self._find_task(item_id)
        item.completed = not item.completed
        await self._save()
        return item

    async def edit_event(self, item_id: int, time: str, description: str) -> ScheduleItem:
        self._require_loaded()
        item = self._find_event(item_id)
        item.time, item.description = self._clean_event_fields(time, description)
        await self._save()
        return item

    async def edit_task(self, item_id: int, text: str) -> ChecklistItem:
        self._require_loaded()
        item = self._find_task(item_id)
        text = self._clean_task_text(text)
        item.text = text
        await self._save()
        return item

    async def delete_event(self, item_id: int) -> ScheduleItem:
        self._require_loaded()
        item = self._find_event(item_id)
        self.schedule = [i for i in self.schedule if i.id != item_id]
        await self._save()
        return item

    async def delete_task(self, item_id: int) -> ChecklistItem:
        self._require_loaded()
        item = self._find_task(item_id)
        self.checklist = [i for i in self.checklist if i.id != item_id]
        await self._save()
        return item
