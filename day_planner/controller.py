"""
Planner controller: the selected date, the working directory, and keeping
the week cache and the day session in step with them.

ARCHITECTURE NOTES:
- main.py (the CLI) only talks to this class
- The controller decides WHEN to refresh the week cache or reload the
  session; week_cache.py and session.py decide HOW
- All disk access still goes through the injected PlannerStorage
"""

import logging
import os
from datetime import date
from typing import Optional

from .config import Settings, get_settings
from .dates import format_date_short, shift_week, week_days
from .models import SessionStatus
from .session import DaySession
from .storage import WORKING_DIRECTORY_KEY, PlannerStorage, SettingsStore
from .week_cache import WeekFileCache

logger = logging.getLogger(__name__)


class PlannerController:
    """
    Owns the UI-level state of the planner.

    Example usage:
        controller = PlannerController(storage, SettingsStore())
        await controller.startup(date.today())

        for day in controller.week:
            print(day, controller.cache.has_file(day))

        if controller.session.status == SessionStatus.NOT_FOUND:
            await controller.create_day()
    """

    def __init__(
        self,
        storage: PlannerStorage,
        settings_store: SettingsStore,
        settings: Settings | None = None,
    ) -> None:
        self.storage = storage
        self.settings_store = settings_store
        self.settings = settings or get_settings()

        self.cache = WeekFileCache(storage)
        self.session = DaySession(storage)

        self.selected_date: Optional[date] = None
        self.working_directory: str = self.settings.default_working_directory

    @property
    def week(self) -> list[date]:
        if self.selected_date is None:
            return []
        return week_days(self.selected_date)

    def week_header(self) -> str:
        """'Week of Nov 10'"""
        if not self.week:
            return ""
        return f"Week of {format_date_short(self.week[0])}"

    async def startup(self, initial_date: date, working_directory: str | None = None) -> SessionStatus:
        """
        Load the saved working directory and select the first date.

        Args:
            initial_date: Date to show first
            working_directory: Use this folder instead of the saved one
                               (not persisted)
        """
        if working_directory is None:
            saved = self.settings_store.get(WORKING_DIRECTORY_KEY)
            working_directory = saved or self.settings.default_working_directory
        self.working_directory = os.path.expanduser(working_directory)
        logger.debug("Working directory: %s", self.working_directory)

        return await self.select_date(initial_date)

    async def select_date(self, day: date) -> SessionStatus:
        """Show `day`, refreshing the week cache if the week changed."""
        self.selected_date = day
        await self._refresh_cache_if_needed()
        return await self.session.navigate(day, self.working_directory)

    async def next_week(self) -> SessionStatus:
        return await self._shift(1)

    async def previous_week(self) -> SessionStatus:
        return await self._shift(-1)

    async def _shift(self, weeks: int) -> SessionStatus:
        if self.selected_date is None:
            raise ValueError("No date selected")
        return await self.select_date(shift_week(self.selected_date, weeks))

    async def _refresh_cache_if_needed(self) -> None:
        week = self.week
        if self.cache.needs_refresh(week, self.working_directory):
            await self.cache.refresh(week, self.working_directory)

    async def refresh_week(self) -> set[str]:
        """Re-check the visible week unconditionally."""
        return await self.cache.refresh(self.week, self.working_directory)

    async def create_day(self) -> SessionStatus:
        """
        Create the selected day's file and update the week markers.

        Raises:
            SessionError: If the selected day isn't in NOT_FOUND
        """
        status = await self.session.create()
        if status == SessionStatus.LOADED:
            await self.refresh_week()
        return status

    async def change_working_directory(self) -> Optional[str]:
        """
        Let the user pick a new folder.

        Returns:
            The new folder, or None if the user cancelled (nothing changes)
        """
        selected = await self.storage.select_folder()
        if selected is None:
            logger.debug("Folder selection cancelled")
            return None

        await self._switch_directory(selected)
        return self.working_directory

    async def set_working_directory(self, path: str) -> str:
        """Switch to `path` and remember it, without asking."""
        self.settings_store.set(WORKING_DIRECTORY_KEY, path)
        await self._switch_directory(path)
        return self.working_directory

    async def _switch_directory(self, path: str) -> None:
        self.working_directory = os.path.expanduser(path)
        logger.info("Working directory changed to %s", self.working_directory)
        if self.selected_date is not None:
            await self.select_date(self.selected_date)
