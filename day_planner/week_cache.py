"""
Which days of the visible week already have a planner file.

LEARNING NOTES:
- The cache is just a set of DateKeys, rebuilt from scratch on refresh
- The five existence checks run concurrently with asyncio.gather()
- return_exceptions=True turns a failed check into a value instead of
  cancelling the batch, so one bad path can't hide the other four days
"""

import asyncio
import logging
from datetime import date

from .dates import date_key, planner_path, week_start
from .storage import PlannerStorage

logger = logging.getLogger(__name__)


class WeekFileCache:
    """
    Tracks which visible dates have a file on disk.

    The cache is only "sound as of the last refresh". A file created
    behind its back shows up after the next refresh() - the controller
    calls refresh() right after it creates one.
    """

    def __init__(self, storage: PlannerStorage) -> None:
        self.storage = storage
        self.existing: set[str] = set()
        self.week_monday: date | None = None
        self.working_directory: str | None = None

    def needs_refresh(self, week: list[date], working_directory: str) -> bool:
        """True if the visible week or the working directory has changed."""
        if not week:
            return False
        return (
            week_start(week[0]) != self.week_monday
            or working_directory != self.working_directory
        )

    async def refresh(self, week: list[date], working_directory: str) -> set[str]:
        """
        Check every date in `week` and replace the cache with the results.

        Args:
            week: The visible dates (normally Monday..Friday)
            working_directory: Folder the planner files live in

        Returns:
            The new set of DateKeys that have a file
        """
        results = await asyncio.gather(
            *(self.storage.check_file_exists(planner_path(day, working_directory)) for day in week),
            return_exceptions=True,
        )

        existing: set[str] = set()
        for day, result in zip(week, results):
            if isinstance(result, BaseException):
                logger.warning("Existence check failed for %s: %s", date_key(day), result)
                continue
            if result:
                existing.add(date_key(day))

        self.existing = existing
        self.week_monday = week_start(week[0]) if week else None
        self.working_directory = working_directory
        logger.debug("Week cache refreshed: %s", sorted(existing))
        return existing

    def has_file(self, day: date) -> bool:
        return date_key(day) in self.existing
