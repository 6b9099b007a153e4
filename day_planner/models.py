"""
Pydantic models for planner data structures.

LEARNING NOTES:
- Pydantic models give us equality, copying and JSON dumps for free
- The persisted shapes (PlannerEvent, PlannerTask, PlannerDay) carry
  exactly what goes into a planner file - nothing more
- The session shapes (ScheduleItem, ChecklistItem) add a transient `id`
  so the CLI can point at "task 2"; ids never reach the disk

These models define the schema for:
- A single schedule entry and a single checklist entry
- A whole day as stored in one planner file
- The load state of the currently selected day
"""

from enum import Enum

from pydantic import BaseModel, Field


class SessionStatus(str, Enum):
    """
    Load state of the currently selected day.

    LEARNING NOTE:
    Like the other str Enums in this package, SessionStatus.LOADED == "loaded"
    is True, which keeps JSON output and log lines readable.
    """
    UNLOADED = "unloaded"
    NOT_FOUND = "not_found"
    LOADED = "loaded"
    LOAD_ERROR = "load_error"


class PlannerEvent(BaseModel):
    """
    A timestamped schedule entry.

    `time` is a display string such as "9:00am" or "11:30PM". It is kept
    exactly as typed; no numeric time is ever derived from it.
    """

    time: str = Field(
        description="Display time, e.g. '09:00am'"
    )

    description: str = Field(
        description="Free text, no newlines"
    )


class PlannerTask(BaseModel):
    """A checklist entry."""

    text: str = Field(
        description="Free text, no newlines"
    )

    completed: bool = Field(
        default=False,
        description="Checkbox state"
    )


class PlannerDay(BaseModel):
    """
    Everything stored in one planner file.

    LEARNING NOTE:
    `date` is the human-facing "11/10/2025" string written into the file
    when it was created. It is NOT derived from the file name - the file
    name uses the zero-padded DateKey (see dates.py) instead.

    Example:
        day = PlannerDay(
            date="11/10/2025",
            events=[PlannerEvent(time="09:00am", description="Team Sync")],
            tasks=[PlannerTask(text="Review PRs")],
        )
    """

    date: str = Field(
        default="",
        description="Display date in M/D/YYYY form"
    )

    events: list[PlannerEvent] = Field(
        default_factory=list,
        description="Schedule entries in file order"
    )

    tasks: list[PlannerTask] = Field(
        default_factory=list,
        description="Checklist entries in file order"
    )


# ============================================================================
# Session Views
# ============================================================================
# These wrap the persisted records with an id that only lives as long as the
# in-memory session. Revisiting a date hands out new ids.

class ScheduleItem(PlannerEvent):
    """A PlannerEvent with a session-local id."""

    id: int = Field(
        description="Session-local identifier, never persisted"
    )

    def to_event(self) -> PlannerEvent:
        return PlannerEvent(time=self.time, description=self.description)


class ChecklistItem(PlannerTask):
    """A PlannerTask with a session-local id."""

    id: int = Field(
        description="Session-local identifier, never persisted"
    )

    def to_task(self) -> PlannerTask:
        return PlannerTask(text=self.text, completed=self.completed)
