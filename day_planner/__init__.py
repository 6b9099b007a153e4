"""
Day Planner - a calendar-driven planner backed by one text file per day.

Each day lives in '<working directory>/YYYY-MM-DD.txt':

    11/10/2025
       09:00am Team Sync
       - [ ] Review PRs
       - [x] Update documentation

CLI Usage:
    $ day-planner show 2025-11-10
    $ day-planner create today
    $ day-planner add-task "Review PRs"

Programmatic Usage:
    from day_planner import parse_planner, format_as_planner

    day = parse_planner(path.read_text())
    day.tasks[0].completed = True
    path.write_text(format_as_planner(day))
"""

__version__ = "0.1.0"

# Re-export key classes for programmatic use
from .controller import PlannerController
from .dates import date_key, planner_path, week_days
from .formatters import format_as_json, format_as_planner, parse_planner
from .models import PlannerDay, PlannerEvent, PlannerTask, SessionStatus
from .session import DaySession, SessionError
from .storage import FileSystemStorage, SettingsStore, StorageError
from .week_cache import WeekFileCache

__all__ = [
    # Version info
    "__version__",
    # Models
    "PlannerDay",
    "PlannerEvent",
    "PlannerTask",
    "SessionStatus",
    # File format
    "parse_planner",
    "format_as_planner",
    "format_as_json",
    # Dates
    "date_key",
    "planner_path",
    "week_days",
    # Core functionality
    "DaySession",
    "SessionError",
    "WeekFileCache",
    "PlannerController",
    # Storage
    "FileSystemStorage",
    "SettingsStore",
    "StorageError",
]
