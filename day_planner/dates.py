"""
Calendar date helpers: file names, cache keys, display strings and weeks.

ARCHITECTURE NOTES:
- date_key() is the ONLY place the YYYY-MM-DD stem is built. Both the
  file path and the week cache lookup go through it, so the "file exists"
  marker can never disagree with the file that gets opened.
- Everything here is pure: no I/O, no clock reads except in
  parse_date_argument() for "today"-style shortcuts.
"""

from datetime import date, timedelta

WORKWEEK_LENGTH = 5

_SHORTCUTS = {
    "today": 0,
    "tomorrow": 1,
    "yesterday": -1,
}


def date_key(day: date) -> str:
    """Return the zero-padded 'YYYY-MM-DD' key for a calendar date."""
    return f"{day.year:04d}-{day.month:02d}-{day.day:02d}"


def planner_path(day: date, working_directory: str) -> str:
    """
    Return the planner file path for a date: '<dir>/2025-11-10.txt'

    The working directory is used verbatim (no expansion, no normalization)
    so the same inputs always give the same path.
    """
    return f"{working_directory}/{date_key(day)}.txt"


def format_date_full(day: date) -> str:
    """'11/10/2025' - the form written on a planner file's first line."""
    return f"{day.month}/{day.day}/{day.year}"


def format_date_short(day: date) -> str:
    """'Nov 10'"""
    return f"{day.strftime('%b')} {day.day}"


def format_weekday(day: date) -> str:
    """'Mon'"""
    return day.strftime("%a")


def week_start(day: date) -> date:
    """Return the Monday of the week containing `day`."""
    return day - timedelta(days=day.weekday())


def week_days(day: date) -> list[date]:
    """
    Return Monday through Friday of the week containing `day`.

    Saturday and Sunday belong to the week that started on the Monday
    before them.
    """
    monday = week_start(day)
    return [monday + timedelta(days=offset) for offset in range(WORKWEEK_LENGTH)]


def shift_week(day: date, weeks: int) -> date:
    """Return the same weekday `weeks` weeks away (negative goes back)."""
    return day + timedelta(weeks=weeks)


def parse_date_argument(text: str, today: date | None = None) -> date:
    """
    Parse a date typed on the command line.

    Accepts 'YYYY-MM-DD', 'M/D/YYYY', or one of 'today', 'tomorrow',
    'yesterday'.

    Raises:
        ValueError: If the text matches none of those forms
    """
    value = text.strip().lower()
    if today is None:
        today = date.today()

    if value in _SHORTCUTS:
        return today + timedelta(days=_SHORTCUTS[value])

    if "/" in value:
        parts = value.split("/")
        if len(parts) == 3 and all(p.isdigit() for p in parts):
            month, day, year = (int(p) for p in parts)
            try:
                return date(year, month, day)
            except OverflowError:
                raise ValueError(f"Not a date: {text!r} (year out of range)") from None
        raise ValueError(f"Not a date: {text!r} (expected M/D/YYYY)")

    try:
        return date.fromisoformat(value)
    except ValueError:
        raise ValueError(
            f"Not a date: {text!r} (expected YYYY-MM-DD, M/D/YYYY or 'today')"
        ) from None
