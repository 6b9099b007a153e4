"""
Reading and writing the planner file text format.

LEARNING NOTES:
- Separating formatting from data models follows "separation of concerns"
- The models know what the data IS; formatters know how it looks on disk
- The parser is forgiving on purpose: a line it can't classify is dropped,
  never reported. A hand-edited file should always open.

A planner file looks like this:

    11/10/2025
       09:00am Team Sync
       11:00am Chelsea/Skyler 1:1
       - [ ] Review PRs
       - [x] Update documentation

The serializer always writes that canonical layout; the parser accepts the
same records in any order and with any indentation.
"""

import logging
import re

from .models import PlannerDay, PlannerEvent, PlannerTask

logger = logging.getLogger(__name__)


# ============================================================================
# Line Patterns
# ============================================================================
# Each pattern is matched against a line that has already been stripped.

DATE_PATTERN = re.compile(r"^\d{1,2}/\d{1,2}/\d{4}$", re.ASCII)

# Time token followed by whitespace and a non-empty description.
# IGNORECASE lets "9:00AM" through; the captured token keeps its case.
EVENT_PATTERN = re.compile(r"^(\d{1,2}:\d{2}(?:am|pm))\s+(.+)$", re.IGNORECASE | re.ASCII)

# Only a space, x or X may sit between the brackets.
TASK_PATTERN = re.compile(r"^- \[([ xX])\]\s+(.+)$")

EVENT_INDENT = "   "


def parse_planner(content: str) -> PlannerDay:
    """
    Parse planner file text into a PlannerDay.

    Rules, tried in this order for every non-blank line:
    1. Date  - only while no date has been seen yet; the first match wins
    2. Event - "H:MMam Description"
    3. Task  - "- [ ] Text" or "- [x] Text"

    LEARNING NOTE:
    Because the date rule is skipped once a date is set, a second
    date-shaped line matches nothing and is dropped. Existing files rely on
    this, so it stays.

    Args:
        content: Raw file text

    Returns:
        The parsed day. Never raises on malformed input.
    """
    day = PlannerDay()

    for line_number, raw_line in enumerate(content.split("\n"), start=1):
        line = raw_line.strip()
        if not line:
            continue

        if not day.date and DATE_PATTERN.match(line):
            day.date = line
            continue

        event_match = EVENT_PATTERN.match(line)
        if event_match:
            day.events.append(PlannerEvent(
                time=event_match.group(1),
                description=event_match.group(2).strip(),
            ))
            continue

        task_match = TASK_PATTERN.match(line)
        if task_match:
            day.tasks.append(PlannerTask(
                text=task_match.group(2),
                completed=task_match.group(1) in ("x", "X"),
            ))
            continue

        logger.debug("Dropping unrecognized line %d: %r", line_number, line)

    return day


def format_as_planner(day: PlannerDay) -> str:
    """
    Format a PlannerDay as planner file text.

    The date line comes first (only when the date is non-empty), then
    events, then tasks, each indented by three spaces. Lines are joined
    with "\\n" and no trailing newline is added.

    Args:
        day: The day to write

    Returns:
        File text ready to be written as UTF-8
    """
    lines: list[str] = []

    if day.date:
        lines.append(day.date)

    for event in day.events:
        lines.append(f"{EVENT_INDENT}{event.time} {event.description}")

    for task in day.tasks:
        checkbox = "[x]" if task.completed else "[ ]"
        lines.append(f"{EVENT_INDENT}- {checkbox} {task.text}")

    return "\n".join(lines)


def format_as_json(day: PlannerDay, indent: int = 2) -> str:
    """
    Format a PlannerDay as pretty-printed JSON.

    LEARNING NOTE:
    model_dump_json() handles nested models for us, so events and tasks
    come out as lists of objects.
    """
    return day.model_dump_json(indent=indent)


def is_valid_event_time(time: str) -> bool:
    """Return True if `time` would be recognized as an event time on reload."""
    return EVENT_PATTERN.match(f"{time.strip()} x") is not None
