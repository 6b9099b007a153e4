"""Tests for the planner file parser and serializer."""

from day_planner.formatters import (
    format_as_json,
    format_as_planner,
    is_valid_event_time,
    parse_planner,
)
from day_planner.models import PlannerDay, PlannerEvent, PlannerTask


SAMPLE = """11/10/2025
   09:00am Team Sync
   11:00am Chelsea/Skyler 1:1
   - [ ] Review PRs
   - [x] Update documentation"""


def test_parse_sample_file():
    day = parse_planner(SAMPLE)

    assert day.date == "11/10/2025"
    assert day.events == [
        PlannerEvent(time="09:00am", description="Team Sync"),
        PlannerEvent(time="11:00am", description="Chelsea/Skyler 1:1"),
    ]
    assert day.tasks == [
        PlannerTask(text="Review PRs", completed=False),
        PlannerTask(text="Update documentation", completed=True),
    ]


def test_round_trip_keeps_date_events_and_tasks():
    original = PlannerDay(
        date="1/5/2026",
        events=[
            PlannerEvent(time="9:00am", description="Standup"),
            PlannerEvent(time="12:30PM", description="Lunch with  the team"),
            PlannerEvent(time="4:15pm", description="Ship [it] - really"),
        ],
        tasks=[
            PlannerTask(text="Write tests", completed=True),
            PlannerTask(text="- [ ] nested-looking text", completed=False),
        ],
    )

    parsed = parse_planner(format_as_planner(original))

    assert parsed.date == original.date
    assert parsed.events == original.events
    assert parsed.tasks == original.tasks


def test_blank_lines_are_ignored():
    with_blanks = "\n\n11/10/2025\n\n   09:00am Team Sync\n   \n\n   - [ ] Review PRs\n\n"
    without_blanks = "11/10/2025\n   09:00am Team Sync\n   - [ ] Review PRs"

    assert parse_planner(with_blanks) == parse_planner(without_blanks)


def test_second_date_line_is_dropped():
    day = parse_planner("1/1/2025\n1/2/2025\n")

    assert day.date == "1/1/2025"
    assert day.events == []
    assert day.tasks == []


def test_date_line_need_not_come_first():
    day = parse_planner("- [ ] Early task\n3/14/2025\n10:00am Later event")

    assert day.date == "3/14/2025"
    assert [t.text for t in day.tasks] == ["Early task"]
    assert [e.time for e in day.events] == ["10:00am"]


def test_event_requires_two_digit_minutes():
    assert parse_planner("9:5am x").events == []

    day = parse_planner("09:05am hi")
    assert day.events == [PlannerEvent(time="09:05am", description="hi")]


def test_event_time_keeps_original_case():
    day = parse_planner("10:30AM Board meeting")
    assert day.events[0].time == "10:30AM"


def test_event_without_description_is_dropped():
    assert parse_planner("10:30am").events == []
    assert parse_planner("10:30am    ").events == []


def test_event_description_is_trimmed_after_whitespace_run():
    day = parse_planner("   2:00pm\t   Dentist   ")
    assert day.events == [PlannerEvent(time="2:00pm", description="Dentist")]


def test_task_checkbox_case_insensitive():
    assert parse_planner("- [X] Done").tasks == [PlannerTask(text="Done", completed=True)]
    assert parse_planner("- [x] Done").tasks == [PlannerTask(text="Done", completed=True)]
    assert parse_planner("- [ ] Todo").tasks == [PlannerTask(text="Todo", completed=False)]


def test_task_with_other_checkbox_character_is_dropped():
    day = parse_planner("- [y] Bad")
    assert day.tasks == []
    assert day.events == []


def test_unrecognized_lines_are_dropped_silently():
    day = parse_planner("Notes for today\n* bullet\n11/10/25\n   - [ ] Keep me")

    assert day.date == ""
    assert day.events == []
    assert day.tasks == [PlannerTask(text="Keep me", completed=False)]


def test_crlf_line_endings():
    day = parse_planner("11/10/2025\r\n   09:00am Team Sync\r\n   - [x] Done\r\n")

    assert day.date == "11/10/2025"
    assert day.events[0].description == "Team Sync"
    assert day.tasks[0].text == "Done"


def test_serializer_layout():
    day = PlannerDay(
        date="11/10/2025",
        events=[PlannerEvent(time="09:00am", description="Team Sync")],
        tasks=[
            PlannerTask(text="Review PRs", completed=False),
            PlannerTask(text="Update documentation", completed=True),
        ],
    )

    assert format_as_planner(day) == (
        "11/10/2025\n"
        "   09:00am Team Sync\n"
        "   - [ ] Review PRs\n"
        "   - [x] Update documentation"
    )


def test_serializer_skips_empty_date():
    day = PlannerDay(tasks=[PlannerTask(text="Orphan task")])
    assert format_as_planner(day) == "   - [ ] Orphan task"


def test_serializer_empty_day():
    assert format_as_planner(PlannerDay()) == ""
    assert format_as_planner(PlannerDay(date="2/3/2025")) == "2/3/2025"


def test_format_as_json_contains_fields():
    output = format_as_json(PlannerDay(date="2/3/2025", tasks=[PlannerTask(text="a")]))
    assert '"date": "2/3/2025"' in output
    assert '"completed": false' in output


def test_is_valid_event_time():
    assert is_valid_event_time("9:00am")
    assert is_valid_event_time("12:45PM")
    assert not is_valid_event_time("9am")
    assert not is_valid_event_time("13:00")
    assert not is_valid_event_time("")


def test_non_ascii_digits_are_not_dates_or_times():
    # Arabic-Indic digits
    day = parse_planner("١/١/٢٠٢٥\n٩:٠٠am Meeting\n   - [ ] Keep me")

    assert day.date == ""
    assert day.events == []
    assert [t.text for t in day.tasks] == ["Keep me"]
    assert not is_valid_event_time("٩:٠٠am")
