"""Tests for calendar grids, per-day lookups and the week agenda."""
from datetime import date, datetime, timedelta, timezone

from tracker_engine.models import Assignment
from tracker_engine.schedule import assignments_due_on, calendar_days, week_agenda

NOW = datetime(2024, 3, 10, 12, 0, tzinfo=timezone.utc)


def make_assignment(id: int, due: datetime, status: str = "pending") -> Assignment:
    return Assignment(id=id, name=f"Assignment {id}", course_id=1, due_date=due, status=status)


def test_calendar_days_cover_whole_weeks_from_sunday() -> None:
    days = calendar_days(2024, 3)
    # March 2024 starts on a Friday and ends on a Sunday
    assert days[0] == date(2024, 2, 25)
    assert days[-1] == date(2024, 4, 6)
    assert len(days) % 7 == 0
    assert all(day.weekday() == 6 for day in days[::7])


def test_assignments_due_on_day() -> None:
    assignments = [
        make_assignment(1, datetime(2024, 3, 12, 0, 0, tzinfo=timezone.utc)),
        make_assignment(2, datetime(2024, 3, 12, 23, 59, tzinfo=timezone.utc)),
        make_assignment(3, datetime(2024, 3, 13, 0, 0, tzinfo=timezone.utc)),
    ]
    assert [a.id for a in assignments_due_on(assignments, date(2024, 3, 12))] == [1, 2]


def test_assignments_due_on_day_in_other_timezone() -> None:
    assignments = [make_assignment(1, datetime(2024, 3, 13, 2, 0, tzinfo=timezone.utc))]
    minus_five = timezone(timedelta(hours=-5))
    assert [a.id for a in assignments_due_on(assignments, date(2024, 3, 12), minus_five)] == [1]
    assert assignments_due_on(assignments, date(2024, 3, 12)) == []


def test_week_agenda_inclusive_window_sorted_and_limited() -> None:
    assignments = [
        make_assignment(1, NOW + timedelta(days=7)),
        make_assignment(2, NOW),
        make_assignment(3, NOW + timedelta(days=1), status="completed"),
        make_assignment(4, NOW + timedelta(days=8)),
        make_assignment(5, NOW - timedelta(minutes=1)),
        make_assignment(6, NOW + timedelta(days=3)),
    ]
    assert [a.id for a in week_agenda(assignments, NOW)] == [2, 6, 1]


def test_week_agenda_limit() -> None:
    assignments = [make_assignment(i, NOW + timedelta(hours=10 - i)) for i in range(1, 9)]
    agenda = week_agenda(assignments, NOW)
    assert [a.id for a in agenda] == [8, 7, 6, 5, 4]
    assert len(week_agenda(assignments, NOW, limit=2)) == 2
