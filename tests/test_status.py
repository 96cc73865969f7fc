"""Tests for due-status classification."""
from datetime import datetime, timedelta, timezone

from tracker_engine.models import Assignment
from tracker_engine.status import as_utc, assignment_status, effective_status, is_overdue

NOW = datetime(2024, 3, 10, 12, 0, tzinfo=timezone.utc)


def test_completed_wins_regardless_of_due_date() -> None:
    """A completed assignment is completed whether its due date is past or future."""
    for offset in (timedelta(days=-30), timedelta(0), timedelta(days=30)):
        assert effective_status(NOW + offset, "completed", NOW) == "completed"


def test_past_due_open_assignment_is_overdue() -> None:
    assert effective_status(NOW - timedelta(seconds=1), "pending", NOW) == "overdue"
    assert effective_status(NOW - timedelta(days=3), "pending", NOW) == "overdue"


def test_due_exactly_now_is_not_overdue() -> None:
    """The overdue check is strictly less-than."""
    assert effective_status(NOW, "pending", NOW) == "pending"


def test_future_due_is_pending() -> None:
    assert effective_status(NOW + timedelta(hours=1), "pending", NOW) == "pending"


def test_unknown_stored_status_is_classified_by_date() -> None:
    assert effective_status(NOW - timedelta(days=1), "", NOW) == "overdue"
    assert effective_status(NOW + timedelta(days=1), "", NOW) == "pending"


def test_naive_and_aware_datetimes_compare() -> None:
    """Naive datetimes are read as UTC."""
    naive_past = datetime(2024, 3, 10, 11, 0)
    assert effective_status(naive_past, "pending", NOW) == "overdue"
    assert as_utc(naive_past) == datetime(2024, 3, 10, 11, 0, tzinfo=timezone.utc)


def test_other_timezones_are_compared_as_instants() -> None:
    plus_two = timezone(timedelta(hours=2))
    # 13:00 at +02:00 is 11:00 UTC, an hour before NOW
    assert effective_status(datetime(2024, 3, 10, 13, 0, tzinfo=plus_two), "pending", NOW) == "overdue"


def test_assignment_helpers() -> None:
    assignment = Assignment(id=1, name="Essay", course_id=1, due_date=NOW - timedelta(days=1))
    assert assignment_status(assignment, NOW) == "overdue"
    assert is_overdue(assignment, NOW)

    assignment.status = "completed"
    assert assignment_status(assignment, NOW) == "completed"
    assert not is_overdue(assignment, NOW)
