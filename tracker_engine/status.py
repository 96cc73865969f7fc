# -*- coding: utf-8 -*-
"""Due-status classification for assignments.

Every function takes ``now`` explicitly so callers (and tests) decide what
time it is.
"""
from datetime import datetime, timezone

from tracker_engine.models import Assignment, EffectiveStatus


def as_utc(moment: datetime) -> datetime:
    """Return ``moment`` as an aware UTC datetime.

    Naive datetimes are taken to already be in UTC, so naive and aware values
    can be compared with each other.
    """
    if moment.tzinfo is None:
        return moment.replace(tzinfo=timezone.utc)
    return moment.astimezone(timezone.utc)


def effective_status(due_date: datetime, stored_status: str, now: datetime) -> EffectiveStatus:
    """Classify an assignment as pending, completed or overdue.

    :param due_date: When the assignment is due.
    :param stored_status: The status as recorded ("pending" or "completed").
    :param now: The current time.
    :return: "completed" if recorded as such, "overdue" if due strictly
        before ``now``, otherwise "pending".
    """
    if stored_status == "completed":
        return "completed"
    if as_utc(due_date) < as_utc(now):
        return "overdue"
    return "pending"


def assignment_status(assignment: Assignment, now: datetime) -> EffectiveStatus:
    return effective_status(assignment.due_date, assignment.status, now)


def is_overdue(assignment: Assignment, now: datetime) -> bool:
    return assignment_status(assignment, now) == "overdue"
