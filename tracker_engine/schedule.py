# -*- coding: utf-8 -*-
"""Calendar helpers: month grids, per-day lookups and the week agenda."""
import calendar
import typing as t
from datetime import date, datetime, timedelta, timezone, tzinfo

from tracker_engine.models import Assignment
from tracker_engine.ranking import sort_assignments
from tracker_engine.status import as_utc

AGENDA_WINDOW = timedelta(days=7)
AGENDA_LIMIT = 5

# Weeks start on Sunday in the month grid
_FIRST_WEEKDAY = calendar.SUNDAY


def calendar_days(year: int, month: int) -> list[date]:
    """All dates of the full weeks covering a month, Sunday first."""
    return list(calendar.Calendar(firstweekday=_FIRST_WEEKDAY).itermonthdates(year, month))


def assignments_due_on(
        assignments: t.Iterable[Assignment],
        day: date,
        tz: tzinfo = timezone.utc,
) -> list[Assignment]:
    """Assignments whose due timestamp falls on ``day`` in ``tz``."""
    return [
        assignment for assignment in assignments
        if as_utc(assignment.due_date).astimezone(tz).date() == day
    ]


def week_agenda(
        assignments: t.Iterable[Assignment],
        now: datetime,
        limit: int = AGENDA_LIMIT,
) -> list[Assignment]:
    """Open assignments due within the next week, soonest first.

    Both ends of the window are inclusive here, unlike the dashboard's
    upcoming list.
    """
    start = as_utc(now)
    end = start + AGENDA_WINDOW
    open_items = [
        assignment for assignment in assignments
        if assignment.status != "completed" and start <= as_utc(assignment.due_date) <= end
    ]
    return sort_assignments(open_items, "due_date")[:limit]
