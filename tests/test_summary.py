"""Tests for dashboard, grades, assignment and course statistics."""
from datetime import datetime, timedelta, timezone

import pytest

from tracker_engine.models import Assignment, Course
from tracker_engine.summary import (
    build_assignment_stats,
    build_course_stats,
    build_dashboard_summary,
    build_grade_stats,
    completion_rate,
    dashboard_gpa,
    is_upcoming,
)

NOW = datetime(2024, 3, 10, 12, 0, tzinfo=timezone.utc)


def make_assignment(id: int, offset: timedelta, status: str = "pending", **kwargs) -> Assignment:
    return Assignment(
        id=id,
        name=f"Assignment {id}",
        course_id=kwargs.pop("course_id", 1),
        due_date=NOW + offset,
        status=status,
        **kwargs,
    )


def test_empty_inputs() -> None:
    summary = build_dashboard_summary([], [], NOW)
    assert summary.total_courses == 0
    assert summary.completion_rate == 0
    assert summary.upcoming == []
    assert summary.overdue == []
    assert summary.average_gpa == 0
    assert summary.recent_grades == []


def test_upcoming_window_bounds() -> None:
    assignments = [
        make_assignment(1, timedelta(0)),                        # due exactly now
        make_assignment(2, timedelta(seconds=1)),
        make_assignment(3, timedelta(days=6, hours=23)),
        make_assignment(4, timedelta(days=7)),                   # exactly a week out
        make_assignment(5, timedelta(days=8)),
        make_assignment(6, timedelta(days=2), status="completed"),
        make_assignment(7, timedelta(days=-1)),
    ]
    summary = build_dashboard_summary([], assignments, NOW)
    assert [a.id for a in summary.upcoming] == [2, 3]
    assert summary.upcoming_count == 2


def test_overdue_uses_derived_status() -> None:
    assignments = [
        make_assignment(1, timedelta(days=-1)),
        make_assignment(2, timedelta(days=-1), status="completed"),
        make_assignment(3, timedelta(0)),
        make_assignment(4, timedelta(days=-10)),
    ]
    summary = build_dashboard_summary([], assignments, NOW)
    assert [a.id for a in summary.overdue] == [1, 4]
    assert summary.overdue_count == 2


def test_completion_rate() -> None:
    assignments = [
        make_assignment(1, timedelta(days=1), status="completed"),
        make_assignment(2, timedelta(days=1)),
        make_assignment(3, timedelta(days=-1), status="completed"),
        make_assignment(4, timedelta(days=-1)),
    ]
    assert completion_rate(assignments) == pytest.approx(50)
    assert completion_rate([]) == 0


def test_dashboard_gpa_is_unweighted() -> None:
    courses = [
        Course(id=1, name="A", credits=3, current_grade=90),
        Course(id=2, name="B", credits=1, current_grade=80),
        Course(id=3, name="C", credits=4, current_grade=0),
    ]
    # (3.6 + 3.2) / 2, credits ignored
    assert dashboard_gpa(courses) == pytest.approx(3.4)
    assert dashboard_gpa([Course(id=1, name="A")]) == 0


def test_recent_grades_keep_order_and_cap_at_four() -> None:
    courses = [
        Course(id=1, name="A", current_grade=70),
        Course(id=2, name="B", current_grade=0),
        Course(id=3, name="C", current_grade=95),
        Course(id=4, name="D", current_grade=85),
        Course(id=5, name="E", current_grade=60),
        Course(id=6, name="F", current_grade=99),
    ]
    summary = build_dashboard_summary(courses, [], NOW)
    assert [c.id for c in summary.recent_grades] == [1, 3, 4, 5]
    assert summary.total_courses == 6


def test_upcoming_preview_is_first_five() -> None:
    assignments = [make_assignment(i, timedelta(hours=i)) for i in range(1, 8)]
    summary = build_dashboard_summary([], assignments, NOW)
    assert summary.upcoming_count == 7
    assert [a.id for a in summary.upcoming_preview] == [1, 2, 3, 4, 5]


def test_summary_is_deterministic() -> None:
    courses = [Course(id=1, name="A", credits=3, current_grade=88)]
    assignments = [
        make_assignment(1, timedelta(days=2)),
        make_assignment(2, timedelta(days=-2)),
        make_assignment(3, timedelta(days=1), status="completed"),
    ]
    first = build_dashboard_summary(courses, assignments, NOW)
    second = build_dashboard_summary(courses, assignments, NOW)
    assert first == second


def test_is_upcoming_with_naive_now() -> None:
    assignment = make_assignment(1, timedelta(days=1))
    assert is_upcoming(assignment, datetime(2024, 3, 10, 12, 0))


def test_grade_stats_credit_weighted() -> None:
    courses = [
        Course(id=1, name="A", credits=3, current_grade=90),
        Course(id=2, name="B", credits=1, current_grade=80),
        Course(id=3, name="C", credits=4, current_grade=0),
    ]
    assignments = [
        make_assignment(1, timedelta(days=-1), status="completed", grade=95),
        make_assignment(2, timedelta(days=-1), status="completed"),
        make_assignment(3, timedelta(days=-1), grade=70),
    ]
    stats = build_grade_stats(courses, assignments)
    assert stats.overall_gpa == pytest.approx(3.5)
    assert stats.average_grade == pytest.approx(85)
    assert stats.highest_grade == 90
    assert stats.lowest_grade == 80
    assert stats.total_credits == 4
    assert stats.completed_assignments == 1


def test_grade_stats_without_graded_courses() -> None:
    courses = [Course(id=1, name="A", credits=3), Course(id=2, name="B", credits=2)]
    stats = build_grade_stats(courses, [])
    assert stats.overall_gpa == 0
    assert stats.average_grade == 0
    assert stats.highest_grade == 0
    assert stats.lowest_grade == 0
    assert stats.total_credits == 5


def test_assignment_stats() -> None:
    assignments = [
        make_assignment(1, timedelta(days=-1)),
        make_assignment(2, timedelta(days=1)),
        make_assignment(3, timedelta(days=-1), status="completed"),
    ]
    stats = build_assignment_stats(assignments, NOW)
    assert (stats.total, stats.completed, stats.pending, stats.overdue) == (3, 1, 2, 1)


def test_course_stats() -> None:
    courses = [
        Course(id=1, name="A", credits=3, semester="Fall 2024"),
        Course(id=2, name="B", credits=4, semester="Fall 2024"),
        Course(id=3, name="C", credits=2, semester="Spring 2025"),
    ]
    stats = build_course_stats(courses)
    assert (stats.total_courses, stats.total_credits, stats.semester_count) == (3, 9, 2)
    assert build_course_stats([]).semester_count == 0
