# -*- coding: utf-8 -*-
"""
Summary statistics for the dashboard, grades, assignments and courses views.

These are pure projections over already-loaded courses and assignments and
an injected ``now``; building a summary twice from the same inputs gives
equal results.
"""
from __future__ import annotations

import typing as t
from datetime import datetime, timedelta

from tracker_engine.grades import credit_weighted_gpa, percentage_to_gpa
from tracker_engine.models import (
    Assignment,
    AssignmentStats,
    Course,
    CourseStats,
    DashboardSummary,
    GradeStats,
)
from tracker_engine.status import as_utc, assignment_status

UPCOMING_WINDOW = timedelta(days=7)
RECENT_GRADES_LIMIT = 4
UPCOMING_PREVIEW_LIMIT = 5


def is_upcoming(assignment: Assignment, now: datetime) -> bool:
    """Not completed and due strictly within the next seven days."""
    if assignment_status(assignment, now) == "completed":
        return False
    due = as_utc(assignment.due_date)
    start = as_utc(now)
    return start < due < start + UPCOMING_WINDOW


def completion_rate(assignments: t.Sequence[Assignment]) -> float:
    """Percentage of assignments marked completed; 0 with no assignments."""
    if not assignments:
        return 0.0
    completed = sum(1 for assignment in assignments if assignment.status == "completed")
    return completed / len(assignments) * 100


def dashboard_gpa(courses: t.Iterable[Course]) -> float:
    """Unweighted mean of ``current_grade / 25`` over graded courses.

    A display heuristic: credits are ignored here, unlike
    ``tracker_engine.grades.credit_weighted_gpa``.
    """
    graded = [course for course in courses if course.is_graded]
    if not graded:
        return 0.0
    return sum(percentage_to_gpa(course.current_grade) for course in graded) / len(graded)


def build_dashboard_summary(
        courses: t.Sequence[Course],
        assignments: t.Sequence[Assignment],
        now: datetime,
) -> DashboardSummary:
    """Build the dashboard aggregates.

    :param courses: All courses.
    :param assignments: All assignments.
    :param now: The current time.
    :return: A DashboardSummary.
    """
    upcoming = [assignment for assignment in assignments if is_upcoming(assignment, now)]
    overdue = [
        assignment for assignment in assignments
        if assignment_status(assignment, now) == "overdue"
    ]
    graded = [course for course in courses if course.is_graded]

    return DashboardSummary(
        total_courses=len(courses),
        upcoming=upcoming,
        overdue=overdue,
        completion_rate=completion_rate(assignments),
        average_gpa=dashboard_gpa(courses),
        recent_grades=graded[:RECENT_GRADES_LIMIT],
        upcoming_preview=upcoming[:UPCOMING_PREVIEW_LIMIT],
    )


def build_grade_stats(courses: t.Sequence[Course], assignments: t.Sequence[Assignment]) -> GradeStats:
    """Statistics for the grades page.

    With no graded course every figure is 0 and ``total_credits`` counts all
    courses; otherwise it counts the graded ones only.
    """
    graded_assignments = sum(
        1 for assignment in assignments
        if assignment.status == "completed" and assignment.grade is not None
    )
    graded = [course for course in courses if course.is_graded]
    if not graded:
        return GradeStats(
            total_credits=sum(course.credits for course in courses),
            completed_assignments=graded_assignments,
        )

    grades = [course.current_grade for course in graded]
    return GradeStats(
        overall_gpa=credit_weighted_gpa(graded),
        average_grade=sum(grades) / len(grades),
        highest_grade=max(grades),
        lowest_grade=min(grades),
        total_credits=sum(course.credits for course in graded),
        completed_assignments=graded_assignments,
    )


def build_assignment_stats(assignments: t.Sequence[Assignment], now: datetime) -> AssignmentStats:
    return AssignmentStats(
        total=len(assignments),
        completed=sum(1 for a in assignments if a.status == "completed"),
        pending=sum(1 for a in assignments if a.status == "pending"),
        overdue=sum(1 for a in assignments if assignment_status(a, now) == "overdue"),
    )


def build_course_stats(courses: t.Sequence[Course]) -> CourseStats:
    return CourseStats(
        total_courses=len(courses),
        total_credits=sum(course.credits for course in courses),
        semester_count=len({course.semester for course in courses}),
    )
