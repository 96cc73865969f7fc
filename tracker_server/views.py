# -*- coding: utf-8 -*-
"""
Helpers that turn engine results into the views the tools and the CLI show.

Nothing here imports the tool server, so the CLI can use these without
building it.
"""
import typing as t
from datetime import datetime, timezone

from tracker_engine.grades import calculate_grade, grade_distribution, letter_grade
from tracker_engine.models import Assignment, Course, GradeCalculation
from tracker_engine.ranking import (
    course_display_name,
    filter_assignments,
    index_courses,
    sort_assignments,
)
from tracker_engine.status import assignment_status
from tracker_engine.summary import build_grade_stats
from tracker_server.models import AssignmentView, CourseGradeView, GradeReport


def resolve_now(now: str = "") -> datetime:
    """Parse an ISO timestamp, or read the clock when ``now`` is blank.

    This is the only place the current time is read; the engine is always
    handed the result.

    :param now: ISO 8601 timestamp, or "".
    :return: An aware datetime (naive input is taken as UTC).
    :raises ValueError: If ``now`` is not a valid timestamp.
    """
    if not now:
        return datetime.now(timezone.utc)
    try:
        moment = datetime.fromisoformat(now.replace("Z", "+00:00"))
    except ValueError as e:
        raise ValueError(f"Invalid timestamp for 'now': {now!r}") from e
    return moment if moment.tzinfo else moment.replace(tzinfo=timezone.utc)


def build_assignment_views(
        assignments: list[Assignment],
        courses: list[Course],
        now: datetime,
) -> list[AssignmentView]:
    """Attach course names and derived statuses."""
    courses_by_id = index_courses(courses)
    return [
        AssignmentView(
            id=assignment.id,
            name=assignment.name,
            course_id=assignment.course_id,
            course_name=course_display_name(assignment.course_id, courses_by_id),
            due_date=assignment.due_date,
            status=assignment.status,
            effective_status=assignment_status(assignment, now),
            priority=assignment.priority,
            category=assignment.category,
            grade=assignment.grade,
            max_grade=assignment.max_grade,
        )
        for assignment in assignments
    ]


def select_assignments(
        courses: list[Course],
        assignments: list[Assignment],
        now: datetime,
        query: str = "",
        status: str = "all",
        sort_by: str = "due_date",
) -> list[AssignmentView]:
    """Filter, sort and resolve an assignment list."""
    matched = filter_assignments(assignments, courses, now, query=query, status_filter=status)
    ordered = sort_assignments(matched, sort_by, courses)
    return build_assignment_views(ordered, courses, now)


def build_grade_report(courses: list[Course], assignments: list[Assignment]) -> GradeReport:
    stats = build_grade_stats(courses, assignments)
    return GradeReport(
        overall_gpa=stats.overall_gpa,
        average_grade=stats.average_grade,
        highest_grade=stats.highest_grade,
        lowest_grade=stats.lowest_grade,
        total_credits=stats.total_credits,
        completed_assignments=stats.completed_assignments,
        courses=[
            CourseGradeView(
                course_id=course.id,
                name=course.name,
                code=course.code,
                credits=course.credits,
                current_grade=course.current_grade,
                letter=letter_grade(course.current_grade),
            )
            for course in courses
            if course.is_graded
        ],
        distribution=grade_distribution(courses),
    )


def run_grade_calculator(
        courses: list[Course],
        course_id: int,
        entries: dict[str, list[t.Any]],
) -> GradeCalculation:
    """Run the calculator for one course.

    :raises ValueError: If no course has ``course_id``.
    """
    course = index_courses(courses).get(course_id)
    if course is None:
        raise ValueError(f"Course {course_id} not found")
    return calculate_grade(course, entries)
