# -*- coding: utf-8 -*-
import logging
import typing as t
from datetime import datetime

from fastmcp import FastMCP

from tracker_config import TRACKER_DATA_PATH, get_timezone
from tracker_engine.grades import letter_grade
from tracker_engine.models import Assignment, Course, DashboardSummary, GradeCalculation
from tracker_engine.ranking import course_display_name, index_courses
from tracker_engine.schedule import week_agenda
from tracker_engine.summary import build_dashboard_summary
from tracker_records.store import load_records
from tracker_server.models import AssignmentView, GradeReport
from tracker_server.views import (
    build_assignment_views,
    build_grade_report,
    resolve_now,
    run_grade_calculator,
    select_assignments,
)

logger = logging.getLogger(__name__)

mcp = FastMCP("CourseTracker")


def get_records(data_path: t.Optional[str] = None) -> tuple[list[Course], list[Assignment]]:
    """Internal function to load the full course and assignment lists.

    :param data_path: Export path; defaults to TRACKER_DATA_PATH.
    :return: The courses and assignments.
    """
    path = data_path or TRACKER_DATA_PATH
    logger.debug("Loading tracker records from %s", path)
    return load_records(path)


def _format_datetime(moment: datetime) -> str:
    """Formats a datetime into a concise readable format.

    Converts datetimes to format: 'Mon 1/15 2:30 PM' in the configured timezone.

    :param moment: The datetime to format.
    :return: Concise datetime string (e.g., 'Mon 1/15 2:30 PM').
    """
    # Format: 'Mon 1/15 2:30 PM' (day of week, month/day, time)
    return moment.astimezone(get_timezone()).strftime("%a %-m/%-d %-I:%M %p")


def _truncate(text: str, width: int) -> str:
    return text[:width - 1] if len(text) > width - 1 else text


def format_assignments(views: list[AssignmentView]) -> str:
    """Internal function to format an assignment list as a clean table.

    :return: Formatted table string of the assignments.
    """
    if not views:
        return "📚 No assignments found."

    lines = []
    lines.append("📚 ASSIGNMENTS")
    lines.append("=" * 100)
    lines.append(f"{'#':<4} {'Title':<35} {'Course':<22} {'Due':<18} {'Priority':<9} {'Status':<10}")
    lines.append("-" * 100)

    for idx, view in enumerate(views, 1):
        lines.append(
            f"{idx:<4} {_truncate(view.name, 35):<35} {_truncate(view.course_name, 22):<22} "
            f"{_format_datetime(view.due_date):<18} {view.priority:<9} {view.effective_status:<10}"
        )

    lines.append("=" * 100)
    lines.append(f"Total: {len(views)} assignment(s)")
    return "\n".join(lines)


def format_dashboard(summary: DashboardSummary, courses: list[Course]) -> str:
    """Internal function to format the dashboard summary.

    :return: Formatted dashboard text.
    """
    courses_by_id = index_courses(courses)
    lines = []
    lines.append("🎓 DASHBOARD")
    lines.append("=" * 100)
    lines.append(f"Courses: {summary.total_courses}")
    lines.append(f"Due this week: {summary.upcoming_count}")
    lines.append(f"Overdue: {summary.overdue_count}")
    lines.append(f"Completion rate: {summary.completion_rate:.0f}%")
    lines.append(f"Average GPA: {summary.average_gpa:.2f}")
    lines.append("-" * 100)

    if summary.upcoming_preview:
        lines.append("Upcoming:")
        for assignment in summary.upcoming_preview:
            course = course_display_name(assignment.course_id, courses_by_id)
            lines.append(
                f"  {_truncate(assignment.name, 35):<35} {_truncate(course, 22):<22} "
                f"{_format_datetime(assignment.due_date):<18} {assignment.priority}"
            )
    else:
        lines.append("Upcoming: nothing due in the next 7 days")

    if summary.recent_grades:
        lines.append("Grades:")
        for course in summary.recent_grades:
            lines.append(
                f"  {_truncate(course.name, 35):<35} {course.current_grade:>6.1f}%  "
                f"{letter_grade(course.current_grade)}"
            )

    lines.append("=" * 100)
    return "\n".join(lines)


@mcp.tool()
def get_dashboard_summary(now: str = "") -> DashboardSummary:
    """Builds the dashboard summary.

    :param now: Current time in ISO format (optional, defaults to the clock).
    :return: A DashboardSummary with upcoming and overdue assignments,
        completion rate, average GPA and recently graded courses.
    """
    courses, assignments = get_records()
    return build_dashboard_summary(courses, assignments, resolve_now(now))


@mcp.tool()
def list_assignments(
        query: str = "",
        status: str = "all",
        sort_by: str = "due_date",
        now: str = "",
) -> list[AssignmentView]:
    """Lists assignments filtered and sorted like the assignment page.

    :param query: Text to match against assignment or course names (optional).
    :param status: "all", "pending", "completed" or "overdue".
    :param sort_by: "due_date", "priority" or "course".
    :param now: Current time in ISO format (optional).
    :return: A list of AssignmentView objects.
    """
    courses, assignments = get_records()
    return select_assignments(courses, assignments, resolve_now(now), query, status, sort_by)


@mcp.tool()
def get_grade_report() -> GradeReport:
    """Builds the grade report: credit-weighted GPA, grade statistics,
    letter grades per graded course and the A-F distribution.

    :return: A GradeReport object.
    """
    courses, assignments = get_records()
    return build_grade_report(courses, assignments)


@mcp.tool()
def calculate_course_grade(course_id: int, entries: dict[str, list[t.Any]]) -> GradeCalculation:
    """Calculates a course grade from scores entered per grade category.

    :param course_id: Id of the course whose categories and weights to use.
    :param entries: Scores keyed by category name, e.g. {"Exams": [80, 90]}.
    :return: A GradeCalculation; grade and letter are null when nothing is scored.
    """
    courses, _ = get_records()
    return run_grade_calculator(courses, course_id, entries)


@mcp.tool()
def get_week_agenda(now: str = "") -> list[AssignmentView]:
    """Lists open assignments due in the next seven days, soonest first.

    :param now: Current time in ISO format (optional).
    :return: Up to five AssignmentView objects.
    """
    courses, assignments = get_records()
    moment = resolve_now(now)
    return build_assignment_views(week_agenda(assignments, moment), courses, moment)


@mcp.tool()
def show_dashboard(now: str = "") -> str:
    """Displays the dashboard summary as formatted text.

    :param now: Current time in ISO format (optional).
    :return: Formatted dashboard text.
    """
    courses, assignments = get_records()
    summary = build_dashboard_summary(courses, assignments, resolve_now(now))
    return format_dashboard(summary, courses)


@mcp.tool()
def show_assignments(
        query: str = "",
        status: str = "all",
        sort_by: str = "due_date",
        now: str = "",
) -> str:
    """Displays a filtered, sorted assignment list as a formatted table.

    :param query: Text to match against assignment or course names (optional).
    :param status: "all", "pending", "completed" or "overdue".
    :param sort_by: "due_date", "priority" or "course".
    :param now: Current time in ISO format (optional).
    :return: Formatted table string, or a message if nothing matches.
    """
    courses, assignments = get_records()
    return format_assignments(select_assignments(courses, assignments, resolve_now(now), query, status, sort_by))


if __name__ == "__main__":
    mcp.run()
