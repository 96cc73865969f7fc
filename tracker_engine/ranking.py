# -*- coding: utf-8 -*-
"""Ordering and filtering of assignments and courses for list views."""
import typing as t
from datetime import datetime
from functools import cmp_to_key

from tracker_engine.models import Assignment, Course
from tracker_engine.status import as_utc, assignment_status

PRIORITY_ORDER = {"high": 3, "medium": 2, "low": 1}

UNKNOWN_COURSE_NAME = "Unknown Course"

# camelCase spellings used by the web client
_SORT_KEY_ALIASES = {"dueDate": "due_date"}


def index_courses(courses: t.Iterable[Course]) -> dict[int, Course]:
    """Map course ids to courses; later duplicates win."""
    return {course.id: course for course in courses}


def priority_rank(priority: t.Optional[str]) -> int:
    """Severity of a priority label; unrecognized labels rank 0."""
    return PRIORITY_ORDER.get(priority or "", 0)


def course_name(course_id: t.Optional[int], courses_by_id: dict[int, Course]) -> str:
    """Name of the owning course, or "" if it cannot be resolved."""
    course = courses_by_id.get(course_id) if course_id is not None else None
    return course.name if course else ""


def course_display_name(course_id: t.Optional[int], courses_by_id: dict[int, Course]) -> str:
    return course_name(course_id, courses_by_id) or UNKNOWN_COURSE_NAME


def _sign(value: t.Any) -> int:
    return (value > 0) - (value < 0)


def _compare_names(left: str, right: str) -> int:
    # Case-insensitive first, then exact text so the order is total.
    left_key, right_key = (left.casefold(), left), (right.casefold(), right)
    return (left_key > right_key) - (left_key < right_key)


def compare_assignments(
        a: Assignment,
        b: Assignment,
        sort_key: str,
        courses: t.Union[t.Iterable[Course], dict[int, Course], None] = None,
) -> int:
    """Compare two assignments for a list view.

    :param a: Left assignment.
    :param b: Right assignment.
    :param sort_key: "due_date" (ascending), "priority" (high first) or
        "course" (course name, ascending). Any other key compares equal.
    :param courses: Courses used to resolve course names, as a list or an id map.
    :return: -1, 0 or 1.
    """
    sort_key = _SORT_KEY_ALIASES.get(sort_key, sort_key)

    if sort_key == "due_date":
        left, right = as_utc(a.due_date), as_utc(b.due_date)
        return (left > right) - (left < right)

    if sort_key == "priority":
        return _sign(priority_rank(b.priority) - priority_rank(a.priority))

    if sort_key == "course":
        courses_by_id = courses if isinstance(courses, dict) else index_courses(courses or [])
        return _compare_names(
            course_name(a.course_id, courses_by_id),
            course_name(b.course_id, courses_by_id),
        )

    return 0


def sort_assignments(
        assignments: t.Iterable[Assignment],
        sort_key: str,
        courses: t.Iterable[Course] = (),
) -> list[Assignment]:
    """Return a new list sorted by ``sort_key``. Ties keep their input order."""
    courses_by_id = index_courses(courses)
    return sorted(
        assignments,
        key=cmp_to_key(lambda a, b: compare_assignments(a, b, sort_key, courses_by_id)),
    )


def matches_query(assignment: Assignment, query: str, courses_by_id: dict[int, Course]) -> bool:
    """True if the query is a case-insensitive substring of the assignment
    name or of its course's name."""
    needle = (query or "").lower()
    if needle in assignment.name.lower():
        return True
    course = courses_by_id.get(assignment.course_id) if assignment.course_id is not None else None
    return course is not None and needle in course.name.lower()


def matches_status(assignment: Assignment, status_filter: str, now: datetime) -> bool:
    """Status filter for the assignment list.

    "overdue" is matched on the derived status only, never the stored one.
    """
    if status_filter == "all":
        return True
    if status_filter == "overdue":
        return assignment_status(assignment, now) == "overdue"
    return assignment.status == status_filter


def filter_assignments(
        assignments: t.Iterable[Assignment],
        courses: t.Iterable[Course],
        now: datetime,
        query: str = "",
        status_filter: str = "all",
) -> list[Assignment]:
    courses_by_id = index_courses(courses)
    return [
        assignment
        for assignment in assignments
        if matches_query(assignment, query, courses_by_id)
        and matches_status(assignment, status_filter, now)
    ]


def filter_courses(courses: t.Iterable[Course], query: str = "", semester: str = "all") -> list[Course]:
    """Courses whose name, code or instructor contains ``query``
    (case-insensitive), restricted to one semester unless ``semester`` is "all"."""
    needle = (query or "").lower()
    matched = []
    for course in courses:
        haystacks = (course.name, course.code, course.instructor)
        if not any(needle in (text or "").lower() for text in haystacks):
            continue
        if semester != "all" and course.semester != semester:
            continue
        matched.append(course)
    return matched


def unique_semesters(courses: t.Iterable[Course]) -> list[str]:
    """Distinct semester labels in the order they first appear."""
    return list(dict.fromkeys(course.semester for course in courses))
