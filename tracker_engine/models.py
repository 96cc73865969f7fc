"""
Data models for courses, assignments and the values derived from them.

This module contains all the dataclasses the derived-state engine works on.
Records arrive already normalized (see ``tracker_records``); nothing here
knows about storage field names or wire formats.
"""
from __future__ import annotations

import typing as t
from dataclasses import dataclass, field
from datetime import datetime


# Type literals for commonly used values
Priority = t.Literal["low", "medium", "high"]
StoredStatus = t.Literal["pending", "completed"]
EffectiveStatus = t.Literal["pending", "completed", "overdue"]
SortKey = t.Literal["due_date", "priority", "course"]

DEFAULT_COURSE_COLOR = "#5b21b6"


@dataclass
class GradeCategory:
    """A named, weighted bucket of scores, e.g. Exams at 35%."""
    name: str
    weight: float


@dataclass
class Course:
    """
    A course being tracked.

    ``current_grade`` is entered by the user; 0 (or None) means the course
    has not been graded yet.
    """
    id: int
    name: str
    code: str = ""
    instructor: str = ""
    semester: str = ""
    credits: int = 0
    color: str = DEFAULT_COURSE_COLOR
    current_grade: t.Optional[float] = 0.0
    grade_categories: list[GradeCategory] = field(default_factory=list)

    @property
    def is_graded(self) -> bool:
        return (self.current_grade or 0) > 0


@dataclass
class Assignment:
    """
    A deliverable belonging to a course.

    ``status`` is only ever the stored value (pending/completed); whether an
    assignment is overdue is derived against a clock in ``tracker_engine.status``.
    """
    id: int
    name: str
    course_id: t.Optional[int]
    due_date: datetime
    status: str = "pending"
    priority: str = "medium"
    category: str = ""
    grade: t.Optional[int] = None
    max_grade: int = 100
    description: str = ""


@dataclass
class GradeCalculation:
    """Result of running the grade calculator for one course."""
    course_id: int
    grade: t.Optional[float]
    letter: t.Optional[str]
    scored_weight: float
    total_weight: float


@dataclass
class DashboardSummary:
    """Aggregates shown on the dashboard."""
    total_courses: int
    upcoming: list[Assignment] = field(default_factory=list)
    overdue: list[Assignment] = field(default_factory=list)
    completion_rate: float = 0.0
    average_gpa: float = 0.0
    recent_grades: list[Course] = field(default_factory=list)
    upcoming_preview: list[Assignment] = field(default_factory=list)

    @property
    def upcoming_count(self) -> int:
        return len(self.upcoming)

    @property
    def overdue_count(self) -> int:
        return len(self.overdue)


@dataclass
class GradeStats:
    """Statistics shown on the grades page."""
    overall_gpa: float = 0.0
    average_grade: float = 0.0
    highest_grade: float = 0.0
    lowest_grade: float = 0.0
    total_credits: int = 0
    completed_assignments: int = 0


@dataclass
class AssignmentStats:
    """Counts shown under the assignment list."""
    total: int = 0
    completed: int = 0
    pending: int = 0
    overdue: int = 0


@dataclass
class CourseStats:
    """Counts shown under the course list."""
    total_courses: int = 0
    total_credits: int = 0
    semester_count: int = 0
