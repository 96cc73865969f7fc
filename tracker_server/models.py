"""
Data models returned by the course tracker server tools.

This module contains the dataclasses that pair engine records with the
derived values a client needs to display them.
"""
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
import typing as t


@dataclass
class AssignmentView:
    """An assignment with its course name and derived status resolved."""
    id: int
    name: str
    course_id: t.Optional[int]
    course_name: str
    due_date: datetime
    status: str
    effective_status: str
    priority: str
    category: str = ""
    grade: t.Optional[int] = None
    max_grade: int = 100


@dataclass
class CourseGradeView:
    """A graded course as listed in the grade report."""
    course_id: int
    name: str
    code: str
    credits: int
    current_grade: float
    letter: str


@dataclass
class GradeReport:
    """Grade statistics, per-course letters and the A-F distribution."""
    overall_gpa: float
    average_grade: float
    highest_grade: float
    lowest_grade: float
    total_credits: int
    completed_assignments: int
    courses: list[CourseGradeView]
    distribution: dict[str, int]
