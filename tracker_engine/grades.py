# -*- coding: utf-8 -*-
"""
Grade computations: the weighted grade calculator, letter grades and GPA.

Two GPA figures exist and are kept apart on purpose:

- ``dashboard_gpa`` (in ``tracker_engine.summary``) is the plain mean of
  ``current_grade / 25`` over graded courses.
- ``credit_weighted_gpa`` weights each graded course by its credits.
"""
from __future__ import annotations

import math
import typing as t

from tracker_engine.models import Course, GradeCalculation, GradeCategory

GPA_DIVISOR = 25

LETTER_GRADE_THRESHOLDS = (
    (97, "A+"),
    (93, "A"),
    (90, "A-"),
    (87, "B+"),
    (83, "B"),
    (80, "B-"),
    (77, "C+"),
    (73, "C"),
    (70, "C-"),
    (67, "D+"),
    (60, "D"),
)

GRADE_BANDS = (
    (90, "A"),
    (80, "B"),
    (70, "C"),
    (60, "D"),
)

RawScore = t.Union[float, int, str, None]


def coerce_score(value: RawScore) -> float:
    """Turn a raw calculator entry into a number.

    Blank, non-numeric and non-finite entries count as 0 rather than being
    dropped from the average.
    """
    if isinstance(value, bool):
        return float(value)
    if isinstance(value, (int, float)):
        number = float(value)
    else:
        try:
            number = float(str(value).strip()) if value is not None else 0.0
        except ValueError:
            return 0.0
    return number if math.isfinite(number) else 0.0


def category_average(scores: t.Sequence[RawScore]) -> t.Optional[float]:
    """Arithmetic mean of the entries, or None if there are none."""
    if not scores:
        return None
    return sum(coerce_score(score) for score in scores) / len(scores)


def total_weight(categories: t.Iterable[GradeCategory]) -> float:
    return sum(category.weight or 0 for category in categories)


def _weighted_parts(
        categories: t.Iterable[GradeCategory],
        entries: t.Mapping[str, t.Sequence[RawScore]],
) -> tuple[float, float]:
    weighted_sum = 0.0
    weight_total = 0.0
    for category in categories:
        average = category_average(entries.get(category.name) or [])
        if average is None:
            continue
        weighted_sum += average * (category.weight / 100)
        weight_total += category.weight
    return weighted_sum, weight_total


def compute_course_grade(
        categories: t.Iterable[GradeCategory],
        entries: t.Mapping[str, t.Sequence[RawScore]],
) -> t.Optional[float]:
    """Compute a course percentage from per-category scores.

    Only categories with at least one entry count, and the result is
    renormalized against their weights: entering only exam scores gives a
    grade computed from the exam weight alone. No clamping is applied.

    :param categories: The course's grade categories and weights (percent).
    :param entries: Scores per category name. Names that are not categories
        of the course are ignored.
    :return: The percentage, or None if no category has been scored.
    """
    weighted_sum, weight_total = _weighted_parts(categories, entries)
    if weight_total == 0:
        return None
    return (weighted_sum / weight_total) * 100


def calculate_grade(course: Course, entries: t.Mapping[str, t.Sequence[RawScore]]) -> GradeCalculation:
    """Run the grade calculator for a course and attach the letter grade."""
    _, scored_weight = _weighted_parts(course.grade_categories, entries)
    grade = compute_course_grade(course.grade_categories, entries)
    return GradeCalculation(
        course_id=course.id,
        grade=grade,
        letter=letter_grade(grade) if grade is not None else None,
        scored_weight=scored_weight,
        total_weight=total_weight(course.grade_categories),
    )


def letter_grade(percentage: float) -> str:
    """Map a percentage to a letter grade. Thresholds include their lower bound."""
    for threshold, letter in LETTER_GRADE_THRESHOLDS:
        if percentage >= threshold:
            return letter
    return "F"


def grade_band(percentage: float) -> str:
    """Coarse A-F band used for the grade distribution."""
    for threshold, band in GRADE_BANDS:
        if percentage >= threshold:
            return band
    return "F"


def grade_distribution(courses: t.Iterable[Course]) -> dict[str, int]:
    """Number of graded courses in each band, A through F."""
    distribution = {band: 0 for _, band in GRADE_BANDS}
    distribution["F"] = 0
    for course in courses:
        if course.is_graded:
            distribution[grade_band(course.current_grade)] += 1
    return distribution


def percentage_to_gpa(percentage: float) -> float:
    """Linear map from the 100-point scale to the 4.0 scale."""
    return percentage / GPA_DIVISOR


def credit_weighted_gpa(courses: t.Iterable[Course]) -> float:
    """GPA over graded courses, weighted by credits. 0 if nothing is graded."""
    graded = [course for course in courses if course.is_graded]
    credits = sum(course.credits for course in graded)
    if not graded or credits == 0:
        return 0.0
    weighted_sum = sum(course.current_grade * course.credits for course in graded)
    return percentage_to_gpa(weighted_sum / credits)


class GradeEntrySet:
    """Scores typed into the grade calculator for one course.

    Entries live only as long as the calculator session; the last write to a
    slot wins.
    """

    def __init__(self, entries: t.Optional[t.Mapping[str, t.Sequence[RawScore]]] = None) -> None:
        self._entries: dict[str, list[RawScore]] = {
            name: list(scores) for name, scores in (entries or {}).items()
        }

    def add_score(self, category: str, value: RawScore = "") -> None:
        self._entries.setdefault(category, []).append(value)

    def update_score(self, category: str, index: int, value: RawScore) -> None:
        scores = self._entries.get(category, [])
        if 0 <= index < len(scores):
            scores[index] = value

    def remove_score(self, category: str, index: int) -> None:
        scores = self._entries.get(category, [])
        if 0 <= index < len(scores):
            del scores[index]

    def scores(self, category: str) -> list[RawScore]:
        return list(self._entries.get(category, []))

    def as_mapping(self) -> dict[str, list[RawScore]]:
        return {name: list(scores) for name, scores in self._entries.items()}
