# -*- coding: utf-8 -*-
"""Read-only loading of a course/assignment export.

The whole export is read and validated before anything is computed from it.
"""
import json
import logging
import typing as t
from pathlib import Path

from pydantic import ValidationError

from tracker_engine.models import Assignment, Course
from tracker_records.models import TrackerData

logger = logging.getLogger(__name__)


class RecordError(ValueError):
    """Raised when an export cannot be read as tracker records."""


def parse_records(payload: t.Mapping[str, t.Any]) -> tuple[list[Course], list[Assignment]]:
    """Validate a decoded export and convert it to engine dataclasses.

    :param payload: A mapping with "courses" and "assignments" lists.
    :return: The courses and assignments.
    :raises pydantic.ValidationError: If a record is malformed.
    """
    data = TrackerData.model_validate(payload)
    courses = [record.to_course() for record in data.courses]
    assignments = [record.to_assignment() for record in data.assignments]

    known_ids = {course.id for course in courses}
    dangling = [a.id for a in assignments if a.course_id is not None and a.course_id not in known_ids]
    if dangling:
        logger.info("Assignments referencing unknown courses: %s", dangling)
    return courses, assignments


def load_records(path: t.Union[str, Path]) -> tuple[list[Course], list[Assignment]]:
    """Load courses and assignments from a JSON export.

    :param path: Path to the export file.
    :return: The courses and assignments.
    :raises FileNotFoundError: If the file doesn't exist.
    :raises RecordError: If the file is not valid JSON or holds invalid records.
    """
    export_file = Path(path)
    if not export_file.is_file():
        raise FileNotFoundError(f"Tracker data file not found: {export_file}")

    try:
        with open(export_file, "r", encoding="utf-8") as f:
            payload = json.load(f)
    except json.JSONDecodeError as e:
        raise RecordError(f"Error reading tracker data file {export_file}: {e}") from e

    if not isinstance(payload, dict):
        raise RecordError(f"Tracker data file {export_file} must hold a JSON object")

    try:
        courses, assignments = parse_records(payload)
    except ValidationError as e:
        raise RecordError(f"Invalid records in {export_file}: {e}") from e

    logger.debug(
        "Loaded %d course(s) and %d assignment(s) from %s",
        len(courses), len(assignments), export_file,
    )
    return courses, assignments
