"""
Pydantic models for course and assignment records.

Records reach us from the web client (camelCase names such as ``courseId``)
or straight from the storage tables (``Name``, ``course_id_c`` and friends).
Both spellings are accepted here and converted to the engine's dataclasses,
so nothing past this module deals with field-name variants.
"""
from __future__ import annotations

import json
import typing as t
from datetime import datetime, timezone

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

from tracker_engine.models import DEFAULT_COURSE_COLOR, Assignment, Course, GradeCategory


class GradeCategoryRecord(BaseModel):
    """One grade category as stored on a course."""
    model_config = ConfigDict(extra="ignore")

    name: str = ""
    weight: float = 0.0

    @field_validator("name", mode="before")
    @classmethod
    def _blank_name(cls, value: t.Any) -> t.Any:
        return value or ""

    @field_validator("weight", mode="before")
    @classmethod
    def _blank_weight(cls, value: t.Any) -> t.Any:
        return value or 0

    def to_category(self) -> GradeCategory:
        return GradeCategory(name=self.name, weight=self.weight)


class CourseRecord(BaseModel):
    """A course record in either naming convention."""
    model_config = ConfigDict(extra="ignore")

    id: int = Field(validation_alias=AliasChoices("id", "Id"))
    name: str = Field("", validation_alias=AliasChoices("name", "Name"))
    code: str = Field("", validation_alias=AliasChoices("code", "code_c"))
    instructor: str = Field("", validation_alias=AliasChoices("instructor", "instructor_c"))
    semester: str = Field("", validation_alias=AliasChoices("semester", "semester_c"))
    credits: int = Field(0, validation_alias=AliasChoices("credits", "credits_c"))
    color: str = Field(DEFAULT_COURSE_COLOR, validation_alias=AliasChoices("color", "color_c"))
    current_grade: float = Field(
        0.0, validation_alias=AliasChoices("currentGrade", "current_grade", "current_grade_c")
    )
    grade_categories: list[GradeCategoryRecord] = Field(
        default_factory=list,
        validation_alias=AliasChoices("gradeCategories", "grade_categories", "grade_categories_c"),
    )

    @field_validator("name", "code", "instructor", "semester", mode="before")
    @classmethod
    def _blank_text(cls, value: t.Any) -> t.Any:
        return value or ""

    @field_validator("credits", "current_grade", mode="before")
    @classmethod
    def _blank_number(cls, value: t.Any) -> t.Any:
        return value or 0

    @field_validator("color", mode="before")
    @classmethod
    def _blank_color(cls, value: t.Any) -> t.Any:
        return value or DEFAULT_COURSE_COLOR

    @field_validator("grade_categories", mode="before")
    @classmethod
    def _decode_categories(cls, value: t.Any) -> t.Any:
        # Storage keeps the categories as a JSON string; unreadable text means none.
        if not value:
            return []
        if isinstance(value, str):
            try:
                decoded = json.loads(value)
            except json.JSONDecodeError:
                return []
            return decoded if isinstance(decoded, list) else []
        return value

    def to_course(self) -> Course:
        return Course(
            id=self.id,
            name=self.name,
            code=self.code,
            instructor=self.instructor,
            semester=self.semester,
            credits=self.credits,
            color=self.color,
            current_grade=self.current_grade,
            grade_categories=[category.to_category() for category in self.grade_categories],
        )


class AssignmentRecord(BaseModel):
    """An assignment record in either naming convention."""
    model_config = ConfigDict(extra="ignore")

    id: int = Field(validation_alias=AliasChoices("id", "Id"))
    name: str = Field("", validation_alias=AliasChoices("name", "Name"))
    course_id: t.Optional[int] = Field(
        None, validation_alias=AliasChoices("courseId", "course_id", "course_id_c")
    )
    due_date: datetime = Field(validation_alias=AliasChoices("dueDate", "due_date", "due_date_c"))
    status: t.Literal["pending", "completed"] = Field(
        "pending", validation_alias=AliasChoices("status", "status_c")
    )
    priority: str = Field("medium", validation_alias=AliasChoices("priority", "priority_c"))
    category: str = Field("", validation_alias=AliasChoices("category", "category_c"))
    grade: t.Optional[int] = Field(None, validation_alias=AliasChoices("grade", "grade_c"))
    max_grade: int = Field(100, validation_alias=AliasChoices("maxGrade", "max_grade", "max_grade_c"))
    description: str = Field("", validation_alias=AliasChoices("description", "description_c"))

    @field_validator("name", "category", "description", mode="before")
    @classmethod
    def _blank_text(cls, value: t.Any) -> t.Any:
        return value or ""

    @field_validator("status", mode="before")
    @classmethod
    def _blank_status(cls, value: t.Any) -> t.Any:
        return value or "pending"

    @field_validator("priority", mode="before")
    @classmethod
    def _blank_priority(cls, value: t.Any) -> t.Any:
        return value or "medium"

    @field_validator("max_grade", mode="before")
    @classmethod
    def _blank_max_grade(cls, value: t.Any) -> t.Any:
        return value or 100

    @field_validator("course_id", mode="before")
    @classmethod
    def _lookup_course_id(cls, value: t.Any) -> t.Any:
        # Lookup fields come back from storage as {"Id": 3, "Name": "..."}
        if isinstance(value, dict):
            value = value.get("Id", value.get("id"))
        if value in ("", 0):
            return None
        return value

    @field_validator("due_date")
    @classmethod
    def _assume_utc(cls, value: datetime) -> datetime:
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value

    def to_assignment(self) -> Assignment:
        return Assignment(
            id=self.id,
            name=self.name,
            course_id=self.course_id,
            due_date=self.due_date,
            status=self.status,
            priority=self.priority,
            category=self.category,
            grade=self.grade,
            max_grade=self.max_grade,
            description=self.description,
        )


class TrackerData(BaseModel):
    """A full export: every course and every assignment."""
    courses: list[CourseRecord] = Field(default_factory=list)
    assignments: list[AssignmentRecord] = Field(default_factory=list)
