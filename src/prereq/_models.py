"""Data model for courses and computed schedules."""

from collections.abc import Iterable
from dataclasses import dataclass
from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field, field_validator


class DuplicatePolicy(StrEnum):
    """What to do when a course code is registered twice."""

    REJECT = "reject"
    OVERWRITE = "overwrite"


class Course(BaseModel):
    """A course with its prerequisite codes.

    Prerequisites keep their declared order. Duplicate entries are allowed
    here and ignored when the graph is built.
    """

    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)

    code: str = Field(min_length=1)
    name: str = ""
    prerequisites: tuple[str, ...] = ()

    @field_validator("prerequisites")
    @classmethod
    def drop_empty_prerequisites(cls, value: tuple[str, ...]) -> tuple[str, ...]:
        return tuple(code for code in value if code)

    def __str__(self) -> str:
        return f"{self.code} - {self.name}"


@dataclass(frozen=True, slots=True)
class ScheduleEntry:
    """One line of a computed course order."""

    position: int
    code: str
    name: str

    def __str__(self) -> str:
        return f"{self.position:2d}. {self.code} - {self.name}"


def number_courses(courses: Iterable[Course]) -> list[ScheduleEntry]:
    """Attach 1-based positions to an ordered sequence of courses."""
    return [
        ScheduleEntry(position=i, code=course.code, name=course.name)
        for i, course in enumerate(courses, start=1)
    ]
