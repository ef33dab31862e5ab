"""Course prerequisite ordering."""

__all__ = [
    "Course",
    "CourseFileError",
    "CourseGraph",
    "CycleDetectedError",
    "DuplicateItemError",
    "DuplicatePolicy",
    "ExportFormat",
    "PrereqError",
    "ScheduleEntry",
    "UnknownReferenceError",
    "export_order",
    "number_courses",
    "parse_courses",
    "read_courses_from_csv",
    "render_text",
    "sort_topologically",
    "topological_sort",
]

from ._errors import (
    CourseFileError,
    CycleDetectedError,
    DuplicateItemError,
    PrereqError,
    UnknownReferenceError,
)
from ._graph import CourseGraph, topological_sort
from ._io import ExportFormat, export_order, parse_courses, read_courses_from_csv, render_text
from ._models import Course, DuplicatePolicy, ScheduleEntry, number_courses
from ._sort import sort_topologically
