"""Tests for the course data model."""

import pytest
from pydantic import ValidationError

from prereq import Course, ScheduleEntry, number_courses


class TestCourse:
    def test_strips_whitespace(self) -> None:
        course = Course(code="  CS101 ", name=" Programming ", prerequisites=(" MA101 ",))
        assert course.code == "CS101"
        assert course.name == "Programming"
        assert course.prerequisites == ("MA101",)

    def test_drops_empty_prerequisites(self) -> None:
        course = Course(code="CS201", prerequisites=("CS101", "", "  ", "MA101"))
        assert course.prerequisites == ("CS101", "MA101")

    def test_keeps_duplicate_prerequisites(self) -> None:
        course = Course(code="CS201", prerequisites=("CS101", "CS101"))
        assert course.prerequisites == ("CS101", "CS101")

    def test_empty_code_rejected(self) -> None:
        with pytest.raises(ValidationError):
            Course(code="   ", name="Nothing")

    def test_is_frozen(self) -> None:
        course = Course(code="CS101")
        with pytest.raises(ValidationError):
            course.name = "Changed"  # type: ignore[misc]

    def test_str(self) -> None:
        assert str(Course(code="CS101", name="Programming")) == "CS101 - Programming"


class TestNumberCourses:
    def test_positions_start_at_one(self) -> None:
        entries = number_courses([Course(code="CS101", name="Programming"), Course(code="MA101", name="Math")])
        assert entries == [
            ScheduleEntry(position=1, code="CS101", name="Programming"),
            ScheduleEntry(position=2, code="MA101", name="Math"),
        ]

    def test_empty(self) -> None:
        assert number_courses([]) == []

    def test_entry_str(self) -> None:
        assert str(ScheduleEntry(position=3, code="CS301", name="Algorithms")) == " 3. CS301 - Algorithms"
