import csv
import json
import logging
from collections.abc import Iterable, Iterator
from dataclasses import asdict
from enum import StrEnum
from pathlib import Path
from typing import Any, Protocol, Self

import tomli_w
from pydantic import ValidationError

from ._errors import CourseFileError
from ._models import Course, ScheduleEntry, number_courses

logger = logging.getLogger(__name__)

PREREQUISITE_SEPARATOR = ";"

TEXT_TITLE = "SUGGESTED COURSE ORDER"


class _RowReader(Protocol):
    @property
    def line_num(self) -> int: ...

    def __iter__(self) -> Iterator[list[str]]: ...

    def __next__(self) -> list[str]: ...


class ExportFormat(StrEnum):
    """Output formats for a computed course order."""

    TEXT = "text"
    TOML = "toml"
    JSON = "json"

    @classmethod
    def from_path(cls, path: Path) -> Self:
        """Guess the format from a file suffix, falling back to plain text."""
        match path.suffix.lower():
            case ".toml":
                return cls.TOML
            case ".json":
                return cls.JSON
            case _:
                return cls.TEXT


# =============================================================================
# Reading
# =============================================================================


def _parse_rows(reader: _RowReader, source: Path) -> Iterator[Course]:
    """Turn CSV rows into courses, skipping the header and blank lines."""
    if next(reader, None) is None:
        return

    for row in reader:
        if not any(value.strip() for value in row):
            continue
        line = reader.line_num
        if len(row) < 2:  # noqa: PLR2004
            raise CourseFileError(source, "expected at least a code and a name", line=line)

        prerequisites = row[2].split(PREREQUISITE_SEPARATOR) if len(row) > 2 else []  # noqa: PLR2004
        try:
            course = Course(code=row[0], name=row[1], prerequisites=tuple(prerequisites))
        except ValidationError as e:
            error = e.errors()[0]
            field_name = ".".join(str(loc) for loc in error["loc"])
            msg = f"invalid {field_name}: {error['msg']}"
            raise CourseFileError(source, msg, line=line) from e
        yield course


def parse_courses(lines: Iterable[str], *, source: Path = Path("<string>")) -> list[Course]:
    """Parse course records from CSV lines.

    The first line is a header and is ignored. Each following line holds a
    course code, a name and an optional ``;``-separated list of prerequisite
    codes.

    Args:
        lines: CSV text split into lines (a file object works too).
        source: Name used in error messages.

    Returns:
        Courses in file order.

    Raises:
        CourseFileError: If a row is malformed.

    """
    reader = csv.reader(lines)
    try:
        return list(_parse_rows(reader, source))
    except csv.Error as e:
        raise CourseFileError(source, str(e), line=reader.line_num) from e


def read_courses_from_csv(input_path: Path) -> list[Course]:
    """Read course records from a CSV file.

    Raises:
        CourseFileError: If the file cannot be read or a row is malformed.

    """
    try:
        with input_path.open(newline="", encoding="utf-8-sig") as f:
            courses = parse_courses(f, source=input_path)
    except OSError as e:
        msg = f"cannot read file ({e.strerror or e})"
        raise CourseFileError(input_path, msg) from e
    except UnicodeDecodeError as e:
        msg = f"not valid UTF-8 text ({e.reason}); save the file as UTF-8"
        raise CourseFileError(input_path, msg) from e

    logger.debug(f"Loaded {len(courses)} courses from {input_path}")
    return courses


# =============================================================================
# Writing
# =============================================================================


def render_text(entries: list[ScheduleEntry]) -> str:
    """Render a numbered course order as plain text."""
    lines = [TEXT_TITLE, "=" * len(TEXT_TITLE), ""]
    lines.extend(str(entry) for entry in entries)
    lines.extend(["", f"Total courses: {len(entries)}", ""])
    return "\n".join(lines)


def _order_to_dict(entries: list[ScheduleEntry], key: str) -> dict[str, Any]:
    return {
        "total": len(entries),
        key: [asdict(entry) for entry in entries],
    }


def export_order(
    courses: Iterable[Course],
    output_path: Path,
    export_format: ExportFormat | None = None,
) -> None:
    """Write a computed course order to a file.

    Args:
        courses: Courses in their computed order.
        output_path: Destination file. Parent directories are created.
        export_format: Output format. Derived from the file suffix when None.

    Raises:
        CourseFileError: If the file cannot be written.

    """
    if export_format is None:
        export_format = ExportFormat.from_path(output_path)

    entries = number_courses(courses)

    try:
        output_path.parent.mkdir(parents=True, exist_ok=True)
        match export_format:
            case ExportFormat.TEXT:
                output_path.write_text(render_text(entries), encoding="utf-8")
            case ExportFormat.TOML:
                with output_path.open("wb") as f:
                    tomli_w.dump(_order_to_dict(entries, "course"), f)
            case ExportFormat.JSON:
                with output_path.open("w", encoding="utf-8") as f:
                    json.dump(_order_to_dict(entries, "courses"), f, indent=2, ensure_ascii=False)
    except OSError as e:
        msg = f"cannot write file ({e.strerror or e})"
        raise CourseFileError(output_path, msg) from e

    logger.debug(f"Exported {len(entries)} courses to {output_path} as {export_format}")
