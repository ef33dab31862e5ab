"""Exception types raised by prereq."""

from collections.abc import Iterable
from pathlib import Path
from typing import Any


class PrereqError(Exception):
    """Base class for all prereq errors."""


class UnknownReferenceError(PrereqError):
    """Raised when a prerequisite edge names a course that was never registered."""

    def __init__(self, code: str, referenced_by: str | None = None) -> None:
        self.code = code
        self.referenced_by = referenced_by
        if referenced_by is None:
            msg = f"Unknown course '{code}'"
        else:
            msg = f"Unknown course '{code}' referenced by '{referenced_by}'"
        super().__init__(msg)


class DuplicateItemError(PrereqError):
    """Raised when a course code is registered twice."""

    def __init__(self, code: str) -> None:
        self.code = code
        super().__init__(f"Course '{code}' is already registered")


class CycleDetectedError(PrereqError):
    """Raised when prerequisites form a circular chain.

    Attributes:
        remaining: Codes whose in-degree never reached zero, sorted.
        cycle: One concrete cycle among the remaining codes, as a closed path
            (first and last element are the same).

    """

    def __init__(self, remaining: Iterable[Any], cycle: Iterable[Any] = ()) -> None:
        self.remaining = tuple(sorted(remaining))
        self.cycle = tuple(cycle)
        msg = f"Cycle detected in prerequisites among: {', '.join(map(str, self.remaining))}"
        if self.cycle:
            msg += f" (e.g. {' -> '.join(map(str, self.cycle))})"
        super().__init__(msg)


class CourseFileError(PrereqError):
    """Raised when a course file cannot be read or is malformed."""

    def __init__(self, path: Path, reason: str, line: int | None = None) -> None:
        self.path = path
        self.line = line
        self.reason = reason
        location = str(path) if line is None else f"{path}:{line}"
        super().__init__(f"{location}: {reason}")
