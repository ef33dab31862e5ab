"""Course prerequisite graph."""

import logging
from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field
from typing import Self

from prereq._errors import CycleDetectedError, DuplicateItemError, UnknownReferenceError
from prereq._models import Course, DuplicatePolicy

from ._algorithms import topological_sort

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class CourseGraph:
    """A directed graph of courses and their prerequisite relationships.

    Edges point from a prerequisite to the courses that depend on it:
    - successors[a] = (b,) means "b requires a"
    - predecessors[b] = (a,) means "b requires a"

    The graph is filled incrementally: register every course first, then add
    prerequisite edges between registered codes. It must not be mutated while
    it is being sorted.

    Attributes:
        duplicate_policy: Whether re-registering a code raises or replaces.

    """

    duplicate_policy: DuplicatePolicy = DuplicatePolicy.REJECT
    _courses: dict[str, Course] = field(default_factory=dict)
    _successors: dict[str, list[str]] = field(default_factory=dict)
    _predecessors: dict[str, list[str]] = field(default_factory=dict)

    @classmethod
    def from_courses(
        cls,
        courses: Iterable[Course],
        *,
        duplicate_policy: DuplicatePolicy = DuplicatePolicy.REJECT,
    ) -> Self:
        """Build a graph from courses and their declared prerequisites.

        All courses are registered before any edge is added, so a course may
        list a prerequisite that appears later in the input.

        Args:
            courses: Courses to register.
            duplicate_policy: Policy applied to repeated course codes.

        Returns:
            A new CourseGraph instance.

        Raises:
            DuplicateItemError: If a code repeats under the reject policy.
            UnknownReferenceError: If a prerequisite was never registered.

        """
        graph = cls(duplicate_policy=duplicate_policy)
        for course in courses:
            graph.add_course(course)
        for course in list(graph):
            for prerequisite in course.prerequisites:
                graph.add_prerequisite(course.code, prerequisite)
        logger.debug(f"Built graph with {len(graph)} courses")
        return graph

    def add_course(self, course: Course) -> None:
        """Register a course under its code.

        Raises:
            DuplicateItemError: If the code is taken and the policy is reject.

        """
        if course.code in self._courses:
            if self.duplicate_policy is DuplicatePolicy.REJECT:
                raise DuplicateItemError(course.code)
            logger.warning(f"Course '{course.code}' registered twice; keeping the later definition")
            self._courses[course.code] = course
            return

        self._courses[course.code] = course
        self._successors[course.code] = []
        self._predecessors[course.code] = []

    def add_item(self, code: str, name: str = "") -> Course:
        """Register a course with no declared prerequisites and return it."""
        course = Course(code=code, name=name)
        self.add_course(course)
        return course

    def add_prerequisite(self, dependent: str, prerequisite: str) -> None:
        """Record that ``dependent`` must be taken after ``prerequisite``.

        Repeating an existing edge has no effect.

        Raises:
            UnknownReferenceError: If either code is not registered.

        """
        if prerequisite not in self._courses:
            raise UnknownReferenceError(prerequisite, referenced_by=dependent)
        if dependent not in self._courses:
            raise UnknownReferenceError(dependent)

        dependents = self._successors[prerequisite]
        if dependent in dependents:
            return
        dependents.append(dependent)
        self._predecessors[dependent].append(prerequisite)

    @property
    def codes(self) -> tuple[str, ...]:
        """All course codes in registration order."""
        return tuple(self._courses)

    def get_course(self, code: str) -> Course:
        """Get a course by code.

        Raises:
            UnknownReferenceError: If no course has this code.

        """
        try:
            return self._courses[code]
        except KeyError:
            raise UnknownReferenceError(code) from None

    def successors(self, code: str) -> tuple[str, ...]:
        """Get courses that directly require ``code``, in insertion order."""
        return tuple(self._successors.get(code, ()))

    def predecessors(self, code: str) -> tuple[str, ...]:
        """Get the direct prerequisites of ``code``, in insertion order."""
        return tuple(self._predecessors.get(code, ()))

    def successor_map(self) -> dict[str, tuple[str, ...]]:
        """Snapshot of the successor lists of every course."""
        return {code: tuple(dependents) for code, dependents in self._successors.items()}

    def roots(self) -> frozenset[str]:
        """Get courses with no prerequisites."""
        return frozenset(code for code in self._courses if not self._predecessors[code])

    def leaves(self) -> frozenset[str]:
        """Get courses that no other course requires."""
        return frozenset(code for code in self._courses if not self._successors[code])

    def ancestors(self, code: str) -> frozenset[str]:
        """Get all transitive prerequisites of a course.

        Args:
            code: The course to query.

        Returns:
            Set of every course that must be taken before ``code``.

        """
        visited: set[str] = set()
        stack = list(self.predecessors(code))
        while stack:
            current = stack.pop()
            if current not in visited:
                visited.add(current)
                stack.extend(self.predecessors(current))
        return frozenset(visited)

    def descendants(self, code: str) -> frozenset[str]:
        """Get all courses that transitively require ``code``."""
        visited: set[str] = set()
        stack = list(self.successors(code))
        while stack:
            current = stack.pop()
            if current not in visited:
                visited.add(current)
                stack.extend(self.successors(current))
        return frozenset(visited)

    def topological_order(self) -> list[str]:
        """Return course codes with every prerequisite before its dependents.

        Raises:
            CycleDetectedError: If the prerequisites are circular.

        """
        return topological_sort(self.successor_map())

    def has_cycle(self) -> bool:
        """Check if the prerequisites contain a cycle."""
        try:
            self.topological_order()
        except CycleDetectedError:
            return True
        return False

    def __len__(self) -> int:
        """Return the number of courses in the graph."""
        return len(self._courses)

    def __contains__(self, code: object) -> bool:
        """Check if a course code is registered."""
        return code in self._courses

    def __iter__(self) -> Iterator[Course]:
        """Iterate over courses in registration order."""
        return iter(self._courses.values())
