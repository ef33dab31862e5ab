"""Graph query functions for CLI commands.

This module provides pure functions for querying the course graph.
These are the functional core - no I/O, no Rich rendering.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from prereq._errors import UnknownReferenceError

if TYPE_CHECKING:
    from prereq._graph import CourseGraph


@dataclass(frozen=True, slots=True)
class CourseInfo:
    """Basic information about a course for listing."""

    code: str
    name: str
    prerequisites: tuple[str, ...]
    dependent_count: int


@dataclass(frozen=True, slots=True)
class CourseDetail:
    """Detailed information about a course."""

    code: str
    name: str
    direct_prerequisites: tuple[str, ...]
    direct_dependents: tuple[str, ...]
    all_prerequisites: frozenset[str]
    all_dependents: frozenset[str]


@dataclass(slots=True)
class TreeNode:
    """A node in a prerequisite tree for rendering."""

    code: str
    children: list[TreeNode]


def list_courses(
    graph: CourseGraph,
    *,
    roots_only: bool = False,
    leaves_only: bool = False,
) -> list[CourseInfo]:
    """List courses in the graph with optional filtering.

    Args:
        graph: The CourseGraph to analyze.
        roots_only: If True, only return courses without prerequisites.
        leaves_only: If True, only return courses nothing else requires.

    Returns:
        List of CourseInfo in registration order.

    """
    codes = list(graph.codes)

    if roots_only:
        roots = graph.roots()
        codes = [code for code in codes if code in roots]

    if leaves_only:
        leaves = graph.leaves()
        codes = [code for code in codes if code in leaves]

    return [
        CourseInfo(
            code=code,
            name=graph.get_course(code).name,
            prerequisites=graph.predecessors(code),
            dependent_count=len(graph.successors(code)),
        )
        for code in codes
    ]


def get_course_detail(graph: CourseGraph, code: str) -> CourseDetail:
    """Get detailed information about a specific course.

    Raises:
        UnknownReferenceError: If the course is not in the graph.

    """
    course = graph.get_course(code)
    return CourseDetail(
        code=course.code,
        name=course.name,
        direct_prerequisites=graph.predecessors(code),
        direct_dependents=graph.successors(code),
        all_prerequisites=graph.ancestors(code),
        all_dependents=graph.descendants(code),
    )


def get_dependency_tree(
    graph: CourseGraph,
    code: str,
    *,
    invert: bool = False,
    max_depth: int | None = None,
) -> TreeNode:
    """Build a prerequisite tree for visualization.

    Args:
        graph: The CourseGraph containing the course.
        code: The root course of the tree.
        invert: If False, show what the course requires.
                If True, show what requires the course.
        max_depth: Maximum depth to traverse (None for unlimited).

    Returns:
        TreeNode representing the prerequisite tree. A course reached twice
        is expanded only the first time.

    Raises:
        UnknownReferenceError: If the course is not in the graph.

    """
    if code not in graph:
        raise UnknownReferenceError(code)

    def build_tree(node_code: str, depth: int, visited: set[str]) -> TreeNode:
        children: list[TreeNode] = []

        if max_depth is not None and depth >= max_depth:
            return TreeNode(code=node_code, children=children)

        neighbors = graph.successors(node_code) if invert else graph.predecessors(node_code)

        for neighbor in sorted(neighbors):
            if neighbor not in visited:
                visited.add(neighbor)
                children.append(build_tree(neighbor, depth + 1, visited))

        return TreeNode(code=node_code, children=children)

    return build_tree(code, 0, {code})
