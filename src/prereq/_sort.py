"""Ordering courses so that prerequisites come first."""

from ._graph import CourseGraph, topological_sort
from ._models import Course


def sort_topologically(graph: CourseGraph) -> list[Course]:
    """Compute a course order that satisfies every prerequisite.

    Courses that become available at the same time are ordered by ascending
    code, so sorting an unchanged graph always yields the same sequence.

    Args:
        graph: The graph to sort. It is only read.

    Returns:
        Every course in the graph, each after all of its prerequisites.

    Raises:
        CycleDetectedError: If the prerequisites are circular. The error lists
            the codes that could not be placed.

    """
    order = topological_sort(graph.successor_map())
    return [graph.get_course(code) for code in order]
