"""Graph module providing the course dependency graph.

This module contains:
- CourseGraph: A mutable graph of courses and prerequisite edges
- topological_sort: Deterministic Kahn ordering of a successor mapping
- find_cycle: Extraction of one cycle from an unsortable remainder
"""

from ._algorithms import find_cycle, topological_sort
from ._dependency_graph import CourseGraph

__all__ = ["CourseGraph", "find_cycle", "topological_sort"]
