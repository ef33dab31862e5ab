"""Graph algorithms for dependency graph operations."""

import heapq
import logging
from collections import defaultdict
from collections.abc import Collection, Iterable, Mapping
from typing import Any, Protocol, TypeVar

from prereq._errors import CycleDetectedError

logger = logging.getLogger(__name__)


class _Orderable(Protocol):
    def __lt__(self, other: Any, /) -> bool: ...


T = TypeVar("T", bound=_Orderable)


def topological_sort(successors: Mapping[T, Collection[T]]) -> list[T]:
    """Sort a graph topologically (dependencies before dependents).

    Given a graph represented as a mapping from nodes to their successors
    (nodes that depend on them), return nodes in an order where each node
    appears before all nodes that depend on it.

    Among nodes that are ready at the same time, the smallest one is emitted
    first, so the result is fully determined by the graph.

    Args:
        successors: Mapping from node to collection of nodes that depend on it.
            An edge (a -> b) means "b depends on a".

    Returns:
        List of nodes in topological order.

    Raises:
        CycleDetectedError: If the graph contains a cycle. No partial order
            is returned.

    Example:
        >>> # a -> b -> c means c depends on b, b depends on a
        >>> topological_sort({"a": ["b"], "b": ["c"], "c": []})
        ['a', 'b', 'c']

    """
    # Calculate in-degree for each node
    indegree: defaultdict[T, int] = defaultdict(int)
    for node, deps in successors.items():
        indegree[node] = indegree.get(node, 0)
        for dep in deps:
            indegree[dep] += 1

    # Start with nodes that have no predecessors (in-degree 0)
    ready = [node for node, deg in indegree.items() if deg == 0]
    heapq.heapify(ready)
    order: list[T] = []

    while ready:
        node = heapq.heappop(ready)
        order.append(node)
        for successor in successors.get(node, ()):
            indegree[successor] -= 1
            if indegree[successor] == 0:
                heapq.heappush(ready, successor)

    if len(order) != len(indegree):
        remaining = [node for node, deg in indegree.items() if deg > 0]
        cycle = find_cycle(successors, remaining)
        logger.debug(f"Sort stopped after {len(order)} of {len(indegree)} nodes")
        raise CycleDetectedError(remaining, cycle)

    logger.debug(f"Sorted {len(order)} nodes")
    return order


def find_cycle(successors: Mapping[T, Collection[T]], nodes: Iterable[T]) -> list[T]:
    """Find one cycle among nodes left over by an incomplete topological sort.

    Every node in ``nodes`` must still have a predecessor inside ``nodes``,
    which holds for the remainder of Kahn's algorithm. Walking predecessors
    backwards from the smallest node therefore always closes a loop.

    Args:
        successors: The same mapping given to ``topological_sort``.
        nodes: Nodes whose in-degree never reached zero.

    Returns:
        The cycle as a closed path in edge direction, e.g. ``["a", "b", "a"]``.
        Empty if ``nodes`` is empty.

    """
    remaining = set(nodes)
    if not remaining:
        return []

    predecessors: dict[T, list[T]] = {node: [] for node in remaining}
    for node in remaining:
        for successor in successors.get(node, ()):
            if successor in remaining:
                predecessors[successor].append(node)

    current = min(remaining)
    path = [current]
    seen = {current: 0}
    while True:
        current = min(predecessors[current])
        if current in seen:
            loop = [*path[seen[current] :], current]
            loop.reverse()
            return loop
        seen[current] = len(path)
        path.append(current)
