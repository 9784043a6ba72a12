"""Topological ordering of a task graph (Kahn's algorithm)."""

import logging
from collections import deque
from typing import Dict, List

from .errors import DependencyError
from .graph import TaskGraph
from .validator import validate_graph

logger = logging.getLogger(__name__)


def topological_sort(graph: TaskGraph, check: bool = True) -> List[str]:
    """Return task ids so that every predecessor precedes its dependents.

    Tasks that become ready at the same time keep their enqueue order; that
    order is not meaningful and callers should not rely on it.
    """
    if check:
        report = validate_graph(graph)
        if not report.is_valid:
            raise DependencyError.from_report(report)

    in_degree: Dict[str, int] = {}
    queue = deque()

    for task_id in graph.task_ids:
        in_degree[task_id] = len(graph.reverse_adjacency.get(task_id, ()))
        if in_degree[task_id] == 0:
            queue.append(task_id)

    order: List[str] = []
    while queue:
        current = queue.popleft()
        order.append(current)

        for dependent in graph.adjacency.get(current, ()):
            in_degree[dependent] -= 1
            if in_degree[dependent] == 0:
                queue.append(dependent)

    if len(order) < len(graph):
        remaining = [task_id for task_id in graph.task_ids if in_degree[task_id] > 0]
        raise DependencyError(
            f"Circular dependency among tasks: {', '.join(remaining)}",
            'circular',
            remaining,
        )

    logger.debug(f"Topological order: {order}")
    return order
