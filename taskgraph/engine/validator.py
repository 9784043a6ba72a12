"""Dependency validation: dangling references, self-dependencies and cycles."""

import logging
from typing import List, Optional, Set

from ..models.schedule import ValidationReport
from .graph import TaskGraph

logger = logging.getLogger(__name__)


def validate_graph(graph: TaskGraph) -> ValidationReport:
    """Check a task graph for invalid references, self-dependencies and cycles."""
    errors: List[str] = []
    invalid_task_ids: List[str] = []

    for task, dep in graph.iter_dependencies():
        if dep.task_id not in graph:
            if dep.task_id not in invalid_task_ids:
                invalid_task_ids.append(dep.task_id)
            errors.append(f"Task {task.task_id} depends on non-existent task {dep.task_id}")

    # Read from the graph so that remove_dependency clears it
    for task_id, predecessors in graph.reverse_adjacency.items():
        if task_id in predecessors:
            errors.append(f"Task {task_id} has self-dependency")

    cycles = find_cycles(graph)
    for cycle in cycles:
        errors.append(f"Circular dependency detected: {' -> '.join(cycle)}")

    for message in errors:
        logger.warning(message)

    report = ValidationReport(
        is_valid=not errors,
        cycles=cycles,
        invalid_task_ids=invalid_task_ids,
        errors=errors,
    )
    logger.debug(
        f"Validated {len(graph)} tasks: valid={report.is_valid}, "
        f"{len(cycles)} cycles, {len(invalid_task_ids)} invalid references"
    )
    return report


def find_cycles(graph: TaskGraph) -> List[List[str]]:
    """Depth-first search from every unvisited task, one witness per offending root.

    Each witness lists the path from the first repeated task back to itself,
    e.g. ``['a', 'b', 'a']``.
    """
    visited: Set[str] = set()
    cycles: List[List[str]] = []

    for root in graph.task_ids:
        if root in visited:
            continue
        cycle = _find_cycle_from(graph, root, visited)
        if cycle is not None:
            cycles.append(cycle)

    return cycles


def _find_cycle_from(graph: TaskGraph, root: str, visited: Set[str]) -> Optional[List[str]]:
    """Iterative DFS keeping the current path; stops at the first back edge."""
    path: List[str] = [root]
    on_path: Set[str] = {root}
    stack = [(root, iter(graph.adjacency.get(root, ())))]
    visited.add(root)

    while stack:
        node, neighbors = stack[-1]
        advanced = False

        for neighbor in neighbors:
            if neighbor in on_path:
                start = path.index(neighbor)
                return path[start:] + [neighbor]
            if neighbor not in visited:
                visited.add(neighbor)
                path.append(neighbor)
                on_path.add(neighbor)
                stack.append((neighbor, iter(graph.adjacency.get(neighbor, ()))))
                advanced = True
                break

        if not advanced:
            stack.pop()
            path.pop()
            on_path.discard(node)

    return None
