"""Task graph: adjacency structures built from a task list."""

import copy
import logging
from collections import deque
from typing import Dict, Iterable, List, Optional, Set, Tuple

from ..models.task import Dependency, DependencyType, Task

logger = logging.getLogger(__name__)


class TaskGraph:
    """Tasks as nodes, dependencies as edges from predecessor to dependent.

    ``adjacency`` maps a predecessor to the set of its dependents and
    ``reverse_adjacency`` maps a dependent to the set of its predecessors.
    Not thread-safe: callers sharing a graph across threads must serialise
    mutations.
    """

    def __init__(self, tasks: Optional[Iterable[Task]] = None):
        """Initialize graph, optionally from a task list."""
        self.tasks: Dict[str, Task] = {}
        self.adjacency: Dict[str, Set[str]] = {}
        self.reverse_adjacency: Dict[str, Set[str]] = {}
        self._edges: Dict[Tuple[str, str], Dependency] = {}

        if tasks is not None:
            self.set_tasks(tasks)

    def set_tasks(self, tasks: Iterable[Task]) -> None:
        """Replace all tasks and rebuild both adjacency mappings."""
        self.tasks.clear()
        self.adjacency.clear()
        self.reverse_adjacency.clear()
        self._edges.clear()

        for task in tasks:
            self.tasks[task.task_id] = task
            self.adjacency[task.task_id] = set()
            self.reverse_adjacency[task.task_id] = set()

        edge_count = 0
        for task in self.tasks.values():
            for dep in task.dependencies:
                # Dangling references stay out of the graph; the validator reports them
                if dep.task_id not in self.tasks:
                    continue

                self.adjacency[dep.task_id].add(task.task_id)
                self.reverse_adjacency[task.task_id].add(dep.task_id)
                # First record for a pair defines the edge
                self._edges.setdefault((dep.task_id, task.task_id), dep)
                edge_count += 1

        logger.debug(f"Built task graph: {len(self.tasks)} tasks, {edge_count} edges")

    @property
    def task_ids(self) -> List[str]:
        """Task identifiers in insertion order."""
        return list(self.tasks)

    def get_task(self, task_id: str) -> Optional[Task]:
        return self.tasks.get(task_id)

    def get_predecessors(self, task_id: str) -> List[str]:
        """Tasks that ``task_id`` depends on."""
        return list(self.reverse_adjacency.get(task_id, ()))

    def get_successors(self, task_id: str) -> List[str]:
        """Tasks that depend on ``task_id``."""
        return list(self.adjacency.get(task_id, ()))

    def get_dependency(self, from_id: str, to_id: str) -> Dependency:
        """Dependency record for an edge; plain finish-to-start if none exists."""
        dep = self._edges.get((from_id, to_id))
        if dep is None:
            return Dependency(task_id=from_id)
        return dep

    def has_path(self, source: str, target: str) -> bool:
        """Breadth-first search along forward adjacency."""
        if source == target:
            return True

        visited = {source}
        queue = deque([source])

        while queue:
            current = queue.popleft()
            for neighbor in self.adjacency.get(current, ()):
                if neighbor == target:
                    return True
                if neighbor not in visited:
                    visited.add(neighbor)
                    queue.append(neighbor)

        return False

    def would_create_cycle(self, from_id: str, to_id: str) -> bool:
        """Whether adding ``from_id -> to_id`` would close a cycle."""
        return self.has_path(to_id, from_id)

    def add_dependency(
        self,
        from_id: str,
        to_id: str,
        dependency_type: DependencyType = DependencyType.FINISH_TO_START,
        lag: float = 0.0,
    ) -> bool:
        """Add an edge ``from_id -> to_id`` if both exist and no cycle results.

        Returns False and leaves the graph untouched otherwise.
        """
        if from_id not in self.tasks or to_id not in self.tasks:
            logger.warning(f"Rejected dependency {from_id} -> {to_id}: unknown task")
            return False

        if self.would_create_cycle(from_id, to_id):
            logger.warning(f"Rejected dependency {from_id} -> {to_id}: would create a cycle")
            return False

        self.adjacency[from_id].add(to_id)
        self.reverse_adjacency[to_id].add(from_id)
        self._edges.setdefault(
            (from_id, to_id),
            Dependency(task_id=from_id, type=dependency_type, lag=lag),
        )
        return True

    def remove_dependency(self, from_id: str, to_id: str) -> bool:
        """Remove an edge; True only if it was present in both mappings."""
        removed_forward = to_id in self.adjacency.get(from_id, ())
        removed_reverse = from_id in self.reverse_adjacency.get(to_id, ())

        if removed_forward:
            self.adjacency[from_id].discard(to_id)
        if removed_reverse:
            self.reverse_adjacency[to_id].discard(from_id)
        if removed_forward or removed_reverse:
            self._edges.pop((from_id, to_id), None)

        return removed_forward and removed_reverse

    def iter_dependencies(self) -> Iterable[Tuple[Task, Dependency]]:
        """Every dependency record as declared on the tasks."""
        for task in self.tasks.values():
            for dep in task.dependencies:
                yield task, dep

    def snapshot(self) -> Tuple[Dict[str, Set[str]], Dict[str, Set[str]]]:
        """Deep copies of both adjacency mappings."""
        return copy.deepcopy(self.adjacency), copy.deepcopy(self.reverse_adjacency)

    def __len__(self) -> int:
        return len(self.tasks)

    def __contains__(self, task_id: str) -> bool:
        return task_id in self.tasks
