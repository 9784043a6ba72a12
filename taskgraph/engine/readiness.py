"""Live readiness check: can a task begin as of a given moment."""

from datetime import datetime
from typing import Optional

from ..models.task import Dependency, DependencyType, Task
from .graph import TaskGraph


def can_task_start(graph: TaskGraph, task_id: str, as_of: Optional[datetime] = None) -> bool:
    """True when every dependency of the task permits starting now.

    Unknown tasks and tasks without dependencies can always start; a
    dependency on a missing task always blocks.
    """
    task = graph.get_task(task_id)
    if task is None or not task.dependencies:
        return True

    if as_of is None:
        as_of = datetime.now()

    return all(
        _dependency_allows_start(dep, graph.get_task(dep.task_id), as_of)
        for dep in task.dependencies
    )


def _dependency_allows_start(dep: Dependency, predecessor: Optional[Task], as_of: datetime) -> bool:
    if predecessor is None:
        return False

    if dep.type == DependencyType.FINISH_TO_START:
        if predecessor.is_complete():
            return True
        return predecessor.end_date is not None and predecessor.end_date <= as_of

    if dep.type == DependencyType.START_TO_START:
        return predecessor.progress > 0

    # finish-to-finish and start-to-finish constrain finishing, not starting
    return True
