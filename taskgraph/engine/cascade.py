"""Cascade rescheduling: shift every transitive dependent by the same delta."""

import logging
from collections import deque
from dataclasses import replace
from datetime import datetime
from typing import Dict, List, Optional

from ..models.schedule import CascadePreview
from ..models.task import Task
from ..utils.datetime_utils import add_days, days_between
from .graph import TaskGraph

logger = logging.getLogger(__name__)


class CascadeRescheduler:
    """Propagates a date shift along forward adjacency.

    Dependents keep whatever gap they had to their predecessors; nothing is
    recomputed through CPM.
    """

    def __init__(self, config: Optional[dict] = None):
        """Initialize rescheduler with configuration."""
        self.config = config or {}
        self.preview_config = self.config.get('preview', {})
        self.day_width = self.preview_config.get('day_width', 1.0)

    def affected_task_ids(self, graph: TaskGraph, task_id: str) -> List[str]:
        """All transitive dependents of ``task_id`` in breadth-first order."""
        visited = {task_id}
        affected: List[str] = []
        queue = deque([task_id])

        while queue:
            current = queue.popleft()
            for dependent in graph.adjacency.get(current, ()):
                if dependent in visited:
                    continue
                visited.add(dependent)
                affected.append(dependent)
                queue.append(dependent)

        return affected

    def cascade(self, tasks: List[Task], task_id: str, delta_days: float) -> List[Task]:
        """Return a new task list with every dependent of ``task_id`` shifted.

        The task itself is not moved; see ``move_task``. Input tasks are not
        modified.
        """
        if delta_days == 0:
            return list(tasks)

        graph = TaskGraph(tasks)
        if task_id not in graph:
            logger.warning(f"Cascade skipped: unknown task {task_id}")
            return list(tasks)

        shifted: Dict[str, Task] = {}
        for dependent_id in self.affected_task_ids(graph, task_id):
            task = graph.tasks[dependent_id]
            if task.start_date is None and task.end_date is None:
                continue
            shifted[dependent_id] = self._shift(task, delta_days)

        logger.info(f"Cascaded {delta_days:+g} days from {task_id} to {len(shifted)} dependents")
        return [shifted.get(task.task_id, task) for task in tasks]

    def move_task(self, tasks: List[Task], task_id: str, delta_days: float) -> List[Task]:
        """Shift ``task_id`` itself and cascade the same delta to its dependents."""
        moved = [
            self._shift(task, delta_days) if task.task_id == task_id else task
            for task in tasks
        ]
        return self.cascade(moved, task_id, delta_days)

    def preview(
        self,
        tasks: List[Task],
        task_id: str,
        delta_days: float,
        timeline_start: Optional[datetime] = None,
    ) -> List[CascadePreview]:
        """Projected positions of dated dependents for a candidate delta.

        Positions are ``days since timeline_start * day_width``, measured from
        the task's start date or, when it has none, its end date. Nothing is
        mutated and no CPM pass runs.
        """
        if delta_days == 0:
            return []

        graph = TaskGraph(tasks)
        if task_id not in graph:
            return []

        if timeline_start is None:
            anchors = [self._anchor(t) for t in tasks if self._anchor(t) is not None]
            if not anchors:
                return []
            timeline_start = min(anchors)

        previews: List[CascadePreview] = []
        for dependent_id in self.affected_task_ids(graph, task_id):
            anchor = self._anchor(graph.tasks[dependent_id])
            if anchor is None:
                continue

            original_position = days_between(timeline_start, anchor) * self.day_width
            previews.append(CascadePreview(
                task_id=dependent_id,
                original_start=anchor,
                preview_start=add_days(anchor, delta_days),
                original_position=original_position,
                preview_position=original_position + delta_days * self.day_width,
                delta=delta_days,
            ))

        return previews

    @staticmethod
    def _anchor(task: Task) -> Optional[datetime]:
        return task.start_date or task.end_date

    @staticmethod
    def _shift(task: Task, delta_days: float) -> Task:
        return replace(
            task,
            start_date=add_days(task.start_date, delta_days) if task.start_date else None,
            end_date=add_days(task.end_date, delta_days) if task.end_date else None,
        )
