"""Critical Path Method scheduling engine."""

import logging
import uuid
from datetime import datetime
from typing import Any, Dict, List, Optional

from ..models.schedule import CriticalPath, ScheduledTask, ScheduleReport
from ..models.task import DependencyType
from ..utils.datetime_utils import add_days, days_between, start_of_day
from .errors import DependencyError
from .graph import TaskGraph
from .sorter import topological_sort
from .validator import validate_graph

logger = logging.getLogger(__name__)


class CriticalPathScheduler:
    """Two-pass (forward/backward) CPM over a validated task graph."""

    def __init__(self, config: Optional[dict] = None):
        """Initialize scheduler with configuration."""
        self.config = config or {}
        self.scheduling_config = self.config.get('scheduling', {})
        self.working_hours_per_day = self.scheduling_config.get('working_hours_per_day', 8)
        self.critical_epsilon = self.scheduling_config.get('critical_float_epsilon', 0.1)
        self.float_precision = self.scheduling_config.get('float_precision', 1)
        self.default_duration_days = self.scheduling_config.get('default_duration_days', 1)

    def calculate_schedule(
        self,
        graph: TaskGraph,
        project_start: Optional[datetime] = None,
    ) -> Dict[str, ScheduledTask]:
        """Compute early/late dates, float and criticality for every task.

        Raises DependencyError if the graph has cycles or dangling references.
        """
        report = validate_graph(graph)
        if not report.is_valid:
            raise DependencyError.from_report(report)

        if project_start is None:
            project_start = self._default_project_start(graph)

        order = topological_sort(graph, check=False)
        durations = {
            task_id: graph.tasks[task_id].get_duration_days(
                self.working_hours_per_day, self.default_duration_days
            )
            for task_id in order
        }

        # All timings are day offsets from project_start
        early_start: Dict[str, float] = {}
        early_finish: Dict[str, float] = {}

        for task_id in order:
            start = 0.0
            for pred_id in graph.reverse_adjacency[task_id]:
                dep = graph.get_dependency(pred_id, task_id)
                bound = self._forward_bound(
                    dep.type,
                    dep.lag,
                    early_start[pred_id],
                    early_finish[pred_id],
                    durations[task_id],
                )
                start = max(start, bound)

            early_start[task_id] = start
            early_finish[task_id] = start + durations[task_id]

        project_end = max(early_finish.values()) if early_finish else 0.0

        late_start: Dict[str, float] = {}
        late_finish: Dict[str, float] = {}

        for task_id in reversed(order):
            finish = project_end
            for succ_id in graph.adjacency[task_id]:
                dep = graph.get_dependency(task_id, succ_id)
                bound = self._backward_bound(
                    dep.type,
                    dep.lag,
                    late_start[succ_id],
                    late_finish[succ_id],
                    durations[task_id],
                )
                finish = min(finish, bound)

            late_finish[task_id] = finish
            late_start[task_id] = finish - durations[task_id]

        scheduled: Dict[str, ScheduledTask] = {}
        for task_id in order:
            successors = graph.get_successors(task_id)
            total_float = late_start[task_id] - early_start[task_id]

            free_float = 0.0
            if successors:
                earliest_successor_start = min(early_start[s] for s in successors)
                free_float = earliest_successor_start - early_finish[task_id]

            scheduled[task_id] = ScheduledTask(
                task_id=task_id,
                early_start=add_days(project_start, early_start[task_id]),
                early_finish=add_days(project_start, early_finish[task_id]),
                late_start=add_days(project_start, late_start[task_id]),
                late_finish=add_days(project_start, late_finish[task_id]),
                duration_days=durations[task_id],
                total_float=self._round_float(total_float),
                free_float=self._round_float(free_float),
                is_critical=total_float <= self.critical_epsilon,
                predecessors=graph.get_predecessors(task_id),
                successors=successors,
            )

        logger.info(
            f"Scheduled {len(scheduled)} tasks, project length {project_end:.1f} days, "
            f"{sum(1 for s in scheduled.values() if s.is_critical)} critical"
        )
        return scheduled

    @staticmethod
    def _forward_bound(
        dep_type: DependencyType,
        lag: float,
        pred_start: float,
        pred_finish: float,
        duration: float,
    ) -> float:
        """Earliest start a single predecessor allows for its dependent."""
        if dep_type == DependencyType.START_TO_START:
            return pred_start + lag
        if dep_type == DependencyType.FINISH_TO_FINISH:
            return pred_finish + lag - duration
        if dep_type == DependencyType.START_TO_FINISH:
            return pred_start + lag - duration
        return pred_finish + lag

    @staticmethod
    def _backward_bound(
        dep_type: DependencyType,
        lag: float,
        succ_late_start: float,
        succ_late_finish: float,
        duration: float,
    ) -> float:
        """Latest finish a single successor allows for its predecessor."""
        if dep_type == DependencyType.START_TO_START:
            return succ_late_start - lag + duration
        if dep_type == DependencyType.FINISH_TO_FINISH:
            return succ_late_finish - lag
        if dep_type == DependencyType.START_TO_FINISH:
            return succ_late_finish - lag + duration
        return succ_late_start - lag

    def _round_float(self, value: float) -> float:
        return max(0.0, round(value, self.float_precision))

    def _default_project_start(self, graph: TaskGraph) -> datetime:
        """Earliest explicit task start, or today at midnight."""
        starts = [t.start_date for t in graph.tasks.values() if t.start_date is not None]
        if starts:
            return min(starts)
        return start_of_day(datetime.now())

    def find_critical_path(
        self,
        graph: TaskGraph,
        project_start: Optional[datetime] = None,
        scheduled: Optional[Dict[str, ScheduledTask]] = None,
    ) -> CriticalPath:
        """Critical tasks in early-start order, with summary figures."""
        if scheduled is None:
            scheduled = self.calculate_schedule(graph, project_start)

        critical = sorted(
            (s for s in scheduled.values() if s.is_critical),
            key=lambda s: s.early_start,
        )

        # Naive sum of durations; overstates parallel critical chains
        duration = sum(days_between(s.early_start, s.early_finish) for s in critical)

        has_delays = False
        for s in critical:
            task = graph.get_task(s.task_id)
            if task is not None and task.end_date is not None and task.end_date < s.early_finish:
                has_delays = True
                break

        span_days = 0.0
        if critical:
            span_days = days_between(
                min(s.early_start for s in critical),
                max(s.early_finish for s in critical),
            )

        return CriticalPath(
            task_ids=[s.task_id for s in critical],
            duration=round(duration, 1),
            has_delays=has_delays,
            total_slack=round(sum(s.total_float for s in critical), 1),
            span_days=round(span_days, 1),
        )

    def build_report(
        self,
        graph: TaskGraph,
        project_start: Optional[datetime] = None,
    ) -> ScheduleReport:
        """Run a full scheduling pass and package it as a report."""
        run_id = str(uuid.uuid4())[:8]

        validation = validate_graph(graph)

        if project_start is None:
            project_start = self._default_project_start(graph)

        scheduled = self.calculate_schedule(graph, project_start)
        critical_path = self.find_critical_path(graph, project_start, scheduled)

        if scheduled:
            project_end = max(s.early_finish for s in scheduled.values())
        else:
            project_end = project_start

        return ScheduleReport(
            run_id=run_id,
            timestamp=datetime.now(),
            project_start=project_start,
            project_end=project_end,
            config={
                'working_hours_per_day': self.working_hours_per_day,
                'critical_float_epsilon': self.critical_epsilon,
                'float_precision': self.float_precision,
            },
            scheduled_tasks=list(scheduled.values()),
            critical_path=critical_path,
            summary_stats=self._compute_summary_stats(scheduled, project_start, project_end),
            validation=validation,
        )

    def _compute_summary_stats(
        self,
        scheduled: Dict[str, ScheduledTask],
        project_start: datetime,
        project_end: datetime,
    ) -> Dict[str, Any]:
        """Compute summary statistics for the report."""
        floats: List[float] = [s.total_float for s in scheduled.values()]
        critical_count = sum(1 for s in scheduled.values() if s.is_critical)

        return {
            'tasks_total': len(scheduled),
            'tasks_critical': critical_count,
            'project_duration_days': round(days_between(project_start, project_end), 2),
            'average_total_float': (sum(floats) / len(floats)) if floats else 0.0,
            'max_total_float': max(floats) if floats else 0.0,
        }
