"""Scheduling engine: graph, validation, ordering, CPM and cascade."""

from .cascade import CascadeRescheduler
from .errors import DependencyError
from .graph import TaskGraph
from .readiness import can_task_start
from .scheduler import CriticalPathScheduler
from .sorter import topological_sort
from .validator import find_cycles, validate_graph

__all__ = [
    'CascadeRescheduler',
    'DependencyError',
    'TaskGraph',
    'can_task_start',
    'CriticalPathScheduler',
    'topological_sort',
    'find_cycles',
    'validate_graph',
]
