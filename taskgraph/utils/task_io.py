"""Reading and writing task lists as JSON."""

import json
from pathlib import Path
from typing import Any, Dict, List

from ..models.task import Dependency, Task
from .datetime_utils import parse_datetime


def _dependency_from_dict(dep: Any, task_id: Any) -> Dependency:
    if not isinstance(dep, dict) or 'task_id' not in dep:
        raise ValueError(f"Dependency without task_id in task {task_id}")

    return Dependency(
        task_id=str(dep['task_id']),
        type=dep.get('type', 'finish-to-start'),
        lag=float(dep.get('lag', 0) or 0),
    )


def task_from_dict(data: Dict[str, Any]) -> Task:
    """Build a Task from a plain dictionary."""
    if not isinstance(data, dict) or 'task_id' not in data:
        raise ValueError(f"Task record without task_id: {data}")

    dependencies = [
        _dependency_from_dict(dep, data['task_id'])
        for dep in data.get('dependencies') or []
    ]

    estimated_hours = data.get('estimated_hours')

    return Task(
        task_id=str(data['task_id']),
        name=data.get('name'),
        start_date=parse_datetime(data.get('start_date')),
        end_date=parse_datetime(data.get('end_date')),
        estimated_hours=float(estimated_hours) if estimated_hours is not None else None,
        progress=float(data.get('progress', 0) or 0),
        dependencies=dependencies,
    )


def task_to_dict(task: Task) -> Dict[str, Any]:
    """Inverse of task_from_dict, with ISO-8601 dates."""
    return {
        'task_id': task.task_id,
        'name': task.name,
        'start_date': task.start_date.isoformat() if task.start_date else None,
        'end_date': task.end_date.isoformat() if task.end_date else None,
        'estimated_hours': task.estimated_hours,
        'progress': task.progress,
        'dependencies': [
            {'task_id': dep.task_id, 'type': dep.type.value, 'lag': dep.lag}
            for dep in task.dependencies
        ],
    }


def load_tasks(tasks_path: str) -> List[Task]:
    """Load a JSON list of task records."""
    path = Path(tasks_path)

    if not path.exists():
        raise FileNotFoundError(f"Tasks file not found: {tasks_path}")

    with open(path, 'r') as f:
        data = json.load(f)

    if isinstance(data, dict):
        data = data.get('tasks', [])
    if not isinstance(data, list):
        raise ValueError(f"Expected a list of tasks in {tasks_path}")

    tasks = [task_from_dict(item) for item in data]

    seen = set()
    for task in tasks:
        if task.task_id in seen:
            raise ValueError(f"Duplicate task id: {task.task_id}")
        seen.add(task.task_id)

    return tasks


def save_tasks(tasks: List[Task], tasks_path: str) -> None:
    """Write tasks as a JSON list."""
    with open(tasks_path, 'w') as f:
        json.dump([task_to_dict(t) for t in tasks], f, indent=2)
