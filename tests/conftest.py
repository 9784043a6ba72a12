"""Shared fixtures."""

from datetime import datetime, timedelta

import pytest

from taskgraph.models.task import Dependency, DependencyType, Task

PROJECT_START = datetime(2025, 1, 6)


def day(n: float) -> datetime:
    return PROJECT_START + timedelta(days=n)


@pytest.fixture
def project_start():
    return PROJECT_START


@pytest.fixture
def on_day():
    """Datetime ``n`` days after the project start."""
    return day


@pytest.fixture
def chain_tasks():
    """A [0,2] -> B [2,4] -> (lag 1) C [5,7], all finish-to-start."""
    return [
        Task(task_id="A", start_date=day(0), end_date=day(2)),
        Task(
            task_id="B",
            start_date=day(2),
            end_date=day(4),
            dependencies=[Dependency("A", DependencyType.FINISH_TO_START, 0)],
        ),
        Task(
            task_id="C",
            start_date=day(5),
            end_date=day(7),
            dependencies=[Dependency("B", DependencyType.FINISH_TO_START, 1)],
        ),
    ]


@pytest.fixture
def diamond_tasks():
    """A -> B (3d) and A -> C (1d), both feeding D; durations from effort."""
    return [
        Task(task_id="A", estimated_hours=16),
        Task(task_id="B", estimated_hours=24, dependencies=[Dependency("A")]),
        Task(task_id="C", estimated_hours=8, dependencies=[Dependency("A")]),
        Task(task_id="D", estimated_hours=8, dependencies=[Dependency("B"), Dependency("C")]),
    ]
