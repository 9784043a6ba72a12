"""Synthetic project generator."""

import random
from datetime import datetime, timedelta
from typing import List

from ..models.task import Dependency, DependencyType, Task


class TaskGenerator:
    """Generates deterministic acyclic task sets for demos and tests."""

    def __init__(self, seed: int = 42, config: dict = None):
        """Initialize generator with seed for reproducibility."""
        self.seed = seed
        self.random = random.Random(seed)
        self.config = config or {}
        self.generator_config = self.config.get('generator', {})

    def generate_tasks(
        self,
        start_date: datetime,
        count: int = None,
        dependency_probability: float = None,
    ) -> List[Task]:
        """Generate a project whose dependencies only point at earlier tasks."""
        count = count or self.generator_config.get('task_count', 20)
        if dependency_probability is None:
            dependency_probability = self.generator_config.get('dependency_probability', 0.3)
        max_hours = self.generator_config.get('max_estimated_hours', 40)

        tasks = []
        for i in range(count):
            task_id = f"task_{i:03d}"

            # Earlier tasks only, so the graph stays acyclic
            dependencies = []
            for j in range(i):
                if self.random.random() < dependency_probability:
                    dependencies.append(self._random_dependency(f"task_{j:03d}"))

            start = None
            end = None
            estimated_hours = None
            if self.random.random() < 0.3:
                # Some tasks carry explicit dates
                start = start_date + timedelta(days=self.random.randint(0, count))
                end = start + timedelta(days=self.random.randint(1, 5))
            else:
                estimated_hours = float(self.random.randint(2, max_hours))

            tasks.append(Task(
                task_id=task_id,
                name=f"Task {i}",
                start_date=start,
                end_date=end,
                estimated_hours=estimated_hours,
                progress=float(self.random.choice([0, 0, 0, 25, 50, 100])),
                dependencies=dependencies,
            ))

        return tasks

    def _random_dependency(self, predecessor_id: str) -> Dependency:
        roll = self.random.random()
        if roll < 0.7:
            dep_type = DependencyType.FINISH_TO_START
        elif roll < 0.85:
            dep_type = DependencyType.START_TO_START
        elif roll < 0.95:
            dep_type = DependencyType.FINISH_TO_FINISH
        else:
            dep_type = DependencyType.START_TO_FINISH

        lag = 0.0
        if self.random.random() < 0.2:
            lag = float(self.random.randint(-1, 3))

        return Dependency(task_id=predecessor_id, type=dep_type, lag=lag)
