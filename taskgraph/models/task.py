"""Task and dependency data models."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import List, Optional


class DependencyType(str, Enum):
    """How a dependency edge binds the predecessor's and dependent's events."""

    FINISH_TO_START = "finish-to-start"
    START_TO_START = "start-to-start"
    FINISH_TO_FINISH = "finish-to-finish"
    START_TO_FINISH = "start-to-finish"


@dataclass
class Dependency:
    """A precedence link to a predecessor task."""

    task_id: str
    type: DependencyType = DependencyType.FINISH_TO_START
    lag: float = 0.0

    def __post_init__(self):
        """Accept plain strings for the dependency type."""
        if not isinstance(self.type, DependencyType):
            try:
                self.type = DependencyType(self.type)
            except ValueError:
                raise ValueError(f"Unknown dependency type: {self.type}")


@dataclass
class Task:
    """Represents a schedulable task with its dependency list."""

    task_id: str
    name: Optional[str] = None
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None
    estimated_hours: Optional[float] = None
    progress: float = 0.0
    dependencies: List[Dependency] = field(default_factory=list)

    def __post_init__(self):
        """Validate progress range."""
        if not 0 <= self.progress <= 100:
            raise ValueError(
                f"Task {self.task_id}: progress must be between 0 and 100, got {self.progress}"
            )

    def get_duration_days(
        self,
        working_hours_per_day: float = 8,
        default_days: float = 1.0,
    ) -> float:
        """Duration in days: explicit dates, else effort, else the default."""
        if self.start_date is not None and self.end_date is not None:
            return (self.end_date - self.start_date).total_seconds() / (24 * 3600)

        if self.estimated_hours:
            return self.estimated_hours / working_hours_per_day

        return default_days

    def is_complete(self) -> bool:
        """Whether progress has reached 100%."""
        return self.progress >= 100
