"""Scheduling result models."""

from dataclasses import dataclass, field, asdict
from datetime import datetime
from typing import Dict, List, Optional, Any


@dataclass
class ScheduledTask:
    """CPM timings computed for a single task."""

    task_id: str
    early_start: datetime
    early_finish: datetime
    late_start: datetime
    late_finish: datetime
    duration_days: float
    total_float: float = 0.0
    free_float: float = 0.0
    is_critical: bool = False
    predecessors: List[str] = field(default_factory=list)
    successors: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON export."""
        return asdict(self)


@dataclass
class ValidationReport:
    """Outcome of validating a task graph."""

    is_valid: bool
    cycles: List[List[str]] = field(default_factory=list)
    invalid_task_ids: List[str] = field(default_factory=list)
    errors: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class CriticalPath:
    """Critical tasks ordered by early start.

    ``duration`` is the sum of the critical tasks' own durations. When several
    critical chains run in parallel it overstates the wall-clock length; use
    ``span_days`` for that.
    """

    task_ids: List[str]
    duration: float
    has_delays: bool
    total_slack: float
    span_days: float = 0.0

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class CascadePreview:
    """Projected placement of a dependent while its predecessor is dragged."""

    task_id: str
    original_start: datetime
    preview_start: datetime
    original_position: float
    preview_position: float
    delta: float

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class ScheduleReport:
    """Complete record of a scheduling run."""

    run_id: str
    timestamp: datetime
    project_start: datetime
    project_end: datetime
    config: Dict[str, Any]
    scheduled_tasks: List[ScheduledTask]
    critical_path: CriticalPath
    summary_stats: Dict[str, Any]
    validation: Optional[ValidationReport] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert report to dictionary for JSON export."""
        return asdict(self)

    def to_human_readable(self) -> str:
        """Generate human-readable log format."""
        lines = [
            f"=== Scheduling Run: {self.run_id} ===",
            f"Timestamp: {self.timestamp}",
            f"Project start: {self.project_start}",
            f"Project end: {self.project_end}",
            f"Dependencies valid: {self.validation.is_valid if self.validation else 'unchecked'}",
            "",
            "Configuration:",
        ]

        for key, value in self.config.items():
            lines.append(f"  {key}: {value}")

        lines.extend([
            "",
            "Scheduled Tasks:",
        ])

        for st in self.scheduled_tasks:
            marker = " [CRITICAL]" if st.is_critical else ""
            lines.append(f"  Task {st.task_id}{marker}:")
            lines.append(f"    Early: {st.early_start} -> {st.early_finish}")
            lines.append(f"    Late:  {st.late_start} -> {st.late_finish}")
            lines.append(f"    Duration: {st.duration_days:.2f} days")
            lines.append(f"    Total float: {st.total_float:.1f} days")
            lines.append(f"    Free float: {st.free_float:.1f} days")
            if st.predecessors:
                lines.append(f"    Predecessors: {', '.join(st.predecessors)}")

        lines.extend([
            "",
            "Critical Path:",
            f"  {' -> '.join(self.critical_path.task_ids) or '(none)'}",
            f"  Duration (sum): {self.critical_path.duration:.1f} days",
            f"  Span: {self.critical_path.span_days:.1f} days",
            f"  Has delays: {self.critical_path.has_delays}",
            "",
            "Summary Statistics:",
        ])

        for key, value in self.summary_stats.items():
            lines.append(f"  {key}: {value}")

        lines.append("=" * 50)

        return "\n".join(lines)
