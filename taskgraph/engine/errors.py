"""Engine exceptions."""

from typing import List, Optional

from ..models.schedule import ValidationReport


class DependencyError(ValueError):
    """Raised when an operation needs a valid graph and the graph is not.

    ``kind`` is one of ``'circular'``, ``'missing'`` or ``'invalid'``.
    """

    def __init__(
        self,
        message: str,
        kind: str,
        task_ids: List[str],
        report: Optional[ValidationReport] = None,
    ):
        super().__init__(message)
        self.kind = kind
        self.task_ids = task_ids
        self.report = report

    @classmethod
    def from_report(cls, report: ValidationReport) -> "DependencyError":
        """Build an error naming the cycles or missing ids in a report."""
        if report.cycles:
            kind = 'circular'
            task_ids = []
            for cycle in report.cycles:
                for task_id in cycle:
                    if task_id not in task_ids:
                        task_ids.append(task_id)
        elif report.invalid_task_ids:
            kind = 'missing'
            task_ids = list(report.invalid_task_ids)
        else:
            kind = 'invalid'
            task_ids = []

        message = f"Invalid dependencies: {', '.join(report.errors)}"
        return cls(message, kind, task_ids, report)
