"""Main entry point for the taskgraph scheduling engine."""

import argparse
import json
import logging
import sys
from datetime import datetime
from pathlib import Path

from taskgraph.engine.cascade import CascadeRescheduler
from taskgraph.engine.errors import DependencyError
from taskgraph.engine.graph import TaskGraph
from taskgraph.engine.scheduler import CriticalPathScheduler
from taskgraph.engine.validator import validate_graph
from taskgraph.evaluation.generator import TaskGenerator
from taskgraph.utils.config import get_config
from taskgraph.utils.datetime_utils import parse_datetime, start_of_day
from taskgraph.utils.logger import setup_logging
from taskgraph.utils.task_io import load_tasks, save_tasks

logger = logging.getLogger(__name__)


def run_validate(tasks_path: str, config: dict, output_dir: Path) -> bool:
    """Validate a task file and save the report."""
    graph = TaskGraph(load_tasks(tasks_path))
    report = validate_graph(graph)

    if report.is_valid:
        print(f"\nAll {len(graph)} tasks are valid")
    else:
        print(f"\nFound {len(report.errors)} problems:")
        for message in report.errors:
            print(f"  - {message}")

    with open(output_dir / "validation.json", 'w') as f:
        json.dump(report.to_dict(), f, indent=2)

    return report.is_valid


def run_schedule(tasks_path: str, config: dict, output_dir: Path, project_start=None):
    """Run a full CPM pass and save the report."""
    graph = TaskGraph(load_tasks(tasks_path))
    scheduler = CriticalPathScheduler(config)
    report = scheduler.build_report(graph, project_start)

    print(f"\nScheduled {len(report.scheduled_tasks)} tasks")
    print(f"Project: {report.project_start} -> {report.project_end}")
    print(f"Critical path: {' -> '.join(report.critical_path.task_ids)}")

    report_path = output_dir / f"schedule_{report.run_id}.json"
    with open(report_path, 'w') as f:
        json.dump(report.to_dict(), f, indent=2, default=str)

    log_path = output_dir / f"schedule_{report.run_id}.log"
    with open(log_path, 'w') as f:
        f.write(report.to_human_readable())

    print(f"\nReport saved to: {report_path}")
    print(f"Human-readable log saved to: {log_path}")

    return report


def run_critical_path(tasks_path: str, config: dict, output_dir: Path, project_start=None):
    """Compute only the critical path."""
    graph = TaskGraph(load_tasks(tasks_path))
    critical_path = CriticalPathScheduler(config).find_critical_path(graph, project_start)

    print(f"\nCritical path: {' -> '.join(critical_path.task_ids) or '(none)'}")
    print(f"Duration (sum of tasks): {critical_path.duration:.1f} days")
    print(f"Span: {critical_path.span_days:.1f} days")
    print(f"Has delays: {critical_path.has_delays}")

    with open(output_dir / "critical_path.json", 'w') as f:
        json.dump(critical_path.to_dict(), f, indent=2)

    return critical_path


def run_cascade(tasks_path: str, config: dict, task_id: str, delta: float, output_path: str = None):
    """Move a task and its dependents, writing the shifted task list."""
    tasks = load_tasks(tasks_path)
    moved = CascadeRescheduler(config).move_task(tasks, task_id, delta)

    output_path = output_path or tasks_path
    save_tasks(moved, output_path)

    changed = sum(1 for before, after in zip(tasks, moved) if before is not after)
    print(f"\nShifted {changed} tasks by {delta:+g} days")
    print(f"Tasks saved to: {output_path}")

    return moved


def run_preview(tasks_path: str, config: dict, task_id: str, delta: float, output_dir: Path):
    """Show where dependents would land without changing anything."""
    tasks = load_tasks(tasks_path)
    previews = CascadeRescheduler(config).preview(tasks, task_id, delta)

    print(f"\n{len(previews)} tasks affected by moving {task_id} {delta:+g} days")
    for p in previews:
        print(f"  {p.task_id}: {p.original_start} -> {p.preview_start}")

    with open(output_dir / "cascade_preview.json", 'w') as f:
        json.dump([p.to_dict() for p in previews], f, indent=2, default=str)

    return previews


def main():
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description="Task dependency validation, CPM scheduling and cascade rescheduling"
    )
    parser.add_argument(
        'command',
        choices=['validate', 'schedule', 'critical-path', 'cascade', 'preview', 'generate-tasks'],
        help='Command to run'
    )
    parser.add_argument(
        '--config',
        type=str,
        default='config.yaml',
        help='Path to configuration file (default: config.yaml)'
    )
    parser.add_argument(
        '--tasks',
        type=str,
        default='tasks.json',
        help='Path to the task list JSON file (default: tasks.json)'
    )
    parser.add_argument(
        '--start',
        type=str,
        default=None,
        help='Project start date, ISO-8601 (default: earliest task start or today)'
    )
    parser.add_argument('--task', type=str, help='Task id for cascade/preview')
    parser.add_argument('--delta', type=float, default=0.0, help='Shift in days for cascade/preview')
    parser.add_argument('--output', type=str, default=None, help='Output task file for cascade')
    parser.add_argument(
        '--output-dir',
        type=str,
        default='results',
        help='Directory for reports (default: results)'
    )

    args = parser.parse_args()

    config = get_config(args.config)
    log_config = config.get('logging', {})
    setup_logging(log_config.get('level', 'INFO'), log_config.get('file'))

    output_dir = Path(args.output_dir)
    output_dir.mkdir(exist_ok=True)

    try:
        project_start = parse_datetime(args.start)

        if args.command in ('cascade', 'preview') and not args.task:
            parser.error(f"--task is required for {args.command}")

        if args.command == 'validate':
            if not run_validate(args.tasks, config, output_dir):
                sys.exit(1)
        elif args.command == 'schedule':
            run_schedule(args.tasks, config, output_dir, project_start)
        elif args.command == 'critical-path':
            run_critical_path(args.tasks, config, output_dir, project_start)
        elif args.command == 'cascade':
            run_cascade(args.tasks, config, args.task, args.delta, args.output)
        elif args.command == 'preview':
            run_preview(args.tasks, config, args.task, args.delta, output_dir)
        elif args.command == 'generate-tasks':
            generator = TaskGenerator(seed=42, config=config)
            today = project_start or start_of_day(datetime.now())
            tasks = generator.generate_tasks(today)
            save_tasks(tasks, args.tasks)
            print(f"Generated {len(tasks)} tasks")
            print(f"Tasks saved to: {args.tasks}")
    except (DependencyError, FileNotFoundError, ValueError) as e:
        logger.error(str(e))
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
