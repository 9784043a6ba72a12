"""Tests for the readiness gate."""

from taskgraph.engine.graph import TaskGraph
from taskgraph.engine.readiness import can_task_start
from taskgraph.models.task import Dependency, DependencyType, Task


def _graph(pred, dep_type, extra_deps=()):
    return TaskGraph([
        pred,
        Task(task_id="next", dependencies=[Dependency(pred.task_id, dep_type)] + list(extra_deps)),
    ])


class TestFinishToStart:

    def test_completed_predecessor(self, on_day):
        graph = _graph(Task(task_id="A", progress=100), DependencyType.FINISH_TO_START)

        assert can_task_start(graph, "next", on_day(0))

    def test_unfinished_predecessor_ending_later(self, on_day):
        pred = Task(task_id="A", start_date=on_day(0), end_date=on_day(5), progress=50)
        graph = _graph(pred, DependencyType.FINISH_TO_START)

        assert not can_task_start(graph, "next", on_day(3))

    def test_predecessor_end_date_reached(self, on_day):
        pred = Task(task_id="A", start_date=on_day(0), end_date=on_day(5), progress=50)
        graph = _graph(pred, DependencyType.FINISH_TO_START)

        assert can_task_start(graph, "next", on_day(5))
        assert can_task_start(graph, "next", on_day(6))

    def test_no_end_date_and_not_complete(self, on_day):
        graph = _graph(Task(task_id="A", progress=90), DependencyType.FINISH_TO_START)

        assert not can_task_start(graph, "next", on_day(100))


class TestOtherTypes:

    def test_start_to_start_needs_progress(self, on_day):
        assert not can_task_start(
            _graph(Task(task_id="A", progress=0), DependencyType.START_TO_START), "next", on_day(0)
        )
        assert can_task_start(
            _graph(Task(task_id="A", progress=10), DependencyType.START_TO_START), "next", on_day(0)
        )

    def test_finish_constraints_never_block(self, on_day):
        for dep_type in (DependencyType.FINISH_TO_FINISH, DependencyType.START_TO_FINISH):
            graph = _graph(Task(task_id="A", progress=0), dep_type)
            assert can_task_start(graph, "next", on_day(0))

    def test_all_dependencies_must_allow(self, on_day):
        graph = TaskGraph([
            Task(task_id="done", progress=100),
            Task(task_id="idle", progress=0),
            Task(task_id="next", dependencies=[
                Dependency("done", DependencyType.FINISH_TO_START),
                Dependency("idle", DependencyType.START_TO_START),
            ]),
        ])

        assert not can_task_start(graph, "next", on_day(0))


class TestEdgeCases:

    def test_missing_predecessor_blocks(self, on_day):
        graph = TaskGraph([Task(task_id="next", dependencies=[Dependency("ghost")])])

        assert not can_task_start(graph, "next", on_day(0))

    def test_unknown_task_and_no_dependencies(self, on_day):
        graph = TaskGraph([Task(task_id="A")])

        assert can_task_start(graph, "A", on_day(0))
        assert can_task_start(graph, "unknown", on_day(0))

    def test_default_as_of_is_now(self, on_day):
        pred = Task(task_id="A", start_date=on_day(-30), end_date=on_day(-20), progress=0)
        graph = _graph(pred, DependencyType.FINISH_TO_START)

        # project_start is in the past, so the end date has passed
        assert can_task_start(graph, "next")
