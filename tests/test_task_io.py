"""Tests for the task model and JSON task files."""

import json

import pytest

from taskgraph.models.task import Dependency, DependencyType, Task
from taskgraph.utils.task_io import load_tasks, save_tasks, task_from_dict


class TestTaskModel:

    def test_duration_from_dates(self, on_day):
        task = Task(task_id="A", start_date=on_day(0), end_date=on_day(3), estimated_hours=80)

        assert task.get_duration_days() == 3

    def test_duration_from_effort(self):
        assert Task(task_id="A", estimated_hours=20).get_duration_days(working_hours_per_day=8) == 2.5

    def test_duration_default(self, on_day):
        assert Task(task_id="A").get_duration_days() == 1
        # A lone start date is not enough to derive a duration
        assert Task(task_id="B", start_date=on_day(0)).get_duration_days() == 1

    def test_progress_range(self):
        with pytest.raises(ValueError):
            Task(task_id="A", progress=120)

    def test_dependency_type_from_string(self):
        dep = Dependency("A", "start-to-start", 2)

        assert dep.type == DependencyType.START_TO_START

    def test_unknown_dependency_type(self):
        with pytest.raises(ValueError):
            Dependency("A", "finish-to-lunch")


class TestTaskFiles:

    def test_load_tasks(self, tmp_path, on_day):
        path = tmp_path / "tasks.json"
        path.write_text(json.dumps([
            {"task_id": "A", "start_date": "2025-01-06T00:00:00", "end_date": "2025-01-08"},
            {
                "task_id": "B",
                "estimated_hours": 12,
                "progress": 25,
                "dependencies": [{"task_id": "A", "type": "start-to-start", "lag": -1}],
            },
        ]))

        a, b = load_tasks(str(path))

        assert a.start_date == on_day(0)
        assert a.end_date == on_day(2)
        assert b.estimated_hours == 12.0
        assert b.dependencies == [Dependency("A", DependencyType.START_TO_START, -1.0)]

    def test_save_then_load(self, tmp_path, chain_tasks):
        path = tmp_path / "tasks.json"
        save_tasks(chain_tasks, str(path))

        assert load_tasks(str(path)) == chain_tasks

    def test_tasks_under_key(self, tmp_path):
        path = tmp_path / "tasks.json"
        path.write_text(json.dumps({"tasks": [{"task_id": 7}]}))

        assert load_tasks(str(path))[0].task_id == "7"

    def test_duplicate_ids(self, tmp_path):
        path = tmp_path / "tasks.json"
        path.write_text(json.dumps([{"task_id": "A"}, {"task_id": "A"}]))

        with pytest.raises(ValueError, match="Duplicate task id"):
            load_tasks(str(path))

    def test_bad_date(self):
        with pytest.raises(ValueError, match="Invalid date"):
            task_from_dict({"task_id": "A", "start_date": "next tuesday"})

    def test_missing_id(self):
        with pytest.raises(ValueError):
            task_from_dict({"name": "nameless"})

    @pytest.mark.parametrize("dependencies", [
        [{"type": "finish-to-start"}],
        [{"lag": 1}],
        ["A"],
    ])
    def test_dependency_without_task_id(self, dependencies):
        with pytest.raises(ValueError, match="Dependency without task_id in task B"):
            task_from_dict({"task_id": "B", "dependencies": dependencies})

    def test_null_dependencies(self):
        assert task_from_dict({"task_id": "A", "dependencies": None}).dependencies == []

    def test_non_dict_record(self):
        with pytest.raises(ValueError):
            task_from_dict(["A"])

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_tasks(str(tmp_path / "nope.json"))
