"""Tests for configuration loading."""

import json
import logging

import pytest

from taskgraph.utils.config import get_config, get_default_config, load_config, merge_config
from taskgraph.utils.logger import LOG_FORMAT, setup_logging


class TestConfig:

    def test_defaults(self):
        config = get_default_config()

        assert config['scheduling']['working_hours_per_day'] == 8
        assert config['scheduling']['critical_float_epsilon'] == 0.1
        assert config['preview']['day_width'] == 1.0

    def test_yaml_overrides_merge_with_defaults(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("scheduling:\n  working_hours_per_day: 6\n")

        config = load_config(str(path))

        assert config['scheduling']['working_hours_per_day'] == 6
        assert config['scheduling']['critical_float_epsilon'] == 0.1
        assert config['preview']['day_width'] == 1.0

    def test_json_config(self, tmp_path):
        path = tmp_path / "config.json"
        path.write_text(json.dumps({'preview': {'day_width': 24}}))

        assert load_config(str(path))['preview']['day_width'] == 24

    def test_empty_yaml_gives_defaults(self, tmp_path):
        path = tmp_path / "config.yml"
        path.write_text("")

        assert load_config(str(path)) == get_default_config()

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_config(str(tmp_path / "nope.yaml"))

    def test_unsupported_format(self, tmp_path):
        path = tmp_path / "config.toml"
        path.write_text("")

        with pytest.raises(ValueError):
            load_config(str(path))

    def test_get_config_falls_back_to_defaults(self, tmp_path):
        assert get_config(str(tmp_path / "nope.yaml")) == get_default_config()
        assert get_config(None) == get_default_config()

    def test_merge_does_not_touch_base(self):
        base = get_default_config()
        merge_config(base, {'scheduling': {'float_precision': 3}})

        assert base['scheduling']['float_precision'] == 1


class TestLogging:

    def test_setup_logging_arguments(self, monkeypatch, tmp_path):
        calls = {}
        monkeypatch.setattr(logging, "basicConfig", lambda **kwargs: calls.update(kwargs))

        logger = setup_logging("debug", str(tmp_path / "run.log"))

        assert logger.name == "taskgraph"
        assert calls['level'] == logging.DEBUG
        assert calls['format'] == LOG_FORMAT
        assert len(calls['handlers']) == 2
        for handler in calls['handlers']:
            if isinstance(handler, logging.FileHandler):
                handler.close()

    def test_unknown_level_falls_back_to_info(self, monkeypatch):
        calls = {}
        monkeypatch.setattr(logging, "basicConfig", lambda **kwargs: calls.update(kwargs))

        setup_logging("chatty")

        assert calls['level'] == logging.INFO
        assert len(calls['handlers']) == 1
