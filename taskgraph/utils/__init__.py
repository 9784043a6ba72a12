"""Utility functions."""

from .config import get_config, get_default_config, load_config
from .datetime_utils import add_days, days_between, parse_datetime
from .logger import setup_logging
from .task_io import load_tasks, save_tasks, task_from_dict, task_to_dict

__all__ = [
    'get_config',
    'get_default_config',
    'load_config',
    'add_days',
    'days_between',
    'parse_datetime',
    'setup_logging',
    'load_tasks',
    'save_tasks',
    'task_from_dict',
    'task_to_dict',
]
