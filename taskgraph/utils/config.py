"""Configuration management."""

import copy
import json
import yaml
from pathlib import Path
from typing import Dict, Any, Optional


def load_config(config_path: str) -> Dict[str, Any]:
    """Load configuration from YAML or JSON file and merge it over the defaults."""
    path = Path(config_path)

    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(path, 'r') as f:
        if path.suffix.lower() in ['.yaml', '.yml']:
            loaded = yaml.safe_load(f)
        elif path.suffix.lower() == '.json':
            loaded = json.load(f)
        else:
            raise ValueError(f"Unsupported config file format: {path.suffix}")

    return merge_config(get_default_config(), loaded or {})


def merge_config(base: Dict[str, Any], overrides: Dict[str, Any]) -> Dict[str, Any]:
    """Merge override sections into a copy of base, one level deep."""
    merged = copy.deepcopy(base)

    for section, values in overrides.items():
        if isinstance(values, dict) and isinstance(merged.get(section), dict):
            merged[section].update(values)
        else:
            merged[section] = values

    return merged


def get_config(config_path: Optional[str] = None) -> Dict[str, Any]:
    """Config from file when it exists, defaults otherwise."""
    if config_path and Path(config_path).exists():
        return load_config(config_path)
    return get_default_config()


def get_default_config() -> Dict[str, Any]:
    """Get default configuration."""
    return {
        'scheduling': {
            'working_hours_per_day': 8,
            'critical_float_epsilon': 0.1,
            'float_precision': 1,
            'default_duration_days': 1,
        },
        'preview': {
            'day_width': 1.0,
        },
        'generator': {
            'task_count': 20,
            'dependency_probability': 0.3,
            'max_estimated_hours': 40,
        },
        'logging': {
            'level': 'INFO',
            'file': None,
        },
    }
