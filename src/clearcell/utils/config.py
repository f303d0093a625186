"""
Configuration loading for Clear Cell runs.
"""
import copy
from pathlib import Path
from typing import Any, Dict, Optional, Union
import yaml


DEFAULT_CONFIG: Dict[str, Any] = {
    'board': {
        'rows': 10,
        'cols': 8,
    },
    'simulation': {
        'num_games': 100,
        'clicks_per_step': 1,
        'max_steps': 1000,
        'seed': 42,
        'window_size': 100,
    },
    'rewards': {
        'cell_cleared': 1.0,
        'invalid_click_penalty': -1.0,
        'game_over_penalty': -10.0,
    },
    'logging': {
        'log_dir': 'logs',
        'name': 'simulation',
    },
}


def merge_config(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """Recursively merge ``override`` into a copy of ``base``."""
    merged = copy.deepcopy(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = merge_config(merged[key], value)
        else:
            merged[key] = value
    return merged


def load_config(config_path: Optional[Union[str, Path]] = None) -> Dict[str, Any]:
    """
    Load configuration from a YAML file on top of the defaults.

    Args:
        config_path: YAML file; None returns the defaults

    Returns:
        Configuration dictionary
    """
    if config_path is None:
        return copy.deepcopy(DEFAULT_CONFIG)

    with open(config_path, 'r') as f:
        loaded = yaml.safe_load(f) or {}

    if not isinstance(loaded, dict):
        raise ValueError(f"Config file {config_path} must contain a mapping")

    return merge_config(DEFAULT_CONFIG, loaded)
