"""
Configuration module for the expense tracker.
"""
from .settings import (
    TrackerConfig,
    get_config,
    load_config,
    reload_config
)

__all__ = [
    'TrackerConfig',
    'get_config',
    'load_config',
    'reload_config'
]
