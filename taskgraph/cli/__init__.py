#!/usr/bin/env python3
"""
CLI Interface for Task Graph

Provides the task-graph command and the configuration file handling it uses.
"""

from .config import ConfigError, export_config, load_config, substitute_env_vars
from .config_validator import ConfigurationValidator
from .main import cli, main

__all__ = [
    'ConfigError',
    'ConfigurationValidator',
    'cli',
    'export_config',
    'load_config',
    'main',
    'substitute_env_vars'
]
