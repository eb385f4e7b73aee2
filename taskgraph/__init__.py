#!/usr/bin/env python3
"""
Task Graph

Visualise the tasks of a Taskfile, their dependencies and the sub-tasks they
call as a Graphviz DOT digraph.
"""

__version__ = "0.1.0"
__description__ = "Render Taskfile task graphs as Graphviz DOT diagrams"

import logging
from typing import Optional

from .errors import TaskGraphError

# Get package logger
logger = logging.getLogger(__name__)

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def get_version() -> str:
    """Get the current version string."""
    return __version__


def setup_logging(level: str = "INFO", log_file: Optional[str] = None):
    """Setup logging configuration."""
    numeric_level = getattr(logging, level.upper(), None)
    if not isinstance(numeric_level, int):
        raise ValueError(f'Invalid log level: {level}')

    handlers = [logging.StreamHandler()]

    if log_file:
        handlers.append(logging.FileHandler(log_file))

    logging.basicConfig(
        level=numeric_level,
        format=LOG_FORMAT,
        handlers=handlers,
        force=True
    )

    logger.debug(f"Logging configured at {level} level")


__all__ = [
    'TaskGraphError',
    'get_version',
    'setup_logging',
    '__version__'
]
