"""
Exceptions shared across the task-graph packages.
"""


class TaskGraphError(Exception):
    """Base exception for task-graph errors."""
    pass
