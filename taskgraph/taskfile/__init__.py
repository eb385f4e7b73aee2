"""Taskfile loading."""

from .models import Command, Dependency, Task, Taskfile
from .loader import DEFAULT_TASKFILES, TaskfileError, TaskfileReader, find_taskfile, load

__all__ = [
    'Command',
    'DEFAULT_TASKFILES',
    'Dependency',
    'Task',
    'Taskfile',
    'TaskfileError',
    'TaskfileReader',
    'find_taskfile',
    'load'
]
