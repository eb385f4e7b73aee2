"""Data models for a loaded Taskfile."""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional, Tuple


@dataclass
class Dependency:
    """A task listed under another task's `deps`."""
    task: str


@dataclass
class Command:
    """A single entry under a task's `cmds`.

    Either a shell command or a call to another task.
    """
    cmd: str = ""
    task: str = ""


@dataclass
class Task:
    """A task definition."""
    name: str
    desc: str = ""
    deps: List[Dependency] = field(default_factory=list)
    cmds: List[Command] = field(default_factory=list)

    def called_tasks(self) -> List[str]:
        """Names of the tasks invoked from this task's commands."""
        return [c.task for c in self.cmds if c.task]


@dataclass
class Taskfile:
    """A Taskfile with all of its includes merged in."""
    path: Optional[Path] = None
    tasks: Dict[str, Task] = field(default_factory=dict)

    def sorted_tasks(self) -> List[Tuple[str, Task]]:
        """Tasks as (name, task) pairs in alphanumeric order of name."""
        return sorted(self.tasks.items())

    def __len__(self) -> int:
        return len(self.tasks)
