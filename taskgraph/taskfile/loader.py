#!/usr/bin/env python3
"""
Taskfile Loader for Task Graph

Reads a Taskfile and every Taskfile it includes, merging them into a single
Taskfile. Only the parts needed to draw the task graph are read: task names,
descriptions, dependencies and the tasks called from commands.

Included tasks are named "<namespace>:<task>". References between tasks in
an included file are namespaced the same way, except for references that
start with ":" which always point at the root Taskfile.
"""

import logging
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import yaml

from ..errors import TaskGraphError
from .models import Command, Dependency, Task, Taskfile

logger = logging.getLogger(__name__)

# Searched in order when a directory is given instead of a file
DEFAULT_TASKFILES = [
    "Taskfile.yml",
    "taskfile.yml",
    "Taskfile.yaml",
    "taskfile.yaml",
    "Taskfile.dist.yml",
    "taskfile.dist.yml",
    "Taskfile.dist.yaml",
    "taskfile.dist.yaml",
]

NAMESPACE_SEPARATOR = ":"


class TaskfileError(TaskGraphError):
    """Raised when a Taskfile cannot be read."""
    pass


def load(path: Union[str, Path]) -> Taskfile:
    """Load the Taskfile at path (a file or a directory containing one)."""
    return TaskfileReader().read(path)


def find_taskfile(path: Union[str, Path]) -> Optional[Path]:
    """Resolve path to a Taskfile, searching a directory for the default names."""
    path = Path(path).resolve()
    if path.is_dir():
        for name in DEFAULT_TASKFILES:
            candidate = path / name
            if candidate.is_file():
                return candidate
        return None

    if path.is_file():
        return path

    return None


class TaskfileReader:
    """
    Reads a Taskfile together with its includes.

    A reader keeps track of the files currently being read so that include
    cycles are reported instead of recursing forever.
    """

    def __init__(self):
        self._reading: List[Path] = []

    def read(self, path: Union[str, Path]) -> Taskfile:
        """Read and merge the Taskfile at path."""
        taskfile_path = find_taskfile(path)
        if taskfile_path is None:
            raise TaskfileError(f"Taskfile not found: {path}")

        logger.debug(f"Reading Taskfile {taskfile_path}")
        tasks = self._read_file(taskfile_path)

        # References to the root Taskfile are now plain names
        for task in tasks.values():
            for dep in task.deps:
                dep.task = _root_reference(dep.task)
            for cmd in task.cmds:
                cmd.task = _root_reference(cmd.task)

        taskfile = Taskfile(path=taskfile_path, tasks=tasks)
        logger.info(f"Loaded Taskfile {taskfile_path} with {len(taskfile)} tasks")
        return taskfile

    def _read_file(self, path: Path) -> Dict[str, Task]:
        if path in self._reading:
            chain = " -> ".join(str(p) for p in self._reading + [path])
            raise TaskfileError(f"include cycle detected: {chain}")

        self._reading.append(path)
        try:
            document = self._parse_document(path)

            tasks: Dict[str, Task] = {}
            raw_tasks = document.get("tasks") or {}
            if not isinstance(raw_tasks, dict):
                raise TaskfileError(f"'tasks' must be a mapping in {path}")

            for name, raw in raw_tasks.items():
                name = str(name)
                tasks[name] = self._parse_task(name, raw, path)

            raw_includes = document.get("includes") or {}
            if not isinstance(raw_includes, dict):
                raise TaskfileError(f"'includes' must be a mapping in {path}")

            for namespace, raw in raw_includes.items():
                included = self._read_include(str(namespace), raw, path)
                for name, task in included.items():
                    if name in tasks:
                        raise TaskfileError(f"duplicate task name '{name}' in {path}")
                    tasks[name] = task

            return tasks
        finally:
            self._reading.pop()

    def _parse_document(self, path: Path) -> Dict[str, Any]:
        try:
            with open(path, "r", encoding="utf-8") as f:
                document = yaml.safe_load(f)
        except OSError as e:
            raise TaskfileError(f"failed to read Taskfile: {path}") from e
        except yaml.YAMLError as e:
            raise TaskfileError(f"failed to parse Taskfile: {path}") from e

        if document is None:
            return {}

        if not isinstance(document, dict):
            raise TaskfileError(f"Taskfile must be a mapping: {path}")

        return document

    def _read_include(self, namespace: str, raw: Any, parent: Path) -> Dict[str, Task]:
        """Read an included Taskfile and namespace its tasks."""
        optional = False
        flatten = False
        if isinstance(raw, str):
            include_path = raw
        elif isinstance(raw, dict) and isinstance(raw.get("taskfile"), str):
            include_path = raw["taskfile"]
            optional = bool(raw.get("optional", False))
            flatten = bool(raw.get("flatten", False))
        else:
            raise TaskfileError(f"include '{namespace}' in {parent} must name a taskfile")

        resolved = find_taskfile(parent.parent / include_path)
        if resolved is None:
            if optional:
                logger.debug(f"Skipping optional include '{namespace}': {include_path} not found")
                return {}
            raise TaskfileError(f"included Taskfile not found: {include_path} (included from {parent})")

        logger.debug(f"Including {resolved} as '{namespace}'")
        tasks = self._read_file(resolved)
        if flatten:
            return tasks

        prefix = namespace + NAMESPACE_SEPARATOR
        namespaced = {}
        for name, task in tasks.items():
            task.name = prefix + name
            for dep in task.deps:
                dep.task = _namespace_reference(prefix, dep.task)
            for cmd in task.cmds:
                cmd.task = _namespace_reference(prefix, cmd.task)
            namespaced[task.name] = task

        return namespaced

    def _parse_task(self, name: str, raw: Any, path: Path) -> Task:
        if raw is None:
            return Task(name=name)

        if isinstance(raw, str):
            return Task(name=name, cmds=[Command(cmd=raw)])

        if isinstance(raw, list):
            return Task(name=name, cmds=self._parse_commands(name, raw, path))

        if not isinstance(raw, dict):
            raise TaskfileError(f"task '{name}' in {path} must be a mapping, string or list")

        desc = raw.get("desc") or ""
        if not isinstance(desc, str):
            raise TaskfileError(f"'desc' of task '{name}' in {path} must be a string")

        raw_cmds = raw.get("cmds")
        if raw_cmds is None and "cmd" in raw:
            raw_cmds = [raw["cmd"]]

        return Task(
            name=name,
            desc=desc,
            deps=self._parse_dependencies(name, raw.get("deps") or [], path),
            cmds=self._parse_commands(name, raw_cmds or [], path)
        )

    def _parse_dependencies(self, name: str, raw: Any, path: Path) -> List[Dependency]:
        if not isinstance(raw, list):
            raise TaskfileError(f"'deps' of task '{name}' in {path} must be a list")

        deps = []
        for entry in raw:
            if isinstance(entry, str):
                deps.append(Dependency(task=entry))
            elif isinstance(entry, dict):
                target = entry.get("task")
                if target:
                    deps.append(Dependency(task=str(target)))
                else:
                    logger.debug(f"Ignoring dependency of '{name}' with no task: {entry}")
            else:
                raise TaskfileError(f"malformed dependency of task '{name}' in {path}: {entry!r}")

        return deps

    def _parse_commands(self, name: str, raw: Any, path: Path) -> List[Command]:
        if not isinstance(raw, list):
            raise TaskfileError(f"'cmds' of task '{name}' in {path} must be a list")

        return [self._parse_command(name, entry, path) for entry in raw]

    def _parse_command(self, name: str, entry: Any, path: Path) -> Command:
        if isinstance(entry, str):
            return Command(cmd=entry)

        if not isinstance(entry, dict):
            raise TaskfileError(f"malformed command in task '{name}' in {path}: {entry!r}")

        if "defer" in entry:
            deferred = entry["defer"]
            if isinstance(deferred, str):
                return Command(cmd=deferred)
            if isinstance(deferred, dict):
                return Command(task=str(deferred.get("task") or ""))
            raise TaskfileError(f"malformed defer in task '{name}' in {path}: {deferred!r}")

        if entry.get("task"):
            return Command(task=str(entry["task"]))

        # Loops and other command forms that call no task
        return Command(cmd=str(entry.get("cmd") or ""))


def _namespace_reference(prefix: str, reference: str) -> str:
    """Prefix a task reference, leaving empty and root (":") references alone."""
    if not reference or reference.startswith(NAMESPACE_SEPARATOR):
        return reference
    return prefix + reference


def _root_reference(reference: str) -> str:
    if reference.startswith(NAMESPACE_SEPARATOR):
        return reference[1:]
    return reference
