#!/usr/bin/env python3
"""
Graphviz dot Integration for Task Graph

Locates the Graphviz `dot` executable and runs it to turn a DOT file into an
image. Graphviz itself is not a Python dependency; it has to be installed
separately.
"""

import logging
import os
import shutil
import subprocess
from typing import Optional

from ..errors import TaskGraphError

logger = logging.getLogger(__name__)

DOT_EXECUTABLE = "dot"


class RenderError(TaskGraphError):
    """Raised when dot cannot be found or fails to render an image."""
    pass


def find_executable(dot_path: str = "") -> str:
    """
    Find the dot executable.

    Args:
        dot_path: Full path to dot, or a folder containing it. When empty,
            dot is looked up on the PATH.

    Returns:
        Path to the dot executable
    """
    if not dot_path:
        found = shutil.which(DOT_EXECUTABLE)
        if found is None:
            raise RenderError("dot executable not found on PATH")
        return found

    if not os.path.exists(dot_path):
        raise RenderError(f"dotPath not found: {dot_path}")

    if os.path.isdir(dot_path):
        candidate = os.path.join(dot_path, DOT_EXECUTABLE)
        if os.path.exists(candidate):
            return candidate

        # Windows
        if os.path.exists(candidate + ".exe"):
            return candidate + ".exe"

        raise RenderError(f"dot executable not found in directory: {dot_path}")

    return dot_path


def render_image(dot_executable: str, dot_file: str, image_file: str, file_type: str,
                 timeout: Optional[float] = None):
    """Render dot_file to image_file; file_type is passed to dot as -T<file_type>."""
    cmd = [dot_executable, f"-T{file_type}", dot_file, "-o", image_file]
    logger.debug(f"Running dot: {' '.join(cmd)}")

    try:
        result = subprocess.run(
            cmd,
            capture_output=True,
            text=True,
            timeout=timeout
        )
    except subprocess.TimeoutExpired as e:
        raise RenderError(f"dot command timed out after {timeout} seconds") from e
    except OSError as e:
        raise RenderError(f"failed to run dot command: {dot_executable}") from e

    if result.returncode != 0:
        output = (result.stdout + result.stderr).strip()
        raise RenderError(f"dot command failed: {output}")

    logger.debug(f"Rendered {dot_file} to {image_file}")
