"""Rendering DOT files with Graphviz."""

from .renderer import RenderError, find_executable, render_image

__all__ = [
    'RenderError',
    'find_executable',
    'render_image'
]
