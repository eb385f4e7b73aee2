"""Indented line trees and word wrapping."""

from .writer import IndentWriter, IndentWriterError, Line
from .wrap import word_wrap

__all__ = [
    'IndentWriter',
    'IndentWriterError',
    'Line',
    'word_wrap'
]
