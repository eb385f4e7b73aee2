#!/usr/bin/env python3
"""
Indent Writer for Task Graph

Builds a tree of text lines where each line may have nested lines, then
writes the tree out with one indent per level of nesting.
"""

from typing import Iterator, List, TextIO, Tuple

from ..errors import TaskGraphError


class IndentWriterError(TaskGraphError):
    """Raised when the underlying stream fails during write_to."""

    def __init__(self, message: str, bytes_written: int = 0):
        super().__init__(message)
        self.bytes_written = bytes_written


class Line:
    """A single line of text with optional nested lines."""

    def __init__(self, text: str = ""):
        self.text = text
        self.children: List["Line"] = []

    def add(self, text: str) -> "Line":
        """Add a nested line and return it, so further lines can be nested below."""
        line = Line(text)
        self.children.append(line)
        return line

    def addf(self, format_string: str, *args, **kwargs) -> "Line":
        """Add a nested line built with str.format."""
        return self.add(format_string.format(*args, **kwargs))

    def _walk(self, level: int) -> Iterator[Tuple[int, "Line"]]:
        # Pre-order: this line, then each child one level deeper
        yield level, self
        for child in self.children:
            yield from child._walk(level + 1)


class IndentWriter(Line):
    """
    Root of a line tree.

    The writer itself has no text; its direct children are the top-level
    lines and are written without indentation.
    """

    def write_to(self, stream: TextIO, indent: str = "  ") -> int:
        """Write every line to stream, returning the number of bytes written.

        Each line is written as the indent repeated once per nesting level,
        the line text and a newline. Bytes are counted in the encoding of
        the stream, or UTF-8 for streams without one such as StringIO.
        """
        encoding = getattr(stream, "encoding", None) or "utf-8"
        written = 0
        for child in self.children:
            for level, line in child._walk(0):
                text = indent * level + line.text + "\n"
                try:
                    stream.write(text)
                except (OSError, ValueError) as e:
                    raise IndentWriterError(
                        f"failed to write line at level {level}: {line.text}",
                        written
                    ) from e

                written += len(text.encode(encoding, errors="replace"))

        return written
