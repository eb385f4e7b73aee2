"""Record-shaped node labels."""

from typing import List

from ..indentwriter import word_wrap
from .properties import LINE_BREAK

_ESCAPES = {
    "{": "\\{",
    "}": "\\}",
    '"': '\\"',
}


class Record:
    """A Graphviz record label built from a sequence of fields."""

    def __init__(self):
        self.parts: List[str] = []

    def add(self, text: str):
        """Add a field; empty text is ignored."""
        if text:
            self.parts.append(text)

    def addf(self, format_string: str, *args, **kwargs):
        self.add(format_string.format(*args, **kwargs))

    def add_wrapped(self, width: int, text: str):
        """Add a field word-wrapped to width."""
        self.add(LINE_BREAK.join(word_wrap(text, width)))

    def add_wrapped_f(self, width: int, format_string: str, *args, **kwargs):
        self.add_wrapped(width, format_string.format(*args, **kwargs))

    def __str__(self) -> str:
        # A single field is a plain label
        if len(self.parts) == 1:
            return self.parts[0]

        content = " | ".join(self.parts)
        content = "".join(_ESCAPES.get(ch, ch) for ch in content)
        return "{" + content + "}"
