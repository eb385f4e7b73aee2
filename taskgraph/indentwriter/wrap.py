"""Word wrapping for labels."""

from typing import List


def word_wrap(text: str, width: int) -> List[str]:
    """Wrap text into lines of roughly width characters.

    Lines break after a space, which stays at the end of the line, so joining
    the result gives back the original text. Words longer than width are
    never split.
    """
    if width == 0 and text == "":
        return []

    if len(text) <= width:
        return [text]

    result = []
    start = 0
    while start < len(text):
        finish = _find_break_point(text, start, width)
        result.append(text[start:finish + 1])
        start = finish + 1

    return result


def _find_break_point(line: str, start: int, width: int) -> int:
    """Index of the last character to keep on the line starting at start."""
    limit = start + width + 1
    if limit >= len(line):
        return len(line) - 1

    # Look for a word break within the line
    index = line.rfind(" ", start, limit)
    if index >= 0:
        return index

    # Continuous text: run on to the end of the word
    index = line.find(" ", limit)
    if index >= 0:
        return index

    return len(line) - 1
