#!/usr/bin/env python3
"""
Glob matching for style rules

Shell-style patterns matched against whole task names:

    *        any run of characters (including none)
    ?        any single character
    [abc]    any character in the set; ranges like [a-z]; [!x] or [^x] negates
    \\x      the character x, literally

Unlike fnmatch, a malformed pattern (an unclosed or empty class, a reversed
range, a trailing backslash) is reported rather than silently treated as
literal text. `matches` turns that into "no match" so that arbitrary
configuration can never break rendering.
"""

import logging
from typing import List, Tuple

logger = logging.getLogger(__name__)


class PatternError(ValueError):
    """Raised for a malformed glob pattern."""
    pass


def matches(pattern: str, name: str) -> bool:
    """True if name matches pattern; malformed patterns never match."""
    try:
        return match(pattern, name)
    except PatternError as e:
        logger.debug(f"Ignoring malformed pattern {pattern!r}: {e}")
        return False


def match(pattern: str, name: str) -> bool:
    """True if name matches pattern, raising PatternError if the pattern is malformed."""
    _validate(pattern)

    p = 0
    n = 0
    # Position of the most recent * and the name position it is currently covering up to
    star_p = -1
    star_n = -1

    while n < len(name):
        if p < len(pattern):
            if pattern[p] == "*":
                star_p = p
                star_n = n
                p += 1
                continue

            matched, next_p = _match_one(pattern, p, name[n])
            if matched:
                p = next_p
                n += 1
                continue

        if star_p >= 0:
            # Let the last * absorb one more character and retry
            star_n += 1
            n = star_n
            p = star_p + 1
            continue

        return False

    while p < len(pattern) and pattern[p] == "*":
        p += 1

    return p == len(pattern)


def _match_one(pattern: str, p: int, ch: str) -> Tuple[bool, int]:
    """Match a single pattern element at p against ch; returns (matched, next position)."""
    c = pattern[p]
    if c == "?":
        return True, p + 1

    if c == "\\":
        return pattern[p + 1] == ch, p + 2

    if c == "[":
        negated, ranges, next_p = _parse_class(pattern, p)
        found = any(lo <= ch <= hi for lo, hi in ranges)
        return found != negated, next_p

    return c == ch, p + 1


def _parse_class(pattern: str, p: int) -> Tuple[bool, List[Tuple[str, str]], int]:
    """Parse the character class opening at p; returns (negated, ranges, position after ])."""
    i = p + 1
    negated = False
    if i < len(pattern) and pattern[i] in "!^":
        negated = True
        i += 1

    ranges = []
    while True:
        if i >= len(pattern):
            raise PatternError("unclosed character class")

        if pattern[i] == "]":
            if not ranges:
                raise PatternError("empty character class")
            return negated, ranges, i + 1

        lo, i = _class_char(pattern, i)
        hi = lo
        if i + 1 < len(pattern) and pattern[i] == "-" and pattern[i + 1] != "]":
            hi, i = _class_char(pattern, i + 1)
            if hi < lo:
                raise PatternError(f"reversed range {lo}-{hi}")

        ranges.append((lo, hi))


def _class_char(pattern: str, i: int) -> Tuple[str, int]:
    if pattern[i] == "\\":
        if i + 1 >= len(pattern):
            raise PatternError("trailing backslash")
        return pattern[i + 1], i + 2

    return pattern[i], i + 1


def _validate(pattern: str) -> None:
    i = 0
    while i < len(pattern):
        c = pattern[i]
        if c == "\\":
            if i + 1 >= len(pattern):
                raise PatternError("trailing backslash")
            i += 2
        elif c == "[":
            _, _, i = _parse_class(pattern, i)
        else:
            i += 1
