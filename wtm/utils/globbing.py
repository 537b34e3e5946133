"""Recursive glob matching for slash-separated relative paths."""

import os
import re
from fnmatch import fnmatchcase
from functools import lru_cache
from typing import Iterable, Iterator, List, Tuple

GLOB_CHARS = "*?["


def match(pattern: str, rel_path: str) -> bool:
    """Match a slash-separated relative path against a glob pattern.

    ``**`` as a whole segment matches zero or more path segments.  ``*``,
    ``?`` and ``[...]`` match within a single segment, ``[!...]`` and
    ``[^...]`` negate a class, ``{a,b}`` matches any alternative and ``\\``
    escapes the next character.  Leading dots are not special, so
    ``*.example*`` matches ``.env.example``.

    A malformed pattern never raises; it simply does not match.
    """
    try:
        alternatives = _compile(pattern)
    except (ValueError, re.error):
        return False
    parts = rel_path.split("/")
    return any(_match_segments(list(segments), parts) for segments in alternatives)


@lru_cache(maxsize=256)
def _compile(pattern: str) -> Tuple[Tuple[str, ...], ...]:
    """Expand braces and turn each segment into an fnmatch pattern."""
    return tuple(
        tuple(_fnmatch_segment(seg) for seg in alternative.split("/"))
        for alternative in _expand_braces(pattern)
    )


def _bracket_end(pattern: str, start: int) -> int:
    """Index of the ``]`` closing the class opened at ``start``, or -1."""
    n = len(pattern)
    i = start + 1
    if i < n and pattern[i] in "!^":
        i += 1
    if i < n and pattern[i] == "]":
        i += 1
    while i < n and pattern[i] != "]":
        if pattern[i] == "\\":
            i += 1
        i += 1
    return i if i < n else -1


def _scan(pattern: str, start: int = 0) -> Iterator[Tuple[int, str]]:
    """Yield characters outside escapes and bracket classes."""
    i, n = start, len(pattern)
    while i < n:
        c = pattern[i]
        if c == "\\":
            i += 2
            continue
        if c == "[":
            end = _bracket_end(pattern, i)
            if end < 0:
                raise ValueError(f"unclosed '[' in {pattern!r}")
            i = end + 1
            continue
        yield i, c
        i += 1


def _expand_braces(pattern: str) -> List[str]:
    opening = next((i for i, c in _scan(pattern) if c == "{"), None)
    if opening is None:
        return [pattern]

    depth = 0
    bounds = [opening]
    for i, c in _scan(pattern, opening):
        if c == "{":
            depth += 1
        elif c == "}":
            depth -= 1
            if depth == 0:
                bounds.append(i)
                break
        elif c == "," and depth == 1:
            bounds.append(i)
    else:
        raise ValueError(f"unclosed '{{' in {pattern!r}")

    prefix = pattern[:opening]
    suffix = pattern[bounds[-1] + 1:]
    expanded = []
    for start, end in zip(bounds, bounds[1:]):
        expanded.extend(_expand_braces(prefix + pattern[start + 1:end] + suffix))
    return expanded


def _literal(c: str) -> str:
    return f"[{c}]" if c in GLOB_CHARS else c


def _fnmatch_segment(segment: str) -> str:
    """Rewrite escapes and ``[^`` classes into plain fnmatch syntax."""
    out = []
    i, n = 0, len(segment)
    while i < n:
        c = segment[i]
        if c == "\\":
            if i + 1 >= n:
                raise ValueError(f"trailing escape in {segment!r}")
            out.append(_literal(segment[i + 1]))
            i += 2
            continue
        if c == "[":
            end = _bracket_end(segment, i)
            if end < 0:
                raise ValueError(f"unclosed '[' in {segment!r}")
            out.append(_fnmatch_class(segment[i + 1:end]))
            i = end + 1
            continue
        out.append(c)
        i += 1
    return "".join(out)


def _fnmatch_class(body: str) -> str:
    negate = body[:1] in ("!", "^")
    if negate:
        body = body[1:]
    members = re.sub(r"\\(.)", r"\1", body)
    # fnmatch only reads ']' as a member when it comes first
    if "]" in members[1:]:
        members = "]" + members[0] + members[1:].replace("]", "")
    return "[" + ("!" if negate else "") + members + "]"


def _match_segments(segments: List[str], parts: List[str]) -> bool:
    if not segments:
        return not parts

    seg = segments[0]
    rest = segments[1:]

    if seg == "**":
        # Collapse repeated ** so each level is tried once
        while rest and rest[0] == "**":
            rest = rest[1:]
        if not rest:
            return True
        return any(_match_segments(rest, parts[i:]) for i in range(len(parts) + 1))

    if not parts:
        return False
    if not fnmatchcase(parts[0], seg):
        return False
    return _match_segments(rest, parts[1:])


def normalize_patterns(patterns: Iterable[str]) -> List[str]:
    """Trim patterns, drop blanks and turn OS separators into forward slashes.

    Backslashes are only rewritten where they are the path separator; on
    POSIX they stay escapes.
    """
    normalized = []
    for pattern in patterns:
        pattern = pattern.strip()
        if not pattern:
            continue
        if os.sep != "/":
            pattern = pattern.replace(os.sep, "/")
        normalized.append(pattern)
    return normalized


def matches_any(patterns: Iterable[str], rel_path: str) -> bool:
    """Check if a relative path matches any of the patterns."""
    return any(match(pattern, rel_path) for pattern in patterns)
