"""Path helpers shared by the planner and the store layout."""

import os
from typing import Iterable, List

# Characters replaced with "_" when turning a path component into a store name
_UNSAFE_CHARS = {"/", "\\", os.sep, " ", ":", "\t"}


def same_path(a: str, b: str) -> bool:
    """Compare two paths after normalization (no symlink resolution)."""
    return os.path.normpath(os.path.abspath(a)) == os.path.normpath(os.path.abspath(b))


def sanitize_name(name: str) -> str:
    """Replace separators, spaces, colons and tabs with "_" and trim the ends."""
    replaced = "".join("_" if ch in _UNSAFE_CHARS else ch for ch in name)
    return replaced.strip("_ ")


def sanitize_segments(parts: Iterable[str]) -> List[str]:
    """Sanitize each component, dropping the ones that end up empty."""
    segments = []
    for part in parts:
        part = part.strip()
        if not part:
            continue
        sanitized = sanitize_name(part)
        if sanitized:
            segments.append(sanitized)
    return segments


def split_path_components(path: str) -> List[str]:
    """Split a path on separators, dropping empty and "." components."""
    if not path:
        return []
    normalized = path.replace("\\", "/").replace(os.sep, "/")
    return [seg for seg in normalized.split("/") if seg and seg != "."]
