"""Utility functions for wtm.

This package provides utility modules:
- globbing: recursive (``**``) glob matching against relative paths
- paths: path comparison and store-name sanitizing
"""

from .globbing import match, matches_any, normalize_patterns
from .paths import same_path, sanitize_name, sanitize_segments, split_path_components

__all__ = [
    # Globbing
    "match",
    "matches_any",
    "normalize_patterns",
    # Paths
    "same_path",
    "sanitize_name",
    "sanitize_segments",
    "split_path_components",
]
