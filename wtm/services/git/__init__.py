"""Git-related services for wtm."""

from .worktrees import WorktreeService, parse_worktree_porcelain

__all__ = [
    "WorktreeService",
    "parse_worktree_porcelain",
]
