"""Worktree data models."""

from dataclasses import dataclass

from wtm.constants import BRANCH_REF_PREFIX, DETACHED_LABEL, SHORT_HEAD_LENGTH


@dataclass(frozen=True)
class WorktreeInfo:
    """One entry of `git worktree list --porcelain`."""

    path: str
    branch: str = ""  # e.g. "refs/heads/develop", empty when detached
    head: str = ""  # full sha

    @property
    def is_detached(self) -> bool:
        return not self.branch

    @property
    def branch_label(self) -> str:
        """Branch name without refs/heads/, or a detached marker."""
        if self.is_detached:
            return DETACHED_LABEL
        if self.branch.startswith(BRANCH_REF_PREFIX):
            return self.branch[len(BRANCH_REF_PREFIX):]
        return self.branch

    @property
    def short_head(self) -> str:
        return self.head[:SHORT_HEAD_LENGTH]

    def __str__(self) -> str:
        """String representation of worktree."""
        return f"{self.branch_label} @ {self.path} ({self.short_head})"
