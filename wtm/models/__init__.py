"""Data models for wtm."""

from .worktree import WorktreeInfo
from .plan import PlanItem, SyncSummary, PushSummary

__all__ = ["WorktreeInfo", "PlanItem", "SyncSummary", "PushSummary"]
