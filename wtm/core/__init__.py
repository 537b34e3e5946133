"""Core orchestration for wtm."""

from .sync_manager import WorktreeSync

__all__ = ["WorktreeSync"]
