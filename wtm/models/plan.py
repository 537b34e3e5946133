"""Plan and result models."""

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class PlanItem:
    """A single file to sync or push.

    In sync mode ``source`` is the repo file, ``store`` its copy in the store
    and ``destination`` the worktree path to link. In push mode ``source`` and
    ``store`` are the store file and ``destination`` is the repo path.
    """

    rel_path: str  # slash-separated, relative to the walked root
    source: str
    destination: str
    store: Optional[str] = None


@dataclass
class SyncSummary:
    """Outcome counters for a sync run."""

    copied: int = 0
    linked: int = 0
    skipped: int = 0
    aborted: bool = False


@dataclass
class PushSummary:
    """Outcome counters for a push run."""

    pushed: int = 0
    skipped: int = 0
    aborted: bool = False
