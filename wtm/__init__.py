"""
wtm - keep repo-local config files in sync across git worktrees
"""

from .__version__ import __version__
from .core import WorktreeSync
from .cli.main import main

__all__ = ["WorktreeSync", "main", "__version__"]
