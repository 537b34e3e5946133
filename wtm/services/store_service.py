"""Location of the per-user store holding canonical config copies."""

import os
from pathlib import Path
from typing import List, Optional

from wtm.constants import (
    STORE_ROOT_DIR,
    STORE_SUB_DIR,
    FALLBACK_REPO_SLUG,
    FALLBACK_WORKTREE_SEGMENT,
)
from wtm.exceptions import WtmError
from wtm.models.worktree import WorktreeInfo
from wtm.utils.paths import sanitize_name, sanitize_segments, split_path_components


def worktree_path_segments(repo_root: str, worktree: WorktreeInfo) -> List[str]:
    """Store path segments identifying a worktree.

    Uses the worktree path relative to the repo root when there is one,
    otherwise every component of the worktree's own path.
    """
    try:
        rel = os.path.relpath(worktree.path, repo_root)
    except ValueError:
        # Different drives on Windows
        rel = ""
    if rel and rel != "." and rel != os.pardir and not rel.startswith(os.pardir + os.sep):
        return sanitize_segments(rel.replace(os.sep, "/").split("/"))
    return sanitize_segments(split_path_components(worktree.path))


def store_root_path(repo_root: str, worktree: WorktreeInfo, home: Optional[str] = None) -> str:
    """Build ``<home>/.wtm/configs/<repo>/<worktree segments...>``.

    Args:
        repo_root: Repository top-level directory
        worktree: Worktree the store belongs to
        home: Home directory override (defaults to the user's home)

    Raises:
        WtmError: If the home directory cannot be determined
    """
    if home is None:
        try:
            home = str(Path.home())
        except RuntimeError as e:
            raise WtmError(f"home dir: {e}") from e

    repo_slug = sanitize_name(os.path.basename(os.path.normpath(repo_root))) or FALLBACK_REPO_SLUG
    segments = worktree_path_segments(repo_root, worktree) or [FALLBACK_WORKTREE_SEGMENT]
    return os.path.join(home, STORE_ROOT_DIR, STORE_SUB_DIR, repo_slug, *segments)
