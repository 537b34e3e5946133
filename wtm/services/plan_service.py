"""Build the list of files a sync or push will touch."""

import os
from typing import Callable, List, Optional

from wtm.config import Config
from wtm.constants import SKIPPED_DIRS
from wtm.exceptions import PlanWalkError
from wtm.models.plan import PlanItem
from wtm.utils.globbing import matches_any, normalize_patterns
from wtm.utils.paths import same_path
from wtm.logging_config import get_logger

logger = get_logger(__name__)

# Maps (absolute file path, OS relative path, slash relative path) to a plan item
ItemFactory = Callable[[str, str, str], Optional[PlanItem]]


def _raise_walk_error(root: str):
    def onerror(error: OSError):
        raise PlanWalkError(root, str(error)) from error
    return onerror


def _walk_plan(root: str, config: Config, make_item: ItemFactory) -> List[PlanItem]:
    """Walk root and build plan items for files selected by the config.

    Directories named in SKIPPED_DIRS are never entered.

    Raises:
        PlanWalkError: If the walk hits an unreadable directory or missing root
    """
    root = os.path.normpath(root)
    include = normalize_patterns(config.include)
    exclude = normalize_patterns(config.exclude)

    if not os.path.isdir(root):
        raise PlanWalkError(root, "not a directory")

    items: List[PlanItem] = []
    for dirpath, dirnames, filenames in os.walk(root, onerror=_raise_walk_error(root)):
        dirnames[:] = [d for d in dirnames if d not in SKIPPED_DIRS]

        for filename in filenames:
            path = os.path.join(dirpath, filename)
            rel_os = os.path.relpath(path, root)
            rel = rel_os.replace(os.sep, "/")

            if not matches_any(include, rel):
                continue
            if matches_any(exclude, rel):
                logger.debug(f"Excluded {rel}")
                continue

            item = make_item(path, rel_os, rel)
            if item is not None:
                items.append(item)

    items.sort(key=lambda it: it.rel_path)
    logger.info(f"Planned {len(items)} entries from {root}")
    return items


def build_sync_plan(repo_root: str, worktree_root: str, store_root: str, config: Config) -> List[PlanItem]:
    """Plan repo files to copy into the store and link into the worktree.

    Args:
        repo_root: Repository checkout to read files from
        worktree_root: Worktree to create links in
        store_root: Store directory for this worktree
        config: Include/exclude patterns

    Returns:
        Plan items sorted by relative path
    """
    worktree_root = os.path.normpath(worktree_root)
    store_root = os.path.normpath(store_root)

    def make_item(path: str, rel_os: str, rel: str) -> Optional[PlanItem]:
        dest = os.path.join(worktree_root, rel_os)
        if same_path(path, dest):
            logger.debug(f"Skipping {rel}: source and destination are the same")
            return None
        return PlanItem(
            rel_path=rel,
            source=path,
            destination=dest,
            store=os.path.join(store_root, rel_os),
        )

    return _walk_plan(repo_root, config, make_item)


def build_push_plan(store_root: str, repo_root: str, config: Config) -> List[PlanItem]:
    """Plan store files to copy back into the repository checkout.

    Args:
        store_root: Store directory to read files from
        repo_root: Repository checkout to write into
        config: Include/exclude patterns

    Returns:
        Plan items sorted by relative path
    """
    repo_root = os.path.normpath(repo_root)

    def make_item(path: str, rel_os: str, rel: str) -> Optional[PlanItem]:
        dest = os.path.join(repo_root, rel_os)
        if same_path(path, dest):
            logger.debug(f"Skipping {rel}: source and destination are the same")
            return None
        return PlanItem(rel_path=rel, source=path, destination=dest, store=path)

    return _walk_plan(store_root, config, make_item)
