"""Worktree listing service for wtm."""

import os
from typing import Dict, List, Optional

import git

from wtm.exceptions import WorktreeLookupError
from wtm.models.worktree import WorktreeInfo
from wtm.logging_config import get_logger

logger = get_logger(__name__)


def _command_error_message(command: str, e: git.exc.GitCommandError) -> str:
    """Build a readable message from a GitCommandError."""
    stderr = (e.stderr if hasattr(e, "stderr") and e.stderr else "").strip()
    status = e.status if hasattr(e, "status") else "unknown"

    if stderr:
        return f"{command} failed (exit {status}): {stderr}"
    return f"{command} failed with exit code {status}"


def parse_worktree_porcelain(output: str) -> List[WorktreeInfo]:
    """Parse `git worktree list --porcelain` output.

    Format:
        worktree /path/to/worktree
        HEAD commit_sha
        branch refs/heads/branch-name
        (blank line between worktrees)

    ``branch`` and ``HEAD`` lines attach to the most recent ``worktree`` line.
    Anything else (``locked``, ``prunable``, ``detached``, ``bare``) is ignored.

    Raises:
        WorktreeLookupError: If the output contains no worktree entries
    """
    worktrees: List[WorktreeInfo] = []
    current: Optional[Dict[str, str]] = None

    for line in output.split("\n"):
        line = line.strip()
        if not line:
            continue

        if line.startswith("worktree "):
            if current is not None:
                worktrees.append(WorktreeInfo(**current))
            current = {"path": line[len("worktree "):].strip()}
        elif line.startswith("branch "):
            if current is not None:
                current["branch"] = line[len("branch "):].strip()
        elif line.startswith("HEAD "):
            if current is not None:
                current["head"] = line[len("HEAD "):].strip()

    if current is not None:
        worktrees.append(WorktreeInfo(**current))

    if not worktrees:
        raise WorktreeLookupError("no worktrees found")
    return worktrees


class WorktreeService:
    """Service for listing the worktrees of a git repository."""

    def __init__(self, repo_path: str):
        """Initialize the worktree service.

        Args:
            repo_path: Path to the git repository root
        """
        self.repo_path = repo_path

    def _get_repo(self) -> git.Repo:
        """Open the repository.

        Raises:
            WorktreeLookupError: If the path is not a git repository
        """
        try:
            return git.Repo(self.repo_path)
        except (git.exc.InvalidGitRepositoryError, git.exc.NoSuchPathError) as e:
            raise WorktreeLookupError(f"Not a git repository: {self.repo_path}") from e

    @staticmethod
    def find_repo_root(repo_hint: Optional[str] = None) -> str:
        """Find the top-level directory of the repository containing repo_hint.

        Args:
            repo_hint: Any path inside the repository (defaults to the current directory)

        Returns:
            Absolute path of the working tree root

        Raises:
            WorktreeLookupError: If no repository can be found
        """
        start = repo_hint or os.getcwd()
        try:
            repo = git.Repo(start, search_parent_directories=True)
            root = repo.git.rev_parse("--show-toplevel").strip()
        except (git.exc.InvalidGitRepositoryError, git.exc.NoSuchPathError) as e:
            raise WorktreeLookupError(f"failed to find git repo root: not a git repository: {start}") from e
        except git.exc.GitCommandError as e:
            raise WorktreeLookupError(
                f"failed to find git repo root: {_command_error_message('git rev-parse', e)}"
            ) from e

        if not root:
            raise WorktreeLookupError(f"failed to find git repo root for {start}")
        logger.debug(f"Repository root: {root}")
        return root

    def list_worktrees(self) -> List[WorktreeInfo]:
        """List all worktrees, main worktree first.

        Returns:
            List of WorktreeInfo in git's order

        Raises:
            WorktreeLookupError: If git fails or reports no worktrees
        """
        repo = self._get_repo()
        try:
            # Use --porcelain for machine-readable output
            output = repo.git.worktree("list", "--porcelain")
        except git.exc.GitCommandError as e:
            raise WorktreeLookupError(_command_error_message("git worktree list", e)) from e
        finally:
            repo.close()

        worktrees = parse_worktree_porcelain(output)
        logger.debug(f"Found {len(worktrees)} worktrees")
        for wt in worktrees:
            logger.debug(f"  {wt}")
        return worktrees
