"""Sync and push orchestration for wtm"""

import os
from typing import Callable, List, Optional

from wtm.config import SyncOptions, load_config
from wtm.exceptions import SelectionError, StoreMissingError, CopyError, LinkError, SkipError
from wtm.models.plan import SyncSummary, PushSummary
from wtm.models.worktree import WorktreeInfo
from wtm.services.display_service import DisplayService
from wtm.services.file_service import copy_repo_to_store, copy_store_to_repo, ensure_worktree_link
from wtm.services.git import WorktreeService
from wtm.services.plan_service import build_sync_plan, build_push_plan
from wtm.services.prompt_service import Prompter, ConsolePrompter
from wtm.services.store_service import store_root_path
from wtm.utils.paths import same_path
from wtm.logging_config import get_logger

logger = get_logger(__name__)

WorktreeLister = Callable[[str], List[WorktreeInfo]]


def _list_with_git(repo_root: str) -> List[WorktreeInfo]:
    return WorktreeService(repo_root).list_worktrees()


class WorktreeSync:
    """Copies matching config files into the store and links them into a worktree."""

    def __init__(
        self,
        options: SyncOptions,
        prompter: Optional[Prompter] = None,
        display: Optional[DisplayService] = None,
        worktree_lister: Optional[WorktreeLister] = None,
        repo_root: Optional[str] = None,
        home: Optional[str] = None,
    ):
        """Initialize WorktreeSync.

        Args:
            options: Runtime options from the command line
            prompter: Source of interactive answers (defaults to the terminal)
            display: Output sink (defaults to rich consoles)
            worktree_lister: Returns the worktrees of a repo root (defaults to git)
            repo_root: Repository root; resolved from options.repo_hint when omitted
            home: Home directory holding the store (defaults to the user's home)
        """
        self.options = options
        self.prompter = prompter or ConsolePrompter()
        self.display = display or DisplayService()
        self.worktree_lister = worktree_lister or _list_with_git
        self._repo_root = repo_root
        self.home = home

    @property
    def repo_root(self) -> str:
        if self._repo_root is None:
            self._repo_root = WorktreeService.find_repo_root(self.options.repo_hint)
        return self._repo_root

    def pick_worktree(self, worktrees: List[WorktreeInfo], action: str = "sync into") -> WorktreeInfo:
        """Select the target worktree.

        --dest wins over --worktree; with neither, ask until a valid number
        is entered.

        Raises:
            SelectionError: If --dest/--worktree do not name a listed worktree,
                or input ends during interactive selection
        """
        if self.options.dest_override:
            for wt in worktrees:
                if same_path(wt.path, self.options.dest_override):
                    return wt
            raise SelectionError(f"--dest did not match an active worktree path: {self.options.dest_override}")

        if self.options.worktree_number is not None:
            number = self.options.worktree_number
            if number < 1 or number > len(worktrees):
                raise SelectionError(f"--worktree must be between 1 and {len(worktrees)}")
            return worktrees[number - 1]

        self.display.display_worktrees(worktrees)
        while True:
            try:
                answer = self.prompter.prompt_line(f"Select worktree number to {action}: ")
            except EOFError:
                raise SelectionError("no worktree selected")
            try:
                number = int(answer.strip())
            except ValueError:
                number = 0
            if 1 <= number <= len(worktrees):
                return worktrees[number - 1]
            self.display.warning(f"Invalid selection. Enter a number between 1 and {len(worktrees)}.")

    def _confirm_proceed(self) -> bool:
        if self.options.yes:
            return True
        if self.prompter.confirm("Proceed? [y/N] "):
            return True
        self.display.status("Aborted.")
        return False

    def sync(self) -> SyncSummary:
        """Copy matching repo files into the store and link them into the chosen worktree."""
        repo_root = self.repo_root
        worktrees = self.worktree_lister(repo_root)
        worktree = self.pick_worktree(worktrees, "sync into")
        dest_root = worktree.path
        if same_path(repo_root, dest_root):
            raise SelectionError("selected worktree is the current repo root; nothing to sync")

        loaded = load_config(repo_root)
        store_root = store_root_path(repo_root, worktree, home=self.home)
        plan = build_sync_plan(repo_root, dest_root, store_root, loaded.config)

        self.display.display_sync_plan(repo_root, dest_root, store_root, loaded.source, plan)

        summary = SyncSummary()
        if not plan:
            self.display.status("No files matched; nothing to do.")
            return summary
        if self.options.dry_run:
            self.display.status("Dry run - no changes made")
            return summary
        if not self._confirm_proceed():
            summary.aborted = True
            return summary

        for item in plan:
            try:
                copy_repo_to_store(item.source, item.store)
            except CopyError as e:
                self.display.error(f"Error copying to store: {e}")
                logger.debug(f"Copy failed for {item.rel_path}: {e}")
                summary.skipped += 1
                continue
            summary.copied += 1

            try:
                ensure_worktree_link(item.store, item.destination, self.options.force, self.prompter)
            except SkipError as e:
                self.display.status(f"Skipped: {e.path}")
                summary.skipped += 1
                continue
            except LinkError as e:
                self.display.error(f"Error symlinking: {e}")
                logger.debug(f"Link failed for {item.rel_path}: {e}")
                summary.skipped += 1
                continue
            summary.linked += 1
            logger.info(f"Linked {item.destination} -> {item.store}")

        self.display.display_sync_summary(summary)
        return summary

    def push(self) -> PushSummary:
        """Copy store files for the chosen worktree back into the repository checkout."""
        repo_root = self.repo_root
        worktrees = self.worktree_lister(repo_root)
        worktree = self.pick_worktree(worktrees, "push from")

        loaded = load_config(repo_root)
        store_root = store_root_path(repo_root, worktree, home=self.home)
        if not os.path.isdir(store_root):
            raise StoreMissingError(store_root)

        plan = build_push_plan(store_root, repo_root, loaded.config)

        self.display.display_push_plan(repo_root, store_root, loaded.source, plan)

        summary = PushSummary()
        if not plan:
            self.display.status("No files in store match the configured include/exclude patterns.")
            return summary
        if self.options.dry_run:
            self.display.status("Dry run - no changes made")
            return summary
        if not self._confirm_proceed():
            summary.aborted = True
            return summary

        for item in plan:
            try:
                copy_store_to_repo(item.source, item.destination, self.options.force, self.prompter)
            except SkipError as e:
                self.display.status(f"Skipped: {e.path}")
                summary.skipped += 1
                continue
            except CopyError as e:
                self.display.error(f"Error copying from store: {e}")
                logger.debug(f"Push failed for {item.rel_path}: {e}")
                summary.skipped += 1
                continue
            summary.pushed += 1
            logger.info(f"Pushed {item.source} -> {item.destination}")

        self.display.display_push_summary(summary)
        return summary
