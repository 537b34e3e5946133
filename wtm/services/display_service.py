"""Display service for plans, worktree lists and run summaries"""
from typing import List, Optional

from rich.console import Console
from rich.markup import escape

from wtm.models.plan import PlanItem, SyncSummary, PushSummary
from wtm.models.worktree import WorktreeInfo


class DisplayService:
    """Plan lines go to stdout so they can be piped; everything else to stderr."""

    def __init__(self, console: Optional[Console] = None, err_console: Optional[Console] = None):
        self.console = console or Console(soft_wrap=True, highlight=False, emoji=False)
        self.err_console = err_console or Console(stderr=True, soft_wrap=True, highlight=False, emoji=False)

    def status(self, message: str, style: Optional[str] = None) -> None:
        """Print a plain status line to stderr."""
        self.err_console.print(escape(message), style=style)

    def error(self, message: str) -> None:
        self.err_console.print(escape(message), style="red")

    def warning(self, message: str) -> None:
        self.err_console.print(escape(message), style="yellow")

    def display_worktrees(self, worktrees: List[WorktreeInfo]) -> None:
        """Print the numbered worktree list used for interactive selection."""
        self.status("Active worktrees:")
        for i, wt in enumerate(worktrees, start=1):
            self.err_console.print(
                f"  [bold]\\[{i}][/bold] {escape(wt.path)}  "
                f"[cyan]{escape(wt.branch_label)}[/cyan]  [dim]{escape(wt.short_head)}[/dim]"
            )

    def _display_header(self, rows: List[tuple], plan: List[PlanItem]) -> None:
        for label, value in rows:
            self.status(f"{label}: {value}")
        self.status(f"Planned entries: {len(plan)}")

    def display_sync_plan(self, repo_root: str, worktree_root: str, store_root: str,
                          config_source: str, plan: List[PlanItem]) -> None:
        self._display_header(
            [("Repo", repo_root), ("Worktree", worktree_root), ("Store", store_root), ("Config", config_source)],
            plan,
        )
        for item in plan:
            self.console.print(escape(f"{item.source} -> {item.store} -> {item.destination}"))

    def display_push_plan(self, repo_root: str, store_root: str, config_source: str,
                          plan: List[PlanItem]) -> None:
        self._display_header(
            [("Repo", repo_root), ("Store", store_root), ("Config", config_source)],
            plan,
        )
        for item in plan:
            self.console.print(escape(f"{item.source} -> {item.destination}"))

    def display_sync_summary(self, summary: SyncSummary) -> None:
        self.status(
            f"Done. Copied into store: {summary.copied}, linked: {summary.linked}, skipped: {summary.skipped}",
            style="green" if not summary.skipped else None,
        )

    def display_push_summary(self, summary: PushSummary) -> None:
        self.status(
            f"Done. Pushed {summary.pushed} files to repo, skipped {summary.skipped}.",
            style="green" if not summary.skipped else None,
        )
