"""Command-line argument parsing for wtm."""

import argparse
from typing import List, Optional

from wtm.__version__ import __version__

COMMANDS = ("sync", "push", "version")

USAGE = "usage: wtm <sync|push|version> [options]"


def _common_options() -> argparse.ArgumentParser:
    """Options shared by sync and push."""
    parent = argparse.ArgumentParser(add_help=False)
    parent.add_argument("--repo", metavar="PATH", help="Repo path (defaults to the repo of the current dir)")
    target = parent.add_mutually_exclusive_group()
    target.add_argument("--worktree", type=int, metavar="N", help="Worktree number (1-indexed)")
    target.add_argument("--dest", metavar="PATH", help="Destination worktree path")
    parent.add_argument("--yes", action="store_true", help="Skip the global proceed confirmation")
    parent.add_argument("--force", action="store_true", help="Overwrite files without per-file prompting")
    parent.add_argument(
        "--dry-run",
        action="store_true",
        help="Preview mode - show the plan without touching any files",
    )
    parent.add_argument("-v", "--verbose", action="store_true", help="Show verbose output")
    parent.add_argument(
        "--debug", action="store_true", help="Show debug information for troubleshooting"
    )
    return parent


def build_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog="wtm",
        description="Sync repo-local config files (.env and friends) into git worktrees",
        epilog="Files are kept in ~/.wtm/configs and symlinked into worktrees. "
        "Patterns come from .worktree-manager.yml at the repo root when present.",
    )
    parser.add_argument("--version", action="version", version=f"wtm {__version__}")

    subparsers = parser.add_subparsers(dest="command", metavar="<sync|push|version>")
    common = _common_options()

    subparsers.add_parser(
        "sync",
        parents=[common],
        help="Copy config files into the store and symlink them into a worktree",
    )
    subparsers.add_parser(
        "push",
        parents=[common],
        help="Copy config files from a worktree's store back into the repo",
    )
    subparsers.add_parser("version", help="Print the version")

    return parser


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    return build_parser().parse_args(argv)
