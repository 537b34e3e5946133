"""Entry point for the wtm command."""

import sys
from typing import List, Optional

from rich.console import Console

from wtm.__version__ import __version__
from wtm.cli.args import COMMANDS, USAGE, parse_args
from wtm.config import SyncOptions
from wtm.constants import EXIT_OK, EXIT_ERROR, EXIT_USAGE
from wtm.core import WorktreeSync
from wtm.exceptions import WtmError
from wtm.logging_config import setup_logging, get_logger

console = Console(soft_wrap=True, highlight=False, emoji=False)
err_console = Console(stderr=True, soft_wrap=True, highlight=False, emoji=False)
logger = get_logger(__name__)


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the application."""
    if argv is None:
        argv = sys.argv[1:]

    if not argv:
        err_console.print(USAGE, markup=False)
        return EXIT_USAGE

    if argv[0] not in COMMANDS and argv[0] not in ("-h", "--help", "--version"):
        err_console.print(f"unknown command: {argv[0]}", markup=False)
        return EXIT_USAGE

    try:
        parsed_args = parse_args(argv)
    except SystemExit as e:
        # argparse exits 2 on bad arguments and 0 after --help/--version
        return e.code if isinstance(e.code, int) else EXIT_USAGE

    if parsed_args.command == "version":
        console.print(__version__, markup=False)
        return EXIT_OK

    setup_logging(verbose=parsed_args.verbose, debug=parsed_args.debug)

    options = SyncOptions(
        repo_hint=parsed_args.repo,
        worktree_number=parsed_args.worktree,
        dest_override=parsed_args.dest,
        yes=parsed_args.yes,
        force=parsed_args.force,
        dry_run=parsed_args.dry_run,
    )

    if parsed_args.debug:
        err_console.print("[yellow]Debug mode enabled[/yellow]")
        logger.debug(f"Options: {options}")

    try:
        syncer = WorktreeSync(options)
        if parsed_args.command == "sync":
            syncer.sync()
        else:
            syncer.push()
        return EXIT_OK
    except KeyboardInterrupt:
        err_console.print("\n[yellow]Operation cancelled by user[/yellow]")
        return EXIT_ERROR
    except WtmError as e:
        err_console.print(f"Error: {e}", style="red", markup=False)
        if parsed_args.debug:
            err_console.print_exception()
        return EXIT_ERROR


if __name__ == "__main__":
    sys.exit(main())
