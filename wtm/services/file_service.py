"""File copy and symlink operations with the overwrite policy."""

import os
import shutil

from wtm.exceptions import CopyError, LinkError, SkipError
from wtm.services.prompt_service import Prompter
from wtm.logging_config import get_logger

logger = get_logger(__name__)


def _ensure_parent(path: str, error_cls):
    parent = os.path.dirname(path)
    try:
        os.makedirs(parent, mode=0o755, exist_ok=True)
    except OSError as e:
        raise error_cls("mkdir", parent, str(e)) from e


def copy_file_contents(src: str, dst: str) -> None:
    """Copy bytes, permission bits and modification time from src to dst.

    Restoring the modification time is best effort.

    Raises:
        CopyError: If reading, writing or chmod fails
    """
    try:
        src_stat = os.stat(src)
    except OSError as e:
        raise CopyError("stat", src, str(e)) from e

    try:
        shutil.copyfile(src, dst)
    except (OSError, shutil.Error) as e:
        raise CopyError("copy", f"{src} -> {dst}", str(e)) from e

    try:
        shutil.copymode(src, dst)
    except OSError as e:
        raise CopyError("chmod", dst, str(e)) from e

    try:
        os.utime(dst, (src_stat.st_atime, src_stat.st_mtime))
    except OSError as e:
        logger.debug(f"Could not preserve mtime on {dst}: {e}")


def handle_existing(path: str, force: bool, prompter: Prompter, error_cls=LinkError) -> None:
    """Clear an existing entry at path, asking first unless forced.

    Args:
        path: Destination that is about to be written
        force: Overwrite without asking
        prompter: Used for the overwrite question
        error_cls: Error raised when stat or removal fails

    Raises:
        SkipError: If the user declines the overwrite
    """
    try:
        os.lstat(path)
    except FileNotFoundError:
        return
    except OSError as e:
        raise error_cls("stat", path, str(e)) from e

    if not force and not prompter.confirm(f"Overwrite {path}? [y/N] "):
        raise SkipError(path)

    try:
        os.remove(path)
    except OSError as e:
        raise error_cls("remove", path, str(e)) from e
    logger.debug(f"Removed existing {path}")


def copy_repo_to_store(src: str, dst: str) -> None:
    """Copy a repository file into the store, creating directories as needed.

    Raises:
        CopyError: If the copy fails
    """
    _ensure_parent(dst, CopyError)
    copy_file_contents(src, dst)


def copy_store_to_repo(src: str, dst: str, force: bool, prompter: Prompter) -> None:
    """Copy a store file back over the repository file.

    Raises:
        SkipError: If the user declines the overwrite
        CopyError: If the copy fails
    """
    _ensure_parent(dst, CopyError)
    handle_existing(dst, force, prompter, error_cls=CopyError)
    copy_file_contents(src, dst)


def ensure_worktree_link(target: str, link: str, force: bool, prompter: Prompter) -> None:
    """Make link a symlink pointing at target.

    A link that already points at target is left untouched.

    Raises:
        SkipError: If the user declines to replace an existing entry
        LinkError: If the link cannot be created
    """
    _ensure_parent(link, LinkError)

    if os.path.islink(link):
        try:
            if os.readlink(link) == target:
                logger.debug(f"{link} already points at {target}")
                return
        except OSError as e:
            logger.debug(f"Could not read link {link}: {e}")

    handle_existing(link, force, prompter, error_cls=LinkError)

    try:
        os.symlink(target, link)
    except OSError as e:
        raise LinkError("symlink", f"{link} -> {target}", str(e)) from e
