"""Custom exceptions for wtm"""

from typing import Optional


class WtmError(Exception):
    """Base exception for all wtm errors."""
    pass


class WorktreeLookupError(WtmError, LookupError):
    """Raised when the repository root or its worktrees cannot be determined."""
    pass


class ConfigError(WtmError):
    """Exception raised for an unreadable or malformed config file."""

    def __init__(self, path: str, message: Optional[str] = None):
        self.path = path
        self.message = message

        error_msg = f"Invalid config {path}"
        if message:
            error_msg += f": {message}"

        super().__init__(error_msg)


class SelectionError(WtmError):
    """Raised for an invalid worktree selection."""
    pass


class StoreMissingError(WtmError):
    """Raised when pushing from a store that was never synced."""

    def __init__(self, store_root: str):
        self.store_root = store_root
        super().__init__(f'store {store_root} does not exist; run "wtm sync" first')


class PlanWalkError(WtmError):
    """Raised when the directory walk backing a plan fails."""

    def __init__(self, root: str, message: Optional[str] = None):
        self.root = root
        self.message = message

        error_msg = f"Failed to walk {root}"
        if message:
            error_msg += f": {message}"

        super().__init__(error_msg)


class FileOperationError(WtmError):
    """Exception raised when a per-file operation fails."""

    def __init__(self, operation: str, path: str, message: Optional[str] = None):
        self.operation = operation
        self.path = path
        self.message = message

        error_msg = f"{operation} {path}"
        if message:
            error_msg += f": {message}"

        super().__init__(error_msg)


class CopyError(FileOperationError):
    """Exception raised when copying a file fails."""
    pass


class LinkError(FileOperationError):
    """Exception raised when creating a symlink fails."""
    pass


class SkipError(WtmError):
    """Raised when the user declines to overwrite an existing path."""

    def __init__(self, path: str):
        self.path = path
        super().__init__(f"skipped {path}")
