"""Shared constants for wtm."""

from typing import List

# Config file looked up at the repository root
CONFIG_FILE_NAME = ".worktree-manager.yml"

# Source tag reported when no config file is present
DEFAULTS_SOURCE = "defaults"

# Store layout: <home>/.wtm/configs/<repo>/<worktree segments...>
STORE_ROOT_DIR = ".wtm"
STORE_SUB_DIR = "configs"

# Fallback path segments when sanitizing leaves nothing
FALLBACK_REPO_SLUG = "repo"
FALLBACK_WORKTREE_SEGMENT = "worktree"

# Directories the planner never descends into
SKIPPED_DIRS = frozenset({".git", "node_modules"})

DEFAULT_INCLUDE: List[str] = [".env", ".env.*", "**/.env", "**/.env.*"]
DEFAULT_EXCLUDE: List[str] = ["**/*.example*", "**/node_modules/**", "**/.git/**"]

# Worktree listing display
DETACHED_LABEL = "(detached)"
BRANCH_REF_PREFIX = "refs/heads/"
SHORT_HEAD_LENGTH = 8

# Exit codes
EXIT_OK = 0
EXIT_ERROR = 1
EXIT_USAGE = 2
