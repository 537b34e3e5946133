"""Configuration handling for wtm"""

import os
from dataclasses import dataclass, field
from typing import Optional, List

import yaml

from wtm.constants import CONFIG_FILE_NAME, DEFAULTS_SOURCE, DEFAULT_INCLUDE, DEFAULT_EXCLUDE
from wtm.exceptions import ConfigError
from wtm.logging_config import get_logger

logger = get_logger(__name__)


@dataclass
class Config:
    """Include/exclude glob patterns selecting the files to sync."""

    include: List[str] = field(default_factory=lambda: list(DEFAULT_INCLUDE))
    exclude: List[str] = field(default_factory=lambda: list(DEFAULT_EXCLUDE))

    def __post_init__(self):
        """Validate configuration after initialization."""
        self._validate_patterns("include", self.include)
        self._validate_patterns("exclude", self.exclude)

    @staticmethod
    def _validate_patterns(name: str, patterns):
        """Validate a pattern list is a list of strings."""
        if not isinstance(patterns, list):
            raise ValueError(f"{name} must be a list of glob patterns, got {type(patterns).__name__}")
        for pattern in patterns:
            if not isinstance(pattern, str):
                raise ValueError(f"{name} entries must be strings, got {pattern!r}")

    @classmethod
    def default(cls) -> "Config":
        """Return the built-in patterns."""
        return cls()

    def with_defaults(self) -> "Config":
        """Replace each empty pattern list with its built-in default."""
        return Config(
            include=list(self.include) or list(DEFAULT_INCLUDE),
            exclude=list(self.exclude) or list(DEFAULT_EXCLUDE),
        )

    def to_dict(self) -> dict:
        """Convert config to dictionary."""
        return {"include": self.include, "exclude": self.exclude}

    @classmethod
    def from_dict(cls, config_dict: dict) -> "Config":
        """Create Config from dictionary.

        Missing or null keys become empty lists; unknown keys are ignored.
        """
        known_fields = {"include", "exclude"}
        filtered = {k: (v if v is not None else []) for k, v in config_dict.items() if k in known_fields}
        filtered.setdefault("include", [])
        filtered.setdefault("exclude", [])
        return cls(**filtered)


@dataclass
class LoadedConfig:
    """A config together with where it came from ("defaults" or a file path)."""

    config: Config
    source: str


@dataclass
class SyncOptions:
    """Runtime options shared by the sync and push commands."""

    repo_hint: Optional[str] = None
    worktree_number: Optional[int] = None  # 1-indexed
    dest_override: Optional[str] = None
    yes: bool = False  # Skip the global proceed confirmation
    force: bool = False  # Skip per-file overwrite confirmation
    dry_run: bool = False

    def __post_init__(self):
        """Validate options after initialization."""
        if self.worktree_number is not None and self.dest_override:
            raise ValueError("--worktree and --dest are mutually exclusive")


def load_config(repo_root: str) -> LoadedConfig:
    """Load the include/exclude config from the repository root.

    Args:
        repo_root: Repository top-level directory

    Returns:
        LoadedConfig; built-in defaults with source "defaults" when the file
        is absent

    Raises:
        ConfigError: If the file cannot be read or parsed
    """
    path = os.path.join(repo_root, CONFIG_FILE_NAME)
    try:
        with open(path, "r", encoding="utf-8") as f:
            raw = f.read()
    except FileNotFoundError:
        logger.debug(f"No {CONFIG_FILE_NAME} in {repo_root}, using defaults")
        return LoadedConfig(config=Config.default(), source=DEFAULTS_SOURCE)
    except OSError as e:
        raise ConfigError(path, f"failed to read: {e}") from e

    try:
        data = yaml.safe_load(raw)
    except yaml.YAMLError as e:
        raise ConfigError(path, f"failed to parse: {e}") from e

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigError(path, "top level must be a mapping with 'include' and 'exclude' keys")

    try:
        config = Config.from_dict(data).with_defaults()
    except ValueError as e:
        raise ConfigError(path, str(e)) from e

    logger.debug(f"Loaded config from {path}: {config.to_dict()}")
    return LoadedConfig(config=config, source=path)
