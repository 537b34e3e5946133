"""Pytest fixtures for wtm tests"""
import tempfile
from pathlib import Path

import pytest
import git

from wtm.config import SyncOptions
from wtm.models.worktree import WorktreeInfo
from wtm.services.prompt_service import Prompter


class ScriptedPrompter(Prompter):
    """Prompter answering from a fixed list; raises EOFError when it runs out."""

    def __init__(self, answers=()):
        self.answers = list(answers)
        self.prompts = []

    def prompt_line(self, message: str) -> str:
        self.prompts.append(message)
        if not self.answers:
            raise EOFError
        return self.answers.pop(0)


@pytest.fixture
def temp_dir():
    """Create a temporary directory for testing."""
    with tempfile.TemporaryDirectory() as tmpdir:
        # Resolve so paths match what git reports (e.g. /private/var on macOS)
        yield Path(tmpdir).resolve()


@pytest.fixture
def home_dir(temp_dir, monkeypatch):
    """Point HOME at a scratch directory so the store never touches the real one."""
    home = temp_dir / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    return home


@pytest.fixture
def prompter():
    """Factory for scripted prompters."""
    return ScriptedPrompter


@pytest.fixture
def make_options():
    """Factory for SyncOptions with non-interactive defaults."""
    def _make(**overrides):
        values = {"yes": True, "force": True}
        values.update(overrides)
        return SyncOptions(**values)
    return _make


@pytest.fixture
def git_repo(temp_dir):
    """Create a real Git repository for testing."""
    repo_path = temp_dir / "test_repo"
    repo_path.mkdir()

    repo = git.Repo.init(repo_path)

    # Configure git user for commits
    repo.config_writer().set_value("user", "name", "Test User").release()
    repo.config_writer().set_value("user", "email", "test@example.com").release()

    readme = repo_path / "README.md"
    readme.write_text("# Test Repository\n")
    repo.index.add(["README.md"])
    repo.index.commit("Initial commit")

    try:
        repo.git.branch('-M', 'main')
    except Exception:
        pass

    yield repo

    repo.close()


@pytest.fixture
def git_repo_with_worktree(git_repo, temp_dir):
    """Repository with one linked worktree next to it on branch feature/x."""
    worktree_path = temp_dir / "test_repo-wt"
    git_repo.git.worktree("add", "-b", "feature/x", str(worktree_path))
    yield git_repo, worktree_path


@pytest.fixture
def repo_layout(temp_dir):
    """Plain directories standing in for a repo and a worktree (no git needed)."""
    repo_root = temp_dir / "repo"
    worktree_root = temp_dir / "repo-wt"
    repo_root.mkdir()
    worktree_root.mkdir()
    worktrees = [
        WorktreeInfo(path=str(repo_root), branch="refs/heads/main", head="1" * 40),
        WorktreeInfo(path=str(worktree_root), branch="refs/heads/feature/x", head="2" * 40),
    ]
    return repo_root, worktree_root, worktrees


def write_file(path: Path, content: str = "", mode: int = 0o644) -> Path:
    """Write a file, creating parent directories."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content)
    path.chmod(mode)
    return path


@pytest.fixture
def write():
    return write_file
