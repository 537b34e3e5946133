"""Tests for worktree selection and the sync/push flows"""
import os
import stat
from pathlib import Path

import pytest

from wtm.constants import CONFIG_FILE_NAME
from wtm.core import WorktreeSync
from wtm.exceptions import SelectionError, StoreMissingError, WorktreeLookupError, ConfigError
from wtm.models.worktree import WorktreeInfo
from wtm.services.store_service import store_root_path


@pytest.fixture
def make_syncer(repo_layout, home_dir, make_options, prompter):
    """Build a WorktreeSync over the plain repo layout with a fixed worktree list."""
    repo_root, _, worktrees = repo_layout

    def _make(answers=(), **option_overrides):
        return WorktreeSync(
            make_options(**option_overrides),
            prompter=prompter(answers),
            worktree_lister=lambda root: list(worktrees),
            repo_root=str(repo_root),
            home=str(home_dir),
        )
    return _make


class TestPickWorktree:
    """Test --dest, --worktree and interactive selection."""

    WORKTREES = [
        WorktreeInfo(path="/repo", branch="refs/heads/main", head="1111111111"),
        WorktreeInfo(path="/repo-wt", branch="refs/heads/feat/x", head="2222222222"),
        WorktreeInfo(path="/repo-detached", head="3333333333"),
    ]

    def test_dest_override_matches(self, make_syncer):
        syncer = make_syncer(worktree_number=None, dest_override="/repo-wt/")
        assert syncer.pick_worktree(self.WORKTREES) == self.WORKTREES[1]

    def test_dest_override_unknown(self, make_syncer):
        syncer = make_syncer(dest_override="/elsewhere")
        with pytest.raises(SelectionError, match="--dest did not match"):
            syncer.pick_worktree(self.WORKTREES)

    def test_worktree_number(self, make_syncer):
        assert make_syncer(worktree_number=3).pick_worktree(self.WORKTREES) == self.WORKTREES[2]

    @pytest.mark.parametrize("number", [0, 4, -1])
    def test_worktree_number_out_of_range(self, make_syncer, number):
        with pytest.raises(SelectionError, match="between 1 and 3"):
            make_syncer(worktree_number=number).pick_worktree(self.WORKTREES)

    def test_interactive_reprompts_until_valid(self, make_syncer, capsys):
        syncer = make_syncer(answers=["", "abc", "9", " 2 "])

        chosen = syncer.pick_worktree(self.WORKTREES)

        assert chosen == self.WORKTREES[1]
        assert len(syncer.prompter.prompts) == 4
        err = capsys.readouterr().err
        assert "Active worktrees:" in err
        assert "[1] /repo  main  11111111" in err
        assert "[3] /repo-detached  (detached)  33333333" in err
        assert err.count("Invalid selection. Enter a number between 1 and 3.") == 3

    def test_interactive_end_of_input(self, make_syncer):
        with pytest.raises(SelectionError):
            make_syncer(answers=["x"]).pick_worktree(self.WORKTREES)


class TestSync:
    """Test the sync flow."""

    def test_end_to_end_env_and_example(self, make_syncer, repo_layout, home_dir, write):
        repo_root, worktree_root, worktrees = repo_layout
        write(repo_root / ".env", "API_KEY=abc\n", mode=0o640)
        write(repo_root / ".env.example", "API_KEY=\n")

        summary = make_syncer(worktree_number=2).sync()

        store_root = store_root_path(str(repo_root), worktrees[1], home=str(home_dir))
        store_env = os.path.join(store_root, ".env")
        assert summary.copied == 1 and summary.linked == 1 and summary.skipped == 0
        with open(store_env, "rb") as f:
            assert f.read() == b"API_KEY=abc\n"
        assert stat.S_IMODE(os.stat(store_env).st_mode) == 0o640
        assert os.path.islink(worktree_root / ".env")
        assert os.path.realpath(worktree_root / ".env") == os.path.realpath(store_env)
        assert not os.path.lexists(os.path.join(store_root, ".env.example"))
        assert not os.path.lexists(worktree_root / ".env.example")

    def test_rerun_on_correct_link_counts_linked(self, make_syncer, repo_layout, write):
        repo_root, worktree_root, _ = repo_layout
        write(repo_root / ".env", "A=1\n")
        make_syncer(worktree_number=2).sync()
        before = os.lstat(worktree_root / ".env")

        # Not forced: an overwrite prompt would raise EOF and skip
        summary = make_syncer(worktree_number=2, force=False).sync()

        assert summary.linked == 1 and summary.skipped == 0
        assert os.lstat(worktree_root / ".env").st_ino == before.st_ino

    def test_edits_through_link_reach_store(self, make_syncer, repo_layout, home_dir, write):
        repo_root, worktree_root, worktrees = repo_layout
        write(repo_root / ".env", "A=1\n")
        make_syncer(worktree_number=2).sync()

        (worktree_root / ".env").write_text("A=2\n")

        store_root = store_root_path(str(repo_root), worktrees[1], home=str(home_dir))
        with open(os.path.join(store_root, ".env")) as f:
            assert f.read() == "A=2\n"

    def test_existing_file_declined_is_skipped(self, make_syncer, repo_layout, write, capsys):
        repo_root, worktree_root, _ = repo_layout
        write(repo_root / ".env", "A=1\n")
        write(worktree_root / ".env", "LOCAL=1\n")

        summary = make_syncer(answers=["n"], worktree_number=2, force=False).sync()

        assert summary.copied == 1 and summary.linked == 0 and summary.skipped == 1
        assert (worktree_root / ".env").read_text() == "LOCAL=1\n"
        assert f"Skipped: {worktree_root / '.env'}" in capsys.readouterr().err

    def test_copy_failure_continues_with_next_item(self, make_syncer, repo_layout, write):
        repo_root, worktree_root, _ = repo_layout
        write(repo_root / ".env", "A=1\n")
        write(repo_root / "apps" / ".env", "B=1\n")
        os.symlink(str(repo_root / "gone"), str(repo_root / ".env.local"))

        summary = make_syncer(worktree_number=2).sync()

        assert summary.skipped == 1
        assert summary.copied == 2 and summary.linked == 2
        assert os.path.islink(worktree_root / "apps" / ".env")
        assert not os.path.lexists(worktree_root / ".env.local")

    def test_rejects_repo_root_as_target(self, make_syncer):
        with pytest.raises(SelectionError, match="nothing to sync"):
            make_syncer(worktree_number=1).sync()

    def test_nothing_matched(self, make_syncer, capsys):
        summary = make_syncer(worktree_number=2).sync()

        assert summary.copied == 0
        assert "No files matched; nothing to do." in capsys.readouterr().err

    def test_declined_proceed_aborts(self, make_syncer, repo_layout, write, capsys):
        repo_root, worktree_root, _ = repo_layout
        write(repo_root / ".env", "A=1\n")

        summary = make_syncer(answers=["n"], worktree_number=2, yes=False).sync()

        assert summary.aborted
        assert not os.path.lexists(worktree_root / ".env")
        assert "Aborted." in capsys.readouterr().err

    def test_dry_run_touches_nothing(self, make_syncer, repo_layout, home_dir, write, capsys):
        repo_root, worktree_root, _ = repo_layout
        write(repo_root / ".env", "A=1\n")

        make_syncer(worktree_number=2, dry_run=True).sync()

        assert not os.path.lexists(worktree_root / ".env")
        assert not (home_dir / ".wtm").exists()
        out = capsys.readouterr().out
        assert f"{repo_root / '.env'} -> " in out

    def test_prints_plan(self, make_syncer, repo_layout, write, capsys):
        repo_root, worktree_root, _ = repo_layout
        write(repo_root / ".env", "A=1\n")

        make_syncer(worktree_number=2).sync()

        captured = capsys.readouterr()
        assert f"Repo: {repo_root}" in captured.err
        assert f"Worktree: {worktree_root}" in captured.err
        assert "Config: defaults" in captured.err
        assert "Planned entries: 1" in captured.err
        assert captured.out.strip().endswith(f"-> {worktree_root / '.env'}")
        assert "Done. Copied into store: 1, linked: 1, skipped: 0" in captured.err

    def test_uses_repo_config_file(self, make_syncer, repo_layout, write):
        repo_root, worktree_root, _ = repo_layout
        write(repo_root / CONFIG_FILE_NAME, "include:\n  - config/*.local\n")
        write(repo_root / "config" / "app.local", "x")
        write(repo_root / ".env", "A=1\n")

        summary = make_syncer(worktree_number=2).sync()

        assert summary.linked == 1
        assert os.path.islink(worktree_root / "config" / "app.local")
        assert not os.path.lexists(worktree_root / ".env")

    def test_bad_config_is_fatal(self, make_syncer, repo_layout, write):
        repo_root, _, _ = repo_layout
        write(repo_root / CONFIG_FILE_NAME, "include: [oops\n")

        with pytest.raises(ConfigError):
            make_syncer(worktree_number=2).sync()


class TestPush:
    """Test the push flow."""

    def test_requires_store(self, make_syncer):
        with pytest.raises(StoreMissingError, match='run "wtm sync" first'):
            make_syncer(worktree_number=2).push()

    def test_sync_then_push_reproduces_content(self, make_syncer, repo_layout, write):
        repo_root, _, _ = repo_layout
        files = {".env": b"A=1\n", "apps/api/.env": b"B=\xc3\xa9\n"}
        for rel, content in files.items():
            path = repo_root / rel
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_bytes(content)

        make_syncer(worktree_number=2).sync()
        summary = make_syncer(worktree_number=2).push()

        assert summary.pushed == 2 and summary.skipped == 0
        for rel, content in files.items():
            assert (repo_root / rel).read_bytes() == content

    def test_push_brings_worktree_edits_back(self, make_syncer, repo_layout, write):
        repo_root, worktree_root, _ = repo_layout
        write(repo_root / ".env", "A=1\n")
        make_syncer(worktree_number=2).sync()
        (worktree_root / ".env").write_text("A=2\n")

        make_syncer(worktree_number=2).push()

        assert (repo_root / ".env").read_text() == "A=2\n"
        assert not os.path.islink(repo_root / ".env")

    def test_declined_overwrite_is_skipped(self, make_syncer, repo_layout, write, capsys):
        repo_root, worktree_root, _ = repo_layout
        write(repo_root / ".env", "A=1\n")
        make_syncer(worktree_number=2).sync()
        (worktree_root / ".env").write_text("A=2\n")

        summary = make_syncer(answers=["n"], worktree_number=2, force=False).push()

        assert summary.pushed == 0 and summary.skipped == 1
        assert (repo_root / ".env").read_text() == "A=1\n"
        assert "Done. Pushed 0 files to repo, skipped 1." in capsys.readouterr().err

    def test_push_allows_repo_root_worktree(self, make_syncer, repo_layout, home_dir, write):
        repo_root, _, worktrees = repo_layout
        store_root = store_root_path(str(repo_root), worktrees[0], home=str(home_dir))
        write(Path(store_root) / ".env", "R=1\n")

        summary = make_syncer(worktree_number=1).push()

        assert summary.pushed == 1
        assert (repo_root / ".env").read_text() == "R=1\n"

    def test_empty_store(self, make_syncer, repo_layout, home_dir, capsys):
        repo_root, _, worktrees = repo_layout
        os.makedirs(store_root_path(str(repo_root), worktrees[1], home=str(home_dir)))

        summary = make_syncer(worktree_number=2).push()

        assert summary.pushed == 0
        assert "No files in store match" in capsys.readouterr().err


class TestWithRealGit:
    """Run the flows against an actual repository and linked worktree."""

    def test_sync_into_linked_worktree(self, git_repo_with_worktree, home_dir, make_options, prompter, write):
        repo, worktree_path = git_repo_with_worktree
        repo_root = repo.working_tree_dir
        write(Path(repo_root) / ".env", "A=1\n")

        syncer = WorktreeSync(
            make_options(repo_hint=repo_root, dest_override=str(worktree_path)),
            prompter=prompter(),
        )
        summary = syncer.sync()

        # The worktree sits next to the repo, so its store uses absolute path segments
        expected_store = store_root_path(repo_root, WorktreeInfo(path=str(worktree_path)), home=str(home_dir))
        assert expected_store.startswith(os.path.join(str(home_dir), ".wtm", "configs", "test_repo") + os.sep)
        assert expected_store.endswith(os.sep + "test_repo-wt")

        assert summary.linked == 1
        link = worktree_path / ".env"
        assert os.readlink(link) == os.path.join(expected_store, ".env")
        assert link.read_text() == "A=1\n"

    def test_push_from_linked_worktree_store(self, git_repo_with_worktree, home_dir, make_options, prompter, write):
        repo, worktree_path = git_repo_with_worktree
        repo_root = repo.working_tree_dir
        write(Path(repo_root) / ".env", "A=1\n")
        options = dict(repo_hint=repo_root, worktree_number=2)
        WorktreeSync(make_options(**options), prompter=prompter()).sync()
        (worktree_path / ".env").write_text("A=changed\n")

        summary = WorktreeSync(make_options(**options), prompter=prompter()).push()

        assert summary.pushed == 1
        assert (Path(repo_root) / ".env").read_text() == "A=changed\n"

    def test_not_a_repository(self, temp_dir, make_options, prompter):
        syncer = WorktreeSync(make_options(repo_hint=str(temp_dir)), prompter=prompter())
        with pytest.raises(WorktreeLookupError):
            syncer.sync()
