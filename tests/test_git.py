"""Tests for collecting repository facts through the git CLI."""

from __future__ import annotations

import os
import shutil
import subprocess
import tempfile
import unittest
from pathlib import Path

from mkprompt import git
from mkprompt.models import RepoFacts, StatusFlag, fold_status

STATUS_OUTPUT = """\
# branch.oid 2f4c3a1e9d9a0c3b5e3c1f2a4b5c6d7e8f9a0b1c
# branch.head feature/login
# branch.upstream origin/feature/login
# branch.ab +2 -0
1 M. N... 100644 100644 100644 3b18e51 3b18e52 src/app.py
1 .M N... 100644 100644 100644 3b18e51 3b18e51 README.md
? notes with spaces.txt
"""


class ParseStatusTests(unittest.TestCase):
    def test_reads_branch_divergence_and_changes(self) -> None:
        summary = git.parse_status(STATUS_OUTPUT)

        self.assertEqual(summary.branch, "feature/login")
        self.assertEqual((summary.ahead, summary.behind), (2, 0))
        self.assertTrue(summary.staged)
        self.assertTrue(summary.unstaged)

    def test_detached_head_without_upstream(self) -> None:
        output = "# branch.oid 2f4c3a1e\n# branch.head (detached)\n"

        summary = git.parse_status(output)

        self.assertIsNone(summary.branch)
        self.assertEqual((summary.ahead, summary.behind), (0, 0))
        self.assertFalse(summary.staged or summary.unstaged)

    def test_staged_only(self) -> None:
        output = "# branch.head main\n2 R. N... 100644 100644 100644 aaa aaa R100 new.py\told.py\n"

        summary = git.parse_status(output)

        self.assertTrue(summary.staged)
        self.assertFalse(summary.unstaged)


class EntryStatusTests(unittest.TestCase):
    def test_codes_map_to_their_side(self) -> None:
        cases = {
            "1 A. N... x": StatusFlag.INDEX_NEW,
            "1 D. N... x": StatusFlag.INDEX_DELETED,
            "1 T. N... x": StatusFlag.INDEX_TYPECHANGE,
            "1 .D N... x": StatusFlag.WT_DELETED,
            "1 .T N... x": StatusFlag.WT_TYPECHANGE,
            "1 .A N... x": StatusFlag.WT_NEW,
            "1 MM N... x": StatusFlag.INDEX_MODIFIED | StatusFlag.WT_MODIFIED,
            "? untracked.txt": StatusFlag.WT_NEW,
            "u UU N... x": StatusFlag.CONFLICTED,
            "! ignored.log": StatusFlag.CURRENT,
        }
        for line, expected in cases.items():
            with self.subTest(line=line):
                self.assertEqual(git.entry_status(line), expected)

    def test_fold_checks_both_groups(self) -> None:
        self.assertEqual(fold_status([]), (False, False))
        self.assertEqual(fold_status([StatusFlag.INDEX_NEW]), (True, False))
        self.assertEqual(fold_status([StatusFlag.WT_DELETED]), (False, True))
        self.assertEqual(fold_status([StatusFlag.CONFLICTED]), (False, False))


GIT_ENV = {
    "GIT_AUTHOR_NAME": "Test",
    "GIT_AUTHOR_EMAIL": "test@example.com",
    "GIT_COMMITTER_NAME": "Test",
    "GIT_COMMITTER_EMAIL": "test@example.com",
    "GIT_CONFIG_NOSYSTEM": "1",
}


@unittest.skipUnless(shutil.which("git"), "git is not installed")
class CollectFactsTests(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.addCleanup(self._tmp.cleanup)
        self.root = Path(self._tmp.name).resolve()
        self.repo_dir = self.root / "repo"
        self.repo_dir.mkdir()
        self._env = dict(os.environ, **GIT_ENV)

    def _git(self, *args: str, cwd: Path | None = None) -> None:
        subprocess.run(
            ["git", "-c", "commit.gpgsign=false", *args],
            cwd=str(cwd or self.repo_dir),
            env=self._env,
            capture_output=True,
            check=True,
        )

    def _init(self) -> None:
        self._git("init", "-q")
        self._git("symbolic-ref", "HEAD", "refs/heads/main")

    def _commit(self, name: str = "file.txt", content: str = "hello\n") -> None:
        (self.repo_dir / name).write_text(content)
        self._git("add", name)
        self._git("commit", "-q", "-m", f"add {name}")

    def _facts(self, path: Path | None = None) -> RepoFacts:
        repo = git.discover(path or self.repo_dir)
        self.assertIsNotNone(repo)
        return git.collect_facts(repo)

    def test_outside_a_repository(self) -> None:
        self.assertIsNone(git.discover(self.root))

    def test_empty_repository(self) -> None:
        self._init()

        self.assertEqual(self._facts(), RepoFacts(empty=True))

    def test_clean_repository(self) -> None:
        self._init()
        self._commit()

        self.assertEqual(self._facts(), RepoFacts(branch="main"))

    def test_discovered_from_a_subdirectory(self) -> None:
        self._init()
        self._commit()
        sub = self.repo_dir / "pkg" / "sub"
        sub.mkdir(parents=True)

        self.assertEqual(self._facts(sub).branch, "main")

    def test_staged_and_unstaged_changes(self) -> None:
        self._init()
        self._commit()
        (self.repo_dir / "file.txt").write_text("changed\n")
        self._git("add", "file.txt")
        (self.repo_dir / "untracked.txt").write_text("new\n")

        facts = self._facts()

        self.assertTrue(facts.staged)
        self.assertTrue(facts.unstaged)

    def test_stash_entries_are_counted(self) -> None:
        self._init()
        self._commit()
        for content in ("one\n", "two\n"):
            (self.repo_dir / "file.txt").write_text(content)
            self._git("stash", "-q")

        facts = self._facts()

        self.assertEqual(facts.stash_count, 2)
        self.assertFalse(facts.unstaged)

    def test_ahead_of_upstream(self) -> None:
        self._init()
        self._commit()
        self._git("branch", "base")
        self._commit("second.txt")
        self._git("branch", "--set-upstream-to=base")

        facts = self._facts()

        self.assertEqual((facts.ahead, facts.behind), (1, 0))

    def test_detached_head(self) -> None:
        self._init()
        self._commit()
        self._git("checkout", "-q", "--detach")

        self.assertIsNone(self._facts().branch)

    def test_branch_name_that_is_not_utf8(self) -> None:
        self._init()
        self._commit()
        self._git("checkout", "-q", "-b", os.fsdecode(b"fix-\xff"))

        self.assertEqual(self._facts().branch, "fix-\ufffd")

    def test_bare_repository(self) -> None:
        self._init()
        self._commit()
        bare = self.root / "bare.git"
        self._git("clone", "-q", "--bare", str(self.repo_dir), str(bare), cwd=self.root)

        self.assertEqual(self._facts(bare), RepoFacts(bare=True))


if __name__ == "__main__":
    unittest.main()
