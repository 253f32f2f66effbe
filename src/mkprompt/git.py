"""Thin wrappers around git CLI commands that gather prompt facts."""

from __future__ import annotations

import logging
import subprocess
from pathlib import Path
from typing import Iterable

from .exceptions import GitCommandError
from .models import RepoFacts, Repository, StatusFlag, StatusSummary, fold_status

INDEX_CODES = {
    "A": StatusFlag.INDEX_NEW,
    "C": StatusFlag.INDEX_NEW,
    "M": StatusFlag.INDEX_MODIFIED,
    "D": StatusFlag.INDEX_DELETED,
    "R": StatusFlag.INDEX_RENAMED,
    "T": StatusFlag.INDEX_TYPECHANGE,
}

WORKTREE_CODES = {
    "A": StatusFlag.WT_NEW,
    "M": StatusFlag.WT_MODIFIED,
    "D": StatusFlag.WT_DELETED,
    "R": StatusFlag.WT_RENAMED,
    "T": StatusFlag.WT_TYPECHANGE,
}

DETACHED_HEAD = "(detached)"


def run_git(
    args: Iterable[str],
    *,
    cwd: Path,
    raise_on_error: bool = True,
) -> subprocess.CompletedProcess[str]:
    """Execute a git command and optionally raise on failure."""

    cmd = ["git", *args]
    logging.debug("Running command: %s (in %s)", " ".join(cmd), cwd)
    try:
        proc = subprocess.run(
            cmd,
            cwd=str(cwd),
            capture_output=True,
            text=True,
            errors="replace",
            check=False,
        )
    except (OSError, UnicodeError) as exc:
        raise GitCommandError(cmd, 127, str(exc)) from exc
    if raise_on_error and proc.returncode != 0:
        raise GitCommandError(cmd, proc.returncode, proc.stderr)
    return proc


def discover(path: Path) -> Repository | None:
    """Find the repository enclosing ``path``, or ``None`` outside of one."""

    cwd = path if path.is_dir() else path.parent
    proc = run_git(
        ["rev-parse", "--absolute-git-dir", "--is-bare-repository", "--is-inside-work-tree"],
        cwd=cwd,
        raise_on_error=False,
    )
    if proc.returncode != 0:
        logging.debug("No repository at %s: %s", cwd, proc.stderr.strip())
        return None
    lines = proc.stdout.splitlines()
    if len(lines) < 3:
        raise GitCommandError(list(proc.args), proc.returncode, "unexpected rev-parse output")
    git_dir, is_bare, inside_work_tree = (line.strip() for line in lines[:3])
    # inside a .git directory there is no work tree either
    bare = is_bare == "true" or inside_work_tree == "false"
    return Repository(path=cwd, git_dir=Path(git_dir), bare=bare)


def is_empty(repo: Repository) -> bool:
    proc = run_git(
        ["rev-parse", "--verify", "--quiet", "HEAD^{commit}"],
        cwd=repo.path,
        raise_on_error=False,
    )
    return proc.returncode != 0


def entry_status(line: str) -> StatusFlag:
    """Map one porcelain v2 entry line to its status flags."""

    kind, _, rest = line.partition(" ")
    if kind == "?":
        return StatusFlag.WT_NEW
    if kind == "u":
        return StatusFlag.CONFLICTED
    if kind not in ("1", "2"):
        return StatusFlag.CURRENT
    xy = rest[:2]
    if len(xy) != 2:
        return StatusFlag.CURRENT
    flags = StatusFlag.CURRENT
    flags |= INDEX_CODES.get(xy[0], StatusFlag.CURRENT)
    flags |= WORKTREE_CODES.get(xy[1], StatusFlag.CURRENT)
    return flags


def parse_status(output: str) -> StatusSummary:
    """Parse ``git status --porcelain=v2 --branch`` output."""

    branch: str | None = None
    ahead = behind = 0
    flags: list[StatusFlag] = []
    for raw in output.splitlines():
        line = raw.rstrip("\n")
        if not line:
            continue
        if line.startswith("# "):
            key, _, value = line[2:].partition(" ")
            if key == "branch.head":
                branch = None if value == DETACHED_HEAD else value
            elif key == "branch.ab":
                ahead, behind = _parse_ahead_behind(value)
            continue
        flags.append(entry_status(line))
    staged, unstaged = fold_status(flags)
    return StatusSummary(
        branch=branch,
        staged=staged,
        unstaged=unstaged,
        ahead=ahead,
        behind=behind,
    )


def _parse_ahead_behind(value: str) -> tuple[int, int]:
    ahead = behind = 0
    for token in value.split():
        try:
            if token.startswith("+"):
                ahead = int(token[1:])
            elif token.startswith("-"):
                behind = int(token[1:])
        except ValueError:
            logging.debug("Ignoring malformed ahead/behind token %r", token)
    return ahead, behind


def status(repo: Repository) -> StatusSummary:
    proc = run_git(
        ["--no-optional-locks", "status", "--porcelain=v2", "--branch"],
        cwd=repo.path,
    )
    return parse_status(proc.stdout)


def stash_count(repo: Repository) -> int:
    proc = run_git(
        ["rev-list", "--walk-reflogs", "--count", "refs/stash"],
        cwd=repo.path,
        raise_on_error=False,
    )
    if proc.returncode != 0:
        return 0
    try:
        return int(proc.stdout.strip())
    except ValueError:
        return 0


def collect_facts(repo: Repository) -> RepoFacts:
    """Gather the facts shown in the prompt for ``repo``.

    Missing optional facts (no upstream, no stash) come back as zeroes. A
    failing status query raises :class:`GitCommandError`.
    """

    if is_empty(repo):
        return RepoFacts(bare=repo.bare, empty=True)
    if repo.bare:
        return RepoFacts(bare=True)
    summary = status(repo)
    return RepoFacts(
        branch=summary.branch,
        staged=summary.staged,
        unstaged=summary.unstaged,
        ahead=summary.ahead,
        behind=summary.behind,
        stash_count=stash_count(repo),
    )
