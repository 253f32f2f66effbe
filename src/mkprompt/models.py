"""Dataclasses shared across modules."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntFlag
from functools import reduce
from pathlib import Path
from typing import Iterable


class StatusFlag(IntFlag):
    """Per-entry change status, split into an index group and a worktree group."""

    CURRENT = 0
    INDEX_NEW = 1 << 0
    INDEX_MODIFIED = 1 << 1
    INDEX_DELETED = 1 << 2
    INDEX_RENAMED = 1 << 3
    INDEX_TYPECHANGE = 1 << 4
    WT_NEW = 1 << 7
    WT_MODIFIED = 1 << 8
    WT_DELETED = 1 << 9
    WT_TYPECHANGE = 1 << 10
    WT_RENAMED = 1 << 11
    CONFLICTED = 1 << 15


INDEX_MASK = (
    StatusFlag.INDEX_NEW
    | StatusFlag.INDEX_MODIFIED
    | StatusFlag.INDEX_DELETED
    | StatusFlag.INDEX_RENAMED
    | StatusFlag.INDEX_TYPECHANGE
)

WORKTREE_MASK = (
    StatusFlag.WT_NEW
    | StatusFlag.WT_MODIFIED
    | StatusFlag.WT_DELETED
    | StatusFlag.WT_TYPECHANGE
    | StatusFlag.WT_RENAMED
)


def fold_status(flags: Iterable[StatusFlag]) -> tuple[bool, bool]:
    """Return ``(staged, unstaged)`` for a collection of entry statuses."""

    combined = reduce(lambda acc, flag: acc | flag, flags, StatusFlag.CURRENT)
    return bool(combined & INDEX_MASK), bool(combined & WORKTREE_MASK)


@dataclass(frozen=True)
class Repository:
    """A git repository discovered from a path."""

    path: Path
    git_dir: Path
    bare: bool


@dataclass(frozen=True)
class StatusSummary:
    """What a single porcelain status call reports."""

    branch: str | None = None
    staged: bool = False
    unstaged: bool = False
    ahead: int = 0
    behind: int = 0


@dataclass(frozen=True)
class RepoFacts:
    """Everything the prompt needs to know about a repository."""

    branch: str | None = None
    staged: bool = False
    unstaged: bool = False
    ahead: int = 0
    behind: int = 0
    stash_count: int = 0
    bare: bool = False
    empty: bool = False

    @property
    def label(self) -> str:
        return self.branch or "detached"
