"""Turn repository facts into the colored VCS part of the prompt."""

from __future__ import annotations

from .colors import Role, Segment
from .models import RepoFacts

AHEAD_GLYPH = "↑"
BEHIND_GLYPH = "↓"


def branch_role(facts: RepoFacts) -> Role:
    if facts.branch is None:
        return Role.ALERT
    if facts.unstaged and facts.staged:
        return Role.WARNING
    if facts.unstaged:
        return Role.INFO
    if facts.staged:
        return Role.SECONDARY
    return Role.SUCCESS


def divergence(facts: RepoFacts) -> Segment:
    # nothing is shown for a branch that is both ahead and behind
    if facts.ahead > 0 and facts.behind == 0:
        return Segment.of(AHEAD_GLYPH, Role.SUCCESS)
    if facts.behind > 0 and facts.ahead == 0:
        return Segment.of(BEHIND_GLYPH, Role.ALERT)
    return Segment()


def stash(facts: RepoFacts) -> Segment:
    if facts.stash_count > 0:
        return Segment.of(f"({facts.stash_count})", Role.ALERT)
    return Segment()


def colorize(facts: RepoFacts) -> Segment:
    """Build the VCS segment, e.g. ``(main↑(2))``, for ``facts``."""

    if facts.empty:
        return Segment.of("(empty)", Role.EMPTY)
    if facts.bare:
        return Segment.of("(bare)", Role.BARE)
    role = branch_role(facts)
    return (
        Segment.of(f"({facts.label}", role)
        + divergence(facts)
        + stash(facts)
        + Segment.of(")", role)
    )
