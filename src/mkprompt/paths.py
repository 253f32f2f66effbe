"""Budget-driven abbreviation of filesystem paths for the prompt."""

from __future__ import annotations

from dataclasses import dataclass, replace
from pathlib import PurePath

from .colors import Role, Segment
from .exceptions import UnexpectedPathPartError

SEPARATOR = "/"
HOME_TOKEN = "~"


def _named_parts(path: PurePath) -> tuple[str, ...]:
    """Return the components of ``path`` below its root.

    Raises :class:`UnexpectedPathPartError` for drive prefixes and for ``.``
    or ``..`` components, none of which a canonical path should contain.
    """

    if path.drive:
        raise UnexpectedPathPartError(path.drive, path)
    parts = path.parts[1:] if path.root else path.parts
    for part in parts:
        if part in (".", ".."):
            raise UnexpectedPathPartError(part, path)
    return parts


def path_length(path: PurePath) -> int:
    """Length of ``path`` as displayed, one separator per named component.

    The bare root counts as a single separator.
    """

    parts = _named_parts(path)
    if not parts:
        return 1 if path.root else 0
    return sum(len(part) + 1 for part in parts)


@dataclass(frozen=True)
class AbbreviationState:
    """Accumulator threaded through the left-to-right abbreviation pass.

    ``remaining_length`` is the original length of everything not yet
    consumed and ``remaining_budget`` the display width still available. Both
    only ever go down. ``under_limit`` turns true the first time the rest of
    the path fits and then stays true; text emitted before that point is dim,
    text emitted after it is bright.
    """

    remaining_length: int
    remaining_budget: int
    under_limit: bool = False
    dim: str = ""
    bright: str = ""

    @property
    def output(self) -> str:
        return self.dim + self.bright

    def fits(self) -> bool:
        return self.remaining_length <= self.remaining_budget

    def settle(self) -> AbbreviationState:
        if self.under_limit or not self.fits():
            return self
        return replace(self, under_limit=True)

    def brighten(self) -> AbbreviationState:
        if self.under_limit:
            return self
        return replace(self, under_limit=True)

    def emit(self, text: str, length: int, budget: int) -> AbbreviationState:
        """Append ``text``, charging ``length`` and ``budget`` to the counters."""

        if self.under_limit:
            state = replace(self, bright=self.bright + text)
        else:
            state = replace(self, dim=self.dim + text)
        return replace(
            state,
            remaining_length=self.remaining_length - length,
            remaining_budget=self.remaining_budget - budget,
        )

    def separate(self) -> AbbreviationState:
        if self.output.endswith(SEPARATOR):
            return self
        return self.emit(SEPARATOR, 1, 1)

    def segment(self) -> Segment:
        return Segment.of(self.dim, Role.PATH_DIM) + Segment.of(self.bright, Role.PATH_BRIGHT)


def step_root(state: AbbreviationState) -> AbbreviationState:
    return state.settle().emit(SEPARATOR, 1, 1)


def step_home(state: AbbreviationState) -> AbbreviationState:
    # the token was charged to the budget up front
    return state.settle().emit(HOME_TOKEN, 0, 0)


def step_name(state: AbbreviationState, name: str, *, last: bool) -> AbbreviationState:
    if not last and not state.fits():
        return state.separate().emit(name[0], len(name), 1)
    return state.brighten().separate().emit(name, len(name), len(name))


def _under_home(path: PurePath, home: PurePath | None) -> bool:
    if home is None or not home.is_absolute() or not _named_parts(home):
        return False
    return path.parts[: len(home.parts)] == home.parts


def abbreviate(path: PurePath, budget: int, home: PurePath | None = None) -> Segment:
    """Render ``path`` within ``budget`` characters where possible.

    Leading components are cut to their first letter until the remainder of
    the path fits; the last component is always shown in full. A path at or
    below ``home`` starts with ``~`` instead of the home directory.

    >>> abbreviate(PurePath("/usr/local/share"), 40).text
    '/usr/local/share'
    >>> abbreviate(PurePath("/usr/local/share/applications"), 20).text
    '/u/l/s/applications'
    >>> abbreviate(PurePath("/home/me/src/mkprompt"), 40, PurePath("/home/me")).text
    '~/src/mkprompt'
    """

    if not path.is_absolute():
        raise UnexpectedPathPartError(str(path), path)
    total = path_length(path)
    parts = _named_parts(path)
    if _under_home(path, home):
        total -= path_length(home)
        budget -= 1
        parts = parts[len(_named_parts(home)):]
        state = step_home(AbbreviationState(total, budget))
    else:
        state = step_root(AbbreviationState(total, budget))
    for index, name in enumerate(parts):
        state = step_name(state, name, last=index == len(parts) - 1)
    return state.segment()
