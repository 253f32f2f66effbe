"""Colors, prompt roles and shell-specific stylers."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterable, NamedTuple


class Color(Enum):
    """Supported foreground colors. Each value equals its xterm number."""

    RED = 1
    GREEN = 2
    YELLOW = 3
    BLUE = 4
    MAGENTA = 5
    CYAN = 6
    LIGHT_RED = 9
    LIGHT_GREEN = 10
    LIGHT_YELLOW = 11
    LIGHT_BLUE = 12
    LIGHT_MAGENTA = 13
    LIGHT_CYAN = 14

    def asfg(self) -> int:
        """Return the ANSI SGR parameter selecting this foreground color."""

        c = self.value
        return c + 30 if c < 8 else c + 82


class Role(Enum):
    """What a piece of prompt text means; the palette decides how it looks."""

    USER = "user"
    HOST = "host"
    PATH_DIM = "path-dim"
    PATH_BRIGHT = "path-bright"
    SUCCESS = "success"
    ALERT = "alert"
    WARNING = "warning"
    INFO = "info"
    SECONDARY = "secondary"
    EMPTY = "empty"
    BARE = "bare"


PALETTE: dict[Role, Color] = {
    Role.USER: Color.LIGHT_GREEN,
    Role.HOST: Color.YELLOW,
    Role.PATH_DIM: Color.BLUE,
    Role.PATH_BRIGHT: Color.LIGHT_BLUE,
    Role.SUCCESS: Color.LIGHT_GREEN,
    Role.ALERT: Color.LIGHT_RED,
    Role.WARNING: Color.LIGHT_YELLOW,
    Role.INFO: Color.LIGHT_CYAN,
    Role.SECONDARY: Color.LIGHT_MAGENTA,
    Role.EMPTY: Color.CYAN,
    Role.BARE: Color.MAGENTA,
}


class Run(NamedTuple):
    text: str
    role: Role | None = None
    raw: bool = False


@dataclass(frozen=True)
class Segment:
    """A piece of the prompt made of styled runs.

    Segments are only ever concatenated; a styler turns them into text at the
    very end. ``raw`` runs hold shell prompt escapes (such as ``\\u``) that
    must reach the shell untouched.
    """

    runs: tuple[Run, ...] = ()

    @classmethod
    def of(cls, text: str, role: Role | None = None, *, raw: bool = False) -> Segment:
        if not text:
            return cls()
        return cls((Run(text, role, raw),))

    def __add__(self, other: Segment) -> Segment:
        return Segment(self.runs + other.runs)

    def __bool__(self) -> bool:
        return any(run.text for run in self.runs)

    @property
    def text(self) -> str:
        """The visible text with all styling stripped."""

        return "".join(run.text for run in self.runs)

    def roles(self) -> list[Role | None]:
        return [run.role for run in self.coalesced()]

    def coalesced(self) -> list[Run]:
        """Merge neighbouring runs that share a role and rawness."""

        merged: list[Run] = []
        for run in self.runs:
            if not run.text:
                continue
            if merged and merged[-1].role == run.role and merged[-1].raw == run.raw:
                last = merged.pop()
                run = Run(last.text + run.text, run.role, run.raw)
            merged.append(run)
        return merged


def join(segments: Iterable[Segment]) -> Segment:
    result = Segment()
    for segment in segments:
        result = result + segment
    return result


BASH_ESCAPES = str.maketrans({"\\": r"\\", "$": r"\$", "`": r"\`"})

ZSH_ESCAPES = str.maketrans({"%": "%%", "\\": r"\\", "$": r"\$", "`": r"\`"})


class Styler:
    """Base class for turning segments into shell prompt text."""

    name = ""
    #: Prompt escape expanding to the current user name
    user = ""
    #: Prompt escape expanding to the short host name
    host = ""
    #: The prompt symbol closing the line, trailing space included
    prompt_suffix = ""
    #: Printed instead of the computed prompt when rendering fails
    fallback = ""

    def __call__(self, text: str, role: Role | None = None, *, raw: bool = False) -> str:
        if not raw:
            text = self.escape(text)
        color = PALETTE.get(role) if role is not None else None
        if color is None:
            return text
        return self.wrap(color, text)

    def render(self, segment: Segment) -> str:
        return "".join(self(run.text, run.role, raw=run.raw) for run in segment.coalesced())

    def escape(self, text: str) -> str:
        return text

    def wrap(self, color: Color, text: str) -> str:
        raise NotImplementedError


class BashStyler(Styler):
    r"""Styles text for Bash's PS1.

    Escape sequences are wrapped in ``\[ ... \]`` so that Bash leaves them out
    of its line-width calculations.
    """

    name = "bash"
    user = r"\u"
    host = r"\h"
    prompt_suffix = r"\$ "
    fallback = r"\u@\h:\w\$ "

    def escape(self, text: str) -> str:
        # PS1 is decoded and then expanded again under promptvars
        return text.translate(BASH_ESCAPES)

    def wrap(self, color: Color, text: str) -> str:
        return r"\[\e[{}m\]{}\[\e[0m\]".format(color.asfg(), text)


class ZshStyler(Styler):
    """Styles text for zsh's PS1, marking escapes with ``%{ ... %}``."""

    name = "zsh"
    user = "%n"
    host = "%m"
    prompt_suffix = "%# "
    fallback = "%n@%m:%~%# "

    def escape(self, text: str) -> str:
        # also covers expansion under PROMPT_SUBST
        return text.translate(ZSH_ESCAPES)

    def wrap(self, color: Color, text: str) -> str:
        return "%{{\033[{}m%}}{}%{{\033[0m%}}".format(color.asfg(), text)


STYLERS: dict[str, type[Styler]] = {
    BashStyler.name: BashStyler,
    ZshStyler.name: ZshStyler,
}
