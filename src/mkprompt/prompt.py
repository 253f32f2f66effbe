"""Main prompt assembly."""

from __future__ import annotations

import logging
from pathlib import Path

from . import fs, git, render
from .colorizer import colorize
from .colors import Role, Segment, Styler, join
from .config import Settings
from .exceptions import GitCommandError, PromptError
from .paths import abbreviate
from .privileges import has_privileges

PRIVILEGE_MARKER = "#"


def user_segment(styler: Styler, privileged: bool) -> Segment:
    segment = Segment.of(styler.user, Role.USER, raw=True)
    if privileged:
        segment = segment + Segment.of(PRIVILEGE_MARKER, Role.ALERT)
    return segment


def host_segment(styler: Styler) -> Segment:
    return Segment.of(f"@{styler.host}:", Role.HOST, raw=True)


def vcs_segment(path: Path) -> Segment:
    """Describe the repository enclosing ``path``.

    Git failures only cost the prompt this segment; they are reported and
    an empty segment is returned.
    """

    try:
        repo = git.discover(path)
        if repo is None:
            return Segment()
        facts = git.collect_facts(repo)
    except GitCommandError as exc:
        detail = exc.stderr.strip()
        render.warning(f"{exc}: {detail}" if detail else str(exc))
        return Segment()
    logging.debug("Repository facts: %s", facts)
    return colorize(facts)


def resolve_home(home: Path | None) -> Path | None:
    if home is None:
        return None
    try:
        return home.resolve()
    except (OSError, RuntimeError):
        return home


def build_prompt(target: Path | None, settings: Settings) -> str:
    """Render the prompt for ``target`` (the current directory by default).

    Raises :class:`PromptError` when the path itself cannot be handled.
    """

    styler = settings.styler
    path = fs.canonicalize(target if target is not None else fs.current_directory())
    fs.ensure_text(path)
    path_part = abbreviate(path, settings.budget, resolve_home(settings.home))
    if fs.on_root_filesystem(path):
        vcs = vcs_segment(path)
    else:
        logging.debug("%s is not on the root filesystem; skipping git", path)
        vcs = Segment()
    privileged = has_privileges(settings.checksudo)
    segment = join(
        [
            user_segment(styler, privileged),
            host_segment(styler),
            path_part,
            Segment.of(" "),
            vcs,
        ]
    )
    return styler.render(segment) + styler.prompt_suffix


def render_prompt(target: Path | None, settings: Settings) -> tuple[str, int]:
    """Return the prompt text and the exit code to finish with."""

    try:
        return build_prompt(target, settings), 0
    except PromptError as exc:
        render.error(str(exc))
        logging.debug("Falling back to the minimal prompt", exc_info=True)
        return settings.styler.fallback, 1
    except Exception as exc:  # the shell must always get a prompt line
        render.error(f"Unexpected {type(exc).__name__}: {exc}")
        logging.debug("Falling back to the minimal prompt", exc_info=True)
        return settings.styler.fallback, 1
