"""Configuration management."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path

from . import render
from .colors import STYLERS, BashStyler, Styler


@dataclass
class Config:
    """Application defaults."""

    path_budget: int = 40
    shell: str = BashStyler.name
    checksudo: str = "bin/checksudo"  # relative to $HOME


@dataclass(frozen=True)
class Settings:
    """Everything a single prompt render needs from the environment."""

    budget: int
    styler: Styler
    home: Path | None
    checksudo: Path | None


def configure_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(level=level, format="%(levelname)s: %(message)s")


def debug_enabled() -> bool:
    value = os.getenv("MKPROMPT_DEBUG", "")
    return bool(value) and value != "0"


def get_home() -> Path | None:
    """Get the home directory from $HOME, if it is set."""
    raw = os.getenv("HOME")
    if not raw:
        return None
    return Path(raw)


def get_path_budget() -> int:
    """Get the path character budget from env or config."""
    raw = os.getenv("MKPROMPT_PATH_BUDGET")
    if not raw:
        return Config.path_budget
    try:
        budget = int(raw)
    except ValueError:
        budget = -1
    if budget < 0:
        render.warning(f"Ignoring invalid MKPROMPT_PATH_BUDGET={raw!r}; using {Config.path_budget}")
        return Config.path_budget
    return budget


def get_styler() -> Styler:
    """Get the styler for the shell named in env or config."""
    name = os.getenv("MKPROMPT_SHELL", Config.shell).strip().lower()
    styler_cls = STYLERS.get(name)
    if styler_cls is None:
        render.warning(f"Unknown MKPROMPT_SHELL={name!r}; using {Config.shell}")
        styler_cls = STYLERS[Config.shell]
    return styler_cls()


def get_checksudo(home: Path | None) -> Path | None:
    """Get the privilege helper location, by default under $HOME."""
    override = os.getenv("MKPROMPT_CHECKSUDO")
    if override:
        return Path(override).expanduser()
    if home is None:
        return None
    return home / Config.checksudo


def load_settings() -> Settings:
    home = get_home()
    return Settings(
        budget=get_path_budget(),
        styler=get_styler(),
        home=home,
        checksudo=get_checksudo(home),
    )
