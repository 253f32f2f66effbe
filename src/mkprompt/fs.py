"""Filesystem helpers for mkprompt."""

from __future__ import annotations

import os
from pathlib import Path

from .exceptions import FilesystemError, PathTextError

ROOT = Path("/")


def canonicalize(path: Path) -> Path:
    """Resolve ``path`` to an absolute path with every symlink followed."""

    try:
        return path.expanduser().resolve(strict=True)
    except (OSError, RuntimeError) as exc:
        raise FilesystemError(f"Cannot resolve {path}: {exc}") from exc


def ensure_text(path: Path) -> str:
    """Return ``path`` as text, rejecting names that are not valid UTF-8."""

    text = str(path)
    try:
        text.encode("utf-8")
    except UnicodeEncodeError as exc:
        raise PathTextError(f"Path is not valid UTF-8: {text!r}") from exc
    return text


def device_id(path: Path) -> int:
    try:
        return os.stat(path).st_dev
    except OSError as exc:
        raise FilesystemError(f"Cannot read metadata of {path}: {exc}") from exc


def on_root_filesystem(path: Path) -> bool:
    return device_id(ROOT) == device_id(path)


def current_directory() -> Path:
    try:
        return Path.cwd()
    except OSError as exc:
        raise FilesystemError(f"Cannot determine the current directory: {exc}") from exc
