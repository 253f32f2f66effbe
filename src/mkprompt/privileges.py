"""Ask the external checksudo helper whether elevated privileges are available."""

from __future__ import annotations

import logging
import subprocess
from pathlib import Path

from . import render


def has_privileges(helper: Path | None) -> bool:
    """Run ``helper`` with no arguments; exit status 0 means privileged.

    Any problem running the helper counts as "not privileged".
    """

    if helper is None:
        render.warning("HOME is not set; cannot locate checksudo")
        return False
    try:
        proc = subprocess.run(
            [str(helper)],
            stdin=subprocess.DEVNULL,
            stdout=subprocess.DEVNULL,
            stderr=subprocess.DEVNULL,
            check=False,
        )
    except OSError as exc:
        render.warning(f"Cannot run {helper}: {exc}")
        return False
    if proc.returncode != 0:
        logging.debug("%s exited with status %d", helper, proc.returncode)
        return False
    return True
