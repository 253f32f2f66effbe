"""Typer-based CLI for mkprompt."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated, Optional

import typer

from . import config
from .prompt import render_prompt

app = typer.Typer(
    help="Print a color-coded shell prompt for a directory.",
    add_completion=False,
    context_settings={"help_option_names": ["-h", "--help"]},
)


@app.command()
def main(
    path: Annotated[
        Optional[Path],
        typer.Argument(help="Use PATH instead of the current working directory.", show_default=False),
    ] = None,
) -> None:
    """Print the prompt for PATH.

    Meant to be called from the shell on every prompt, for example in Bash:

        PROMPT_COMMAND='PS1="$(mkprompt)"'

    or in zsh, with MKPROMPT_SHELL=zsh:

        precmd() { PS1="$(mkprompt)" }
    """
    config.configure_logging(config.debug_enabled())
    settings = config.load_settings()
    text, code = render_prompt(path, settings)
    # zsh escapes are real control characters; keep click from stripping them
    typer.echo(text, color=True)
    if code:
        raise typer.Exit(code)


if __name__ == "__main__":
    app()
