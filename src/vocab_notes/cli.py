"""Command-line interface for vocab-notes."""

from __future__ import annotations

import typer

from .cli_commands import pattern_commands, word_commands

app = typer.Typer(
    name="vocab-notes",
    help="Build Czech vocabulary word notes and grammar drill patterns in an Obsidian vault.",
    no_args_is_help=True,
)

word_commands.register(app)
pattern_commands.register(app)


def cli() -> None:
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    cli()
