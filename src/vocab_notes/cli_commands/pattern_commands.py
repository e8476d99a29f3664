"""Pattern generation command."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer

from vocab_notes.exceptions import VocabNotesError

from .pattern_handler import run_generate_patterns
from .shared import console, get_config_and_logger


def register(app: typer.Typer) -> None:
    """Register pattern commands on the given Typer app."""

    @app.command(name="generate-patterns")
    def generate_patterns(
        request_note: Annotated[
            Path,
            typer.Argument(
                help="Note whose frontmatter lists the wanted words and grammar",
                exists=True,
                dir_okay=False,
            ),
        ],
        config_path: Annotated[
            Path | None,
            typer.Option("--config", help="Path to config.yaml", exists=True),
        ] = None,
        log_level: Annotated[
            str | None,
            typer.Option("--log-level", help="Log level (DEBUG, INFO, WARNING, ERROR)"),
        ] = None,
        verbose: Annotated[
            bool,
            typer.Option("--verbose", "-v", help="Show all log messages on terminal"),
        ] = False,
    ) -> None:
        """Generate grammar drill patterns with the LLM and write them as notes."""
        try:
            config, logger = get_config_and_logger(config_path, log_level, verbose=verbose)
            logger.info("cli_command_started", command="generate-patterns", note=str(request_note))
            with console.status("Generating grammar patterns..."):
                collection, pattern_paths = run_generate_patterns(config, request_note)
        except VocabNotesError as e:
            console.print(f"\n[bold red]Error:[/bold red] {e.message}")
            if e.suggestion:
                console.print(f"[dim]TIP: {e.suggestion}[/dim]")
            raise typer.Exit(code=1) from e

        console.print(f"[green]✓[/green] Wrote {len(pattern_paths)} patterns")
        console.print(f"  Collection: [cyan]{collection}[/cyan]")
