"""Word note commands: process-table, process-folder, update-note."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated, NoReturn

import typer

from vocab_notes.config import Config
from vocab_notes.error_codes import ErrorCode
from vocab_notes.exceptions import ConfigurationError, VocabNotesError

from .shared import console, get_config_and_logger, print_report
from .word_handler import run_process_folder, run_process_table, run_update_note

ConfigOption = Annotated[
    Path | None,
    typer.Option("--config", help="Path to config.yaml", exists=True),
]
LogLevelOption = Annotated[
    str | None,
    typer.Option("--log-level", help="Log level (DEBUG, INFO, WARNING, ERROR)"),
]
RemoteOption = Annotated[
    bool | None,
    typer.Option(
        "--remote/--no-remote",
        help="Ask the grammar analyzer about every word (default: from config)",
    ),
]
VerboseOption = Annotated[
    bool,
    typer.Option("--verbose", "-v", help="Show all log messages on terminal"),
]


def _use_remote(config: Config, flag: bool | None) -> bool:
    remote = config.use_remote_grammar_analysis if flag is None else flag
    if remote and not config.server_urls:
        raise ConfigurationError(
            "Remote analysis requested but no server URLs are configured",
            suggestion="Set server_urls in config.yaml or pass --no-remote",
            error_code=ErrorCode.CFG_MISSING_KEY.value,
        )
    return remote


def _fail(error: VocabNotesError) -> NoReturn:
    console.print(f"\n[bold red]Error:[/bold red] {error.message}")
    if error.suggestion:
        console.print(f"[dim]TIP: {error.suggestion}[/dim]")
    raise typer.Exit(code=1)


def register(app: typer.Typer) -> None:
    """Register word note commands on the given Typer app."""

    @app.command(name="process-table")
    def process_table(
        note: Annotated[
            Path,
            typer.Argument(help="Note containing a vocabulary table", exists=True, dir_okay=False),
        ],
        remote: RemoteOption = None,
        config_path: ConfigOption = None,
        log_level: LogLevelOption = None,
        verbose: VerboseOption = False,
    ) -> None:
        """Create or update a word note for every row of a vocabulary table."""
        try:
            config, logger = get_config_and_logger(config_path, log_level, verbose=verbose)
            use_remote = _use_remote(config, remote)
            logger.info("cli_command_started", command="process-table", note=str(note), remote=use_remote)
            report = run_process_table(config, note, use_remote)
        except VocabNotesError as e:
            _fail(e)

        print_report(f"Words from {note.name}", report)
        if report.failed:
            raise typer.Exit(code=1)

    @app.command(name="process-folder")
    def process_folder(
        folder: Annotated[
            Path,
            typer.Argument(help="Folder with vocabulary table notes", exists=True, file_okay=False),
        ],
        remote: RemoteOption = None,
        config_path: ConfigOption = None,
        log_level: LogLevelOption = None,
        verbose: VerboseOption = False,
    ) -> None:
        """Process every table note in a folder and move finished notes aside."""
        try:
            config, logger = get_config_and_logger(config_path, log_level, verbose=verbose)
            use_remote = _use_remote(config, remote)
            logger.info("cli_command_started", command="process-folder", folder=str(folder), remote=use_remote)
            report = run_process_folder(config, folder, use_remote)
        except VocabNotesError as e:
            _fail(e)

        print_report(f"Words from {folder}", report)
        if report.failed:
            raise typer.Exit(code=1)

    @app.command(name="update-note")
    def update_note(
        note: Annotated[
            Path,
            typer.Argument(help="Word note with a 'slovo' frontmatter field", exists=True, dir_okay=False),
        ],
        remote: RemoteOption = None,
        config_path: ConfigOption = None,
        log_level: LogLevelOption = None,
        verbose: VerboseOption = False,
    ) -> None:
        """Re-process a single word note from its own frontmatter."""
        try:
            config, logger = get_config_and_logger(config_path, log_level, verbose=verbose)
            use_remote = _use_remote(config, remote)
            logger.info("cli_command_started", command="update-note", note=str(note), remote=use_remote)
            report = run_update_note(config, note, use_remote)
        except VocabNotesError as e:
            _fail(e)

        if report.failed:
            print_report(f"Update of {note.name}", report)
            raise typer.Exit(code=1)
        console.print(f"[green]✓[/green] Updated {note}")
