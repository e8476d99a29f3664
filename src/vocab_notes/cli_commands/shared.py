"""Shared utilities for CLI commands."""

from pathlib import Path
from typing import Any

from rich.console import Console
from rich.table import Table

from vocab_notes.config import Config, load_config
from vocab_notes.models import ProcessingReport
from vocab_notes.utils.logging import configure_logging, get_logger

# Shared console for all commands
console = Console()

_config: Config | None = None
_logger: Any | None = None


def get_config_and_logger(
    config_path: Path | None = None,
    log_level: str | None = None,
    verbose: bool = False,
) -> tuple[Config, Any]:
    """Load configuration and logger once per process.

    Args:
        config_path: Optional path to config file
        log_level: Console log level; the configured level when None
        verbose: Show all log messages on terminal (for debugging)
    """
    global _config, _logger

    if _config is None:
        _config = load_config(config_path)
        configure_logging(
            log_level or _config.log_level,
            log_dir=_config.log_dir,
            verbose=verbose,
        )
        _logger = get_logger("cli")

    return _config, _logger


def reset_cli_state() -> None:
    """Forget the cached config and logger (for testing)."""
    global _config, _logger
    _config = None
    _logger = None


def print_report(title: str, report: ProcessingReport) -> None:
    """Print a processing summary and any per-item failures."""
    table = Table(title=title)
    table.add_column("Result", style="cyan")
    table.add_column("Count", justify="right")
    table.add_row("Written", str(report.processed))
    table.add_row("Failed", str(report.failed))
    table.add_row("Without grammar (analysis failed)", str(report.analysis_failed))
    console.print(table)

    for item, error in report.failures.items():
        console.print(f"[red]✗ {item}[/red]: {error}")
