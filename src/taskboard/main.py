"""Main CLI entry point for Taskboard.

This module provides the main Typer application with sub-commands for the
board session.

Usage:
    taskboard board session
    taskboard --config taskboard.toml --verbose board session
    taskboard version
"""

from __future__ import annotations

from pathlib import Path
from typing import Annotated, Optional

import typer
from rich.console import Console

from taskboard import __version__
from taskboard.cli import board as board_cli
from taskboard.config import TaskboardConfig, load_config
from taskboard.logging import setup_logging

app = typer.Typer(
    name="taskboard",
    help="Taskboard: propose projects and drag them between lists",
    no_args_is_help=True,
)

app.add_typer(board_cli.app, name="board", help="Run the board")

console = Console()


class AppContext:
    """Application context shared across CLI commands.

    Attributes:
        config: Loaded Taskboard configuration
    """

    def __init__(self, config: TaskboardConfig):
        self.config = config


_app_context: AppContext | None = None


def get_app_context() -> AppContext:
    """Get the shared application context.

    Raises:
        RuntimeError: If context has not been initialized
    """
    if _app_context is None:
        raise RuntimeError("Application context not initialized. Call initialize_context first.")
    return _app_context


def initialize_context(config: TaskboardConfig) -> AppContext:
    """Initialize the global application context."""
    global _app_context
    _app_context = AppContext(config)
    return _app_context


@app.command()
def version() -> None:
    """Print the Taskboard version."""
    console.print(f"taskboard {__version__}")


@app.callback()
def main(
    config_path: Annotated[
        Optional[Path],
        typer.Option(
            "--config",
            "-c",
            help="Path to configuration file (TOML format)",
            exists=True,
            dir_okay=False,
            readable=True,
        ),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Enable debug logging"),
    ] = False,
) -> None:
    """Configure global options and initialize application context.

    Args:
        config_path: Optional path to TOML configuration file
        verbose: Enable debug-level logging
    """
    try:
        config = load_config(config_path)
    except Exception as e:
        console.print(f"[red]Error loading configuration:[/red] {e}")
        raise typer.Exit(code=1)

    # Logs go to stderr so they never interleave with the rendered board
    overrides: dict[str, object] = {"stream": "stderr"}
    if verbose:
        overrides["level"] = "DEBUG"
    setup_logging(config.logging.model_copy(update=overrides))

    initialize_context(config)

    if verbose:
        console.print("[dim]Debug logging enabled[/dim]")


if __name__ == "__main__":
    app()
