"""Typer CLI application."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated, Optional

import typer
from rich.console import Console

from chatterm.errors import ConfigError, ProgramError


def create_app() -> typer.Typer:
    """Create and configure the CLI application."""
    app = typer.Typer(
        name="chatterm",
        help="Chat from the terminal: type, scroll back and select messages.",
        no_args_is_help=True,
        rich_markup_mode="rich",
    )
    console = Console(stderr=True)

    @app.command()
    def chat(
        config: Annotated[Optional[Path], typer.Option("--config", "-c", help="JSON config file")] = None,
        char_limit: Annotated[Optional[int], typer.Option("--char-limit", help="Maximum message length", min=1)] = None,
        height: Annotated[Optional[int], typer.Option("--height", help="Editor rows", min=1)] = None,
        no_color: Annotated[bool, typer.Option("--no-color", help="Disable colors")] = False,
        log_level: Annotated[Optional[str], typer.Option("--log-level", help="DEBUG, INFO, WARNING or ERROR")] = None,
    ) -> None:
        """Start an interactive chat session."""
        from chatterm.cli import logging_setup
        from chatterm.cli.programs.chat import run_chat
        from chatterm.core.config import ChatConfig

        logging_setup.configure(log_level)

        try:
            settings = ChatConfig.load(config).with_overrides(
                char_limit=char_limit,
                editor_height=height,
                color=False if no_color else None,
            )
        except ConfigError as e:
            console.print(f"[red]Invalid configuration:[/] {e}")
            raise typer.Exit(1)

        try:
            run_chat(settings)
        except ProgramError as e:
            console.print(f"[red]Error running program:[/] {e}")
            raise typer.Exit(1)

    @app.command()
    def winsize() -> None:
        """Show the terminal size in two framed boxes (q to quit)."""
        from chatterm.cli import logging_setup
        from chatterm.cli.programs.winsize import run_winsize

        logging_setup.configure()

        try:
            run_winsize()
        except ProgramError as e:
            console.print(f"[red]Error running program:[/] {e}")
            raise typer.Exit(1)

    return app
