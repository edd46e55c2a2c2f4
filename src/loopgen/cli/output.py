"""Terminal output helpers shared by the CLI commands."""

from __future__ import annotations

import os
from pathlib import Path

import typer
from rich.console import Console
from rich.markup import escape

from loopgen.errors import ProjectNotFoundError
from loopgen.models.config import ProjectConfig, find_project_root, load_project_config

console = Console()
err_console = Console(stderr=True)


def print_error(message: str) -> None:
    """Print an error line in red to stderr."""
    err_console.print(f"[red]Error: {escape(message)}[/red]", soft_wrap=True)


def print_success(action: str, target: str) -> None:
    """Print a green check line for a file the command changed."""
    console.print(f"  [green]\u2713[/green] {action} {escape(target)}", soft_wrap=True)


def debug_enabled(config: ProjectConfig) -> bool:
    """Debug output is on when configured or when LOOPGEN_DEBUG is set."""
    env = os.environ.get("LOOPGEN_DEBUG", "").lower() in ("true", "1", "yes")
    return config.verbose or env


def open_project(directory: str) -> tuple[Path, ProjectConfig]:
    """Locate the project root and load its config, exiting 1 on failure."""
    try:
        root = find_project_root(Path(directory))
    except ProjectNotFoundError as e:
        print_error(str(e))
        raise typer.Exit(code=1)
    return root, load_project_config(root)
