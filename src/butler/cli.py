"""
butler.cli - Command Line Interface
===================================

This module provides the command-line interface for butler using Typer,
with questionary for the interactive prompts and rich for output.

Architecture
------------
    app (main entry point)
    ├── template - Scaffold a new project from a template repository
    └── list     - Show the configured templates

The ``template`` command asks three questions:

    1. What system are you using?   (template selection)
    2. What is the project name?
    3. What is the destination?     (default: ./src)

Any answer can be given up front as an option, in which case only the
missing ones are asked. ``--yes`` never prompts.

Usage Examples
--------------
Interactive mode:
    $ butler template

Non-interactive mode:
    $ butler template --template node --name acme --path ./acme --yes

Show configured templates:
    $ butler list --config ./butler.toml
"""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import questionary
import typer
from rich import print as rprint
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from butler import __version__
from butler.config import discover_config
from butler.errors import ButlerError, ConfigError
from butler.models import ButlerConfig, ProjectRequest
from butler.scaffolder import scaffold_project


# =============================================================================
# CLI Application Setup
# =============================================================================

app = typer.Typer(
    name="butler",
    help="Scaffold new projects from template repositories.",
    no_args_is_help=True,
    rich_markup_mode="rich",
    add_completion=True,
)

console = Console()

TEMPLATE_QUESTION = "What system are you using?"
NAME_QUESTION = "What is the project name?"
DESTINATION_QUESTION = "What is the destination?"


# =============================================================================
# Version Callback
# =============================================================================

def version_callback(value: bool) -> None:
    """Display version information and exit."""
    if value:
        console.print(Panel(
            f"[bold green]butler[/] version [cyan]{__version__}[/]\n\n"
            f"[dim]Project scaffolding from template repositories[/]",
            border_style="green",
        ))
        raise typer.Exit()


# =============================================================================
# Interactive Prompts
# =============================================================================

def require_value(value: str) -> bool | str:
    """questionary validator rejecting blank answers."""
    if value and value.strip():
        return True
    return "Value is required"


def prompt_template(names: list[str]) -> str:
    """
    Ask which template to use.

    Returns
    -------
    str
        The selected template name.
    """
    result = questionary.select(
        TEMPLATE_QUESTION,
        choices=names,
    ).ask()

    if result is None:
        raise typer.Abort()

    return result


def prompt_project_name() -> str:
    """Ask for the project name."""
    result = questionary.text(
        NAME_QUESTION,
        validate=require_value,
    ).ask()

    if result is None:
        raise typer.Abort()

    return result


def prompt_destination(default: str) -> str:
    """
    Ask where the project should be created.

    Parameters
    ----------
    default : str
        Value used when the user just presses enter.
    """
    result = questionary.text(
        DESTINATION_QUESTION,
        default=default,
        validate=require_value,
    ).ask()

    if result is None:
        raise typer.Abort()

    return result


def select_project(
    config: ButlerConfig,
    *,
    template: str | None = None,
    name: str | None = None,
    path: str | None = None,
    interactive: bool = True,
) -> ProjectRequest:
    """
    Collect the answers for a scaffolding run.

    Values passed in are used as given; the remaining ones are prompted for
    in order (template, name, destination). Without ``interactive`` nothing
    is prompted and the destination falls back to the configured default.

    Parameters
    ----------
    config : ButlerConfig
        Configuration providing the template choices.

    template, name, path : str | None
        Answers supplied on the command line.

    interactive : bool, default=True
        Whether missing answers may be prompted for.

    Returns
    -------
    ProjectRequest
        The validated answers.

    Raises
    ------
    ConfigError
        If no templates are configured.
    ValidationError
        If a required answer is empty.
    typer.Abort
        If the user cancels a prompt.
    """
    if not config.templates:
        raise ConfigError("No templates configured")

    if interactive:
        if not template:
            template = prompt_template(config.template_names)
        if not name:
            name = prompt_project_name()
        if not path:
            path = prompt_destination(config.default_destination)
    elif not path:
        path = config.default_destination

    return ProjectRequest.from_answers(template, name, path)


# =============================================================================
# Main Application Callback
# =============================================================================

@app.callback()
def main(
    version: Annotated[
        bool | None,
        typer.Option(
            "--version",
            "-V",
            help="Show version and exit.",
            callback=version_callback,
            is_eager=True,
        ),
    ] = None,
) -> None:
    """
    [bold]butler[/] - Scaffold projects from template repositories.

    Templates are configured in [cyan]butler.toml[/].

    [bold]Quick Start:[/]

        butler template
    """
    pass


ConfigOption = Annotated[
    Path | None,
    typer.Option(
        "--config",
        "-c",
        help="Path to the butler.toml configuration file",
    ),
]


# =============================================================================
# Template Command - Scaffold a New Project
# =============================================================================

@app.command()
def template(
    config_path: ConfigOption = None,
    template_name: Annotated[
        str | None,
        typer.Option(
            "--template",
            "-t",
            help="Name of the template to use",
        ),
    ] = None,
    name: Annotated[
        str | None,
        typer.Option(
            "--name",
            "-n",
            help="Project name substituted into the template",
        ),
    ] = None,
    path: Annotated[
        str | None,
        typer.Option(
            "--path",
            "-p",
            help="Destination directory (default: ./src)",
        ),
    ] = None,
    yes: Annotated[
        bool,
        typer.Option(
            "--yes",
            "-y",
            help="Never prompt; fail if a required value is missing",
        ),
    ] = False,
) -> None:
    """
    Scaffold a new project from a template repository.

    Clones the selected template into the destination and substitutes the
    project name into its text files.

    [bold]Examples:[/]

        # Interactive mode
        butler template

        # Fully scripted
        butler template --template node --name acme --path ./acme --yes
    """
    try:
        config = discover_config(config_path)
        request = select_project(
            config,
            template=template_name,
            name=name,
            path=path,
            interactive=not yes,
        )
        scaffold_project(config, request, verbose=True)
    except ButlerError as e:
        rprint(f"[red]Error:[/] {escape(str(e))}")
        raise typer.Exit(1)


# =============================================================================
# List Command
# =============================================================================

@app.command("list")
def list_templates(config_path: ConfigOption = None) -> None:
    """
    List the configured templates.
    """
    try:
        config = discover_config(config_path)
    except ButlerError as e:
        rprint(f"[red]Error:[/] {escape(str(e))}")
        raise typer.Exit(1)

    if not config.templates:
        rprint("[yellow]No templates configured.[/]")
        return

    table = Table(title="Templates")
    table.add_column("Name", style="cyan")
    table.add_column("Source", style="green")

    for descriptor in config.templates:
        table.add_row(escape(descriptor.name), escape(descriptor.url))

    console.print(table)


if __name__ == "__main__":  # pragma: no cover
    app()
