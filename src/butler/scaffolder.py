"""
butler.scaffolder - Scaffolding Pipeline
========================================

Wires the pieces of a scaffolding run together:

    1. Resolve the selected template by name
    2. Clone the template repository into the destination
    3. Rewrite the cloned tree with the project name

Every step either completes or raises a :class:`~butler.errors.ButlerError`
that ends the run. Files that fail to render during step 3 are restored and
reported, they do not fail the run.

Usage Example
-------------
>>> from butler.models import ButlerConfig, ProjectRequest, TemplateDescriptor
>>> from butler.scaffolder import scaffold_project
>>>
>>> config = ButlerConfig(
...     templates=[TemplateDescriptor(name="node", url="https://example.com/node-tpl.git")],
... )
>>> request = ProjectRequest(template_name="node", project_name="acme", destination="./out")
>>> result = scaffold_project(config, request)
>>> [p.name for p in result.report.rewritten]
['README.md']
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from pathlib import Path

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel

from butler.errors import TemplateNotFoundError
from butler.git import fetch_template
from butler.models import ButlerConfig, ProjectRequest, TemplateDescriptor
from butler.rewriter import RewriteReport, rewrite_tree


console = Console()


@dataclass
class ScaffoldResult:
    """
    Result of a successful scaffolding run.

    Attributes
    ----------
    template : TemplateDescriptor
        The template that was cloned.

    destination : Path
        Directory holding the new project.

    report : RewriteReport
        Per-file outcome of the rewrite step.
    """

    template: TemplateDescriptor
    destination: Path
    report: RewriteReport


def resolve_template(
    templates: Iterable[TemplateDescriptor],
    name: str,
) -> TemplateDescriptor | None:
    """
    Find the template called ``name``.

    Parameters
    ----------
    templates : Iterable[TemplateDescriptor]
        Configured templates. Names are unique (enforced when the
        configuration is loaded).

    name : str
        Exact name to look for.

    Returns
    -------
    TemplateDescriptor | None
        The matching descriptor, or None when no template has that name.
    """
    for template in templates:
        if template.name == name:
            return template
    return None


def scaffold_project(
    config: ButlerConfig,
    request: ProjectRequest,
    *,
    verbose: bool = True,
) -> ScaffoldResult:
    """
    Create a project from a template repository.

    Parameters
    ----------
    config : ButlerConfig
        Loaded configuration holding the available templates.

    request : ProjectRequest
        The user's answers.

    verbose : bool, default=True
        If True, display progress information to the console.

    Returns
    -------
    ScaffoldResult
        Template, destination and rewrite report.

    Raises
    ------
    TemplateNotFoundError
        If no configured template matches ``request.template_name``.
    CloneError
        If the repository cannot be cloned.
    WalkSetupError
        If the cloned tree cannot be traversed.
    """
    template = resolve_template(config.templates, request.template_name)
    if template is None:
        raise TemplateNotFoundError(request.template_name)

    destination = request.destination_path

    if verbose:
        console.print()
        console.print(
            Panel(
                f"[bold blue]Creating project:[/] [green]{escape(request.project_name)}[/]\n"
                f"[dim]Template: {escape(template.name)} | Source: {escape(template.url)}[/]",
                title="[bold]butler[/]",
                border_style="blue",
            )
        )
        console.print()
        console.print("[bold]Cloning template repository...[/]")

    fetch_template(template.url, destination)

    if verbose:
        console.print()
        console.print("[bold]Rewriting project files...[/]")

    report = rewrite_tree(destination, request.project_name)

    if verbose:
        for path in report.rewritten:
            console.print(f"  Rewrote {escape(str(path.relative_to(destination)))}")

        summary = (
            f"[bold green]Project created successfully![/]\n\n"
            f"[dim]Location:[/] {escape(str(destination))}\n"
            f"[dim]Files rewritten:[/] {len(report.rewritten)}"
        )
        if report.reverted:
            summary += f"\n[yellow]Files left unchanged due to template errors:[/] {len(report.reverted)}"

        console.print()
        console.print(
            Panel(
                summary,
                title="[bold green]Success[/]",
                border_style="green",
            )
        )

    return ScaffoldResult(template=template, destination=destination, report=report)
