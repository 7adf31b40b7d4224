"""Project commands for the projectshelf CLI."""

import typer
from typing import Any, Dict, Optional
from rich.console import Console, Group
from rich.markdown import Markdown
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table as RichTable

from projectshelf.cli.utils import (
    get_store,
    normalize_status,
    short_id,
    status_text,
    validate_required_arg,
)
from projectshelf.managers.projects import (
    PersistenceError,
    ProjectIndexError,
    ProjectNotFoundError,
    ProjectStore,
)
from projectshelf.models.project import LINK_LABELS, LinkKind, Project, ProjectStatus
from projectshelf.utils.links import resolve_link
from projectshelf.utils.validators import InvalidTitleError

app = typer.Typer(help="Project commands", invoke_without_command=True)
console = Console()


@app.callback()
def callback(ctx: typer.Context):
    """Show help when no subcommand is provided."""
    if ctx.invoked_subcommand is None:
        console.print(ctx.get_help())
        raise typer.Exit(0)


def _fail(message: str) -> None:
    console.print(f"[red]❌ {escape(message)}[/red]")
    raise typer.Exit(1)


def _resolve(store: ProjectStore, ref: str) -> int:
    """Position for a CLI reference, exiting with an error if it matches nothing."""
    try:
        return store.resolve(ref)
    except (ProjectIndexError, ProjectNotFoundError) as e:
        _fail(str(e))


def _link_options(**links: Optional[str]) -> Dict[str, Optional[str]]:
    return {kind.value: links[kind.value] for kind in LinkKind}


@app.command(name="list")
def list_projects(
    query: Optional[str] = typer.Argument(
        None, help="Only show projects whose title or status contains this text"
    ),
):
    """List projects, optionally filtered by title or status."""
    _, store = get_store()
    results = store.search(query)

    if not results:
        console.print("[yellow]No projects found[/yellow]")
        return

    table = RichTable(title="Projects", title_justify="left")
    table.add_column("#", style="dim", justify="right")
    table.add_column("ID", style="dim")
    table.add_column("Title", style="cyan")
    table.add_column("Status")
    table.add_column("Link")

    ids = store.ids
    for index, project in results:
        quick = project.quick_link()
        table.add_row(
            str(index),
            short_id(ids[index]),
            project.title,
            status_text(project.status),
            quick[1] if quick else "",
        )

    console.print(table)


@app.command()
def show(
    ctx: typer.Context,
    ref: Optional[str] = typer.Argument(None, help="Project position or id prefix"),
):
    """Show a project's details."""
    ref = validate_required_arg(ref, "ref", ctx)
    _, store = get_store()
    index = _resolve(store, ref)
    project = store.get(index)
    project_id = store.ids[index]

    metadata = RichTable.grid(padding=(0, 2))
    metadata.add_column(style="bold")
    metadata.add_column()
    metadata.add_row("Status", status_text(project.status) if project.status else "-")
    metadata.add_row("ID", project_id)
    for kind, value in project.links():
        label = LINK_LABELS[kind]
        if project.favorite == kind.value:
            label = f"{label} ★"
        metadata.add_row(label, value)

    parts = []
    if project.description:
        parts.append(Markdown(project.description))
        parts.append("")
    parts.append(metadata)

    console.print(Panel(Group(*parts), title=escape(project.title) or "(untitled)", title_align="left"))


@app.command()
def create(
    ctx: typer.Context,
    title: Optional[str] = typer.Argument(None, help="Project title"),
    status: Optional[str] = typer.Option(
        None, "--status", "-s", help="Status label (defaults to the shelf's default status)"
    ),
    description: Optional[str] = typer.Option(
        None, "--description", "-d", help="Markdown description"
    ),
    url: Optional[str] = typer.Option(None, "--url", help="Admin portal link"),
    website: Optional[str] = typer.Option(None, "--website", help="Website link"),
    repository: Optional[str] = typer.Option(None, "--repository", "--repo", help="Repository link"),
    roadmap: Optional[str] = typer.Option(None, "--roadmap", help="Roadmap link"),
    kanban: Optional[str] = typer.Option(None, "--kanban", help="Kanban board link"),
    design: Optional[str] = typer.Option(None, "--design", help="Design tool link"),
    backend: Optional[str] = typer.Option(None, "--backend", help="Backend console link"),
    extra: Optional[str] = typer.Option(None, "--extra", help="Any other link"),
    favorite: Optional[LinkKind] = typer.Option(
        None, "--favorite", help="Link opened by 'project open' when no link is given"
    ),
):
    """Create a new project at the end of the list."""
    title = validate_required_arg(title, "title", ctx)
    config_data, store = get_store()

    fields: Dict[str, Any] = {
        "title": title,
        "status": normalize_status(status) if status is not None else config_data.default_status,
        "description": description,
        "favorite": favorite,
    }
    fields.update(
        _link_options(
            url=url, website=website, repository=repository, roadmap=roadmap,
            kanban=kanban, design=design, backend=backend, extra=extra,
        )
    )

    try:
        store.create(Project(**{k: v for k, v in fields.items() if v or k == "title"}))
    except (InvalidTitleError, PersistenceError) as e:
        _fail(str(e))

    console.print(f"[green]✅ Created project '{escape(title)}' ({short_id(store.ids[-1])})[/green]")


@app.command()
def edit(
    ctx: typer.Context,
    ref: Optional[str] = typer.Argument(None, help="Project position or id prefix"),
    title: Optional[str] = typer.Option(None, "--title", "-t", help="New title"),
    status: Optional[str] = typer.Option(None, "--status", "-s", help="New status label"),
    description: Optional[str] = typer.Option(
        None, "--description", "-d", help="New markdown description"
    ),
    url: Optional[str] = typer.Option(None, "--url", help="Admin portal link"),
    website: Optional[str] = typer.Option(None, "--website", help="Website link"),
    repository: Optional[str] = typer.Option(None, "--repository", "--repo", help="Repository link"),
    roadmap: Optional[str] = typer.Option(None, "--roadmap", help="Roadmap link"),
    kanban: Optional[str] = typer.Option(None, "--kanban", help="Kanban board link"),
    design: Optional[str] = typer.Option(None, "--design", help="Design tool link"),
    backend: Optional[str] = typer.Option(None, "--backend", help="Backend console link"),
    extra: Optional[str] = typer.Option(None, "--extra", help="Any other link"),
    favorite: Optional[LinkKind] = typer.Option(None, "--favorite", help="Quick-open link"),
    clear_favorite: bool = typer.Option(False, "--clear-favorite", help="Unset the quick-open link"),
):
    """Edit a project. Options left out keep their current value; pass "" to clear one."""
    ref = validate_required_arg(ref, "ref", ctx)
    _, store = get_store()
    index = _resolve(store, ref)
    current = store.get(index)

    changes: Dict[str, Any] = {
        "title": title,
        "status": normalize_status(status),
        "description": description,
        "favorite": favorite,
    }
    changes.update(
        _link_options(
            url=url, website=website, repository=repository, roadmap=roadmap,
            kanban=kanban, design=design, backend=backend, extra=extra,
        )
    )

    # Start from the current values, like a form pre-filled with the record
    fields = current.model_dump(exclude_none=True)
    for name, value in changes.items():
        if value is None:
            continue
        if value == "" and name != "title":
            fields.pop(name, None)
        else:
            fields[name] = value
    if clear_favorite:
        fields.pop("favorite", None)

    try:
        store.edit(index, Project.model_validate(fields))
    except (InvalidTitleError, ProjectIndexError, PersistenceError) as e:
        _fail(str(e))

    console.print(f"[green]✅ Updated project '{escape(store.get(index).title)}'[/green]")


@app.command()
def delete(
    ctx: typer.Context,
    ref: Optional[str] = typer.Argument(None, help="Project position or id prefix"),
    force: bool = typer.Option(False, "--force", "-f", help="Delete without confirmation"),
):
    """Delete a project."""
    ref = validate_required_arg(ref, "ref", ctx)
    _, store = get_store()
    index = _resolve(store, ref)
    project = store.get(index)

    if not force:
        confirm = typer.confirm(f"Are you sure you want to delete project '{project.title}'?")
        if not confirm:
            console.print("[yellow]Cancelled[/yellow]")
            raise typer.Exit(0)

    try:
        store.delete(index)
    except (ProjectIndexError, PersistenceError) as e:
        _fail(str(e))

    console.print(f"[green]✅ Deleted project '{escape(project.title)}'[/green]")


@app.command(name="open")
def open_link(
    ctx: typer.Context,
    ref: Optional[str] = typer.Argument(None, help="Project position or id prefix"),
    link: Optional[LinkKind] = typer.Option(
        None, "--link", "-l", help="Which link to open (defaults to the favorite)"
    ),
    print_only: bool = typer.Option(
        False, "--print", "-p", help="Print the URL instead of opening it"
    ),
):
    """Open one of a project's links in the browser."""
    ref = validate_required_arg(ref, "ref", ctx)
    config_data, store = get_store()
    project = store.get(_resolve(store, ref))

    if link is not None:
        value = project.link(link)
        if not value:
            _fail(f"Project '{project.title}' has no {LINK_LABELS[link].lower()} link")
        kind = link
    else:
        quick = project.quick_link()
        if quick is None:
            _fail(f"Project '{project.title}' has no links")
        kind, value = quick

    target = resolve_link(kind, value, config_data.link_templates)

    if print_only:
        typer.echo(target)
        return

    console.print(f"Opening {escape(target)}")
    typer.launch(target)


@app.command()
def statuses():
    """List the known status labels."""
    table = RichTable(title="Statuses", title_justify="left")
    table.add_column("Status")

    for status in ProjectStatus:
        table.add_row(status_text(status.value))

    console.print(table)
