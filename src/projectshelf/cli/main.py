"""Main CLI entry point for projectshelf."""

import logging
import typer
from typing import Optional
from pathlib import Path
from rich.logging import RichHandler

from projectshelf.cli.commands import projects

app = typer.Typer(
    name="shelf",
    help="projectshelf - track projects and their links",
    add_completion=False,
    invoke_without_command=True,
)


@app.callback()
def main(
    ctx: typer.Context,
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug logging"),
):
    """
    projectshelf - track projects and their links
    """
    logger = logging.getLogger("projectshelf")
    logger.setLevel(logging.DEBUG if verbose else logging.WARNING)
    if not any(isinstance(h, RichHandler) for h in logger.handlers):
        logger.addHandler(RichHandler(show_path=False))

    if ctx.invoked_subcommand is None:
        print(ctx.get_help())
        raise typer.Exit(0)


app.add_typer(projects.app, name="project", help="Project commands")


@app.command()
def init(
    path: Optional[Path] = typer.Argument(
        None, help="Directory to initialize the shelf in (default: current directory)"
    ),
    key: str = typer.Option(
        "projects", "--key", "-k", help="Key-value entry that holds the project list"
    ),
):
    """Initialize a new shelf."""
    from projectshelf.core.initializer import init_shelf

    shelf_path = path or Path.cwd()

    try:
        init_shelf(shelf_dir=shelf_path, storage_key=key)
        typer.secho(f"✅ Initialized shelf in {shelf_path}", fg=typer.colors.GREEN)
    except FileExistsError:
        typer.secho(f"❌ Shelf already exists in {shelf_path}", fg=typer.colors.RED)
        raise typer.Exit(1)
    except ValueError as e:
        typer.secho(f"❌ {e}", fg=typer.colors.RED)
        raise typer.Exit(1)


@app.command()
def version():
    """Show projectshelf version."""
    from projectshelf import __version__

    typer.echo(f"projectshelf version {__version__}")


@app.command()
def status():
    """Show shelf status including configuration and environment variables."""
    from projectshelf.cli.utils import console, get_store, show_env_config

    config_data, store = get_store()

    console.print("\n[bold]projectshelf Status[/bold]")
    console.print(f"Store: {store.kv.db_path}")
    console.print(f"Storage key: {config_data.storage_key}")
    console.print(f"Projects: {len(store)}")
    console.print(f"Require title: {'yes' if config_data.require_title else 'no'}")
    console.print(f"Default status: {config_data.default_status}")

    show_env_config()


if __name__ == "__main__":
    app()
