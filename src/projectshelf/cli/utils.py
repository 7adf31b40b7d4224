"""Utility functions for CLI commands."""

import os
import typer
from pathlib import Path
from typing import Optional, Tuple
from rich.console import Console
from rich.markup import escape
from rich.text import Text

from projectshelf.config import Config, ShelfConfig
from projectshelf.core.path_utils import get_shelf_root
from projectshelf.managers.projects import ProjectStore, PersistenceError
from projectshelf.models.project import ProjectStatus
from projectshelf.utils.status import status_icon

console = Console()

# Terminal glyphs for the icon names used in the status table
ICON_GLYPHS = {
    "circle": "○",
    "circle-dashed": "◌",
    "circle-progress-25": "◔",
    "circle-progress-50": "◑",
    "circle-progress-75": "◕",
    "circle-progress-100": "●",
    "pause": "‖",
    "stop": "■",
}

# Status tint names mapped onto rich styles
COLOR_STYLES = {
    "red": "red",
    "yellow": "yellow",
    "blue": "blue",
    "green": "green",
    "orange": "dark_orange",
    "purple": "purple",
    "magenta": "magenta",
    "secondary": "grey50",
}


def get_config_with_data() -> Tuple[Config, ShelfConfig]:
    """Get config and load data for the current shelf.

    Uses PROJECTSHELF_DIR when set, otherwise searches upward from the
    current directory.

    Returns:
        tuple: (config, config_data)
    """
    config = Config()
    if not config.exists and not os.environ.get("PROJECTSHELF_DIR"):
        try:
            config = Config(get_shelf_root(Path.cwd()))
        except FileNotFoundError:
            console.print("[red]❌ Not in a projectshelf directory. Run 'shelf init' first.[/red]")
            raise typer.Exit(1)

    try:
        config_data = config.load()
    except FileNotFoundError:
        console.print("[red]❌ Config file not found. Run 'shelf init' first.[/red]")
        raise typer.Exit(1)

    return config, config_data


def get_store() -> Tuple[ShelfConfig, ProjectStore]:
    """Open the current shelf's store and surface any load warnings.

    Returns:
        tuple: (config_data, store)
    """
    config, config_data = get_config_with_data()

    store = ProjectStore(
        config.shelf_dir,
        storage_key=config_data.storage_key,
        require_title=config_data.require_title,
    )
    try:
        store.load()
    except PersistenceError as e:
        console.print(f"[red]❌ {escape(str(e))}[/red]")
        raise typer.Exit(1)

    for warning in store.warnings:
        console.print(f"[yellow]⚠ {escape(warning)}[/yellow]")

    return config_data, store


def validate_required_arg(
    value: Optional[str], arg_name: str, ctx: typer.Context
) -> str:
    """Validate a required argument and show help if missing.

    Raises:
        typer.Exit: If value is None
    """
    if value is None:
        console.print(ctx.get_help())
        console.print(f"\n[red]❌ Error: Missing argument '{arg_name.upper()}'.[/red]")
        raise typer.Exit(1)
    return value


def normalize_status(value: Optional[str]) -> Optional[str]:
    """Match a status typed on the command line to a known label.

    Matching ignores case. Empty input clears the status.

    Raises:
        typer.Exit: If the label is not a known status
    """
    if value is None:
        return None
    if not value.strip():
        return ""

    for status in ProjectStatus:
        if status.value.lower() == value.strip().lower():
            return status.value

    known = ", ".join(status.value for status in ProjectStatus)
    console.print(f"[red]❌ Unknown status '{value}'. Choose one of: {known}[/red]")
    raise typer.Exit(1)


def status_text(status: Optional[str], with_label: bool = True) -> Text:
    """Render a status label with its glyph and color."""
    icon = status_icon(status)
    glyph = ICON_GLYPHS.get(icon.icon, ICON_GLYPHS["circle"])
    style = COLOR_STYLES.get(icon.color, "") if icon.color else ""

    text = Text(glyph, style=style)
    if with_label and status:
        text.append(f" {status}", style=style)
    return text


def short_id(project_id: str) -> str:
    """First block of a project id, enough to reference it on the CLI."""
    return project_id.split("-")[0]


def show_env_config():
    """Display active environment variable configuration."""
    env_vars = {
        "PROJECTSHELF_DIR": os.environ.get("PROJECTSHELF_DIR"),
        "PROJECTSHELF_STORAGE_KEY": os.environ.get("PROJECTSHELF_STORAGE_KEY"),
        "PROJECTSHELF_REQUIRE_TITLE": os.environ.get("PROJECTSHELF_REQUIRE_TITLE"),
    }

    active = {k: v for k, v in env_vars.items() if v}
    if active:
        console.print("\n[yellow]Active environment variables:[/yellow]")
        for key, value in active.items():
            console.print(f"  {key}={value}")
    else:
        console.print("\n[dim]No projectshelf environment variables set[/dim]")
