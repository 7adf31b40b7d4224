"""Path utilities for projectshelf."""

from pathlib import Path

SHELF_DIR_NAME = ".projectshelf"
CONFIG_FILE_NAME = "config.toml"
STORE_FILE_NAME = "shelf.db"


def get_shelf_root(start_path: Path) -> Path:
    """Find the shelf root by looking for a .projectshelf directory.

    Args:
        start_path: Path to start searching from

    Returns:
        Path to the directory containing .projectshelf

    Raises:
        FileNotFoundError: If no shelf is found
    """
    current = Path(start_path).resolve()

    while True:
        if (current / SHELF_DIR_NAME).exists():
            return current
        if current == current.parent:
            break
        current = current.parent

    raise FileNotFoundError(f"No projectshelf found from {start_path}")


def get_shelf_dir(shelf_root: Path) -> Path:
    """Get path to the .projectshelf directory."""
    return Path(shelf_root) / SHELF_DIR_NAME


def get_config_path(shelf_root: Path) -> Path:
    """Get path to the shelf config file."""
    return get_shelf_dir(shelf_root) / CONFIG_FILE_NAME


def get_store_path(shelf_root: Path) -> Path:
    """Get path to the SQLite file that holds the key/value entries."""
    return get_shelf_dir(shelf_root) / STORE_FILE_NAME
