"""Open a configured shelf and its project store."""

from pathlib import Path
from typing import Optional

from projectshelf.config import Config
from projectshelf.core.path_utils import get_shelf_root
from projectshelf.managers.projects import ProjectStore


def connect(shelf_dir: Optional[Path] = None, strict: bool = False) -> ProjectStore:
    """Load a shelf's configuration and return its store with projects loaded.

    Args:
        shelf_dir: Directory containing .projectshelf. If None, uses
            PROJECTSHELF_DIR or searches upward from the current directory.
        strict: Raise CorruptStateError instead of starting empty when the
            stored list cannot be read

    Returns:
        Loaded ProjectStore

    Raises:
        FileNotFoundError: If no shelf config is found
    """
    config = Config(shelf_dir)
    if shelf_dir is None and not config.exists:
        config = Config(get_shelf_root(Path.cwd()))

    config_data = config.load()

    store = ProjectStore(
        config.shelf_dir,
        storage_key=config_data.storage_key,
        require_title=config_data.require_title,
    )
    store.load(strict=strict)
    return store
