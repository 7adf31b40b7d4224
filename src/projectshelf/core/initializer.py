"""Shelf initialization for projectshelf."""

import logging
from pathlib import Path
from typing import Optional

import toml

from projectshelf.config import ShelfConfig
from projectshelf.core.path_utils import get_config_path, get_shelf_dir
from projectshelf.managers.kv import KVManager

logger = logging.getLogger(__name__)


class ShelfInitializer:
    """Handles initialization of a new shelf directory."""

    def __init__(self, shelf_dir: Optional[Path] = None):
        """Initialize the shelf initializer.

        Args:
            shelf_dir: Directory to create the shelf in. If None, uses current directory.
        """
        self.shelf_dir = Path(shelf_dir) if shelf_dir else Path.cwd()
        self.config_dir = get_shelf_dir(self.shelf_dir)
        self.config_path = get_config_path(self.shelf_dir)

    def init_shelf(self, storage_key: str = "projects") -> ShelfConfig:
        """Create .projectshelf with a default config and an empty store.

        Args:
            storage_key: Key/value entry that will hold the project list

        Returns:
            The created ShelfConfig

        Raises:
            FileExistsError: If a shelf already exists at the location
            ValueError: If storage_key is not a valid key
        """
        if self.config_path.exists():
            raise FileExistsError(f"Shelf already exists at {self.config_dir}")

        config = ShelfConfig(storage_key=storage_key)

        kv = KVManager(self.shelf_dir)
        kv.validate_key(storage_key)

        self.config_dir.mkdir(parents=True, exist_ok=True)
        kv.ensure_store()
        with open(self.config_path, "w") as f:
            toml.dump(config.model_dump(), f)

        logger.info(f"Initialized shelf in {self.config_dir}")
        return config


def init_shelf(shelf_dir: Optional[Path] = None, storage_key: str = "projects") -> ShelfConfig:
    """Initialize a new shelf.

    Args:
        shelf_dir: Directory to initialize in. If None, uses current directory.
        storage_key: Key/value entry that will hold the project list

    Returns:
        The created ShelfConfig
    """
    return ShelfInitializer(shelf_dir).init_shelf(storage_key)
