"""Configuration management for projectshelf."""

import os
from pathlib import Path
from typing import Optional, Dict, Any
import toml
from pydantic import BaseModel, Field, ConfigDict

from projectshelf.core.path_utils import get_config_path, get_shelf_dir
from projectshelf.models.project import ProjectStatus
from projectshelf.utils.links import DEFAULT_LINK_TEMPLATES

TRUE_VALUES = {"1", "true", "yes", "on"}


class ShelfConfig(BaseModel):
    """Configuration for a shelf stored in .projectshelf/config.toml."""

    model_config = ConfigDict(
        extra="allow"
    )  # Allow additional fields for extensibility

    storage_key: str = Field(
        default="projects", description="Key/value entry holding the project list"
    )
    require_title: bool = Field(
        default=False, description="Reject empty or blank project titles"
    )
    default_status: str = Field(
        default=ProjectStatus.NOT_STARTED.value,
        description="Status given to new projects when none is chosen",
    )
    link_templates: Dict[str, str] = Field(
        default_factory=lambda: dict(DEFAULT_LINK_TEMPLATES),
        description="URL templates for partial link values, by link kind",
    )


class Config:
    """Manages shelf configuration."""

    def __init__(self, shelf_dir: Optional[Path] = None):
        """Initialize config manager.

        Args:
            shelf_dir: Directory containing .projectshelf. If None, uses
                PROJECTSHELF_DIR env var or current directory.
        """
        if shelf_dir is None:
            env_dir = os.environ.get("PROJECTSHELF_DIR")
            if env_dir:
                shelf_dir = Path(env_dir)

        self.shelf_dir = Path(shelf_dir) if shelf_dir else Path.cwd()
        self.config_dir = get_shelf_dir(self.shelf_dir)
        self.config_path = get_config_path(self.shelf_dir)
        self._config: Optional[ShelfConfig] = None

    @property
    def exists(self) -> bool:
        """Check if config file exists."""
        return self.config_path.exists()

    def load(self) -> ShelfConfig:
        """Load configuration from disk, with environment variable overrides."""
        if not self.exists:
            raise FileNotFoundError(f"Config file not found at {self.config_path}")

        with open(self.config_path, "r") as f:
            data = toml.load(f)

        self._apply_env_overrides(data)

        self._config = ShelfConfig(**data)
        return self._config

    def _apply_env_overrides(self, data: Dict[str, Any]) -> None:
        """Apply environment variable overrides to configuration data."""
        if env_key := os.environ.get("PROJECTSHELF_STORAGE_KEY"):
            data["storage_key"] = env_key

        if env_require := os.environ.get("PROJECTSHELF_REQUIRE_TITLE"):
            data["require_title"] = env_require.strip().lower() in TRUE_VALUES

    def save(self, config: Optional[ShelfConfig] = None) -> None:
        """Save configuration to disk.

        Args:
            config: Configuration to save. If None, saves current config.
        """
        if config:
            self._config = config

        if not self._config:
            raise ValueError("No configuration to save")

        self.config_dir.mkdir(parents=True, exist_ok=True)

        with open(self.config_path, "w") as f:
            toml.dump(self._config.model_dump(), f)

    def init_project(self) -> ShelfConfig:
        """Initialize a new shelf with default configuration.

        Delegates to ShelfInitializer for the actual initialization logic.
        """
        from projectshelf.core.initializer import ShelfInitializer

        initializer = ShelfInitializer(self.shelf_dir)
        config = initializer.init_shelf()

        self._config = config
        return config
