"""projectshelf - a small searchable list of tracked projects."""

from importlib.metadata import PackageNotFoundError, version

from projectshelf.core.shelf import connect
from projectshelf.managers.projects import ProjectStore
from projectshelf.models.project import Project, ProjectStatus, LinkKind

try:
    __version__ = version("projectshelf")
except PackageNotFoundError:
    # Package metadata is not available when running from a source checkout
    __version__ = "0.1.0"

__all__ = ["connect", "ProjectStore", "Project", "ProjectStatus", "LinkKind"]
