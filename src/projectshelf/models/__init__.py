"""Core data models for projectshelf."""

from .base import ShelfBaseModel, ShelfStrictModel
from .project import Project, ProjectStatus, LinkKind, LINK_LABELS

__all__ = [
    "ShelfBaseModel",
    "ShelfStrictModel",
    "Project",
    "ProjectStatus",
    "LinkKind",
    "LINK_LABELS",
]
