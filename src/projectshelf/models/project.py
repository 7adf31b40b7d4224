"""Project record model for projectshelf."""

from enum import Enum
from typing import Any, List, Optional, Tuple

from pydantic import Field, model_validator

from .base import ShelfBaseModel


class ProjectStatus(str, Enum):
    """Known lifecycle labels for a project."""

    NOT_STARTED = "Not Started"
    BACKLOG = "Backlog"
    IN_PROGRESS = "In Progress"
    PAUSED = "Paused"
    IN_REVIEW = "In Review"
    COMPLETED = "Completed"
    MAINTENANCE = "Maintenance"
    BLOCKED = "Blocked"


class LinkKind(str, Enum):
    """Link fields a project can carry, in display order."""

    URL = "url"
    WEBSITE = "website"
    REPOSITORY = "repository"
    ROADMAP = "roadmap"
    KANBAN = "kanban"
    DESIGN = "design"
    BACKEND = "backend"
    EXTRA = "extra"


LEGACY_REPOSITORY_KEYS = ("repo", "github")

LINK_LABELS = {
    LinkKind.URL: "Admin Portal",
    LinkKind.WEBSITE: "Website",
    LinkKind.REPOSITORY: "Repository",
    LinkKind.ROADMAP: "Roadmap",
    LinkKind.KANBAN: "Kanban",
    LinkKind.DESIGN: "Design",
    LinkKind.BACKEND: "Backend",
    LinkKind.EXTRA: "Extra",
}


class Project(ShelfBaseModel):
    """A tracked project.

    Only ``title`` is required. Link fields are opaque strings; nothing
    checks that they are URLs.
    """

    title: str = Field(description="Project name")
    status: Optional[str] = Field(default=None, description="Lifecycle label")
    description: Optional[str] = Field(
        default=None, description="Markdown description"
    )

    url: Optional[str] = Field(default=None, description="Admin portal link")
    website: Optional[str] = Field(default=None, description="Public website")
    repository: Optional[str] = Field(default=None, description="Source repository")
    roadmap: Optional[str] = Field(default=None, description="Roadmap link")
    kanban: Optional[str] = Field(default=None, description="Kanban board link")
    design: Optional[str] = Field(default=None, description="Design tool link")
    backend: Optional[str] = Field(default=None, description="Backend console link")
    extra: Optional[str] = Field(default=None, description="Any other link")

    favorite: Optional[LinkKind] = Field(
        default=None, description="Link opened by the quick-open action"
    )

    @model_validator(mode="before")
    @classmethod
    def fold_legacy_links(cls, data: Any) -> Any:
        """Move older repository field names onto ``repository``.

        The first non-empty of repository, repo and github fills
        ``repository``. A second, different value moves to ``extra`` when
        that is empty and otherwise stays under its own key.
        """
        if not isinstance(data, dict):
            return data

        data = dict(data)
        for key in LEGACY_REPOSITORY_KEYS:
            value = data.get(key)
            if not value:
                continue
            if not data.get("repository"):
                data["repository"] = data.pop(key)
            elif value == data["repository"]:
                data.pop(key)
            elif not data.get("extra"):
                data["extra"] = data.pop(key)
        return data

    def link(self, kind: LinkKind | str) -> Optional[str]:
        """Return the value of one link field, or None when it is empty."""
        value = getattr(self, LinkKind(kind).value)
        return value or None

    def links(self) -> List[Tuple[LinkKind, str]]:
        """Non-empty link fields in display order."""
        return [(kind, self.link(kind)) for kind in LinkKind if self.link(kind)]

    def quick_link(self) -> Optional[Tuple[LinkKind, str]]:
        """Link the quick-open action targets.

        The favorite wins when it is set and filled in; otherwise the first
        non-empty link is used.
        """
        if self.favorite:
            value = self.link(self.favorite)
            if value:
                return LinkKind(self.favorite), value

        links = self.links()
        return links[0] if links else None

    def keywords(self) -> List[str]:
        """Strings the list search matches against."""
        return [self.title, self.status] if self.status else [self.title]
