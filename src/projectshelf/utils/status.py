"""Status label to display glyph lookup."""

from typing import Dict, Optional

from pydantic import Field

from projectshelf.models.base import ShelfStrictModel
from projectshelf.models.project import ProjectStatus


class StatusIcon(ShelfStrictModel):
    """Icon name and tint used to render a status label."""

    icon: str = Field(description="Icon name understood by the renderer")
    color: Optional[str] = Field(default=None, description="Tint color name")


DEFAULT_STATUS_ICON = StatusIcon(icon="circle", color=None)

STATUS_ICONS: Dict[str, StatusIcon] = {
    ProjectStatus.NOT_STARTED.value: StatusIcon(icon="circle", color="red"),
    ProjectStatus.BACKLOG.value: StatusIcon(icon="circle-dashed", color="secondary"),
    ProjectStatus.IN_PROGRESS.value: StatusIcon(icon="circle-progress-25", color="yellow"),
    ProjectStatus.PAUSED.value: StatusIcon(icon="pause", color="orange"),
    ProjectStatus.IN_REVIEW.value: StatusIcon(icon="circle-progress-50", color="purple"),
    ProjectStatus.COMPLETED.value: StatusIcon(icon="circle-progress-100", color="green"),
    ProjectStatus.MAINTENANCE.value: StatusIcon(icon="circle-progress-75", color="blue"),
    ProjectStatus.BLOCKED.value: StatusIcon(icon="stop", color="magenta"),
}


def status_icon(status: Optional[str]) -> StatusIcon:
    """Map a status label to its icon and color.

    Empty, missing and unknown labels all map to DEFAULT_STATUS_ICON.
    """
    if not status:
        return DEFAULT_STATUS_ICON
    return STATUS_ICONS.get(status, DEFAULT_STATUS_ICON)
