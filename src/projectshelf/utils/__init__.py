"""Utility functions for projectshelf."""

from .status import StatusIcon, DEFAULT_STATUS_ICON, STATUS_ICONS, status_icon
from .validators import InvalidTitleError, validate_title, validate_key
from .links import DEFAULT_LINK_TEMPLATES, resolve_link

__all__ = [
    "StatusIcon",
    "DEFAULT_STATUS_ICON",
    "STATUS_ICONS",
    "status_icon",
    "InvalidTitleError",
    "validate_title",
    "validate_key",
    "DEFAULT_LINK_TEMPLATES",
    "resolve_link",
]
