"""Validation helpers for projectshelf records and storage keys."""

from typing import Any


class InvalidTitleError(ValueError):
    """Raised when a project title is rejected by the title policy."""

    pass


def validate_title(title: Any) -> None:
    """Reject empty or whitespace-only titles.

    Only applied when the shelf is configured with ``require_title``.

    Raises:
        InvalidTitleError: If the title is missing or blank
    """
    if not isinstance(title, str) or not title.strip():
        raise InvalidTitleError("Project title cannot be empty")


def validate_key(key: Any) -> None:
    """Validate a storage key.

    Raises:
        ValueError: If key is invalid
    """
    if not isinstance(key, str) or not key:
        raise ValueError("Key must be a non-empty string")

    if len(key) > 255:
        raise ValueError(f"Key length cannot exceed 255 characters (got {len(key)})")

    if "\n" in key or "\r" in key or "\t" in key or "\0" in key:
        raise ValueError("Key cannot contain newlines, tabs, or null bytes")

    if not all(c.isprintable() for c in key):
        raise ValueError("Key must contain only printable characters")

    if key.startswith("__"):
        raise ValueError("Keys cannot start with '__' (reserved for system use)")
