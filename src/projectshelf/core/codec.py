"""Encode and decode the persisted project list."""

import json
import uuid
from typing import List, Sequence, Set, Tuple

from pydantic import ValidationError

from projectshelf.models.project import Project

Entry = Tuple[str, Project]


class CorruptStateError(ValueError):
    """Raised when a persisted blob cannot be decoded into projects."""

    pass


def new_project_id() -> str:
    """Generate a stable identifier for a newly stored project."""
    return str(uuid.uuid4())


def encode_projects(entries: Sequence[Entry]) -> str:
    """Serialize the whole sequence to one JSON string.

    Each record becomes an object carrying its id; empty fields are omitted.
    The store id always wins over an "id" field carried by the record itself.
    """
    payload = []
    for project_id, project in entries:
        data = project.model_dump(mode="json", exclude_none=True)
        data.pop("id", None)
        payload.append({"id": project_id, **data})
    return json.dumps(payload, ensure_ascii=False)


def decode_projects(blob: str) -> List[Entry]:
    """Parse a persisted blob back into (id, project) pairs in stored order.

    Records without an id, as written by older versions, get a fresh one,
    and so does any record repeating an id seen earlier in the blob.

    Raises:
        CorruptStateError: If the blob is not a JSON array of project objects
    """
    try:
        data = json.loads(blob)
    except (TypeError, ValueError) as e:
        raise CorruptStateError(f"Stored projects are not valid JSON: {e}") from e

    if not isinstance(data, list):
        raise CorruptStateError(
            f"Stored projects must be a JSON array, got {type(data).__name__}"
        )

    entries: List[Entry] = []
    seen: Set[str] = set()
    for position, item in enumerate(data):
        if not isinstance(item, dict):
            raise CorruptStateError(
                f"Stored project at position {position} is not an object"
            )

        item = dict(item)
        project_id = item.pop("id", None)
        if not isinstance(project_id, str) or not project_id or project_id in seen:
            project_id = new_project_id()
        seen.add(project_id)

        try:
            project = Project.model_validate(item)
        except ValidationError as e:
            raise CorruptStateError(
                f"Stored project at position {position} is invalid: {e}"
            ) from e

        entries.append((project_id, project))

    return entries
