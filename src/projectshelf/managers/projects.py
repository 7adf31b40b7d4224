"""Project store - the ordered project list mirrored to the key-value store."""

import json
import logging
import sqlite3
import threading
from pathlib import Path
from typing import Any, Callable, Dict, List, Mapping, Optional, Tuple

from projectshelf.core.codec import (
    CorruptStateError,
    decode_projects,
    encode_projects,
    new_project_id,
)
from projectshelf.managers.kv import KVManager
from projectshelf.models.project import Project
from projectshelf.utils.status import StatusIcon, status_icon
from projectshelf.utils.validators import validate_title

logger = logging.getLogger(__name__)


class ProjectIndexError(IndexError):
    """Raised when a positional reference does not point at a project."""

    pass


class ProjectNotFoundError(LookupError):
    """Raised when an id or reference matches no project, or more than one."""

    pass


class PersistenceError(RuntimeError):
    """Raised when the project list cannot be read from or written to storage."""

    pass


class ProjectStore:
    """Ordered collection of projects, persisted as one blob per change.

    Display order is insertion order. Every record also has a stable id so
    callers holding a reference across other mutations can use the
    ``*_by_id`` methods instead of positions. Each mutation rewrites the whole
    stored list before it returns; if the write fails the in-memory change is
    undone and PersistenceError is raised.
    """

    def __init__(
        self,
        shelf_dir: Path,
        storage_key: str = "projects",
        require_title: bool = False,
        kv: Optional[KVManager] = None,
    ):
        """Initialize the store. Call load() to read persisted projects.

        Args:
            shelf_dir: Directory containing .projectshelf
            storage_key: Key-value entry holding the encoded list
            require_title: Reject empty or blank titles on create and edit
            kv: KVManager to use instead of the shelf's default one
        """
        self.shelf_dir = Path(shelf_dir)
        self.kv = kv or KVManager(self.shelf_dir)
        self.kv.validate_key(storage_key)
        self.storage_key = storage_key
        self.require_title = require_title
        self.warnings: List[str] = []

        self._order: List[str] = []
        self._records: Dict[str, Project] = {}
        self._lock = threading.Lock()

    # Reading

    def load(self, strict: bool = False) -> List[Project]:
        """Replace the in-memory list with the persisted one.

        A missing entry leaves the store empty. An entry that cannot be
        decoded raises CorruptStateError when ``strict``; otherwise the store
        is reset to empty and a warning is logged and added to ``warnings``.
        The stored entry itself is left untouched until the next mutation.

        Returns:
            The loaded projects in order

        Raises:
            CorruptStateError: If strict and the stored entry is unreadable
            PersistenceError: If the storage backend fails
        """
        try:
            blob = self.kv.get(self.storage_key)
        except sqlite3.Error as e:
            logger.error(f"Failed to read projects from '{self.kv.db_path}': {e}")
            raise PersistenceError(f"Could not read stored projects: {e}") from e

        with self._lock:
            if blob is None:
                self._order, self._records = [], {}
                logger.debug(f"No stored projects under key '{self.storage_key}'")
                return self.projects

            if not isinstance(blob, str):
                blob = json.dumps(blob)

            try:
                entries = decode_projects(blob)
            except CorruptStateError as e:
                if strict:
                    raise
                warning = (
                    f"Stored projects under '{self.storage_key}' could not be "
                    f"read and were ignored: {e}"
                )
                logger.warning(warning)
                self.warnings.append(warning)
                self._order, self._records = [], {}
                return self.projects

            self._order = [project_id for project_id, _ in entries]
            self._records = dict(entries)

        logger.debug(f"Loaded {len(self._order)} projects from '{self.storage_key}'")
        return self.projects

    @property
    def projects(self) -> List[Project]:
        """Projects in display order."""
        return [self._records[project_id] for project_id in self._order]

    @property
    def ids(self) -> List[str]:
        """Project ids in display order."""
        return list(self._order)

    def entries(self) -> List[Tuple[str, Project]]:
        """(id, project) pairs in display order."""
        return [(project_id, self._records[project_id]) for project_id in self._order]

    def __len__(self) -> int:
        return len(self._order)

    def get(self, index: int) -> Project:
        """Get the project at a position.

        Raises:
            ProjectIndexError: If index is out of range
        """
        self._check_index(index)
        return self._records[self._order[index]]

    def get_by_id(self, project_id: str) -> Project:
        """Get a project by id.

        Raises:
            ProjectNotFoundError: If no project has this id
        """
        if project_id not in self._records:
            raise ProjectNotFoundError(f"Project '{project_id}' does not exist")
        return self._records[project_id]

    def index_of(self, project_id: str) -> int:
        """Current position of a project id.

        Raises:
            ProjectNotFoundError: If no project has this id
        """
        self.get_by_id(project_id)
        return self._order.index(project_id)

    def resolve(self, ref: str) -> int:
        """Turn a user reference into a position.

        A reference made only of digits is a position; anything else is
        matched as a prefix of the project ids and must match exactly one.

        Raises:
            ProjectIndexError: If a numeric reference is out of range
            ProjectNotFoundError: If an id prefix matches zero or several projects
        """
        ref = str(ref).strip()
        if ref.isdigit():
            index = int(ref)
            self._check_index(index)
            return index

        matches = [i for i, project_id in enumerate(self._order) if ref and project_id.startswith(ref)]
        if not matches:
            raise ProjectNotFoundError(f"No project matches '{ref}'")
        if len(matches) > 1:
            raise ProjectNotFoundError(
                f"Reference '{ref}' is ambiguous ({len(matches)} projects match)"
            )
        return matches[0]

    def search(self, query: Optional[str] = None) -> List[Tuple[int, Project]]:
        """Filter projects by title or status, keeping display order.

        Matching is a case-insensitive substring test; an empty query
        returns every project.

        Returns:
            (position, project) pairs for matching projects
        """
        results = list(enumerate(self.projects))
        needle = (query or "").strip().lower()
        if not needle:
            return results

        return [
            (index, project)
            for index, project in results
            if any(needle in keyword.lower() for keyword in project.keywords())
        ]

    @staticmethod
    def status_icon(status: Optional[str]) -> StatusIcon:
        """Icon and color for a status label; unknown labels get the default."""
        return status_icon(status)

    # Mutations

    def create(self, record: Project | Mapping[str, Any]) -> List[Project]:
        """Append a project to the end of the list and persist.

        Returns:
            The new list of projects

        Raises:
            InvalidTitleError: If titles are required and this one is blank
            PersistenceError: If the list could not be written
        """
        project = self._coerce(record)
        project_id = new_project_id()

        def apply() -> None:
            self._order.append(project_id)
            self._records[project_id] = project

        self._mutate(apply)
        logger.info(f"Created project '{project.title}' ({project_id})")
        return self.projects

    def edit(self, index: int, record: Project | Mapping[str, Any]) -> List[Project]:
        """Replace the project at a position with a new record and persist.

        The replacement is complete: fields missing from ``record`` are
        cleared. The position keeps its id.

        Returns:
            The new list of projects

        Raises:
            ProjectIndexError: If index is out of range
            InvalidTitleError: If titles are required and this one is blank
            PersistenceError: If the list could not be written
        """
        project = self._coerce(record)

        def apply() -> None:
            self._check_index(index)
            self._records[self._order[index]] = project

        self._mutate(apply)
        logger.info(f"Edited project at position {index} ('{project.title}')")
        return self.projects

    def edit_by_id(self, project_id: str, record: Project | Mapping[str, Any]) -> List[Project]:
        """Replace the project with the given id and persist.

        Raises:
            ProjectNotFoundError: If no project has this id
        """
        project = self._coerce(record)

        def apply() -> None:
            self.get_by_id(project_id)
            self._records[project_id] = project

        self._mutate(apply)
        logger.info(f"Edited project {project_id} ('{project.title}')")
        return self.projects

    def delete(self, index: int) -> List[Project]:
        """Remove the project at a position and persist.

        Later projects move up by one position.

        Returns:
            The new list of projects

        Raises:
            ProjectIndexError: If index is out of range
            PersistenceError: If the list could not be written
        """
        removed: List[str] = []

        def apply() -> None:
            self._check_index(index)
            project_id = self._order.pop(index)
            self._records.pop(project_id)
            removed.append(project_id)

        self._mutate(apply)
        logger.info(f"Deleted project {removed[0]} at position {index}")
        return self.projects

    def delete_by_id(self, project_id: str) -> List[Project]:
        """Remove the project with the given id and persist.

        Raises:
            ProjectNotFoundError: If no project has this id
        """

        def apply() -> None:
            self.get_by_id(project_id)
            self._order.remove(project_id)
            self._records.pop(project_id)

        self._mutate(apply)
        logger.info(f"Deleted project {project_id}")
        return self.projects

    def persist(self) -> None:
        """Encode the whole list and overwrite the stored entry.

        Raises:
            PersistenceError: If the storage backend fails
        """
        with self._lock:
            self._write()

    # Internals

    def _check_index(self, index: int) -> None:
        # bool is an int subclass but never a position
        if (
            isinstance(index, bool)
            or not isinstance(index, int)
            or index < 0
            or index >= len(self._order)
        ):
            raise ProjectIndexError(
                f"Project index {index} is out of range ({len(self._order)} projects)"
            )

    def _coerce(self, record: Project | Mapping[str, Any]) -> Project:
        # "id" is reserved for the store's own identifier
        if isinstance(record, Project):
            project = record
            if project.model_extra and "id" in project.model_extra:
                data = project.model_dump()
                data.pop("id")
                project = Project.model_validate(data)
        else:
            data = dict(record)
            data.pop("id", None)
            project = Project.model_validate(data)
        if self.require_title:
            validate_title(project.title)
        return project

    def _mutate(self, apply: Callable[[], None]) -> None:
        """Apply an in-memory change and persist it under the write lock.

        The previous state is restored if the change or the write fails.
        """
        with self._lock:
            previous_order = list(self._order)
            previous_records = dict(self._records)
            try:
                apply()
                self._write()
            except Exception:
                self._order = previous_order
                self._records = previous_records
                raise

    def _write(self) -> None:
        blob = encode_projects(self.entries())
        try:
            self.kv.set(self.storage_key, blob)
        except (sqlite3.Error, OSError) as e:
            logger.error(f"Failed to persist {len(self._order)} projects: {e}")
            raise PersistenceError(f"Could not save projects: {e}") from e
        logger.debug(f"Persisted {len(self._order)} projects under '{self.storage_key}'")
