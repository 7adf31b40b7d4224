"""Key-value store manager for projectshelf - durable string and JSON entries."""

import json
import logging
from pathlib import Path
from typing import Any, List, Optional

from projectshelf.core.connection import DatabaseConnection
from projectshelf.core.path_utils import get_store_path
from projectshelf.utils.validators import validate_key

logger = logging.getLogger(__name__)


class KVManager:
    """Key-value store backed by a ``__kv`` table in the shelf's SQLite file.

    Text values are stored as-is; lists and dicts are stored as JSON and
    come back as the same Python types.
    """

    def __init__(self, shelf_dir: Path):
        """Initialize KV manager.

        Args:
            shelf_dir: Directory containing .projectshelf
        """
        self.shelf_dir = Path(shelf_dir)
        self.db_path = get_store_path(self.shelf_dir)

    def _ensure_kv_table(self, conn: DatabaseConnection) -> None:
        """Ensure the __kv table exists."""
        conn.execute("""
            CREATE TABLE IF NOT EXISTS __kv (
                key TEXT PRIMARY KEY,
                value_type TEXT NOT NULL CHECK (value_type IN ('text', 'json', 'null')),
                value_text TEXT,
                value_json TEXT,
                value_size INTEGER,
                created_at INTEGER DEFAULT (strftime('%s', 'now')),
                updated_at INTEGER DEFAULT (strftime('%s', 'now')),

                CHECK (
                    (value_type = 'text' AND value_text IS NOT NULL AND value_json IS NULL) OR
                    (value_type = 'json' AND value_json IS NOT NULL AND value_text IS NULL) OR
                    (value_type = 'null' AND value_text IS NULL AND value_json IS NULL)
                )
            )
        """)
        conn.commit()

    def ensure_store(self) -> None:
        """Create the store file and table if they do not exist yet."""
        with DatabaseConnection(self.db_path) as conn:
            self._ensure_kv_table(conn)

    def validate_key(self, key: Any) -> None:
        """Validate key format and constraints.

        Raises:
            ValueError: If key is invalid
        """
        validate_key(key)

    def _detect_type_and_value(self, value: Any) -> tuple[str, Optional[str], Optional[str]]:
        """Detect value type and prepare for storage.

        Returns:
            (value_type, value_text, value_json)
        """
        if value is None:
            return "null", None, None
        elif isinstance(value, str):
            return "text", value, None
        else:
            try:
                return "json", None, json.dumps(value)
            except (TypeError, ValueError) as e:
                raise ValueError(f"Value is not JSON serializable: {e}")

    def set(self, key: str, value: Any) -> None:
        """Set a key-value pair, overwriting any previous value.

        Args:
            key: Key to set
            value: String, JSON-serializable value, or None

        Raises:
            ValueError: If key is invalid or value cannot be stored
        """
        self.validate_key(key)

        value_type, value_text, value_json = self._detect_type_and_value(value)
        stored = value_text if value_text is not None else value_json
        value_size = len(stored.encode("utf-8")) if stored is not None else 0

        with DatabaseConnection(self.db_path) as conn:
            self._ensure_kv_table(conn)

            with conn.transaction():
                conn.execute(
                    """
                    INSERT INTO __kv (key, value_type, value_text, value_json, value_size, updated_at)
                    VALUES (?, ?, ?, ?, ?, strftime('%s', 'now'))
                    ON CONFLICT(key) DO UPDATE SET
                        value_type = excluded.value_type,
                        value_text = excluded.value_text,
                        value_json = excluded.value_json,
                        value_size = excluded.value_size,
                        updated_at = strftime('%s', 'now')
                    """,
                    (key, value_type, value_text, value_json, value_size),
                )

        logger.debug(f"Stored {value_size} bytes under key '{key}'")

    def get(self, key: str) -> Optional[Any]:
        """Get value by key.

        Args:
            key: Key to retrieve

        Returns:
            Original value or None if key doesn't exist
        """
        if not key or not isinstance(key, str):
            return None

        if not self.db_path.exists():
            return None

        with DatabaseConnection(self.db_path) as conn:
            self._ensure_kv_table(conn)

            result = conn.execute(
                "SELECT value_type, value_text, value_json FROM __kv WHERE key = ?",
                (key,),
            ).fetchone()

            if not result:
                return None

            value_type = result["value_type"]
            if value_type == "text":
                return result["value_text"]
            elif value_type == "json":
                return json.loads(result["value_json"])

            return None

    def delete(self, *keys: str) -> int:
        """Delete one or more keys.

        Returns:
            Number of keys that were deleted
        """
        for key in keys:
            self.validate_key(key)

        if not keys or not self.db_path.exists():
            return 0

        deleted_count = 0
        with DatabaseConnection(self.db_path) as conn:
            self._ensure_kv_table(conn)

            with conn.transaction():
                for key in keys:
                    result = conn.execute("DELETE FROM __kv WHERE key = ?", (key,))
                    deleted_count += result.rowcount

        return deleted_count

    def exists(self, key: str) -> bool:
        """Check if a key exists."""
        if not key or not isinstance(key, str):
            return False

        if not self.db_path.exists():
            return False

        with DatabaseConnection(self.db_path) as conn:
            self._ensure_kv_table(conn)

            result = conn.execute("SELECT 1 FROM __kv WHERE key = ?", (key,)).fetchone()
            return result is not None

    def keys(self) -> List[str]:
        """List all keys in insertion order."""
        if not self.db_path.exists():
            return []

        with DatabaseConnection(self.db_path) as conn:
            self._ensure_kv_table(conn)

            rows = conn.execute("SELECT key FROM __kv ORDER BY rowid").fetchall()
            return [row["key"] for row in rows]
