"""SQLite-backed document store for the ``users`` collection."""
from __future__ import annotations

import json
import logging
import secrets
import sqlite3
import threading
from datetime import datetime, timezone
from pathlib import Path
from typing import List, Optional

from .models import NewUser, User

logger = logging.getLogger("userhub.database")


class DuplicateUserError(ValueError):
    """Raised when an insert violates the unique index on ``name``."""


def _ensure_directory(path: Path) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)


def resolve_database_path(env_value: Optional[str]) -> Path:
    """Resolve the on-disk path for the document store."""

    if env_value:
        return Path(env_value).expanduser().resolve(strict=False)
    base_dir = Path(__file__).resolve().parent.parent / "data"
    return (base_dir / "userhub.sqlite3").resolve(strict=False)


def _current_timestamp() -> datetime:
    return datetime.now(timezone.utc)


def _generate_document_id() -> str:
    return secrets.token_hex(12)


class Database:
    """Wraps a single SQLite connection holding JSON user documents.

    The connection is opened on first use and shared by every caller;
    ``close`` releases it and a later call reopens it.
    """

    def __init__(self, path: Path) -> None:
        _ensure_directory(path)
        self._path = path
        self._conn: Optional[sqlite3.Connection] = None
        self._lock = threading.Lock()

    @property
    def path(self) -> Path:
        return self._path

    def _connection(self) -> sqlite3.Connection:
        if self._conn is None:
            conn = sqlite3.connect(self._path, check_same_thread=False)
            conn.row_factory = sqlite3.Row
            self._conn = conn
        return self._conn

    def initialize(self) -> None:
        """Create the ``users`` collection and its indexes if missing."""

        with self._lock:
            conn = self._connection()
            with conn:
                conn.executescript(
                    """
                    CREATE TABLE IF NOT EXISTS users (
                        id TEXT PRIMARY KEY,
                        name TEXT NOT NULL,
                        document TEXT NOT NULL,
                        created_at TEXT NOT NULL
                    );

                    CREATE UNIQUE INDEX IF NOT EXISTS idx_users_name ON users(name);
                    """
                )

    def close(self) -> None:
        with self._lock:
            if self._conn is not None:
                self._conn.close()
                self._conn = None

    # ------------------------------------------------------------------
    # User documents
    # ------------------------------------------------------------------
    def find_user_by_name(self, name: str) -> Optional[User]:
        with self._lock:
            row = self._connection().execute(
                "SELECT document FROM users WHERE name = ?",
                (name,),
            ).fetchone()
        if row is None:
            return None
        return self._row_to_user(row)

    def insert_user(self, new_user: NewUser) -> User:
        """Store ``new_user`` with a fresh id and creation timestamp."""

        user = User(
            id=_generate_document_id(),
            name=new_user.name,
            age=new_user.age,
            created_at=_current_timestamp(),
        )
        document = user.to_document()

        with self._lock:
            conn = self._connection()
            try:
                with conn:
                    conn.execute(
                        "INSERT INTO users (id, name, document, created_at) VALUES (?, ?, ?, ?)",
                        (user.id, user.name, json.dumps(document), document["createdAt"]),
                    )
            except sqlite3.IntegrityError as exc:
                raise DuplicateUserError(f"A user named {user.name!r} already exists") from exc

        logger.debug("Stored user document %s", user.id)
        return user

    def list_users(self) -> List[User]:
        with self._lock:
            rows = self._connection().execute("SELECT document FROM users").fetchall()
        return [self._row_to_user(row) for row in rows]

    def count_users(self, name: Optional[str] = None) -> int:
        query = "SELECT COUNT(*) AS total FROM users"
        params: tuple = ()
        if name is not None:
            query += " WHERE name = ?"
            params = (name,)
        with self._lock:
            row = self._connection().execute(query, params).fetchone()
        return int(row["total"])

    @staticmethod
    def _row_to_user(row: sqlite3.Row) -> User:
        return User.from_document(json.loads(row["document"]))


__all__ = ["Database", "DuplicateUserError", "resolve_database_path"]
