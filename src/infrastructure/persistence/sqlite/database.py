"""
SQLite database manager

File-based SQLite database backing the record store: projects, their ordered
scenes and (optionally) timeline keyframes.
"""
import sqlite3
from pathlib import Path
from typing import Optional

from src.utils.message import Log

SCHEMA_VERSION = 1

# position is not UNIQUE: a batched renumber passes through transient
# duplicates inside its transaction
SCHEMA = (
    """CREATE TABLE IF NOT EXISTS schema_version (
        version INTEGER PRIMARY KEY
    )""",
    """CREATE TABLE IF NOT EXISTS projects (
        id TEXT PRIMARY KEY,
        name TEXT NOT NULL,
        owner_id TEXT NOT NULL,
        created_at TEXT NOT NULL
    )""",
    """CREATE TABLE IF NOT EXISTS scenes (
        id TEXT PRIMARY KEY,
        project_id TEXT NOT NULL REFERENCES projects(id) ON DELETE CASCADE,
        title TEXT NOT NULL,
        description TEXT NOT NULL DEFAULT '',
        comments TEXT NOT NULL DEFAULT '',
        still_url TEXT,
        position INTEGER NOT NULL,
        created_at TEXT NOT NULL,
        updated_at TEXT NOT NULL
    )""",
    """CREATE TABLE IF NOT EXISTS keyframes (
        id TEXT PRIMARY KEY,
        project_id TEXT NOT NULL REFERENCES projects(id) ON DELETE CASCADE,
        scene_id TEXT NOT NULL REFERENCES scenes(id) ON DELETE CASCADE,
        name TEXT NOT NULL,
        color TEXT NOT NULL,
        timestamp REAL NOT NULL,
        sequence INTEGER NOT NULL,
        created_at TEXT NOT NULL
    )""",
    "CREATE INDEX IF NOT EXISTS idx_projects_owner ON projects(owner_id)",
    "CREATE INDEX IF NOT EXISTS idx_scenes_project_position ON scenes(project_id, position)",
    "CREATE INDEX IF NOT EXISTS idx_keyframes_project ON keyframes(project_id, sequence)",
    "CREATE INDEX IF NOT EXISTS idx_keyframes_scene ON keyframes(scene_id)",
)


class Database:
    """
    One shared connection to a database file.

    Writes go through transaction(): commit on success, rollback on any
    exception, so a failed batch leaves no partial rows behind.
    """

    def __init__(self, db_path: Optional[str] = None):
        if db_path is None:
            raise ValueError("Database path is required for file-based operation")

        self.db_path = Path(db_path)
        self.db_path.parent.mkdir(parents=True, exist_ok=True)

        self._connection = sqlite3.connect(str(self.db_path), check_same_thread=False)
        self._connection.row_factory = sqlite3.Row
        self._create_schema()

    def _create_schema(self):
        with self.transaction() as conn:
            for statement in SCHEMA:
                conn.execute(statement)
            if conn.execute("SELECT COUNT(*) FROM schema_version").fetchone()[0] == 0:
                conn.execute("INSERT INTO schema_version (version) VALUES (?)", (SCHEMA_VERSION,))
        Log.info(f"Database initialized ({self.db_path})")

    def get_connection(self) -> sqlite3.Connection:
        if self._connection is None:
            raise sqlite3.ProgrammingError(f"Database is closed: {self.db_path}")
        self._connection.execute("PRAGMA foreign_keys = ON")
        return self._connection

    def transaction(self) -> "TransactionContext":
        return TransactionContext(self.get_connection())

    def schema_version(self) -> int:
        row = self.get_connection().execute("SELECT version FROM schema_version LIMIT 1").fetchone()
        return row[0] if row else SCHEMA_VERSION

    def close(self) -> None:
        if self._connection is not None:
            self._connection.close()
            self._connection = None
            Log.info(f"Database connection closed: {self.db_path}")


class TransactionContext:
    """Commits on a clean exit and rolls back when the block raises."""

    def __init__(self, conn: sqlite3.Connection):
        self.conn = conn

    def __enter__(self) -> sqlite3.Connection:
        return self.conn

    def __exit__(self, exc_type, exc_val, exc_tb):
        if exc_type is None:
            self.conn.commit()
        else:
            self.conn.rollback()
            Log.error(f"Transaction rolled back: {exc_val}")
        return False
