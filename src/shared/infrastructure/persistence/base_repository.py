"""
Base Repository

Shared plumbing for the SQLite repositories (projects, scenes, keyframes).
A subclass names its table and maps rows to entities; lookups, filtered
selects, inserts and deletes come from here.

    class SQLiteKeyframeRepository(BaseRepository[Keyframe]):
        entity_name = "Keyframe"
        table_name = "keyframes"

        def _row_to_entity(self, row) -> Keyframe: ...
        def _entity_to_row(self, entity: Keyframe) -> dict: ...

Every sqlite3 failure leaves this layer as RepositoryError, so services
only ever catch one failure type.
"""
import sqlite3
from abc import ABC, abstractmethod
from contextlib import contextmanager
from typing import TypeVar, Generic, Optional, List, Any, Dict, Iterator, Sequence

from src.infrastructure.persistence.sqlite.database import Database
from src.utils.message import Log


class RepositoryError(Exception):
    """A storage read or write failed."""
    pass


class EntityNotFoundError(RepositoryError):
    """Raised when a row that must exist does not."""

    def __init__(self, entity_name: str, entity_id: str, context: str = ""):
        self.entity_name = entity_name
        self.entity_id = entity_id
        self.context = context
        suffix = f" ({context})" if context else ""
        super().__init__(f"{entity_name} with id '{entity_id}' not found{suffix}")


T = TypeVar('T')


class BaseRepository(ABC, Generic[T]):
    """
    Table-backed repository for one entity type.

    Class attributes:
        entity_name: used in log lines and error messages
        table_name: backing table
        id_column: primary key column
    """

    entity_name: str = "Entity"
    table_name: str = ""
    id_column: str = "id"

    def __init__(self, database: Database):
        self.db = database

    @abstractmethod
    def _row_to_entity(self, row) -> T:
        pass

    @abstractmethod
    def _entity_to_row(self, entity: T) -> Dict[str, Any]:
        pass

    @contextmanager
    def _guard(self, action: str) -> Iterator[None]:
        """Re-raise sqlite3 failures as RepositoryError naming the entity and action."""
        try:
            yield
        except sqlite3.Error as e:
            raise RepositoryError(f"{self.entity_name} {action} failed: {e}") from e

    def _query(self, action: str, sql: str, params: Sequence = ()) -> List[sqlite3.Row]:
        with self._guard(action), self.db.get_connection() as conn:
            return conn.execute(sql, tuple(params)).fetchall()

    def _by_id_sql(self, projection: str) -> str:
        return f"SELECT {projection} FROM {self.table_name} WHERE {self.id_column} = ?"

    # -- reads ---------------------------------------------------------------

    def exists(self, entity_id: str) -> bool:
        return bool(self._query("lookup", self._by_id_sql("1"), (entity_id,)))

    def get_by_id(self, entity_id: str) -> Optional[T]:
        rows = self._query("lookup", self._by_id_sql("*"), (entity_id,))
        return self._row_to_entity(rows[0]) if rows else None

    def require_exists(self, entity_id: str, context: str = "") -> T:
        """Like get_by_id, but a missing row raises EntityNotFoundError."""
        entity = self.get_by_id(entity_id)
        if entity is None:
            raise EntityNotFoundError(self.entity_name, entity_id, context)
        return entity

    def select_where(self, where: str, params: tuple = (), order_by: Optional[str] = None) -> List[T]:
        """
        Entities matching a WHERE clause (given without the keyword),
        optionally ordered, e.g. select_where("project_id = ?", (pid,), "position ASC").
        """
        sql = f"SELECT * FROM {self.table_name} WHERE {where}"
        if order_by:
            sql = f"{sql} ORDER BY {order_by}"
        return [self._row_to_entity(row) for row in self._query("select", sql, params)]

    def count(self, where: Optional[str] = None, params: Optional[tuple] = None) -> int:
        sql = f"SELECT COUNT(*) FROM {self.table_name}"
        if where:
            sql = f"{sql} WHERE {where}"
        return self._query("count", sql, params or ())[0][0]

    # -- writes --------------------------------------------------------------

    def insert(self, entity: T) -> T:
        row = self._entity_to_row(entity)
        with self._guard("insert"), self.db.transaction() as conn:
            conn.execute(self._build_insert_sql(list(row)), list(row.values()))
        self._log_create(entity)
        return entity

    def delete_by_id(self, entity_id: str, require_exists: bool = True) -> bool:
        """
        Delete one row. A missing row raises EntityNotFoundError, or returns
        False when require_exists is off.
        """
        if not self.exists(entity_id):
            if require_exists:
                raise EntityNotFoundError(self.entity_name, entity_id)
            return False

        with self._guard("delete"), self.db.transaction() as conn:
            conn.execute(f"DELETE FROM {self.table_name} WHERE {self.id_column} = ?", (entity_id,))
        Log.info(f"Deleted {self.entity_name}: {entity_id}")
        return True

    # -- SQL builders --------------------------------------------------------

    def _build_insert_sql(self, columns: List[str]) -> str:
        return "INSERT INTO {} ({}) VALUES ({})".format(
            self.table_name, ", ".join(columns), ", ".join("?" for _ in columns)
        )

    def _build_update_sql(self, columns: List[str], where_column: str = None) -> str:
        assignments = ", ".join(f"{col} = ?" for col in columns)
        return f"UPDATE {self.table_name} SET {assignments} WHERE {where_column or self.id_column} = ?"

    # -- log lines -----------------------------------------------------------

    def _display_name(self, entity: T) -> str:
        for attr in ("name", "title", "id"):
            value = getattr(entity, attr, None)
            if value:
                return str(value)
        return "?"

    def _log_create(self, entity: T, extra: str = "") -> None:
        detail = f" ({extra})" if extra else ""
        Log.info(f"Created {self.entity_name}: {self._display_name(entity)}{detail}")

    def _log_update(self, entity: T, changes: List[str] = None) -> None:
        name = self._display_name(entity)
        if not changes:
            Log.debug(f"Updated {self.entity_name}: {name} (no changes)")
            return
        Log.info(f"Updated {self.entity_name}: {name} [{', '.join(changes)}]")
