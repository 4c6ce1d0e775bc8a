from __future__ import annotations

import logging
import sqlite3
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Generator, List

from .codec import MAX_ID, encode_due_date, row_to_entity
from .errors import DatabaseError, InternalInconsistency
from .filters import build_filter
from .models import TodoEntity
from .repositories import ListQuery, Repository
from .schemas import TodoCreate

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class _Cols:
    table: str = "todos"
    id: str = "id"
    description: str = "description"
    due_date: str = "due_date"
    starred: str = "starred"
    is_completed: str = "is_completed"


_COLS = _Cols()

_SELECT_SQL = (
    f"SELECT {_COLS.id}, {_COLS.description}, {_COLS.due_date}, {_COLS.starred}, "
    f"{_COLS.is_completed} FROM {_COLS.table}"
)


class SQLiteRepository(Repository):
    """
    SQLite repository over a pre-provisioned 'todos' table.

    The table is created outside this service; nothing here issues DDL.
    """

    def __init__(self, db_path: str, timeout: float = 5.0) -> None:
        self._db_path = db_path
        self._timeout = timeout

    @contextmanager
    def _conn(self) -> Generator[sqlite3.Connection, None, None]:
        try:
            conn = sqlite3.connect(self._db_path, timeout=self._timeout)
        except sqlite3.Error as exc:
            raise DatabaseError(f"Could not open database: {exc}") from exc
        conn.row_factory = sqlite3.Row
        try:
            yield conn
            conn.commit()
        except sqlite3.Error as exc:
            raise DatabaseError(f"Database query failed: {exc}") from exc
        finally:
            conn.close()

    def create(self, data: TodoCreate) -> TodoEntity:
        due = encode_due_date(data.due_date)
        with self._conn() as conn:
            cur = conn.execute(
                f"INSERT INTO {_COLS.table} ({_COLS.description}, {_COLS.due_date}) VALUES (?, ?)",
                (data.description, due),
            )
            new_id = cur.lastrowid
            # Raising here skips the commit, so an unusable id is never persisted.
            if isinstance(new_id, bool) or not isinstance(new_id, int):
                raise InternalInconsistency(f"Expected int, got {new_id!r}")
            if not 0 <= new_id <= MAX_ID:
                raise InternalInconsistency(f"Expected u32 id, got {new_id!r}")
        logger.debug("todos.inserted id=%s", new_id)
        return {
            "id": new_id,
            "description": data.description,
            "due_date": data.due_date,
            "starred": False,
            "is_completed": False,
        }

    def list(self, query: ListQuery) -> List[TodoEntity]:
        where_sql, params = build_filter(query.due, query.complete, query.today)
        sql = f"{_SELECT_SQL} {where_sql};" if where_sql else f"{_SELECT_SQL};"
        with self._conn() as conn:
            rows = conn.execute(sql, params).fetchall()
        logger.debug("todos.fetched rows=%d", len(rows))
        # A single bad row fails the whole listing.
        return [row_to_entity(r) for r in rows]
