from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import date
from typing import List, Optional

from .models import TodoEntity
from .schemas import TodoCreate
from .settings import get_settings


@dataclass(frozen=True)
class ListQuery:
    """
    Query parameters for listing todos.
    """
    today: date
    due: Optional[bool] = None
    complete: Optional[bool] = None


# PUBLIC_INTERFACE
class Repository(ABC):
    """Abstract repository contract for todo storage backends."""

    @abstractmethod
    def create(self, data: TodoCreate) -> TodoEntity:
        """Insert a new todo and return it with the database-assigned id."""

    @abstractmethod
    def list(self, query: ListQuery) -> List[TodoEntity]:
        """
        Return every TodoEntity matching the filters.
        - due: due on or before query.today (True), later or undated (False)
        - complete: filter by is_completed
        """


# PUBLIC_INTERFACE
def get_repository() -> Repository:
    """
    Factory returning a repository bound to the configured SQLite database.

    Called once per request; the repository opens a connection per operation
    and closes it before returning.
    """
    from .db import SQLiteRepository

    settings = get_settings()
    return SQLiteRepository(settings.sqlite_db_path, timeout=settings.sqlite_timeout)
