from __future__ import annotations

from datetime import date
from typing import Optional, TypedDict


# PUBLIC_INTERFACE
class TodoEntity(TypedDict):
    """
    In-memory record of one row of the 'todos' table.

    Fields:
    - id: Unique integer identifier assigned by the database (unsigned 32-bit)
    - description: Non-empty text set at creation
    - due_date: Optional calendar date (no time component)
    - starred: Boolean flag, false at creation
    - is_completed: Boolean completion flag, false at creation
    """

    id: int
    description: str
    due_date: Optional[date]
    starred: bool
    is_completed: bool
