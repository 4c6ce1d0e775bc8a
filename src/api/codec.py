from __future__ import annotations

import re
from datetime import date
from typing import Any, Optional, Tuple

from .errors import MalformedRow
from .models import TodoEntity

# Column order of the 'todos' table; positional rows follow it exactly.
COLUMNS: Tuple[str, ...] = ("id", "description", "due_date", "starred", "is_completed")

_DATE_RE = re.compile(r"[0-9]{4}-[0-9]{2}-[0-9]{2}")
MAX_ID = 2**32 - 1


# PUBLIC_INTERFACE
def parse_date_text(text: str) -> date:
    """
    Parse a strict YYYY-MM-DD string into a date.

    Raises:
        ValueError if the text is not zero-padded YYYY-MM-DD or not a real calendar date.
    """
    if not _DATE_RE.fullmatch(text):
        raise ValueError(f"Invalid date {text!r}; expected YYYY-MM-DD")
    return date.fromisoformat(text)


# PUBLIC_INTERFACE
def encode_due_date(due: Optional[date]) -> Optional[str]:
    """Return the SQL parameter for a due date: 'YYYY-MM-DD' text, or None for SQL NULL."""
    if due is None:
        return None
    return due.isoformat()


def _by_name(row: Any) -> bool:
    return callable(getattr(row, "keys", None))


def _column(row: Any, index: int) -> Any:
    name = COLUMNS[index]
    if _by_name(row):
        if name not in row.keys():
            raise MalformedRow(f"Missing column {name!r}")
        return row[name]
    return row[index]


def _decode_flag(name: str, value: Any) -> bool:
    if not isinstance(value, int):
        raise MalformedRow(f"Unexpected value for {name}: {value!r}")
    return value != 0


# PUBLIC_INTERFACE
def row_to_entity(row: Any) -> TodoEntity:
    """
    Decode one 'todos' row into a TodoEntity.

    Rows exposing keys() (sqlite3.Row, dicts) are read by column name, anything
    else by position in COLUMNS order. Both give the same record.

    Raises:
        MalformedRow if a column is missing, has an unexpected type, or the
        due date text is not a valid YYYY-MM-DD date.
    """
    if not _by_name(row) and len(row) != len(COLUMNS):
        raise MalformedRow(f"Expected {len(COLUMNS)} columns, got {len(row)}")

    todo_id, description, due_raw, starred, is_completed = (
        _column(row, i) for i in range(len(COLUMNS))
    )

    if isinstance(todo_id, bool) or not isinstance(todo_id, int):
        raise MalformedRow(f"Unexpected value for id: {todo_id!r}")
    if not 0 <= todo_id <= MAX_ID:
        raise MalformedRow(f"id out of range: {todo_id}")

    if not isinstance(description, str):
        raise MalformedRow(f"Unexpected value for description: {description!r}")

    due_date: Optional[date] = None
    if due_raw is not None:
        if not isinstance(due_raw, str):
            raise MalformedRow(f"Unexpected value for due_date: {due_raw!r}")
        try:
            due_date = parse_date_text(due_raw)
        except ValueError as exc:
            raise MalformedRow(f"Corrupted due date value: {due_raw}") from exc

    return {
        "id": todo_id,
        "description": description,
        "due_date": due_date,
        "starred": _decode_flag("starred", starred),
        "is_completed": _decode_flag("is_completed", is_completed),
    }
