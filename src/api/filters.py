from __future__ import annotations

from datetime import date
from typing import List, Optional, Tuple

# The only SQL fragments a list filter can produce. Query flags select among
# these; request text never reaches the statement.
DUE_CLAUSE = "due_date <= ?"
NOT_DUE_CLAUSE = "(due_date > ? OR due_date IS NULL)"
COMPLETE_CLAUSE = "is_completed == TRUE"
INCOMPLETE_CLAUSE = "is_completed == FALSE"


# PUBLIC_INTERFACE
def build_filter(
    due: Optional[bool],
    complete: Optional[bool],
    today: date,
) -> Tuple[str, List[str]]:
    """
    Build the WHERE clause and bound parameters for listing todos.

    Args:
        due: True for items due today or earlier, False for items due later or
            without a due date, None for no date filter.
        complete: True/False to filter on is_completed, None for no filter.
        today: The request's calendar date, bound as 'YYYY-MM-DD' text.

    Returns:
        (where_sql, params). where_sql is '' when neither filter is given.
    """
    clauses: List[str] = []
    params: List[str] = []

    if due is not None:
        clauses.append(DUE_CLAUSE if due else NOT_DUE_CLAUSE)
        params.append(today.isoformat())

    if complete is not None:
        clauses.append(COMPLETE_CLAUSE if complete else INCOMPLETE_CLAUSE)

    where_sql = f"WHERE {' AND '.join(clauses)}" if clauses else ""
    return where_sql, params
