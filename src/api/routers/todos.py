from __future__ import annotations

import logging
from datetime import date
from typing import List, Literal, Optional

from fastapi import APIRouter, Depends, Query

from ..repositories import ListQuery, Repository, get_repository
from ..schemas import ErrorOut, TodoCreate, TodoOut
from ..utils import get_today

logger = logging.getLogger(__name__)

# Query flags accept exactly 'true' or 'false'; anything else fails validation.
BoolFlag = Literal["true", "false"]


def _flag(value: Optional[BoolFlag]) -> Optional[bool]:
    return None if value is None else value == "true"

router = APIRouter(
    prefix="/api/todos",
    tags=["todos"],
)


def _get_repo(repo: Repository = Depends(get_repository)) -> Repository:
    """
    Dependency wrapper for repository to keep signatures clean.
    """
    return repo


# PUBLIC_INTERFACE
@router.get(
    "",
    response_model=List[TodoOut],
    summary="List Todos",
    description=(
        "List todos with optional filters.\n\n"
        "Query parameters:\n"
        "- due: true for items due today or earlier; false for items due later or without a due date\n"
        "- complete: filter by completion status\n\n"
        "Returns a JSON array of todos, empty when nothing matches."
    ),
    responses={
        200: {"description": "List retrieved successfully"},
        400: {"model": ErrorOut, "description": "Invalid query parameters"},
        500: {"model": ErrorOut, "description": "Database failure or corrupted row"},
    },
)
def list_todos(
    due: Optional[BoolFlag] = Query(None, description="'true' or 'false'; filter by due status relative to today"),
    complete: Optional[BoolFlag] = Query(None, description="'true' or 'false'; filter by completion status"),
    today: date = Depends(get_today),
    repo: Repository = Depends(_get_repo),
) -> List[TodoOut]:
    """
    List todos matching the optional due/complete filters.
    """
    due_flag, complete_flag = _flag(due), _flag(complete)
    logger.info("todos.list due=%s complete=%s today=%s", due_flag, complete_flag, today.isoformat())
    items = repo.list(ListQuery(today=today, due=due_flag, complete=complete_flag))
    return [TodoOut(**it) for it in items]


# PUBLIC_INTERFACE
@router.post(
    "/create",
    response_model=TodoOut,
    summary="Create Todo",
    description="Create a new Todo item and return it with its generated id.",
    responses={
        200: {"description": "Todo created successfully"},
        400: {"model": ErrorOut, "description": "Malformed body"},
        500: {"model": ErrorOut, "description": "Insert failed"},
    },
)
def create_todo(payload: TodoCreate, repo: Repository = Depends(_get_repo)) -> TodoOut:
    """
    Create a new Todo. starred and is_completed always start false.
    """
    logger.info("todos.create due_date=%s", payload.due_date)
    created = repo.create(payload)
    logger.info("todos.created id=%s", created["id"])
    return TodoOut(**created)
