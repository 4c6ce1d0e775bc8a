from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .codec import parse_date_text

# Incoming due_date may arrive as a date object (internal callers) or a YYYY-MM-DD string
DueDateInput = Union[date, str]


def _parse_due_date(value: Optional[DueDateInput]) -> Optional[date]:
    """
    Normalize due_date input into a calendar date.
    - None stays None (no due date).
    - A date is returned as-is; datetimes are rejected since due dates carry no time.
    - A string must be exactly YYYY-MM-DD.
    """
    if value is None:
        return None

    if isinstance(value, datetime):
        raise ValueError("due_date must be a calendar date without a time component.")

    if isinstance(value, date):
        return value

    if isinstance(value, str):
        return parse_date_text(value.strip())

    raise ValueError("Invalid type for due_date; expected a YYYY-MM-DD string or null.")


# PUBLIC_INTERFACE
class TodoCreate(BaseModel):
    """
    Schema for creating a new Todo item.
    """

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "description": "Buy milk",
                "due_date": "2025-02-01",
            }
        }
    )

    description: str = Field(..., description="What needs doing", min_length=1)
    due_date: Optional[date] = Field(
        default=None,
        description="Optional due date as YYYY-MM-DD",
    )

    @field_validator("description")
    @classmethod
    def validate_description(cls, v: str) -> str:
        """
        Reject blank descriptions; the submitted text is kept as-is.
        """
        if not v.strip():
            raise ValueError("description must not be empty")
        return v

    @field_validator("due_date", mode="before")
    @classmethod
    def parse_due_date(cls, v: Optional[DueDateInput]) -> Optional[date]:
        return _parse_due_date(v)


# PUBLIC_INTERFACE
class TodoOut(BaseModel):
    """
    Schema returned by the API for a Todo item.
    """

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "id": 123,
                "description": "Buy milk",
                "due_date": "2025-02-01",
                "starred": False,
                "is_completed": False,
            }
        }
    )

    id: int = Field(..., description="Unique identifier of the todo item")
    description: str = Field(..., description="What needs doing")
    due_date: Optional[date] = Field(default=None, description="Due date as YYYY-MM-DD, or null")
    starred: bool = Field(..., description="Starred flag")
    is_completed: bool = Field(..., description="Completion status flag")


class ErrorOut(BaseModel):
    """Error body shared by every failing response."""

    error: str = Field(..., description="Error message, or 'not_found' for unknown routes")
