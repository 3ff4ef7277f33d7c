"""
Todoist record models for todoist-blocks.

These mirror the subset of the Todoist REST API v1 payloads the retrieval
pipeline consumes. Unknown fields are ignored.
"""

from typing import Any, Generic, List, Optional, TypeVar
from pydantic import BaseModel, Field, model_validator


T = TypeVar("T")


class Page(BaseModel, Generic[T]):
    """One page of a cursor-paginated listing."""

    results: List[T] = Field(default_factory=list)
    next_cursor: Optional[str] = None


class Due(BaseModel):
    """
    A due date as returned by Todoist.

    `date` always holds the calendar date; `datetime` holds the time-bearing
    value when the task has a time of day.
    """

    date: Optional[str] = None
    datetime: Optional[str] = None
    string: Optional[str] = None
    is_recurring: bool = False
    timezone: Optional[str] = None

    @model_validator(mode="before")
    @classmethod
    def split_time_bearing_date(cls, data: Any) -> Any:
        # API v1 returns "YYYY-MM-DDTHH:MM:SS" in `date` for timed tasks
        if isinstance(data, dict):
            date_value = data.get("date")
            if isinstance(date_value, str) and "T" in date_value and not data.get("datetime"):
                data = dict(data)
                data["datetime"] = date_value
                data["date"] = date_value.split("T", 1)[0]
        return data


class Deadline(BaseModel):
    date: str
    lang: Optional[str] = None


class Task(BaseModel):
    """
    A raw Todoist task. Treated as opaque apart from the fields below.
    """

    id: str
    content: str = ""
    description: str = ""
    url: Optional[str] = None
    priority: int = Field(default=1, description="1 (normal) to 4 (urgent)")
    due: Optional[Due] = None
    deadline: Optional[Deadline] = None
    labels: List[str] = Field(default_factory=list)
    project_id: Optional[str] = None
    section_id: Optional[str] = None
    parent_id: Optional[str] = None
    child_order: int = 0
    added_at: Optional[str] = None


class Project(BaseModel):
    id: str
    name: str
    child_order: int = 0


class Section(BaseModel):
    id: str
    name: str
    section_order: int = 0
    project_id: Optional[str] = None


class Label(BaseModel):
    id: str
    name: str


class FileAttachment(BaseModel):
    file_name: Optional[str] = None
    file_url: Optional[str] = None


class Comment(BaseModel):
    id: str
    content: str = ""
    file_attachment: Optional[FileAttachment] = None
