"""
Display models for todoist-blocks.

A DisplayTask wraps a raw Task with everything the renderer needs, so the
sort, grouping and tree stages never call back into the API.
"""

from datetime import datetime
from typing import Dict, List, Literal, Optional
from pydantic import BaseModel, Field

from .todoist import Label, Project, Section, Task


DueFlag = Literal["overdue", "today", "tomorrow", "upcoming", "none"]


class DuePresentation(BaseModel):
    inline: Optional[str] = None
    heading: Optional[str] = None
    flag: DueFlag = "none"


class TaskAnnotations(BaseModel):
    comments: Optional[str] = None
    attachments: Optional[str] = None


class DisplayTask(BaseModel):
    """
    A task enriched with resolved context and presentation fields.

    Built once per retrieval and discarded with it.
    """

    source: Task
    annotations: TaskAnnotations = Field(default_factory=TaskAnnotations)
    project: Optional[Project] = None
    section: Optional[Section] = None
    label_names: List[str] = Field(default_factory=list)
    due_inline: Optional[str] = None
    due_iso: Optional[str] = None
    due_heading: Optional[str] = None
    due_flag: DueFlag = "none"
    due_has_time: bool = False
    due_date: Optional[datetime] = None
    creation_date: Optional[str] = None


class TodoistContext(BaseModel):
    """Lookup tables for the auxiliary entities a retrieval needs."""

    projects: Dict[str, Project] = Field(default_factory=dict)
    sections: Dict[str, Section] = Field(default_factory=dict)
    labels: Dict[str, Label] = Field(default_factory=dict)


class ContextRequirements(BaseModel):
    projects: bool = False
    sections: bool = False
    labels: bool = False
