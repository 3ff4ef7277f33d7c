"""Data models for todoist-blocks."""

from .blocks import TaskBlock, create_task_block
from .display import (
    ContextRequirements,
    DisplayTask,
    DuePresentation,
    TaskAnnotations,
    TodoistContext,
)
from .query import (
    GroupingOption,
    MetadataOption,
    QueryConfig,
    QueryParseError,
    QueryParseResult,
    QueryParseSuccess,
    SortingOption,
)
from .todoist import Comment, Deadline, Due, FileAttachment, Label, Page, Project, Section, Task

__all__ = [
    "TaskBlock",
    "create_task_block",
    "ContextRequirements",
    "DisplayTask",
    "DuePresentation",
    "TaskAnnotations",
    "TodoistContext",
    "GroupingOption",
    "MetadataOption",
    "QueryConfig",
    "QueryParseError",
    "QueryParseResult",
    "QueryParseSuccess",
    "SortingOption",
    "Comment",
    "Deadline",
    "Due",
    "FileAttachment",
    "Label",
    "Page",
    "Project",
    "Section",
    "Task",
]
