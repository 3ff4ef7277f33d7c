"""
Query models for todoist-blocks.

This module defines the canonical configuration a user query is parsed into,
the option enumerations it draws from, and the parse result shapes.
"""

from enum import Enum
from typing import List, Literal, Optional, Set, Union
from pydantic import BaseModel, Field


class GroupingOption(str, Enum):
    HIERARCHY = "hierarchy"
    PROJECT = "project"
    SECTION = "section"
    DUE_DATE = "due"
    LABELS = "labels"
    PRIORITY = "priority"


class SortingOption(str, Enum):
    TODOIST_ORDER = "order"
    DATE_ASCENDING = "date"
    DATE_DESCENDING = "dateDescending"
    PRIORITY_ASCENDING = "priority"
    PRIORITY_DESCENDING = "priorityDescending"
    ADDED_ASCENDING = "dateAdded"
    ADDED_DESCENDING = "dateAddedDescending"


class MetadataOption(str, Enum):
    DUE = "due"
    DESCRIPTION = "description"
    LABELS = "labels"
    PROJECT = "project"
    URL = "url"


DEFAULT_NAME = ""
DEFAULT_AUTOREFRESH = 0
DEFAULT_GROUPING = GroupingOption.HIERARCHY
DEFAULT_SORTING = [SortingOption.TODOIST_ORDER]
DEFAULT_SHOW = [
    MetadataOption.DUE,
    MetadataOption.DESCRIPTION,
    MetadataOption.LABELS,
    MetadataOption.PROJECT,
]


class QueryConfig(BaseModel):
    """
    The validated, canonical form of a user query.
    """

    name: str = Field(
        default=DEFAULT_NAME,
        description="Optional title written to the anchor block"
    )

    filter: str = Field(
        ...,
        description="Todoist filter expression"
    )

    autorefresh: int = Field(
        default=DEFAULT_AUTOREFRESH,
        description="Refresh interval in minutes, 0 disables it"
    )

    group_by: GroupingOption = Field(
        default=DEFAULT_GROUPING,
        description="How tasks are bucketed into blocks"
    )

    sorting: List[SortingOption] = Field(
        default_factory=lambda: list(DEFAULT_SORTING),
        description="Ordered, deduplicated sort rules; never empty"
    )

    show: Set[MetadataOption] = Field(
        default_factory=lambda: set(DEFAULT_SHOW),
        description="Metadata kinds surfaced inline or as properties"
    )


class QueryParseSuccess(BaseModel):
    ok: Literal[True] = True
    config: QueryConfig
    warnings: List[str] = Field(default_factory=list)


class QueryParseError(BaseModel):
    ok: Literal[False] = False
    error: str
    details: Optional[List[str]] = None


QueryParseResult = Union[QueryParseSuccess, QueryParseError]
