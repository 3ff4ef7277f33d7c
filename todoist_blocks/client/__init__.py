"""Todoist API access for todoist-blocks."""

from .pagination import collect_paginated_results
from .todoist import TodoistClient

__all__ = ["collect_paginated_results", "TodoistClient"]
