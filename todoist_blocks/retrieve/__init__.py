"""Task retrieval pipeline for todoist-blocks."""

from .context import fetch_todoist_context, make_context_requirements
from .due_date import format_due_date, format_due_iso, format_logseq_date, resolve_due_date
from .enrich import build_display_task, build_display_tasks
from .grouping import TaskGroup, group_tasks
from .orchestrator import RetrievalOrchestrator, RetrieveResult
from .preferences import RenderPreferences, resolve_render_preferences
from .sorting import sort_by_options
from .tree import build_blocks_from_display_tasks

__all__ = [
    "fetch_todoist_context",
    "make_context_requirements",
    "format_due_date",
    "format_due_iso",
    "format_logseq_date",
    "resolve_due_date",
    "build_display_task",
    "build_display_tasks",
    "TaskGroup",
    "group_tasks",
    "RetrievalOrchestrator",
    "RetrieveResult",
    "RenderPreferences",
    "resolve_render_preferences",
    "sort_by_options",
    "build_blocks_from_display_tasks",
]
