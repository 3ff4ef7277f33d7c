"""
Task enrichment for todoist-blocks.

Combines raw tasks with context lookups, due-date resolution and comment
annotations into self-contained DisplayTasks.
"""

import asyncio
import logging
from datetime import datetime
from typing import Dict, List, Optional

from ..client.pagination import collect_paginated_results
from ..client.todoist import TodoistClient
from ..helpers import format_page_date
from ..models.display import DisplayTask, TaskAnnotations, TodoistContext
from ..models.todoist import Comment, Due, Label, Task
from .due_date import format_due_date, format_due_iso, parse_date, resolve_due_date
from .preferences import RenderPreferences


def summarize_comments(comments: List[Comment]) -> TaskAnnotations:
    """
    Split comments into text and file attachments.

    Text comments are joined with ", "; attachments are rendered as
    Markdown links.
    """
    text_parts = [comment.content for comment in comments if not comment.file_attachment]
    attachment_parts = [
        f"[{comment.file_attachment.file_name or 'attachment'}]({comment.file_attachment.file_url})"
        for comment in comments
        if comment.file_attachment and comment.file_attachment.file_url
    ]
    return TaskAnnotations(
        comments=", ".join(text_parts) if text_parts else None,
        attachments=", ".join(attachment_parts) if attachment_parts else None,
    )


async def load_comments(client: TodoistClient, task_id: str) -> TaskAnnotations:
    comments = await collect_paginated_results(lambda cursor: client.get_comments(task_id, cursor))
    if not comments:
        return TaskAnnotations()
    return summarize_comments(comments)


def resolve_label_names(labels: List[str], lookup: Dict[str, Label]) -> List[str]:
    """Map label ids to names, keeping the raw value when it is unknown."""
    return [lookup[label].name if label in lookup else label for label in labels]


def select_due_source(task: Task) -> Optional[Due]:
    """A deadline (date only) wins over the regular due date."""
    if task.deadline is not None:
        return Due(date=task.deadline.date)
    return task.due


def build_display_task(task: Task, annotations: TaskAnnotations, context: TodoistContext,
                       preferences: RenderPreferences, date_format: str,
                       now: Optional[datetime] = None) -> DisplayTask:
    """
    Enrich one task.

    Args:
        task: Raw Todoist task
        annotations: Comment and attachment summary for the task
        context: Resolved lookup tables
        preferences: Render preferences for this retrieval
        date_format: The host's page-date format for creation dates
        now: Reference instant for due bucketing

    Returns:
        The DisplayTask
    """
    due_source = select_due_source(task)
    presentation = format_due_date(due_source, now=now)

    creation_date = None
    if preferences.append_creation_date_property and task.added_at:
        added = parse_date(task.added_at)
        if added is not None:
            if added.tzinfo is not None:
                added = added.astimezone()
            creation_date = format_page_date(added, date_format)

    return DisplayTask(
        source=task,
        annotations=annotations,
        project=context.projects.get(task.project_id) if task.project_id else None,
        section=context.sections.get(task.section_id) if task.section_id else None,
        label_names=resolve_label_names(task.labels, context.labels),
        due_inline=presentation.inline,
        due_iso=format_due_iso(due_source),
        due_heading=presentation.heading,
        due_flag=presentation.flag,
        due_has_time=bool(due_source and due_source.datetime),
        due_date=resolve_due_date(due_source),
        creation_date=creation_date,
    )


async def build_display_tasks(client: TodoistClient, tasks: List[Task], context: TodoistContext,
                              preferences: RenderPreferences, date_format: str,
                              now: Optional[datetime] = None) -> List[DisplayTask]:
    """
    Enrich every task, fetching comments for all of them concurrently.
    """
    annotations = await asyncio.gather(*(load_comments(client, task.id) for task in tasks))
    logging.info(f"Loaded comments for {len(tasks)} tasks")

    return [
        build_display_task(task, annotation, context, preferences, date_format, now=now)
        for task, annotation in zip(tasks, annotations)
    ]
