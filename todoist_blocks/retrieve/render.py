"""
Block content and property builders for todoist-blocks.
"""

from typing import Dict

from ..models.display import DisplayTask
from ..models.query import GroupingOption, MetadataOption
from .due_date import format_logseq_date, parse_date
from .preferences import RenderPreferences


TODO_MARKER = "TODO "

PROPERTY_ID = "todoistid"
PROPERTY_COMMENTS = "comments"
PROPERTY_ATTACHMENTS = "attachments"
PROPERTY_CREATED = "created"
PROPERTY_DEADLINE = "todoist_deadline"
PROPERTY_DUE = "todoist_due"
PROPERTY_DESCRIPTION = "todoist_description"
PROPERTY_PROJECT = "todoist_project"
PROPERTY_SECTION = "todoist_section"
PROPERTY_LABELS = "todoist_labels"
PROPERTY_URL = "todoist_url"


def normalize_keyword(content: str, prepend: bool) -> str:
    """Ensure exactly one leading TODO marker when prepending is enabled."""
    if not prepend:
        return content
    return content if content.startswith(TODO_MARKER) else f"{TODO_MARKER}{content}"


def make_task_content(task: DisplayTask, preferences: RenderPreferences) -> str:
    """
    Render the block text for a task.

    Layout: keyword marker, task content, inline label links, then
    " — due | project" metadata, followed by SCHEDULED and DEADLINE lines.
    """
    content = normalize_keyword(task.source.content, preferences.prepend_todo_keyword)

    if preferences.embed_labels_inline and task.label_names:
        labels_inline = " ".join(f"[[{label}]]" for label in task.label_names)
        content = f"{content} {labels_inline}".strip()

    show = preferences.show_metadata
    show_due = MetadataOption.DUE in show

    inline_metadata = []
    if show_due and task.due_inline:
        inline_metadata.append(task.due_inline)
    if MetadataOption.PROJECT in show and task.project is not None:
        inline_metadata.append(task.project.name)
    if inline_metadata:
        content = f"{content} — {' | '.join(inline_metadata)}"

    if show_due and task.due_date is not None:
        content = f"{content}\nSCHEDULED: {format_logseq_date(task.due_date, task.due_has_time)}"

    if show_due and task.source.deadline is not None:
        deadline = parse_date(task.source.deadline.date)
        if deadline is not None:
            content = f"{content}\nDEADLINE: {format_logseq_date(deadline, False)}"

    return content


def build_properties(task: DisplayTask, preferences: RenderPreferences,
                     group_by: GroupingOption = GroupingOption.HIERARCHY) -> Dict[str, str]:
    """
    Build the block properties for a task.

    Each property is gated by its metadata kind or preference flag and is
    only present when its value is non-empty.
    """
    show = preferences.show_metadata
    source = task.source
    candidates = [
        (PROPERTY_ID, source.id, preferences.append_todoist_id_property),
        (PROPERTY_COMMENTS, task.annotations.comments, True),
        (PROPERTY_ATTACHMENTS, task.annotations.attachments, True),
        (PROPERTY_CREATED, task.creation_date, preferences.append_creation_date_property),
        (PROPERTY_DEADLINE, source.deadline.date if source.deadline else None, True),
        (PROPERTY_DUE, task.due_iso, MetadataOption.DUE in show),
        (PROPERTY_DESCRIPTION, source.description, MetadataOption.DESCRIPTION in show),
        (PROPERTY_PROJECT, task.project.name if task.project else None, MetadataOption.PROJECT in show),
        (PROPERTY_SECTION, task.section.name if task.section else None, group_by == GroupingOption.SECTION),
        (PROPERTY_LABELS, ", ".join(task.label_names), MetadataOption.LABELS in show),
        (PROPERTY_URL, source.url, MetadataOption.URL in show),
    ]
    return {key: value for key, value, enabled in candidates if enabled and value}
