"""
Render preferences for todoist-blocks.

Combines the retrieval settings from the configuration with the active query
(if any) into the flags the content and property builders read.
"""

from dataclasses import dataclass, field
from typing import Optional, Set

from ..config import ConfigManager, get_config
from ..models.query import MetadataOption, QueryConfig


@dataclass
class RenderPreferences:
    """
    Flags controlling how a DisplayTask is rendered.
    """
    prepend_todo_keyword: bool = True
    embed_labels_inline: bool = False
    append_creation_date_property: bool = False
    append_todoist_id_property: bool = True
    show_metadata: Set[MetadataOption] = field(default_factory=lambda: {MetadataOption.DUE})


def show_from_settings(settings: ConfigManager) -> Set[MetadataOption]:
    """Metadata kinds shown when no query config is active."""
    show = {MetadataOption.DUE}
    if settings.read_flag("retrieve.append_labels", False):
        show.add(MetadataOption.LABELS)
    if settings.read_flag("retrieve.append_url", False):
        show.add(MetadataOption.URL)
    return show


def resolve_render_preferences(query: Optional[QueryConfig] = None,
                               settings: Optional[ConfigManager] = None) -> RenderPreferences:
    """
    Resolve render preferences for one retrieval.

    Args:
        query: The parsed query, or None for the plain retrieval commands
        settings: Configuration to read (defaults to the global config)

    Returns:
        RenderPreferences for this invocation
    """
    settings = settings or get_config()

    if query is not None:
        embed_labels_inline = MetadataOption.LABELS in query.show
        show_metadata = set(query.show)
    else:
        embed_labels_inline = settings.read_flag("retrieve.append_labels", False)
        show_metadata = show_from_settings(settings)

    return RenderPreferences(
        prepend_todo_keyword=settings.read_flag("retrieve.append_todo", True),
        embed_labels_inline=embed_labels_inline,
        append_creation_date_property=settings.read_flag("retrieve.append_creation_datetime", False),
        append_todoist_id_property=settings.read_flag("retrieve.append_todoist_id", True),
        show_metadata=show_metadata,
    )
