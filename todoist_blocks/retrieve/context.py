"""
Context resolution for todoist-blocks.

Fetches and indexes only the projects, sections and labels the active
configuration actually needs. Independent fetches run concurrently.
"""

import asyncio
import logging
from typing import Optional

from ..client.pagination import collect_paginated_results
from ..client.todoist import TodoistClient
from ..models.display import ContextRequirements, TodoistContext
from ..models.query import GroupingOption, MetadataOption, QueryConfig
from .preferences import RenderPreferences


def make_context_requirements(query: Optional[QueryConfig],
                              preferences: RenderPreferences) -> ContextRequirements:
    """
    Work out which auxiliary entities a retrieval needs.

    Args:
        query: The parsed query, or None for the plain retrieval commands
        preferences: Resolved render preferences

    Returns:
        ContextRequirements flag triple
    """
    show = query.show if query is not None else preferences.show_metadata
    group_by = query.group_by if query is not None else GroupingOption.HIERARCHY

    sections = group_by == GroupingOption.SECTION
    projects = (
        group_by in (GroupingOption.PROJECT, GroupingOption.SECTION)
        or MetadataOption.PROJECT in show
    )
    labels = (
        group_by == GroupingOption.LABELS
        or preferences.embed_labels_inline
        or MetadataOption.LABELS in show
    )

    return ContextRequirements(projects=projects or sections, sections=sections, labels=labels)


async def _load_projects(client: TodoistClient, context: TodoistContext) -> None:
    projects = await collect_paginated_results(lambda cursor: client.get_projects(cursor))
    for project in projects:
        context.projects[project.id] = project


async def _load_sections(client: TodoistClient, context: TodoistContext) -> None:
    sections = await collect_paginated_results(lambda cursor: client.get_sections(cursor))
    for section in sections:
        context.sections[section.id] = section


async def _load_labels(client: TodoistClient, context: TodoistContext) -> None:
    labels = await collect_paginated_results(lambda cursor: client.get_labels(cursor))
    for label in labels:
        context.labels[label.id] = label


async def fetch_todoist_context(client: TodoistClient,
                                requirements: ContextRequirements) -> TodoistContext:
    """
    Build the lookup tables for one retrieval.

    Tables whose flag is unset stay empty and cost no API calls.

    Args:
        client: Todoist client
        requirements: Which tables to fill

    Returns:
        TodoistContext with the requested tables populated
    """
    context = TodoistContext()
    loaders = []

    if requirements.projects or requirements.sections:
        loaders.append(_load_projects(client, context))
    if requirements.sections:
        loaders.append(_load_sections(client, context))
    if requirements.labels:
        loaders.append(_load_labels(client, context))

    if loaders:
        await asyncio.gather(*loaders)

    logging.info(
        f"Resolved context: {len(context.projects)} projects, "
        f"{len(context.sections)} sections, {len(context.labels)} labels"
    )
    return context
