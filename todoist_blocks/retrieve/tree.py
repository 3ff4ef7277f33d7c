"""
Block tree builder for todoist-blocks.

Renders sorted display tasks either as a parent/child hierarchy following
Todoist subtasks, or as one heading block per group.
"""

from typing import Dict, List, Optional

from ..models.blocks import TaskBlock, create_task_block
from ..models.display import DisplayTask
from ..models.query import DEFAULT_SORTING, GroupingOption, QueryConfig
from .grouping import TaskGroup, group_tasks
from .preferences import RenderPreferences
from .render import build_properties, make_task_content
from .sorting import sort_by_options


def render_task_block(task: DisplayTask, preferences: RenderPreferences,
                      group_by: GroupingOption = GroupingOption.HIERARCHY) -> TaskBlock:
    return create_task_block(
        make_task_content(task, preferences),
        build_properties(task, preferences, group_by),
    )


def build_hierarchy_blocks(tasks: List[DisplayTask], preferences: RenderPreferences) -> List[TaskBlock]:
    """
    Nest each task under its parent when the parent is part of the result.

    Tasks whose parent was not fetched become top-level blocks. Input order
    is preserved at every level.
    """
    blocks: Dict[str, TaskBlock] = {
        task.source.id: render_task_block(task, preferences) for task in tasks
    }

    roots: List[TaskBlock] = []
    for task in tasks:
        block = blocks[task.source.id]
        parent_id = task.source.parent_id
        if parent_id and parent_id in blocks and parent_id != task.source.id:
            blocks[parent_id].children.append(block)
        else:
            roots.append(block)
    return roots


def build_grouped_blocks(groups: List[TaskGroup], preferences: RenderPreferences,
                         query: QueryConfig) -> List[TaskBlock]:
    """One heading block per group, its sorted tasks as children."""
    blocks = []
    for group in groups:
        ordered = sort_by_options(group.tasks, query.sorting)
        children = [render_task_block(task, preferences, query.group_by) for task in ordered]
        blocks.append(create_task_block(group.heading, children=children))
    return blocks


def build_blocks_from_display_tasks(tasks: List[DisplayTask], preferences: RenderPreferences,
                                    query: Optional[QueryConfig] = None) -> List[TaskBlock]:
    """
    Sort, group and render display tasks into the final block tree.

    Args:
        tasks: Enriched tasks
        preferences: Render preferences for this retrieval
        query: Parsed query, or None for the plain retrieval commands

    Returns:
        Root-level blocks
    """
    if query is None or query.group_by == GroupingOption.HIERARCHY:
        sorting = query.sorting if query is not None else list(DEFAULT_SORTING)
        return build_hierarchy_blocks(sort_by_options(tasks, sorting), preferences)

    return build_grouped_blocks(group_tasks(tasks, query.group_by), preferences, query)
