"""
Output block model for todoist-blocks.

A TaskBlock is the unit handed to the host for insertion: rendered content,
optional string properties and nested children.
"""

from typing import Dict, List, Optional
from pydantic import BaseModel, Field


class TaskBlock(BaseModel):
    """
    A rendered block ready to be inserted into the note graph.
    """

    content: str = Field(
        ...,
        description="The block text, including SCHEDULED/DEADLINE lines"
    )

    children: List['TaskBlock'] = Field(
        default_factory=list,
        description="Nested blocks (subtasks or grouped tasks)"
    )

    properties: Optional[Dict[str, str]] = Field(
        default=None,
        description="Block properties; omitted when there are none"
    )


# Enable forward references for self-referencing model
TaskBlock.model_rebuild()


def create_task_block(
    content: str,
    properties: Optional[Dict[str, str]] = None,
    children: Optional[List[TaskBlock]] = None,
) -> TaskBlock:
    """Build a TaskBlock, dropping an empty property mapping."""
    return TaskBlock(
        content=content,
        children=children or [],
        properties=properties or None,
    )
