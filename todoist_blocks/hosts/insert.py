"""
Insertion of retrieved blocks into the host graph.
"""

import logging
from typing import List, Optional

from ..config import ConfigManager, get_config
from ..helpers import get_name_from_string
from ..models import TaskBlock
from .base import BaseHost


async def insert_tasks_into_graph(host: BaseHost, blocks: List[TaskBlock], uuid: str,
                                  title: Optional[str] = None,
                                  settings: Optional[ConfigManager] = None) -> None:
    """
    Insert blocks before the anchor block, then title or remove the anchor.

    Args:
        host: Note host
        blocks: Root-level blocks to insert
        uuid: The block the command was run from
        title: Title for the anchor block; when empty the default project
            name is used if configured, otherwise the anchor is removed
        settings: Configuration to read (defaults to the global config)
    """
    if not blocks:
        return

    settings = settings or get_config()
    await host.insert_batch_block(uuid, blocks, before=True)
    logging.info(f"Inserted {len(blocks)} blocks before {uuid}")

    desired_title = (title or "").strip()
    if desired_title:
        await host.update_block(uuid, desired_title)
        return

    if settings.project_name_as_parent_block:
        fallback = get_name_from_string(settings.default_project)
        if fallback:
            await host.update_block(uuid, fallback)
            return

    await host.remove_block(uuid)
