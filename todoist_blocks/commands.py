"""
Retrieval commands for todoist-blocks.

Each command runs one retrieval from an anchor block and inserts the result
around it, reporting empty results and query problems through the host.
"""

import logging
from datetime import datetime
from typing import Optional

from .client.todoist import TodoistClient
from .config import ConfigManager, get_config
from .hosts.base import BaseHost
from .hosts.insert import insert_tasks_into_graph
from .query.parser import parse_query
from .retrieve.orchestrator import RetrievalOrchestrator, RetrieveResult


TODAY_TITLE = "Todoist · Today"
QUERY_PROPERTY = "todoist_query"


async def retrieve_default_tasks(host: BaseHost, uuid: str, client: Optional[TodoistClient] = None,
                                 settings: Optional[ConfigManager] = None,
                                 now: Optional[datetime] = None) -> RetrieveResult:
    """Retrieve the configured default project's tasks."""
    settings = settings or get_config()
    await host.show_message("Getting tasks...")
    result = await RetrievalOrchestrator(host, client=client, settings=settings, now=now).retrieve_tasks("default")
    if not result.blocks:
        await host.show_message("No tasks available for the default project.", "warning")
        return result

    await insert_tasks_into_graph(host, result.blocks, uuid, settings=settings)
    return result


async def retrieve_today_tasks(host: BaseHost, uuid: str, client: Optional[TodoistClient] = None,
                               settings: Optional[ConfigManager] = None,
                               now: Optional[datetime] = None) -> RetrieveResult:
    """Retrieve tasks due today."""
    settings = settings or get_config()
    await host.show_message("Getting tasks...")
    result = await RetrievalOrchestrator(host, client=client, settings=settings, now=now).retrieve_tasks("today")
    if not result.blocks:
        await host.show_message("No tasks due today.", "warning")
        return result

    await insert_tasks_into_graph(host, result.blocks, uuid, title=TODAY_TITLE, settings=settings)
    return result


async def retrieve_custom_query(host: BaseHost, uuid: str, content: str,
                                client: Optional[TodoistClient] = None,
                                settings: Optional[ConfigManager] = None,
                                now: Optional[datetime] = None) -> RetrieveResult:
    """
    Parse the anchor block's content as a query and retrieve its tasks.

    Args:
        host: Note host
        uuid: Anchor block holding the query
        content: Raw content of the anchor block
        client: Todoist client (created from configuration when omitted)
        settings: Configuration to read (defaults to the global config)
        now: Fixed reference instant for due-date bucketing

    Returns:
        The RetrieveResult (empty when the query was rejected)
    """
    settings = settings or get_config()
    if not content.strip():
        await host.show_message("Cannot retrieve with empty filter", "error")
        return RetrieveResult()

    parse_result = parse_query(content)
    if not parse_result.ok:
        logging.warning(f"Query rejected: {parse_result.error} {parse_result.details or ''}")
        message = "\n".join([parse_result.error, *(parse_result.details or [])])
        await host.show_message(message, "error")
        return RetrieveResult()

    await host.show_message("Running Todoist query...")
    result = await RetrievalOrchestrator(host, client=client, settings=settings, now=now).run_query(parse_result.config)

    if parse_result.warnings:
        await host.show_message("\n".join(parse_result.warnings), "warning")

    if not result.blocks:
        await host.show_message("No tasks matched the query.", "warning")
        return result

    await host.upsert_block_property(uuid, QUERY_PROPERTY, content)
    await insert_tasks_into_graph(host, result.blocks, uuid, title=result.title, settings=settings)
    return result
