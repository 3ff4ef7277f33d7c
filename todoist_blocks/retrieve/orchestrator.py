"""
Retrieval orchestrator for todoist-blocks.

Coordinates one retrieval: validates the mode, fetches tasks, optionally
clears them from Todoist, resolves context, enriches, and builds the block
tree. Failures never escape; they are logged, shown through the host and
turned into an empty result.
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Literal, Optional

from ..client.pagination import collect_paginated_results
from ..client.todoist import TodoistClient
from ..config import DEFAULT_PROJECT_PLACEHOLDER, ConfigManager, get_config
from ..exceptions import PreconditionError
from ..helpers import get_id_from_string
from ..hosts.base import BaseHost
from ..models import Task, TaskBlock
from ..models.query import QueryConfig
from .context import fetch_todoist_context, make_context_requirements
from .enrich import build_display_tasks
from .preferences import resolve_render_preferences
from .tree import build_blocks_from_display_tasks


RetrieveMode = Literal["default", "today", "custom"]

TODAY_FILTER = "today"


@dataclass
class RetrieveResult:
    """Outcome of one retrieval; empty on any failure."""
    tasks: List[Task] = field(default_factory=list)
    blocks: List[TaskBlock] = field(default_factory=list)
    title: Optional[str] = None


class RetrievalOrchestrator:
    """
    Runs retrievals against Todoist and renders them for a host.
    """

    def __init__(self, host: BaseHost, client: Optional[TodoistClient] = None,
                 settings: Optional[ConfigManager] = None, now: Optional[datetime] = None):
        """
        Initialize the orchestrator.

        Args:
            host: Note host used for messages and date preferences
            client: Todoist client; when omitted one is created from configuration
                on first use and closed once the retrieval finishes, so a missing
                token is reported like any other failure
            settings: Configuration to read (defaults to the global config)
            now: Fixed reference instant for due-date bucketing
        """
        self.host = host
        self.client = client
        self.owns_client = client is None
        self.settings = settings or get_config()
        self.now = now

    def _ensure_client(self) -> TodoistClient:
        if self.client is None:
            self.client = TodoistClient(
                api_token=self.settings.api_token,
                base_url=self.settings.base_url,
                timeout=self.settings.timeout,
            )
        return self.client

    async def fetch_tasks_by_project(self, project_id: str) -> List[Task]:
        client = self._ensure_client()
        return await collect_paginated_results(lambda cursor: client.get_tasks(project_id, cursor))

    async def fetch_tasks_by_filter(self, query: str) -> List[Task]:
        client = self._ensure_client()
        return await collect_paginated_results(lambda cursor: client.get_tasks_by_filter(query, cursor))

    async def delete_tasks(self, tasks: List[Task]) -> None:
        """Delete tasks one at a time, in order."""
        client = self._ensure_client()
        for task in tasks:
            await client.delete_task(task.id)
        logging.info(f"Cleared {len(tasks)} tasks from Todoist")

    async def build_blocks(self, tasks: List[Task], query: Optional[QueryConfig] = None) -> List[TaskBlock]:
        """
        Render fetched tasks into blocks.

        Args:
            tasks: Raw tasks already captured for rendering
            query: Parsed query, or None for the plain retrieval commands

        Returns:
            Root-level blocks
        """
        if not tasks:
            return []

        client = self._ensure_client()
        preferences = resolve_render_preferences(query, self.settings)
        requirements = make_context_requirements(query, preferences)
        context = await fetch_todoist_context(client, requirements)
        date_format = await self.host.get_preferred_date_format()
        display_tasks = await build_display_tasks(
            client, tasks, context, preferences, date_format, now=self.now
        )
        return build_blocks_from_display_tasks(display_tasks, preferences, query)

    async def _fetch_for_mode(self, mode: RetrieveMode, custom_filter: Optional[str]) -> List[Task]:
        if mode == "default":
            selector = self.settings.default_project
            project_id = get_id_from_string(selector)
            if selector == DEFAULT_PROJECT_PLACEHOLDER or not project_id:
                raise PreconditionError("Please select a default project")
            return await self.fetch_tasks_by_project(project_id)

        if mode == "today":
            return await self.fetch_tasks_by_filter(TODAY_FILTER)

        if mode == "custom":
            if not custom_filter or not custom_filter.strip():
                raise PreconditionError("Missing custom filter")
            return await self.fetch_tasks_by_filter(custom_filter)

        raise PreconditionError(f"Unknown retrieval mode: {mode}")

    async def _run(self, fetch, query: Optional[QueryConfig], title: Optional[str]) -> RetrieveResult:
        try:
            return await self._collect(fetch, query, title)
        finally:
            await self._release_client()

    async def _release_client(self) -> None:
        """Close a client this orchestrator created for itself."""
        if self.owns_client and self.client is not None:
            await self.client.aclose()
            self.client = None

    async def _collect(self, fetch, query: Optional[QueryConfig], title: Optional[str]) -> RetrieveResult:
        try:
            tasks = await fetch()
            if not tasks:
                logging.info("No tasks found")
                return RetrieveResult(title=title)

            if self.settings.clear_tasks:
                await self.delete_tasks(tasks)

            blocks = await self.build_blocks(tasks, query)
            logging.info(f"Retrieved {len(tasks)} tasks into {len(blocks)} root blocks")
            return RetrieveResult(tasks=tasks, blocks=blocks, title=title)

        except PreconditionError as e:
            logging.warning(f"Retrieval precondition failed: {e}")
            await self.host.show_message(str(e), "warning")
            return RetrieveResult(title=title)

        except Exception as e:
            logging.error(f"Retrieval failed: {e}", exc_info=True)
            await self.host.show_message(f"Error: {e}", "error")
            return RetrieveResult(title=title)

    async def retrieve_tasks(self, mode: RetrieveMode, custom_filter: Optional[str] = None) -> RetrieveResult:
        """
        Retrieve tasks for one of the plain modes.

        Args:
            mode: "default" (configured project), "today", or "custom"
            custom_filter: Filter expression, required for "custom"

        Returns:
            RetrieveResult, empty when nothing matched or anything failed
        """
        return await self._run(lambda: self._fetch_for_mode(mode, custom_filter), None, None)

    async def run_query(self, query: QueryConfig) -> RetrieveResult:
        """
        Retrieve and render the tasks matching a parsed query.

        Returns:
            RetrieveResult titled with the query name
        """
        return await self._run(lambda: self.fetch_tasks_by_filter(query.filter), query, query.name)
