"""
Todoist REST client for todoist-blocks.

Thin async wrapper over the Todoist API v1 endpoints the retrieval pipeline
needs. Every listing method returns a single Page; use
collect_paginated_results to walk the cursor.
"""

import logging
from typing import Any, Dict, Optional, Type

import httpx

from ..config import get_config
from ..exceptions import AuthenticationError, IntegrationError, RateLimitError
from ..models.todoist import Comment, Label, Page, Project, Section, Task


class TodoistClient:
    """
    Async client for the Todoist REST API.
    """

    def __init__(self, api_token: Optional[str] = None, base_url: Optional[str] = None,
                 timeout: Optional[float] = None, transport: Optional[httpx.AsyncBaseTransport] = None):
        """
        Initialize the Todoist client.

        Args:
            api_token: Todoist API token (defaults to config value)
            base_url: REST API root (defaults to config value)
            timeout: HTTP timeout in seconds (defaults to config value)
            transport: Optional httpx transport, used by tests

        Raises:
            AuthenticationError: If no API token is available
        """
        settings = get_config()
        token = api_token if api_token is not None else settings.api_token
        if not token:
            raise AuthenticationError("Invalid API token")

        self.base_url = (base_url or settings.base_url).rstrip("/")
        self.client = httpx.AsyncClient(
            base_url=self.base_url,
            headers={"Authorization": f"Bearer {token}"},
            timeout=timeout or settings.timeout,
            transport=transport,
        )

    async def __aenter__(self):
        """Async context manager entry."""
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Async context manager exit."""
        await self.aclose()

    async def aclose(self) -> None:
        await self.client.aclose()

    async def _request(self, method: str, path: str, params: Optional[Dict[str, Any]] = None) -> Any:
        """
        Send a request and decode the JSON body.

        Raises:
            AuthenticationError: On 401/403
            RateLimitError: On 429
            IntegrationError: On any other HTTP or transport failure
        """
        query = {key: value for key, value in (params or {}).items() if value is not None}
        try:
            response = await self.client.request(method, path, params=query)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            _handle_api_error(e)
        except httpx.RequestError as e:
            raise IntegrationError(f"Failed to connect to Todoist: {e}") from e

        if response.status_code == 204 or not response.content:
            return None
        return response.json()

    async def _get_page(self, path: str, model: Type, params: Dict[str, Any]) -> Page:
        payload = await self._request("GET", path, params)
        page = Page[model].model_validate(payload or {})
        logging.debug(f"GET {path}: {len(page.results)} results, next cursor {page.next_cursor!r}")
        return page

    async def get_tasks(self, project_id: str, cursor: Optional[str] = None) -> Page[Task]:
        """List active tasks of one project."""
        return await self._get_page("/tasks", Task, {"project_id": project_id, "cursor": cursor})

    async def get_tasks_by_filter(self, query: str, cursor: Optional[str] = None) -> Page[Task]:
        """List active tasks matching a Todoist filter expression."""
        return await self._get_page("/tasks/filter", Task, {"query": query, "cursor": cursor})

    async def get_projects(self, cursor: Optional[str] = None) -> Page[Project]:
        return await self._get_page("/projects", Project, {"cursor": cursor})

    async def get_sections(self, cursor: Optional[str] = None, project_id: Optional[str] = None) -> Page[Section]:
        return await self._get_page("/sections", Section, {"project_id": project_id, "cursor": cursor})

    async def get_labels(self, cursor: Optional[str] = None) -> Page[Label]:
        return await self._get_page("/labels", Label, {"cursor": cursor})

    async def get_comments(self, task_id: str, cursor: Optional[str] = None) -> Page[Comment]:
        return await self._get_page("/comments", Comment, {"task_id": task_id, "cursor": cursor})

    async def delete_task(self, task_id: str) -> None:
        await self._request("DELETE", f"/tasks/{task_id}")


def _handle_api_error(e: httpx.HTTPStatusError):
    status = e.response.status_code
    if status == 429:
        raise RateLimitError("Todoist API rate limit exceeded. Try again shortly.") from e
    if status in (401, 403):
        raise AuthenticationError("Todoist rejected the API token. Check todoist.api_token.") from e
    raise IntegrationError(f"Todoist API error: {status} {e.response.text}") from e
