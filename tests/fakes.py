"""
Test doubles and builders shared by the todoist-blocks test suite.
"""

from datetime import datetime
from pathlib import Path
from typing import Dict, List, Optional

import yaml

from todoist_blocks.config import ConfigManager
from todoist_blocks.models import (
    Comment,
    DisplayTask,
    Label,
    Page,
    Project,
    Section,
    Task,
)


def paginate(items: List, page_size: int) -> Dict[Optional[str], Page]:
    """Split items into pages keyed by the cursor that requests them."""
    pages: Dict[Optional[str], Page] = {}
    cursor: Optional[str] = None
    chunks = [items[i:i + page_size] for i in range(0, len(items), page_size)] or [[]]
    for index, chunk in enumerate(chunks):
        next_cursor = f"cursor-{index + 1}" if index + 1 < len(chunks) else None
        pages[cursor] = Page(results=chunk, next_cursor=next_cursor)
        cursor = next_cursor
    return pages


class FakeTodoistClient:
    """
    In-memory stand-in for TodoistClient.

    Records every call as a tuple so tests can assert on what was fetched.
    """

    def __init__(self, tasks: Optional[List[Task]] = None, projects: Optional[List[Project]] = None,
                 sections: Optional[List[Section]] = None, labels: Optional[List[Label]] = None,
                 comments: Optional[Dict[str, List[Comment]]] = None, page_size: int = 2,
                 fail_on: Optional[str] = None):
        self.tasks = list(tasks or [])
        self.projects = list(projects or [])
        self.sections = list(sections or [])
        self.labels = list(labels or [])
        self.comments = dict(comments or {})
        self.page_size = page_size
        self.fail_on = fail_on
        self.calls: List[tuple] = []

    def _page(self, name: str, items: List, cursor: Optional[str]) -> Page:
        if self.fail_on == name:
            raise RuntimeError(f"{name} exploded")
        return paginate(items, self.page_size)[cursor]

    def calls_to(self, name: str) -> List[tuple]:
        return [call for call in self.calls if call[0] == name]

    async def get_tasks(self, project_id: str, cursor: Optional[str] = None) -> Page:
        self.calls.append(("get_tasks", project_id, cursor))
        return self._page("get_tasks", [t for t in self.tasks if t.project_id == project_id], cursor)

    async def get_tasks_by_filter(self, query: str, cursor: Optional[str] = None) -> Page:
        self.calls.append(("get_tasks_by_filter", query, cursor))
        return self._page("get_tasks_by_filter", self.tasks, cursor)

    async def get_projects(self, cursor: Optional[str] = None) -> Page:
        self.calls.append(("get_projects", cursor))
        return self._page("get_projects", self.projects, cursor)

    async def get_sections(self, cursor: Optional[str] = None, project_id: Optional[str] = None) -> Page:
        self.calls.append(("get_sections", cursor))
        return self._page("get_sections", self.sections, cursor)

    async def get_labels(self, cursor: Optional[str] = None) -> Page:
        self.calls.append(("get_labels", cursor))
        return self._page("get_labels", self.labels, cursor)

    async def get_comments(self, task_id: str, cursor: Optional[str] = None) -> Page:
        self.calls.append(("get_comments", task_id, cursor))
        return self._page("get_comments", self.comments.get(task_id, []), cursor)

    async def delete_task(self, task_id: str) -> None:
        self.calls.append(("delete_task", task_id))


def make_task(task_id: str, **fields) -> Task:
    data = {"id": task_id, "content": f"Task {task_id}"}
    data.update(fields)
    return Task.model_validate(data)


def make_display(task_id: str, due_date: Optional[datetime] = None, due_flag: str = "none",
                 **fields) -> DisplayTask:
    """Build a DisplayTask directly, bypassing enrichment."""
    display_fields = {
        key: fields.pop(key)
        for key in ("project", "section", "label_names", "due_heading", "due_inline", "annotations")
        if key in fields
    }
    return DisplayTask(
        source=make_task(task_id, **fields),
        due_date=due_date,
        due_flag=due_flag,
        **display_fields,
    )


def make_settings(directory: str, values: Optional[dict] = None) -> ConfigManager:
    """Write a config.yaml into directory and load it."""
    path = Path(directory) / "config.yaml"
    path.write_text(yaml.safe_dump(values or {"todoist": {"api_token": "test-token"}}), encoding="utf-8")
    return ConfigManager(str(path))
