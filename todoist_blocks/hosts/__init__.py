"""Note host integrations for todoist-blocks."""

from .base import BaseHost
from .memory import HostBlock, MemoryHost
from .insert import insert_tasks_into_graph

__all__ = ["BaseHost", "HostBlock", "MemoryHost", "insert_tasks_into_graph"]
