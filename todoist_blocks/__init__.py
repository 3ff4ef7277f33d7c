"""
todoist-blocks: Todoist queries rendered as nested Logseq blocks.

Parses query blocks, fetches matching Todoist tasks and builds the block
tree inserted back into the graph.
"""

__version__ = "0.1.0"
__author__ = "todoist-blocks Project"

# Import main components
from .models import QueryConfig, TaskBlock, DisplayTask
from .query import parse_query
from .client import TodoistClient, collect_paginated_results
from .hosts import BaseHost, MemoryHost, insert_tasks_into_graph
from .retrieve import RetrievalOrchestrator, RetrieveResult

__all__ = [
    "QueryConfig",
    "TaskBlock",
    "DisplayTask",
    "parse_query",
    "TodoistClient",
    "collect_paginated_results",
    "BaseHost",
    "MemoryHost",
    "insert_tasks_into_graph",
    "RetrievalOrchestrator",
    "RetrieveResult",
]
