"""
Sort engine for todoist-blocks.

Each rule is applied as a full stable sort of the whole list, in rule order,
so the last rule decides the final order and earlier rules only break ties
it leaves.
"""

import math
from typing import Callable, Dict, List, Optional, Tuple

from ..models.display import DisplayTask
from ..models.query import SortingOption
from .due_date import parse_date


def _due_timestamp(task: DisplayTask) -> Optional[float]:
    return task.due_date.timestamp() if task.due_date is not None else None


def _added_timestamp(task: DisplayTask) -> Optional[float]:
    added = parse_date(task.source.added_at)
    return added.timestamp() if added is not None else None


def _by_date_ascending(task: DisplayTask) -> Tuple[bool, float]:
    stamp = _due_timestamp(task)
    return (stamp is None, stamp or 0.0)


def _by_date_descending(task: DisplayTask) -> Tuple[bool, float]:
    # Tasks without a due date stay last in both directions
    stamp = _due_timestamp(task)
    return (stamp is None, -(stamp or 0.0))


def _by_added_ascending(task: DisplayTask) -> float:
    stamp = _added_timestamp(task)
    return math.inf if stamp is None else stamp


def _by_added_descending(task: DisplayTask) -> float:
    # Missing timestamps count as 0 here, which also puts them last
    stamp = _added_timestamp(task)
    return -(0.0 if stamp is None else stamp)


SORT_KEYS: Dict[SortingOption, Callable[[DisplayTask], object]] = {
    SortingOption.TODOIST_ORDER: lambda task: task.source.child_order,
    SortingOption.DATE_ASCENDING: _by_date_ascending,
    SortingOption.DATE_DESCENDING: _by_date_descending,
    SortingOption.PRIORITY_ASCENDING: lambda task: task.source.priority,
    SortingOption.PRIORITY_DESCENDING: lambda task: -task.source.priority,
    SortingOption.ADDED_ASCENDING: _by_added_ascending,
    SortingOption.ADDED_DESCENDING: _by_added_descending,
}


def sort_by_options(tasks: List[DisplayTask], sorting: List[SortingOption]) -> List[DisplayTask]:
    """
    Apply sort rules in order, each as a stable sort of the whole list.

    Args:
        tasks: Display tasks to sort (not modified)
        sorting: Sort rules; unknown rules fall back to Todoist order

    Returns:
        A new, sorted list
    """
    result = list(tasks)
    for option in sorting:
        key = SORT_KEYS.get(option, SORT_KEYS[SortingOption.TODOIST_ORDER])
        result.sort(key=key)
    return result
