"""
Grouping engine for todoist-blocks.

Partitions display tasks into ordered, labeled buckets. Buckets keep the
order in which their first task was seen unless the strategy orders them.
"""

import sys
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Tuple

from ..models.display import DisplayTask
from ..models.query import GroupingOption


NO_PROJECT = "No Project"
NO_SECTION = "No Section"
NO_LABELS = "No Labels"
NO_DUE_DATE = "No Due Date"
UNRESOLVED_ORDER = sys.maxsize

DUE_BUCKETS = {
    "overdue": ("Overdue", 0),
    "today": ("Today", 1),
    "tomorrow": ("Tomorrow", 2),
    "upcoming": ("Upcoming", 3),
    "none": (NO_DUE_DATE, 4),
}


@dataclass
class TaskGroup:
    """A labeled bucket of tasks."""
    heading: str
    order: int
    tasks: List[DisplayTask] = field(default_factory=list)


def _collect(tasks: List[DisplayTask],
             classify: Callable[[DisplayTask], Tuple[str, int]]) -> List[TaskGroup]:
    groups: Dict[str, TaskGroup] = {}
    for task in tasks:
        heading, order = classify(task)
        if heading not in groups:
            groups[heading] = TaskGroup(heading=heading, order=order)
        groups[heading].tasks.append(task)
    return list(groups.values())


def group_by_project(tasks: List[DisplayTask]) -> List[TaskGroup]:
    def classify(task: DisplayTask) -> Tuple[str, int]:
        if task.project is None:
            return NO_PROJECT, UNRESOLVED_ORDER
        return task.project.name, task.project.child_order

    return sorted(_collect(tasks, classify), key=lambda group: group.order)


def group_by_section(tasks: List[DisplayTask]) -> List[TaskGroup]:
    def classify(task: DisplayTask) -> Tuple[str, int]:
        project_name = task.project.name if task.project else NO_PROJECT
        section_name = task.section.name if task.section else NO_SECTION
        order = task.section.section_order if task.section else UNRESOLVED_ORDER
        return f"{project_name} / {section_name}", order

    return sorted(_collect(tasks, classify), key=lambda group: group.order)


def group_by_due(tasks: List[DisplayTask]) -> List[TaskGroup]:
    def classify(task: DisplayTask) -> Tuple[str, int]:
        heading, order = DUE_BUCKETS.get(task.due_flag, DUE_BUCKETS["none"])
        if task.due_flag == "upcoming" and task.due_heading:
            heading = task.due_heading
        return heading, order

    return sorted(_collect(tasks, classify), key=lambda group: group.order)


def group_by_priority(tasks: List[DisplayTask]) -> List[TaskGroup]:
    def classify(task: DisplayTask) -> Tuple[str, int]:
        return f"Priority {task.source.priority}", task.source.priority

    return sorted(_collect(tasks, classify), key=lambda group: group.order, reverse=True)


def group_by_label(tasks: List[DisplayTask]) -> List[TaskGroup]:
    """Bucket by each task's alphabetically-first label."""
    def classify(task: DisplayTask) -> Tuple[str, int]:
        if not task.label_names:
            return NO_LABELS, UNRESOLVED_ORDER
        return sorted(task.label_names)[0], 0

    groups = _collect(tasks, classify)
    return sorted(groups, key=lambda group: (group.order, group.heading.casefold(), group.heading))


GROUPERS: Dict[GroupingOption, Callable[[List[DisplayTask]], List[TaskGroup]]] = {
    GroupingOption.PROJECT: group_by_project,
    GroupingOption.SECTION: group_by_section,
    GroupingOption.DUE_DATE: group_by_due,
    GroupingOption.PRIORITY: group_by_priority,
    GroupingOption.LABELS: group_by_label,
}


def group_tasks(tasks: List[DisplayTask], group_by: GroupingOption) -> List[TaskGroup]:
    """
    Group tasks with the given strategy.

    Returns an empty list for the hierarchy strategy, which is not grouped.
    """
    grouper = GROUPERS.get(group_by)
    if grouper is None:
        return []
    return grouper(tasks)
