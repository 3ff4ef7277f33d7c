"""
Unit tests for the sort and grouping engines.
"""

import unittest
from datetime import datetime

from todoist_blocks.models import GroupingOption, Project, Section, SortingOption
from todoist_blocks.retrieve.grouping import group_tasks
from todoist_blocks.retrieve.sorting import sort_by_options

from tests.fakes import make_display


def ids(tasks):
    return [task.source.id for task in tasks]


class TestSortByOptions(unittest.TestCase):
    """Each rule is a full stable sort; the last rule wins."""

    def setUp(self):
        self.tasks = [
            make_display("a", child_order=3, priority=4, due_date=datetime(2025, 3, 12)),
            make_display("b", child_order=1, priority=1),
            make_display("c", child_order=2, priority=4, due_date=datetime(2025, 3, 11)),
            make_display("d", child_order=4, priority=2, due_date=datetime(2025, 3, 13)),
        ]

    def test_todoist_order(self):
        self.assertEqual(ids(sort_by_options(self.tasks, [SortingOption.TODOIST_ORDER])), ["b", "c", "a", "d"])

    def test_input_is_not_modified(self):
        sort_by_options(self.tasks, [SortingOption.TODOIST_ORDER])
        self.assertEqual(ids(self.tasks), ["a", "b", "c", "d"])

    def test_date_ascending_puts_missing_last(self):
        self.assertEqual(ids(sort_by_options(self.tasks, [SortingOption.DATE_ASCENDING])), ["c", "a", "d", "b"])

    def test_date_descending_puts_missing_last(self):
        self.assertEqual(ids(sort_by_options(self.tasks, [SortingOption.DATE_DESCENDING])), ["d", "a", "c", "b"])

    def test_priority_directions(self):
        self.assertEqual(ids(sort_by_options(self.tasks, [SortingOption.PRIORITY_ASCENDING])), ["b", "d", "a", "c"])
        self.assertEqual(ids(sort_by_options(self.tasks, [SortingOption.PRIORITY_DESCENDING])), ["a", "c", "d", "b"])

    def test_last_rule_dominates(self):
        result = sort_by_options(self.tasks, [SortingOption.PRIORITY_DESCENDING, SortingOption.TODOIST_ORDER])
        self.assertEqual(ids(result), ["b", "c", "a", "d"])

    def test_earlier_rule_breaks_ties_of_later_rule(self):
        result = sort_by_options(self.tasks, [SortingOption.TODOIST_ORDER, SortingOption.PRIORITY_DESCENDING])
        # a and c tie on priority 4; Todoist order puts c first
        self.assertEqual(ids(result), ["c", "a", "d", "b"])

    def test_added_ascending_missing_last(self):
        tasks = [
            make_display("x"),
            make_display("y", added_at="2025-03-02T10:00:00Z"),
            make_display("z", added_at="2025-03-01T10:00:00Z"),
        ]
        self.assertEqual(ids(sort_by_options(tasks, [SortingOption.ADDED_ASCENDING])), ["z", "y", "x"])

    def test_added_descending_missing_last(self):
        # Missing timestamps count as +inf ascending but as 0 descending;
        # both place them last, kept as observed rather than harmonized
        tasks = [
            make_display("x"),
            make_display("y", added_at="2025-03-02T10:00:00Z"),
            make_display("z", added_at="2025-03-01T10:00:00Z"),
        ]
        self.assertEqual(ids(sort_by_options(tasks, [SortingOption.ADDED_DESCENDING])), ["y", "z", "x"])


class TestGroupTasks(unittest.TestCase):

    def test_hierarchy_is_not_grouped(self):
        self.assertEqual(group_tasks([make_display("a")], GroupingOption.HIERARCHY), [])

    def test_empty_input(self):
        self.assertEqual(group_tasks([], GroupingOption.PROJECT), [])

    def test_due_buckets_are_ordered(self):
        tasks = [
            make_display("none"),
            make_display("up", due_flag="upcoming", due_heading="Fri, Mar 14"),
            make_display("tom", due_flag="tomorrow"),
            make_display("today", due_flag="today"),
            make_display("late", due_flag="overdue"),
        ]
        groups = group_tasks(tasks, GroupingOption.DUE_DATE)

        self.assertEqual([g.heading for g in groups], ["Overdue", "Today", "Tomorrow", "Fri, Mar 14", "No Due Date"])
        self.assertEqual([g.order for g in groups], [0, 1, 2, 3, 4])

    def test_priority_groups_descend(self):
        tasks = [make_display("a", priority=1), make_display("b", priority=4), make_display("c", priority=1)]
        groups = group_tasks(tasks, GroupingOption.PRIORITY)

        self.assertEqual([g.heading for g in groups], ["Priority 4", "Priority 1"])
        self.assertEqual(ids(groups[1].tasks), ["a", "c"])

    def test_project_groups_follow_project_order(self):
        work = Project(id="p1", name="Work", child_order=2)
        home = Project(id="p2", name="Home", child_order=1)
        tasks = [make_display("a", project=work), make_display("b"), make_display("c", project=home)]
        groups = group_tasks(tasks, GroupingOption.PROJECT)

        self.assertEqual([g.heading for g in groups], ["Home", "Work", "No Project"])

    def test_section_headings(self):
        work = Project(id="p1", name="Work", child_order=1)
        later = Section(id="s2", name="Later", section_order=2, project_id="p1")
        now = Section(id="s1", name="Now", section_order=1, project_id="p1")
        tasks = [
            make_display("a", project=work, section=later),
            make_display("b", project=work, section=now),
            make_display("c", project=work),
        ]
        groups = group_tasks(tasks, GroupingOption.SECTION)

        self.assertEqual([g.heading for g in groups], ["Work / Now", "Work / Later", "Work / No Section"])

    def test_label_groups_use_first_label_alphabetically(self):
        tasks = [
            make_display("a", label_names=["zeta", "alpha"]),
            make_display("b"),
            make_display("c", label_names=["beta"]),
            make_display("d", label_names=["alpha"]),
        ]
        groups = group_tasks(tasks, GroupingOption.LABELS)

        self.assertEqual([g.heading for g in groups], ["alpha", "beta", "No Labels"])
        self.assertEqual(ids(groups[0].tasks), ["a", "d"])


if __name__ == "__main__":
    unittest.main()
