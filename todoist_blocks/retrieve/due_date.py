"""
Due-date resolution for todoist-blocks.

Classifies a task's due date into a calendar bucket and produces the strings
shown inline, in group headings, and in SCHEDULED/DEADLINE lines. All
functions accept an explicit `now` so results are reproducible.
"""

from datetime import datetime, timezone
from typing import Optional

from ..models.display import DueFlag, DuePresentation
from ..models.todoist import Due


WEEKDAYS = ["Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun"]


def parse_date(value: Optional[str]) -> Optional[datetime]:
    """
    Parse a Todoist date or datetime string.

    Date-only values become local midnight. Values with an offset or a
    trailing "Z" stay timezone-aware; floating datetimes stay naive.
    """
    if not value:
        return None
    text = value.strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    try:
        return datetime.fromisoformat(text)
    except ValueError:
        return None


def _local(value: datetime) -> datetime:
    if value.tzinfo is not None:
        return value.astimezone().replace(tzinfo=None)
    return value


def difference_in_days(target: datetime, base: datetime) -> int:
    """Whole calendar days from base to target, ignoring time of day."""
    return (_local(target).date() - _local(base).date()).days


def describe_relative_days(days: int) -> str:
    if days == 0:
        return "today"
    if days == -1:
        return "yesterday"
    if days == 1:
        return "tomorrow"
    if days < 0:
        return f"{-days} days ago"
    return f"in {days} days"


def format_day(value: datetime) -> str:
    """Short weekday and month, e.g. "Mon, Mar 10"."""
    local = _local(value)
    return f"{WEEKDAYS[local.weekday()]}, {local:%b} {local.day}"


def format_time(value: datetime) -> str:
    """12-hour clock time, e.g. "9:05 AM"."""
    local = _local(value)
    hour = local.hour % 12 or 12
    return f"{hour}:{local.minute:02d} {'AM' if local.hour < 12 else 'PM'}"


def resolve_due_date(due: Optional[Due]) -> Optional[datetime]:
    """
    Resolve a due record to a single instant.

    Prefers the time-bearing value; returns None when neither value parses.
    """
    if due is None:
        return None
    return parse_date(due.datetime or due.date)


def classify_due(due_date: Optional[datetime], now: datetime) -> DueFlag:
    if due_date is None:
        return "none"
    diff = difference_in_days(due_date, now)
    if diff < 0:
        return "overdue"
    if diff == 0:
        return "today"
    if diff == 1:
        return "tomorrow"
    return "upcoming"


def _describe_flag(flag: DueFlag, due_date: datetime, now: datetime) -> Optional[str]:
    if flag == "today":
        return "Today"
    if flag == "tomorrow":
        return "Tomorrow"
    if flag == "overdue":
        return describe_relative_days(difference_in_days(due_date, now))
    return None


def format_due_date(due: Optional[Due], now: Optional[datetime] = None) -> DuePresentation:
    """
    Build the presentation strings for a due date.

    Args:
        due: The due record, or None
        now: Reference instant (defaults to the current local time)

    Returns:
        DuePresentation with the inline string, group heading and bucket flag
    """
    due_date = resolve_due_date(due)
    if due_date is None:
        return DuePresentation(inline=None, heading=None, flag="none")

    now = now or datetime.now()
    flag = classify_due(due_date, now)
    date_part = format_day(due_date)
    descriptor = _describe_flag(flag, due_date, now)

    inline = f"{date_part} • {descriptor}" if descriptor else date_part
    if due is not None and due.datetime:
        inline = f"{inline} @ {format_time(due_date)}"
    heading = f"{date_part} · {descriptor}" if descriptor else date_part

    return DuePresentation(inline=inline, heading=heading, flag=flag)


def format_due_iso(due: Optional[Due]) -> Optional[str]:
    """ISO-8601 UTC instant of the due date, or None."""
    due_date = resolve_due_date(due)
    if due_date is None:
        return None
    return due_date.astimezone(timezone.utc).strftime("%Y-%m-%dT%H:%M:%S.") + f"{due_date.microsecond // 1000:03d}Z"


def format_logseq_date(value: datetime, has_time: bool) -> str:
    """Logseq timestamp such as "<2025-03-10 Mon>" or "<2025-03-10 Mon 09:30>"."""
    local = _local(value)
    stamp = f"{local:%Y-%m-%d} {WEEKDAYS[local.weekday()]}"
    if has_time:
        stamp = f"{stamp} {local:%H:%M}"
    return f"<{stamp}>"
