"""
Small helpers shared across todoist-blocks.
"""

import re
from datetime import datetime


_ID_PATTERN = re.compile(r"\((.*?)\)")

_DATE_TOKENS = re.compile(r"yyyy|yy|MMMM|MMM|MM|M|do|dd|d|EEEE|EEE|E")

_MONTHS = [
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
]
_WEEKDAYS = ["Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday"]


def get_id_from_string(content: str) -> str:
    """
    Extract the id from a selector string such as "Inbox (2203306141)".

    Returns an empty string when there are no parentheses.
    """
    match = _ID_PATTERN.search(content.strip())
    if match and match.group(1):
        return match.group(1)
    return ""


def get_name_from_string(content: str) -> str:
    """Extract the name from a selector string such as "Inbox (2203306141)"."""
    index = content.find("(")
    if index < 0:
        return ""
    return content[:index].strip()


def ordinal(day: int) -> str:
    if 11 <= day % 100 <= 13:
        suffix = "th"
    else:
        suffix = {1: "st", 2: "nd", 3: "rd"}.get(day % 10, "th")
    return f"{day}{suffix}"


def format_page_date(value: datetime, date_format: str) -> str:
    """
    Format a date as a journal page reference.

    Args:
        value: The date to format
        date_format: Logseq date format, e.g. "MMM do, yyyy" or "yyyy-MM-dd"

    Returns:
        Page link such as "[[Mar 10th, 2025]]"
    """
    def replace(match: re.Match) -> str:
        token = match.group(0)
        if token == "yyyy":
            return f"{value.year:04d}"
        if token == "yy":
            return f"{value.year % 100:02d}"
        if token == "MMMM":
            return _MONTHS[value.month - 1]
        if token == "MMM":
            return _MONTHS[value.month - 1][:3]
        if token == "MM":
            return f"{value.month:02d}"
        if token == "M":
            return str(value.month)
        if token == "do":
            return ordinal(value.day)
        if token == "dd":
            return f"{value.day:02d}"
        if token == "d":
            return str(value.day)
        if token == "EEEE":
            return _WEEKDAYS[value.weekday()]
        return _WEEKDAYS[value.weekday()][:3]

    return f"[[{_DATE_TOKENS.sub(replace, date_format)}]]"
