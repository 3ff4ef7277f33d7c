"""
Cursor pagination helper for todoist-blocks.
"""

from typing import Awaitable, Callable, List, Optional, TypeVar

from ..models.todoist import Page


T = TypeVar("T")


async def collect_paginated_results(
    fetch_page: Callable[[Optional[str]], Awaitable[Page[T]]],
) -> List[T]:
    """
    Fetch every page of a cursor-paginated listing.

    The first call receives None; each following call receives the cursor
    returned by the previous page. Stops only once next_cursor is empty.

    Args:
        fetch_page: Coroutine function returning one Page for a cursor

    Returns:
        All results, in page order
    """
    items: List[T] = []
    cursor: Optional[str] = None

    while True:
        page = await fetch_page(cursor)
        items.extend(page.results)
        cursor = page.next_cursor
        if not cursor:
            break

    return items
