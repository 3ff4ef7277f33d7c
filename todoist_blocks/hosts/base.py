"""
Host storage interface for todoist-blocks.

This module defines the abstract interface a note host must implement for
retrieved blocks to be shown, inserted and annotated.
"""

from abc import ABC, abstractmethod
from typing import List

from ..models import TaskBlock


class BaseHost(ABC):
    """
    Abstract base class for note hosts.

    Every call may suspend; implementations backed by a remote editor API
    should not block the event loop.
    """

    @abstractmethod
    async def show_message(self, message: str, level: str = "success") -> None:
        """
        Show a user-facing message.

        Args:
            message: Text to show
            level: One of "success", "warning", "error"
        """
        pass

    @abstractmethod
    async def get_preferred_date_format(self) -> str:
        """Return the user's journal page date format."""
        pass

    @abstractmethod
    async def insert_batch_block(self, uuid: str, blocks: List[TaskBlock], before: bool = True) -> None:
        """
        Insert a block tree next to an existing block.

        Args:
            uuid: Anchor block
            blocks: Root-level blocks to insert, with their children
            before: Insert before the anchor instead of after it
        """
        pass

    @abstractmethod
    async def update_block(self, uuid: str, content: str) -> None:
        pass

    @abstractmethod
    async def remove_block(self, uuid: str) -> None:
        pass

    @abstractmethod
    async def upsert_block_property(self, uuid: str, key: str, value: str) -> None:
        pass
