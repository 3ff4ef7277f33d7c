"""
In-memory host for todoist-blocks.

Keeps a block outline in memory and records the messages shown to the user.
Backs the command-line entry and the test suite.
"""

import uuid as uuid_lib
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

from ..config import get_config
from ..models import TaskBlock
from .base import BaseHost


@dataclass
class HostBlock:
    uuid: str
    content: str
    properties: Dict[str, str] = field(default_factory=dict)
    children: List['HostBlock'] = field(default_factory=list)


class MemoryHost(BaseHost):
    """
    Host implementation storing the outline as HostBlock trees.
    """

    def __init__(self, preferred_date_format: Optional[str] = None):
        """
        Initialize the in-memory host.

        Args:
            preferred_date_format: Page date format (defaults to config value)
        """
        self.preferred_date_format = preferred_date_format or get_config().preferred_date_format
        self.blocks: List[HostBlock] = []
        self.messages: List[Tuple[str, str]] = []

    def add_block(self, content: str) -> str:
        """Append a top-level block and return its uuid."""
        block = HostBlock(uuid=str(uuid_lib.uuid4()), content=content)
        self.blocks.append(block)
        return block.uuid

    def _locate(self, uuid: str) -> Tuple[List[HostBlock], int]:
        pending = [self.blocks]
        while pending:
            siblings = pending.pop()
            for index, block in enumerate(siblings):
                if block.uuid == uuid:
                    return siblings, index
                pending.append(block.children)
        raise KeyError(f"Block not found: {uuid}")

    def get_block(self, uuid: str) -> HostBlock:
        siblings, index = self._locate(uuid)
        return siblings[index]

    def _convert(self, block: TaskBlock) -> HostBlock:
        return HostBlock(
            uuid=str(uuid_lib.uuid4()),
            content=block.content,
            properties=dict(block.properties or {}),
            children=[self._convert(child) for child in block.children],
        )

    async def show_message(self, message: str, level: str = "success") -> None:
        self.messages.append((message, level))

    async def get_preferred_date_format(self) -> str:
        return self.preferred_date_format

    async def insert_batch_block(self, uuid: str, blocks: List[TaskBlock], before: bool = True) -> None:
        siblings, index = self._locate(uuid)
        position = index if before else index + 1
        siblings[position:position] = [self._convert(block) for block in blocks]

    async def update_block(self, uuid: str, content: str) -> None:
        self.get_block(uuid).content = content

    async def remove_block(self, uuid: str) -> None:
        siblings, index = self._locate(uuid)
        del siblings[index]

    async def upsert_block_property(self, uuid: str, key: str, value: str) -> None:
        self.get_block(uuid).properties[key] = value

    def render_outline(self) -> str:
        """Render the outline as Logseq-flavored Markdown."""
        lines: List[str] = []

        def walk(block: HostBlock, depth: int) -> None:
            indent = "  " * depth
            content_lines = block.content.split("\n")
            lines.append(f"{indent}- {content_lines[0]}")
            for extra in content_lines[1:]:
                lines.append(f"{indent}  {extra}")
            for key, value in block.properties.items():
                lines.append(f"{indent}  {key}:: {value}")
            for child in block.children:
                walk(child, depth + 1)

        for block in self.blocks:
            walk(block, 0)
        return "\n".join(lines)
