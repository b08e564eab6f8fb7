"""BVH hierarchy data model — the joint tree of the HIERARCHY section."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Callable, Iterator

from ..types import Vector3


class ChannelType(Enum):
    XPOSITION = "Xposition"
    YPOSITION = "Yposition"
    ZPOSITION = "Zposition"
    ZROTATION = "Zrotation"
    YROTATION = "Yrotation"
    XROTATION = "Xrotation"


# Literal text in the file → channel type
CHANNEL_LITERALS: dict[str, ChannelType] = {c.value: c for c in ChannelType}


@dataclass(frozen=True)
class HierarchyNode:
    """One joint. Channels and children keep the order they were declared in."""

    name: str
    offset: Vector3
    channels: tuple[ChannelType, ...] = ()
    children: tuple[HierarchyNode, ...] = ()

    def __str__(self) -> str:
        channels = "".join(c.value for c in self.channels)
        return f"{self.name}{self.offset}{channels}"

    def walk(self, depth: int = 0) -> Iterator[tuple[HierarchyNode, int]]:
        """Yield ``(node, depth)`` in pre-order, starting with this node."""
        yield self, depth
        for child in self.children:
            yield from child.walk(depth + 1)

    def traverse(self, visit: Callable[[HierarchyNode, int], None]) -> None:
        for node, depth in self.walk():
            visit(node, depth)
