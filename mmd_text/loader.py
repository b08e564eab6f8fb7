"""File loading and console formatting for parsed pose and hierarchy data."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable, Iterator, Union

from . import bvh, vpd
from .bvh.types import HierarchyNode
from .vpd.types import PoseNode

log = logging.getLogger("mmd_text")

INDENT = "  "

_PARSERS = {
    ".vpd": vpd.parse,
    ".bvh": bvh.parse,
}

Parsed = Union[list[PoseNode], HierarchyNode]


def load(filepath: str | Path) -> Parsed:
    """Parse a .vpd or .bvh file, picking the parser by suffix."""
    filepath = Path(filepath)
    parser = _PARSERS.get(filepath.suffix.lower())
    if parser is None:
        raise ValueError(
            f"Unsupported file type: {filepath.suffix or filepath.name!r} "
            f"(expected one of {', '.join(sorted(_PARSERS))})"
        )
    return parser(filepath)


def format_poses(nodes: Iterable[PoseNode]) -> Iterator[str]:
    for node in nodes:
        yield str(node)


def format_hierarchy(root: HierarchyNode) -> Iterator[str]:
    """One line per joint in pre-order, indented by depth."""
    for node, depth in root.walk():
        yield f"{INDENT * depth}{node}"


def format_result(result: Parsed) -> Iterator[str]:
    if isinstance(result, HierarchyNode):
        return format_hierarchy(result)
    return format_poses(result)
