"""BVH text parser — reads the HIERARCHY section of a Biovision file.

Grammar (whitespace separated, ``//`` comments allowed):

    file     := "HIERARCHY" node
    node     := ("ROOT" | "JOINT") name "{" "OFFSET" vec3 channels? child* "}"
    channels := "CHANNELS" count chtype{count}
    child    := node | endsite
    endsite  := "End" "Site" "{" "OFFSET" vec3 "}"

Only the joint tree is read. The MOTION section and anything else after
the root joint's closing brace is ignored.
"""

from __future__ import annotations

import logging
from pathlib import Path

from ..lexer import (
    ArityError,
    ParseError,
    keyword,
    non_whitespace_token,
    signed_decimal,
    skip_whitespace_or_comment,
    string,
    token,
    unsigned_integer,
)
from ..types import Vector3
from .types import CHANNEL_LITERALS, ChannelType, HierarchyNode

log = logging.getLogger("mmd_text")

END_SITE_NAME = "End Site"
JOINT_KEYWORDS = ("ROOT", "JOINT")

_hierarchy = token(keyword("HIERARCHY"))
_offset_keyword = token(keyword("OFFSET"))
_channels_keyword = token(keyword("CHANNELS"))
_end = token(keyword("End"))
_site = token(keyword("Site"))
_open_brace = token(string("{"))
_close_brace = token(string("}"))
_name = token(non_whitespace_token)
_count = token(unsigned_integer)
_number = token(signed_decimal)

# Words that end a channel list early
_STRUCTURAL = frozenset(JOINT_KEYWORDS + ("End",))


def parse(filepath: str | Path, encoding: str | None = None) -> HierarchyNode:
    """Parse a BVH file and return its root joint.

    ``encoding=None`` uses the platform default encoding.
    Raises ParseError (a ValueError) if the hierarchy is malformed.
    """
    filepath = Path(filepath)
    log.info("Parsing BVH: %s", filepath.name)
    root = parse_text(filepath.read_text(encoding=encoding))
    log.info(
        "BVH parsed: root %s, %d nodes", root.name, sum(1 for _ in root.walk())
    )
    return root


def parse_text(text: str) -> HierarchyNode:
    """Parse BVH text that has already been decoded.

    A leading byte order mark is dropped. Joints nested deeper than the
    interpreter recursion limit raise ParseError.
    """
    if text.startswith("\ufeff"):
        text = text[1:]
    _, pos = _hierarchy(text, 0)
    try:
        root, _ = _joint(text, pos)
    except RecursionError:
        raise ParseError(
            text, pos, "joints nested within the recursion limit",
            "deeper nesting",
        ) from None
    return root


def _peek_word(text: str, pos: int) -> str | None:
    """Next whitespace-delimited word without consuming it."""
    pos = skip_whitespace_or_comment(text, pos)
    if pos >= len(text):
        return None
    word, _ = non_whitespace_token(text, pos)
    return word


def _vector3(text: str, pos: int) -> tuple[Vector3, int]:
    x, pos = _number(text, pos)
    y, pos = _number(text, pos)
    z, pos = _number(text, pos)
    return Vector3(x, y, z), pos


def _offset(text: str, pos: int) -> tuple[Vector3, int]:
    _, pos = _offset_keyword(text, pos)
    return _vector3(text, pos)


def _channels(text: str, pos: int) -> tuple[tuple[ChannelType, ...], int]:
    _, pos = _channels_keyword(text, pos)
    count, pos = _count(text, pos)

    channels: list[ChannelType] = []
    for _ in range(count):
        start = skip_whitespace_or_comment(text, pos)
        word = _peek_word(text, start)
        if word is None or word in _STRUCTURAL or word.startswith("}"):
            raise ArityError(text, start, "channels", count, len(channels))
        channel = CHANNEL_LITERALS.get(word)
        if channel is None:
            raise ParseError(text, start, "channel type", repr(word))
        channels.append(channel)
        _, pos = _name(text, start)

    if _peek_word(text, pos) in CHANNEL_LITERALS:
        start = skip_whitespace_or_comment(text, pos)
        raise ArityError(text, start, "channels", count, count + 1)
    return tuple(channels), pos


def _end_site(text: str, pos: int) -> tuple[HierarchyNode, int]:
    _, pos = _end(text, pos)
    _, pos = _site(text, pos)
    _, pos = _open_brace(text, pos)
    offset, pos = _offset(text, pos)
    _, pos = _close_brace(text, pos)
    return HierarchyNode(name=END_SITE_NAME, offset=offset), pos


def _joint_keyword(text: str, pos: int) -> tuple[str, int]:
    start = skip_whitespace_or_comment(text, pos)
    word = _peek_word(text, start)
    if word not in JOINT_KEYWORDS:
        raise ParseError(text, start, " or ".join(repr(k) for k in JOINT_KEYWORDS))
    return _name(text, start)


def _joint(text: str, pos: int) -> tuple[HierarchyNode, int]:
    """A ROOT/JOINT block, recursing into nested joints."""
    _, pos = _joint_keyword(text, pos)
    name, pos = _name(text, pos)
    _, pos = _open_brace(text, pos)
    offset, pos = _offset(text, pos)

    channels: tuple[ChannelType, ...] = ()
    if _peek_word(text, pos) == "CHANNELS":
        channels, pos = _channels(text, pos)

    children: list[HierarchyNode] = []
    while not text.startswith("}", skip_whitespace_or_comment(text, pos)):
        if _peek_word(text, pos) == "End":
            child, pos = _end_site(text, pos)
        else:
            child, pos = _joint(text, pos)
        children.append(child)

    _, pos = _close_brace(text, pos)
    return (
        HierarchyNode(
            name=name, offset=offset, channels=channels, children=tuple(children)
        ),
        pos,
    )
