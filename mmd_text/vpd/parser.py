"""VPD text parser — reads Vocaloid Pose Data files.

VPD is a CP932 (Shift-JIS) encoded text format:

    Vocaloid Pose Data file

    miku.osm;		// parent file name
    14;				// number of pose bones

    Bone0{右親指１
      -0.000000,0.000000,0.000000;				// trans x,y,z
      0.071834,0.539167,0.266196,0.795784;		// Quatanion x,y,z,w
    }

The header declares how many ``Bone`` records follow; exactly that many
are read. Anything after the last declared record is ignored.
No coordinate conversion — raw MMD values are returned.
"""

from __future__ import annotations

import logging
from pathlib import Path

from ..lexer import (
    ArityError,
    non_whitespace_token,
    signed_decimal,
    skip_whitespace_or_comment,
    string,
    token,
    unsigned_integer,
)
from ..types import Quaternion, Vector3
from .types import PoseNode

log = logging.getLogger("mmd_text")

VPD_SIGNATURE = "Vocaloid Pose Data file"
OWNER_FILE = "miku.osm;"
DEFAULT_ENCODING = "cp932"

_comma = string(",")
_semicolon = string(";")
_open_brace = string("{")
_close_brace = string("}")
_bone = string("Bone")
_signature = string(VPD_SIGNATURE)
_owner_file = token(string(OWNER_FILE))


def parse(filepath: str | Path, encoding: str = DEFAULT_ENCODING) -> list[PoseNode]:
    """Parse a VPD file and return its pose records in file order.

    Raises ParseError (a ValueError) if the file does not match the format.
    """
    filepath = Path(filepath)
    log.info("Parsing VPD: %s", filepath.name)
    nodes = parse_text(filepath.read_text(encoding=encoding))
    log.info("VPD parsed: %d bones", len(nodes))
    return nodes


def parse_text(text: str) -> list[PoseNode]:
    """Parse VPD text that has already been decoded."""
    count, pos = _header(text, 0)

    nodes: list[PoseNode] = []
    for _ in range(count):
        if skip_whitespace_or_comment(text, pos) >= len(text):
            raise ArityError(text, len(text), "bone records", count, len(nodes))
        node, pos = _record_token(text, pos)
        nodes.append(node)

    return nodes


# ---------------------------------------------------------------------------
# Header
# ---------------------------------------------------------------------------

def _bone_count(text: str, pos: int) -> tuple[int, int]:
    count, pos = unsigned_integer(text, pos)
    _, pos = _semicolon(text, pos)
    return count, pos


_bone_count_token = token(_bone_count)


def _header(text: str, pos: int) -> tuple[int, int]:
    """Signature, owner model file and declared bone count."""
    _, pos = _signature(text, pos)
    _, pos = _owner_file(text, pos)
    return _bone_count_token(text, pos)


# ---------------------------------------------------------------------------
# Bone records
# ---------------------------------------------------------------------------

def _vector3(text: str, pos: int) -> tuple[Vector3, int]:
    x, pos = signed_decimal(text, pos)
    _, pos = _comma(text, pos)
    y, pos = signed_decimal(text, pos)
    _, pos = _comma(text, pos)
    z, pos = signed_decimal(text, pos)
    _, pos = _semicolon(text, pos)
    return Vector3(x, y, z), pos


def _quaternion(text: str, pos: int) -> tuple[Quaternion, int]:
    x, pos = signed_decimal(text, pos)
    _, pos = _comma(text, pos)
    y, pos = signed_decimal(text, pos)
    _, pos = _comma(text, pos)
    z, pos = signed_decimal(text, pos)
    _, pos = _comma(text, pos)
    w, pos = signed_decimal(text, pos)
    _, pos = _semicolon(text, pos)
    return Quaternion(x, y, z, w), pos


_translation = token(_vector3)
_rotation = token(_quaternion)


def _record(text: str, pos: int) -> tuple[PoseNode, int]:
    """``Bone<index>{<name> <vec3>; <quat>; }``"""
    _, pos = _bone(text, pos)
    # Index is positional only, the name identifies the bone
    _, pos = unsigned_integer(text, pos)
    _, pos = _open_brace(text, pos)
    name, pos = non_whitespace_token(text, pos)
    translation, pos = _translation(text, pos)
    rotation, pos = _rotation(text, pos)
    _, pos = _close_brace(text, pos)
    return PoseNode(name=name, translation=translation, rotation=rotation), pos


_record_token = token(_record)
