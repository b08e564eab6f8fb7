"""VPD data model — one record per posed bone."""

from __future__ import annotations

from dataclasses import dataclass

from ..types import Quaternion, Vector3


@dataclass(frozen=True)
class PoseNode:
    """A single bone pose from a VPD file."""

    name: str  # Japanese name (CP932 decoded)
    translation: Vector3
    rotation: Quaternion  # (x, y, z, w)

    def __str__(self) -> str:
        return f"<{self.name}: pos{self.translation}, rot{self.rotation}>"
