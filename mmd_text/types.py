"""Value types shared by the pose and hierarchy data models.

Components are single-precision values exactly as written in the file.
No normalization or coordinate conversion is applied.
"""

from __future__ import annotations

from typing import NamedTuple


class Vector3(NamedTuple):
    x: float
    y: float
    z: float

    def __str__(self) -> str:
        return f"[{self.x:g}, {self.y:g}, {self.z:g}]"


class Quaternion(NamedTuple):
    """Rotation as (x, y, z, w). Not required to be unit length."""

    x: float
    y: float
    z: float
    w: float

    def __str__(self) -> str:
        return f"({self.x:g}, {self.y:g}, {self.z:g}, {self.w:g})"
