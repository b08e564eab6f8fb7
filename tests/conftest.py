from __future__ import annotations

from pathlib import Path

import pytest

from mmd_text import bvh, vpd
from mmd_text.bvh.types import HierarchyNode
from mmd_text.vpd.types import PoseNode

SAMPLES_DIR = Path(__file__).parent / "samples"


@pytest.fixture
def sample_dir() -> Path:
    return SAMPLES_DIR


@pytest.fixture
def vpd_path() -> Path:
    path = SAMPLES_DIR / "pose.vpd"
    assert path.exists(), f"Test VPD not found: {path}"
    return path


@pytest.fixture
def bvh_path() -> Path:
    path = SAMPLES_DIR / "skeleton.bvh"
    assert path.exists(), f"Test BVH not found: {path}"
    return path


@pytest.fixture
def parsed_pose(vpd_path) -> list[PoseNode]:
    return vpd.parse(vpd_path)


@pytest.fixture
def parsed_hierarchy(bvh_path) -> HierarchyNode:
    return bvh.parse(bvh_path)
