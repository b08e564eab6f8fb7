#!/usr/bin/env python3
"""Parse a VPD pose or BVH hierarchy file and print its contents.

Usage:
    python scripts/dump_motion.py <file.vpd|file.bvh>

Pose files print one line per bone; hierarchy files print the joint tree
in pre-order, indented by depth. Parse errors are not caught.
"""

from __future__ import annotations

import sys
from pathlib import Path

# Add parent to path so we can import the package without installing it
sys.path.insert(0, str(Path(__file__).parent.parent))

from mmd_text.loader import format_result, load


def main():
    if len(sys.argv) < 2:
        print(f"Usage: {sys.argv[0]} <file.vpd|file.bvh>", file=sys.stderr)
        sys.exit(1)

    for line in format_result(load(sys.argv[1])):
        print(line)


if __name__ == "__main__":
    main()
