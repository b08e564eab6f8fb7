"""mmd-text — parsers for the VPD pose and BVH hierarchy text formats."""

import logging

log = logging.getLogger("mmd_text")
log.setLevel(logging.DEBUG)
