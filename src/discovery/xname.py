"""Xname translation: node xname -> owning BMC xname.

A node xname has the form ``x<cabinet>c<chassis>s<slot>b<bmc>n<node>``,
e.g. ``x1000c1s7b0n0``. Its BMC is the same string without the trailing
node ordinal: ``x1000c1s7b0``.
"""

from __future__ import annotations

import re
from typing import NamedTuple

from src.discovery.errors import XnameError

_NODE_XNAME_RE = re.compile(r"^(x\d+c\d+s\d+b\d+)n\d+$")


class Translation(NamedTuple):
    bmc_xname: str
    used_fallback: bool


def is_node_xname(xname: str) -> bool:
    """Return True if *xname* follows the node xname grammar."""
    return _NODE_XNAME_RE.match(xname) is not None


def node_to_bmc_xname(xname: str) -> str:
    """Return the BMC xname owning node *xname*.

    Raises:
        XnameError: If *xname* is not a node xname.
    """
    m = _NODE_XNAME_RE.match(xname)
    if m is None:
        raise XnameError(f"{xname!r} is not a valid node xname")
    return m.group(1)


def translate(xname: str) -> Translation:
    """Like :func:`node_to_bmc_xname`, but falls back to *xname* itself.

    The caller is expected to log the fallback.
    """
    try:
        return Translation(node_to_bmc_xname(xname), False)
    except XnameError:
        return Translation(xname, True)
