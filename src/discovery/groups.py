"""Group membership derived from the ``groups``/``group`` fields of each node."""

from __future__ import annotations

import logging

from src.contracts.node import NodeList
from src.contracts.smd import Group

log = logging.getLogger(__name__)


def add_member(group: Group, xname: str) -> Group:
    """Return *group* with *xname* added to its members, without duplicates.

    The input group is not modified.
    """
    if xname in group.members:
        return group
    return Group(label=group.label, description=group.description, members=[*group.members, xname])


def build_groups(node_list: NodeList, warnings: list[str] | None = None) -> list[Group]:
    """Collect group memberships across all nodes, in first-seen order.

    Deprecation warnings are also appended to *warnings* when given.
    """
    groups: dict[str, Group] = {}

    for node in node_list:
        labels = list(node.groups)
        if node.group:
            msg = f"node {node.xname}: 'group' is deprecated, use 'groups' instead"
            log.warning("%s", msg)
            if warnings is not None:
                warnings.append(msg)
            labels.append(node.group)

        for label in labels:
            group = groups.get(label) or Group(label=label)
            groups[label] = add_member(group, node.xname)

    log.debug("Built %d groups: %s", len(groups), ", ".join(groups))
    return list(groups.values())
