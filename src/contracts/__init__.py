"""Inventory contract: input node records and SMD output records."""

from src.contracts.enums import ComponentState, ComponentType, ResetAction
from src.contracts.node import Iface, IfaceIP, Node, NodeList
from src.contracts.smd import (
    NIL_UUID,
    Component,
    EthernetInterface,
    EthernetIP,
    Group,
    Manager,
    RedfishEndpoint,
    RedfishInterface,
    System,
)

__all__ = [
    "NIL_UUID",
    "Component",
    "ComponentState",
    "ComponentType",
    "EthernetIP",
    "EthernetInterface",
    "Group",
    "Iface",
    "IfaceIP",
    "Manager",
    "Node",
    "NodeList",
    "RedfishEndpoint",
    "RedfishInterface",
    "ResetAction",
    "System",
]
