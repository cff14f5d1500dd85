"""Output records handed to the SMD inventory client.

``to_dict()`` produces the wire keys SMD expects: CamelCase for the
top-level SMD records, snake_case for the Redfish sub-entities.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from typing import Any

from src.contracts.enums import ComponentState, ComponentType

NIL_UUID = uuid.UUID(int=0)

# Tells SMD to use the v2 Redfish endpoint parsing code
REDFISH_SCHEMA_VERSION = 1


@dataclass(slots=True)
class Component:
    """Inventory presence/state record for one node."""

    id: str
    nid: int
    type: str = ComponentType.NODE.value
    state: str = ComponentState.ON.value
    enabled: bool = True

    def to_dict(self) -> dict[str, Any]:
        return {
            "ID": self.id,
            "NID": self.nid,
            "Type": self.type,
            "State": self.state,
            "Enabled": self.enabled,
        }


@dataclass(slots=True)
class EthernetIP:
    ip_address: str
    network: str = ""

    def to_dict(self) -> dict[str, Any]:
        return {"IPAddress": self.ip_address, "Network": self.network}


@dataclass(slots=True)
class EthernetInterface:
    """Top-level SMD interface record; carries every address of the interface."""

    component_id: str
    description: str
    mac_address: str
    type: str = ComponentType.NODE.value
    ip_addresses: list[EthernetIP] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "ComponentID": self.component_id,
            "Type": self.type,
            "Description": self.description,
            "MACAddress": self.mac_address,
            "IPAddresses": [ip.to_dict() for ip in self.ip_addresses],
        }


@dataclass(slots=True)
class RedfishInterface:
    """Interface embedded in a System or Manager (single legacy IP)."""

    name: str
    description: str
    mac: str
    ip: str

    def to_dict(self) -> dict[str, Any]:
        return {"name": self.name, "description": self.description, "mac": self.mac, "ip": self.ip}


@dataclass(slots=True)
class System:
    """Fake BMC "System": the compute system behind a node BMC."""

    uri: str
    name: str
    uuid: str = ""
    actions: list[str] = field(default_factory=list)
    ethernet_interfaces: list[RedfishInterface] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "uri": self.uri,
            "name": self.name,
            "uuid": self.uuid,
            "actions": list(self.actions),
            "ethernet_interfaces": [i.to_dict() for i in self.ethernet_interfaces],
        }


@dataclass(slots=True)
class Manager:
    """Fake BMC "Manager": the management controller itself."""

    uri: str
    name: str
    uuid: str = ""
    type: str = ComponentType.NODE_BMC.value
    ethernet_interfaces: list[RedfishInterface] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "uri": self.uri,
            "name": self.name,
            "uuid": self.uuid,
            "type": self.type,
            "ethernet_interfaces": [i.to_dict() for i in self.ethernet_interfaces],
        }


@dataclass(slots=True)
class RedfishEndpoint:
    """One Redfish endpoint record per input node."""

    id: str
    name: str
    mac_addr: str = ""
    ip_address: str = ""
    fqdn: str = ""
    type: str = ComponentType.NODE_BMC.value
    schema_version: int = REDFISH_SCHEMA_VERSION
    uid: uuid.UUID = NIL_UUID
    systems: list[System] = field(default_factory=list)
    managers: list[Manager] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "ID": self.id,
            "Name": self.name,
            "Type": self.type,
            "MACAddr": self.mac_addr,
            "IPAddress": self.ip_address,
            "FQDN": self.fqdn,
            "SchemaVersion": self.schema_version,
            "UID": str(self.uid),
            "Systems": [s.to_dict() for s in self.systems],
            "Managers": [m.to_dict() for m in self.managers],
        }


@dataclass(slots=True)
class Group:
    """SMD group: a label and its member xnames."""

    label: str
    description: str = ""
    members: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "label": self.label,
            "description": self.description,
            "members": {"ids": list(self.members)},
        }
