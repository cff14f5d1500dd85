"""Entity builders: one input Node -> SMD output records.

All builders are pure; deduplication and UUID issuance are the driver's job.

Interface asymmetry
───────────────────
  build_system             — embedded interfaces carry only the FIRST IP
  build_ethernet_interfaces — top-level records carry ALL IPs with networks
"""

from __future__ import annotations

from urllib.parse import SplitResult, quote

from src.contracts.enums import ComponentType, ResetAction
from src.contracts.node import Iface, Node
from src.contracts.smd import (
    Component,
    EthernetInterface,
    EthernetIP,
    Manager,
    RedfishEndpoint,
    RedfishInterface,
    System,
)

SYSTEMS_PATH = "/redfish/v1/Systems/"
MANAGERS_PATH = "/redfish/v1/Managers/"

# Payload files have no field for supported power actions, but the power
# control service requires them, so every Redfish ResetType is advertised.
SYSTEM_ACTIONS: tuple[str, ...] = tuple(a.value for a in ResetAction)


def resource_uri(base: SplitResult, path: str) -> str:
    """Replace the path of *base* with *path* (scheme, host, query kept)."""
    return base._replace(path=quote(path, safe="/:@$&+,;=")).geturl()


def iface_description(idx: int, node: Node) -> str:
    return f"Interface {idx} for {node.name}"


def _first_ip(iface: Iface) -> str:
    return iface.ip_addrs[0].ip_addr if iface.ip_addrs else ""


def build_component(node: Node) -> Component:
    return Component(id=node.xname, nid=node.nid)


def build_endpoint(node: Node, bmc_xname: str) -> RedfishEndpoint:
    """Endpoint base fields; Systems, Managers and UID are attached later."""
    return RedfishEndpoint(
        id=bmc_xname,
        name=node.name,
        mac_addr=node.bmc_mac,
        ip_address=node.bmc_ip,
        fqdn=node.bmc_fqdn,
    )


def build_system(base: SplitResult, node: Node) -> System:
    return System(
        uri=resource_uri(base, SYSTEMS_PATH + node.xname),
        name=node.name,
        actions=list(SYSTEM_ACTIONS),
        ethernet_interfaces=[
            RedfishInterface(
                name=node.xname,
                description=iface_description(idx, node),
                mac=iface.mac_addr,
                ip=_first_ip(iface),
            )
            for idx, iface in enumerate(node.ifaces)
        ],
    )


def build_manager(base: SplitResult, node: Node, bmc_xname: str) -> Manager:
    return Manager(
        uri=resource_uri(base, MANAGERS_PATH + bmc_xname),
        name=bmc_xname,
        ethernet_interfaces=[
            RedfishInterface(
                name=bmc_xname,
                description=f"Interface for BMC {bmc_xname}",
                mac=node.bmc_mac,
                ip=node.bmc_ip,
            )
        ],
    )


def build_ethernet_interfaces(node: Node) -> list[EthernetInterface]:
    return [
        EthernetInterface(
            component_id=node.xname,
            type=ComponentType.NODE.value,
            description=iface_description(idx, node),
            mac_address=iface.mac_addr,
            ip_addresses=[EthernetIP(ip_address=ip.ip_addr, network=ip.network) for ip in iface.ip_addrs],
        )
        for idx, iface in enumerate(node.ifaces)
    ]
