"""Input records: the node list read from a discovery payload file."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from src.discovery.errors import PayloadError


def _join_indexed(prefix: str, items: list[Any]) -> str:
    """Render ``[prefix0={...} prefix1={...}]``."""
    return "[" + " ".join(f"{prefix}{idx}={{{item}}}" for idx, item in enumerate(items)) + "]"


@dataclass(slots=True)
class IfaceIP:
    """One IP address of an interface.

    ``network`` is the human-readable name of the network the address is on
    (e.g. "nmn"), NOT its subnet mask or CIDR.
    """

    network: str = ""
    ip_addr: str = ""

    @classmethod
    def from_dict(cls, obj: dict[str, Any]) -> IfaceIP:
        _require_mapping(obj, "ip_addrs entry")
        return cls(
            network=str(obj.get("network") or ""),
            ip_addr=str(obj.get("ip_addr") or ""),
        )

    def __str__(self) -> str:
        return f'network="{self.network}" ip_addr={self.ip_addr}'


@dataclass(slots=True)
class Iface:
    """A single network interface with one or more IP addresses."""

    mac_addr: str = ""
    ip_addrs: list[IfaceIP] = field(default_factory=list)

    @classmethod
    def from_dict(cls, obj: dict[str, Any]) -> Iface:
        _require_mapping(obj, "interface entry")
        return cls(
            mac_addr=str(obj.get("mac_addr") or ""),
            ip_addrs=[IfaceIP.from_dict(ip) for ip in _as_list(obj.get("ip_addrs"), "ip_addrs")],
        )

    def __str__(self) -> str:
        return f"mac_addr={self.mac_addr} ip_addrs={_join_indexed('ip', self.ip_addrs)}"


@dataclass(slots=True)
class Node:
    """One node entry of a payload file."""

    # ── identity ──
    xname: str              # e.g. "x1000c1s7b0n0"
    name: str = ""          # display label, e.g. "nid001"
    nid: int = 0

    # ── grouping ──
    group: str = ""         # deprecated, use groups
    groups: list[str] = field(default_factory=list)

    # ── BMC ──
    bmc_mac: str = ""
    bmc_ip: str = ""
    bmc_fqdn: str = ""

    ifaces: list[Iface] = field(default_factory=list)

    @classmethod
    def from_dict(cls, obj: dict[str, Any]) -> Node:
        _require_mapping(obj, "node entry")
        try:
            nid = int(obj.get("nid") or 0)
        except (TypeError, ValueError) as exc:
            raise PayloadError(f"node {obj.get('xname')!r}: invalid nid {obj.get('nid')!r}") from exc
        return cls(
            xname=str(obj.get("xname") or ""),
            name=str(obj.get("name") or ""),
            nid=nid,
            group=str(obj.get("group") or ""),
            groups=[str(g) for g in _as_list(obj.get("groups"), "groups")],
            bmc_mac=str(obj.get("bmc_mac") or ""),
            bmc_ip=str(obj.get("bmc_ip") or ""),
            bmc_fqdn=str(obj.get("bmc_fqdn") or ""),
            ifaces=[Iface.from_dict(i) for i in _as_list(obj.get("interfaces"), "interfaces")],
        )

    def __str__(self) -> str:
        return (
            f'name="{self.name}" nid={self.nid} xname={self.xname} '
            f"bmc_mac={self.bmc_mac} bmc_ip={self.bmc_ip} bmc_fqdn={self.bmc_fqdn} "
            f"interfaces={_join_indexed('iface', self.ifaces)}"
        )


@dataclass(slots=True)
class NodeList:
    """Ordered list of nodes, as unmarshalled from a payload file."""

    nodes: list[Node] = field(default_factory=list)

    @classmethod
    def from_dict(cls, obj: Any) -> NodeList:
        """Build a NodeList from a ``{"nodes": [...]}`` payload mapping."""
        if not isinstance(obj, dict):
            raise PayloadError(f"payload must be a mapping with a 'nodes' key, got {type(obj).__name__}")
        return cls(nodes=[Node.from_dict(n) for n in _as_list(obj.get("nodes"), "nodes")])

    def __len__(self) -> int:
        return len(self.nodes)

    def __iter__(self):
        return iter(self.nodes)

    def __str__(self) -> str:
        return _join_indexed("node", self.nodes)


def _require_mapping(obj: Any, what: str) -> None:
    if not isinstance(obj, dict):
        raise PayloadError(f"{what} must be a mapping, got {type(obj).__name__}")


def _as_list(value: Any, key: str) -> list[Any]:
    if value is None:
        return []
    if not isinstance(value, list):
        raise PayloadError(f"'{key}' must be a list, got {type(value).__name__}")
    return value
