"""Shared fixtures for fake discovery tests."""

from __future__ import annotations

import uuid

import pytest

from src.contracts.node import Iface, IfaceIP, Node, NodeList

BASE_URI = "https://smd.cluster.example"

# ── Helpers: create input records with sensible defaults ────────────────


def make_iface(
    *,
    mac_addr: str = "de:ad:be:ee:ee:f1",
    ips: list[tuple[str, str]] | None = None,
) -> Iface:
    """*ips* is a list of ``(network, ip_addr)`` pairs."""
    if ips is None:
        ips = [("nmn", "172.16.0.1")]
    return Iface(mac_addr=mac_addr, ip_addrs=[IfaceIP(network=n, ip_addr=ip) for n, ip in ips])


def make_node(
    *,
    xname: str = "x1000c1s7b0n0",
    name: str = "nid001",
    nid: int = 1,
    group: str = "",
    groups: list[str] | None = None,
    bmc_mac: str = "de:ca:fc:0f:ee:ee",
    bmc_ip: str = "172.16.0.101",
    bmc_fqdn: str = "x1000c1s7b0.cluster.example",
    ifaces: list[Iface] | None = None,
) -> Node:
    return Node(
        xname=xname,
        name=name,
        nid=nid,
        group=group,
        groups=list(groups or []),
        bmc_mac=bmc_mac,
        bmc_ip=bmc_ip,
        bmc_fqdn=bmc_fqdn,
        ifaces=[make_iface()] if ifaces is None else ifaces,
    )


def make_node_list(*nodes: Node) -> NodeList:
    return NodeList(nodes=list(nodes))


def failing_uid() -> uuid.UUID:
    raise OSError("entropy source unavailable")


# ── Payload fixtures ────────────────────────────────────────────────────


@pytest.fixture
def node_payload() -> dict:
    """Two nodes behind one BMC, mirroring a real payload file."""
    return {
        "nodes": [
            {
                "name": "nid001",
                "nid": 1,
                "xname": "x1000c1s7b0n0",
                "groups": ["compute"],
                "bmc_mac": "de:ca:fc:0f:ee:ee",
                "bmc_ip": "172.16.0.101",
                "bmc_fqdn": "x1000c1s7b0.cluster.example",
                "interfaces": [
                    {
                        "mac_addr": "de:ad:be:ee:ee:f1",
                        "ip_addrs": [
                            {"network": "nmn", "ip_addr": "172.16.0.1"},
                            {"network": "hmn", "ip_addr": "172.17.0.1"},
                        ],
                    }
                ],
            },
            {
                "name": "nid002",
                "nid": 2,
                "xname": "x1000c1s7b0n1",
                "group": "io",
                "groups": ["compute"],
                "bmc_mac": "de:ca:fc:0f:ee:ee",
                "bmc_ip": "172.16.0.101",
                "bmc_fqdn": "x1000c1s7b0.cluster.example",
                "interfaces": [
                    {
                        "mac_addr": "de:ad:be:ee:ee:f2",
                        "ip_addrs": [{"network": "nmn", "ip_addr": "172.16.0.2"}],
                    }
                ],
            },
        ]
    }
