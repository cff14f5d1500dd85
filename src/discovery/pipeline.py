"""Discovery driver: NodeList -> Components, Redfish endpoints, interfaces.

"Fake" discovery produces the same records a real BMC discovery would
send to SMD, except that everything is sourced from a payload file
instead of reaching out to BMCs.

Per node, in input order:
  1. Component          — once per xname, duplicates warned and skipped
  2. BMC xname          — translated from the node xname, warned on fallback
  3. Redfish endpoint   — always one per node
  4. System             — once per xname, with its top-level interfaces
  5. Manager            — once per BMC xname; its UUID becomes the endpoint UID

Only an invalid base URI aborts the run.
"""

from __future__ import annotations

import json
import logging
import re
import uuid
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any
from urllib.parse import SplitResult, urlsplit

from src.contracts.node import NodeList
from src.contracts.smd import Component, EthernetInterface, Group, RedfishEndpoint
from src.discovery.builders import (
    build_component,
    build_endpoint,
    build_ethernet_interfaces,
    build_manager,
    build_system,
)
from src.discovery.errors import InvalidBaseURI
from src.discovery.ledger import DedupLedger, LedgerKind
from src.discovery.uid import UidFactory, issue_uid
from src.discovery.xname import translate

log = logging.getLogger(__name__)

_CTL_RE = re.compile(r"[\x00-\x1f\x7f]")
_BAD_ESCAPE_RE = re.compile(r"%(?![0-9A-Fa-f]{2})")
_SCHEME_RE = re.compile(r"^[A-Za-z][A-Za-z0-9+.\-]*:")
_PORT_RE = re.compile(r"^(:[0-9]*)?$")
# unreserved and sub-delims; non-ASCII (IDN) hosts pass through
_BAD_HOST_CHAR_RE = re.compile(r"[^A-Za-z0-9\-_.~!$&'()*+,;=:\[\]<>\"%\x80-\U0010ffff]")


@dataclass(slots=True)
class DiscoveryResult:
    """Everything one discovery run generated, plus the warnings it raised."""

    components: list[Component] = field(default_factory=list)
    redfish_endpoints: list[RedfishEndpoint] = field(default_factory=list)
    ethernet_interfaces: list[EthernetInterface] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    def warn(self, msg: str, *args: Any) -> None:
        """Log a warning and record it on the result."""
        log.warning(msg, *args)
        self.warnings.append(msg % args if args else msg)

    def to_dict(self, groups: list[Group] | None = None) -> dict[str, Any]:
        out: dict[str, Any] = {
            "components": [c.to_dict() for c in self.components],
            "redfish_endpoints": [r.to_dict() for r in self.redfish_endpoints],
            "ethernet_interfaces": [i.to_dict() for i in self.ethernet_interfaces],
        }
        if groups is not None:
            out["groups"] = [g.to_dict() for g in groups]
        return out


def _split_host_port(hostport: str) -> tuple[str, str]:
    """Split ``host[:port]``; the port keeps its leading colon."""
    if hostport.startswith("["):
        end = hostport.find("]") + 1  # urlsplit rejects an unclosed bracket
        return hostport[:end], hostport[end:]
    colon = hostport.rfind(":")
    if colon < 0:
        return hostport, ""
    return hostport[:colon], hostport[colon:]


def validate_base_uri(base_uri: str) -> SplitResult:
    """Parse *base_uri*, raising InvalidBaseURI if it is not a valid URI reference.

    Rejected:
      - ASCII control bytes anywhere
      - a leading ``:`` (missing protocol scheme)
      - a scheme-less reference whose first path segment contains ``:``
      - a malformed ``%`` escape outside the query
      - characters not allowed in a host name, or a non-digit port
    """

    def invalid(reason: str) -> InvalidBaseURI:
        return InvalidBaseURI(f"invalid URI: {base_uri!r} ({reason})")

    if _CTL_RE.search(base_uri):
        raise invalid("invalid control character in URL")
    if base_uri.startswith(":"):
        raise invalid("missing protocol scheme")

    before_fragment, _, fragment = base_uri.partition("#")
    before_query = before_fragment.split("?", 1)[0]
    if _BAD_ESCAPE_RE.search(before_query) or _BAD_ESCAPE_RE.search(fragment):
        raise invalid("invalid URL escape")
    if (
        not _SCHEME_RE.match(before_query)
        and not before_query.startswith("/")
        and ":" in before_query.split("/", 1)[0]
    ):
        raise invalid("first path segment in URL cannot contain colon")

    try:
        parts = urlsplit(base_uri)
    except ValueError as exc:
        raise invalid(str(exc)) from exc

    host, port = _split_host_port(parts.netloc.rpartition("@")[2])
    if not _PORT_RE.match(port):
        raise invalid(f"invalid port {port!r} after host")
    if not host.startswith("["):
        bad = _BAD_HOST_CHAR_RE.search(host)
        if bad:
            raise invalid(f"invalid character {bad.group()!r} in host name")
    return parts


def discover(
    base_uri: str,
    node_list: NodeList,
    uid_factory: UidFactory = uuid.uuid4,
) -> DiscoveryResult:
    """Generate the SMD records for every node of *node_list*.

    Raises:
        InvalidBaseURI: If *base_uri* cannot be parsed. Nothing is generated.
    """
    base = validate_base_uri(base_uri)

    result = DiscoveryResult()
    ledger = DedupLedger()

    for node in node_list:
        log.debug("generating component structure for node with xname %s", node.xname)
        if not ledger.present(LedgerKind.COMPONENT, node.xname):
            comp = build_component(node)
            log.debug("adding component %s", comp)
            ledger.mark(LedgerKind.COMPONENT, node.xname)
            result.components.append(comp)
        else:
            result.warn("component with xname %s already exists (duplicate?), not adding", node.xname)

        log.debug("generating redfish structure for node with xname %s", node.xname)
        bmc_xname, used_fallback = translate(node.xname)
        if used_fallback:
            result.warn("node %s: not a node xname, falling back to node xname as BMC xname", node.xname)

        rfe = build_endpoint(node, bmc_xname)

        if not ledger.present(LedgerKind.SYSTEM, node.xname):
            log.debug("node %s: generating fake BMC System", node.xname)
            system = build_system(base, node)
            sys_uid = issue_uid(uid_factory)
            if sys_uid.ok:
                system.uuid = str(sys_uid.value)
            else:
                result.warn("node %s: could not generate UUID for fake BMC System, it will be zero", node.xname)
            result.ethernet_interfaces.extend(build_ethernet_interfaces(node))
            ledger.mark(LedgerKind.SYSTEM, node.xname)
            log.debug("node %s: generated system: %s", node.xname, system)
            rfe.systems.append(system)
        else:
            log.debug("node %s: fake BMC System already exists, skipping creation", node.xname)

        if not ledger.present(LedgerKind.MANAGER, bmc_xname):
            log.debug("BMC %s: generating fake BMC Manager", bmc_xname)
            manager = build_manager(base, node, bmc_xname)
            mgr_uid = issue_uid(uid_factory)
            if mgr_uid.ok:
                manager.uuid = str(mgr_uid.value)
                rfe.uid = mgr_uid.value
            else:
                result.warn("BMC %s: could not generate UUID for fake BMC Manager, it will be zero", bmc_xname)
            ledger.mark(LedgerKind.MANAGER, bmc_xname)
            log.debug("BMC %s: generated manager: %s", bmc_xname, manager)
            rfe.managers.append(manager)
        else:
            log.debug("BMC %s: fake BMC Manager already exists, skipping creation", bmc_xname)

        # One endpoint per input node, even when its System/Manager already exist
        result.redfish_endpoints.append(rfe)

    log.info(
        "Discovered %d nodes: %d components, %d systems, %d managers, %d redfish endpoints, %d interfaces, %d warnings",
        len(node_list),
        ledger.count(LedgerKind.COMPONENT),
        ledger.count(LedgerKind.SYSTEM),
        ledger.count(LedgerKind.MANAGER),
        len(result.redfish_endpoints),
        len(result.ethernet_interfaces),
        len(result.warnings),
    )
    return result


def write_result(result: DiscoveryResult, path: str, groups: list[Group] | None = None) -> None:
    """Write the generated records as one JSON document."""
    Path(path).parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as fh:
        json.dump(result.to_dict(groups), fh, indent=2, ensure_ascii=False)
    log.info("Wrote discovery output -> %s", path)
