"""Tests for src.discovery.pipeline: the discovery driver."""

from __future__ import annotations

import json
import logging
import uuid

import pytest

from src.contracts.node import NodeList
from src.contracts.smd import NIL_UUID
from src.discovery.errors import InvalidBaseURI
from src.discovery.pipeline import discover, validate_base_uri, write_result
from tests.conftest import BASE_URI, failing_uid, make_iface, make_node, make_node_list


def _warnings(caplog, needle: str) -> list[str]:
    return [r.getMessage() for r in caplog.records if r.levelno == logging.WARNING and needle in r.getMessage()]


# ═══════════════════════════════════════════════════════════════════════════
#  validate_base_uri
# ═══════════════════════════════════════════════════════════════════════════


class TestValidateBaseUri:
    @pytest.mark.parametrize(
        "uri",
        [
            "https://smd.cluster.example",
            "http://10.0.0.5:27779/hsm/v2",
            "smd.local",
            "https://[fd00::1]:8443",
            "http://smd/hsm v2",
            "http://smd:70000",
        ],
    )
    def test_valid(self, uri):
        assert validate_base_uri(uri).geturl() == uri

    @pytest.mark.parametrize(
        "uri",
        [
            "http://smd:/",             # empty port
            "localhost:8080",           # scheme "localhost", opaque "8080"
            "/hsm/v2",                  # relative reference
        ],
    )
    def test_valid_unusual(self, uri):
        validate_base_uri(uri)

    @pytest.mark.parametrize(
        ("uri", "reason"),
        [
            ("http://[::1", "Invalid IPv6 URL"),
            ("http://smd:port/", "invalid port"),
            ("http://smd:80x/", "invalid port"),
            ("://smd.cluster.example", "missing protocol scheme"),
            ("http://smd/\x00", "invalid control character"),
            ("http://smd/\x7f", "invalid control character"),
            ("http://smd\t/", "invalid control character"),
            ("http://smd name/", "in host name"),
            ("http://smd|x/", "in host name"),
            ("http://smd/%zz", "invalid URL escape"),
            ("10.0.0.5:27779", "first path segment"),
            ("10.0.0.5:27779/hsm", "first path segment"),
        ],
    )
    def test_invalid(self, uri, reason):
        with pytest.raises(InvalidBaseURI, match="invalid URI") as exc_info:
            validate_base_uri(uri)
        assert reason in str(exc_info.value)

    def test_query_may_hold_percent(self):
        assert validate_base_uri("http://smd/?q=100%").query == "q=100%"


# ═══════════════════════════════════════════════════════════════════════════
#  discover
# ═══════════════════════════════════════════════════════════════════════════


class TestDiscoverSingleNode:
    def test_generates_all_records(self):
        result = discover(BASE_URI, make_node_list(make_node()))

        assert [c.id for c in result.components] == ["x1000c1s7b0n0"]
        (rfe,) = result.redfish_endpoints
        assert rfe.id == "x1000c1s7b0"
        (system,) = rfe.systems
        (manager,) = rfe.managers
        assert system.uri == f"{BASE_URI}/redfish/v1/Systems/x1000c1s7b0n0"
        assert manager.uri == f"{BASE_URI}/redfish/v1/Managers/x1000c1s7b0"
        assert len(result.ethernet_interfaces) == 1
        assert result.warnings == []

    def test_endpoint_uid_is_manager_uuid(self):
        result = discover(BASE_URI, make_node_list(make_node()))
        (rfe,) = result.redfish_endpoints
        assert rfe.uid != NIL_UUID
        assert str(rfe.uid) == rfe.managers[0].uuid
        assert rfe.systems[0].uuid not in ("", rfe.managers[0].uuid)

    def test_empty_node_list(self):
        result = discover(BASE_URI, NodeList())
        assert result.components == []
        assert result.redfish_endpoints == []
        assert result.ethernet_interfaces == []


class TestDiscoverDedup:
    def test_duplicate_xname_yields_one_component(self, caplog):
        first = make_node(xname="x1000c1s7b0n0", nid=1, name="nid001")
        dup = make_node(xname="x1000c1s7b0n0", nid=99, name="other")

        with caplog.at_level(logging.WARNING):
            result = discover(BASE_URI, make_node_list(first, dup))

        (comp,) = result.components
        assert comp.id == "x1000c1s7b0n0"
        assert comp.nid == 1
        assert len(_warnings(caplog, "already exists (duplicate?)")) == 1
        assert len(result.warnings) == 1

    def test_summary_counts(self, caplog):
        nodes = make_node_list(make_node(xname="x1000c1s7b0n0"), make_node(xname="x1000c1s7b0n0"))

        with caplog.at_level(logging.INFO, logger="src.discovery.pipeline"):
            discover(BASE_URI, nodes)

        (summary,) = [r.getMessage() for r in caplog.records if r.getMessage().startswith("Discovered")]
        assert summary == (
            "Discovered 2 nodes: 1 components, 1 systems, 1 managers, 2 redfish endpoints, 1 interfaces, 1 warnings"
        )

    def test_duplicate_xname_creates_one_system(self):
        nodes = make_node_list(make_node(), make_node())
        result = discover(BASE_URI, nodes)

        systems = [s for rfe in result.redfish_endpoints for s in rfe.systems]
        assert len(systems) == 1
        assert len(result.ethernet_interfaces) == 1

    def test_shared_bmc_creates_one_manager(self):
        nodes = make_node_list(
            make_node(xname="x1000c1s7b0n0", nid=1),
            make_node(xname="x1000c1s7b0n1", nid=2),
        )
        result = discover(BASE_URI, nodes)

        assert [c.id for c in result.components] == ["x1000c1s7b0n0", "x1000c1s7b0n1"]
        managers = [m for rfe in result.redfish_endpoints for m in rfe.managers]
        assert len(managers) == 1
        systems = [s for rfe in result.redfish_endpoints for s in rfe.systems]
        assert len(systems) == 2
        assert result.warnings == []

    def test_one_endpoint_per_input_node(self):
        nodes = make_node_list(
            make_node(xname="x1000c1s7b0n0"),
            make_node(xname="x1000c1s7b0n1"),
            make_node(xname="x1000c1s7b0n0"),
        )
        result = discover(BASE_URI, nodes)

        assert [r.id for r in result.redfish_endpoints] == ["x1000c1s7b0"] * 3
        second, third = result.redfish_endpoints[1:]
        assert second.managers == [] and len(second.systems) == 1
        assert third.managers == [] and third.systems == []
        assert second.uid == NIL_UUID

    def test_runs_do_not_share_state(self):
        nodes = make_node_list(make_node())
        discover(BASE_URI, nodes)
        result = discover(BASE_URI, nodes)
        assert len(result.components) == 1
        assert result.warnings == []


class TestDiscoverXnameFallback:
    def test_non_conforming_xname_used_as_bmc_xname(self, caplog):
        with caplog.at_level(logging.WARNING):
            result = discover(BASE_URI, make_node_list(make_node(xname="node-a")))

        (rfe,) = result.redfish_endpoints
        assert rfe.id == "node-a"
        assert rfe.managers[0].uri == f"{BASE_URI}/redfish/v1/Managers/node-a"
        assert len(_warnings(caplog, "falling back to node xname")) == 1

    def test_warning_per_node(self, caplog):
        with caplog.at_level(logging.WARNING):
            discover(BASE_URI, make_node_list(make_node(xname="a"), make_node(xname="b")))
        assert len(_warnings(caplog, "falling back to node xname")) == 2


class TestDiscoverDegradedUid:
    def test_failed_uid_is_zero_and_not_fatal(self, caplog):
        with caplog.at_level(logging.WARNING):
            result = discover(BASE_URI, make_node_list(make_node()), uid_factory=failing_uid)

        (rfe,) = result.redfish_endpoints
        assert rfe.uid == NIL_UUID
        assert rfe.managers[0].uuid == ""
        assert rfe.systems[0].uuid == ""
        assert len(_warnings(caplog, "could not generate UUID for fake BMC System")) == 1
        assert len(_warnings(caplog, "could not generate UUID for fake BMC Manager")) == 1
        assert len(result.components) == 1

    def test_manager_failure_only(self):
        calls = iter([uuid.UUID(int=1)])

        def factory() -> uuid.UUID:
            try:
                return next(calls)
            except StopIteration:
                raise OSError("exhausted") from None

        result = discover(BASE_URI, make_node_list(make_node()), uid_factory=factory)
        (rfe,) = result.redfish_endpoints
        assert rfe.systems[0].uuid == str(uuid.UUID(int=1))
        assert rfe.uid == NIL_UUID


class TestDiscoverFatalBaseUri:
    def test_invalid_base_uri_raises(self):
        with pytest.raises(InvalidBaseURI):
            discover("http://[::1", make_node_list(make_node()))

    def test_host_port_without_scheme_raises(self):
        with pytest.raises(InvalidBaseURI, match="first path segment"):
            discover("10.0.0.5:27779", make_node_list(make_node()))

    def test_no_warnings_logged_before_abort(self, caplog):
        with caplog.at_level(logging.DEBUG), pytest.raises(InvalidBaseURI):
            discover("://nope", make_node_list(make_node(xname="bad"), make_node(xname="bad")))
        assert _warnings(caplog, "") == []


class TestInterfaceFanOut:
    def test_all_ips_top_level_first_ip_embedded(self):
        node = make_node(ifaces=[make_iface(ips=[("nmn", "10.0.0.1"), ("hmn", "10.1.0.1")])])
        result = discover(BASE_URI, make_node_list(node))

        (iface,) = result.ethernet_interfaces
        assert [(ip.network, ip.ip_address) for ip in iface.ip_addresses] == [
            ("nmn", "10.0.0.1"),
            ("hmn", "10.1.0.1"),
        ]
        (embedded,) = result.redfish_endpoints[0].systems[0].ethernet_interfaces
        assert embedded.ip == "10.0.0.1"


# ═══════════════════════════════════════════════════════════════════════════
#  Output
# ═══════════════════════════════════════════════════════════════════════════


class TestWriteResult:
    def test_writes_json_document(self, tmp_path):
        result = discover(BASE_URI, make_node_list(make_node()))
        out = tmp_path / "nested" / "discovery.json"

        write_result(result, str(out))

        doc = json.loads(out.read_text())
        assert set(doc) == {"components", "redfish_endpoints", "ethernet_interfaces"}
        assert doc["components"][0] == {
            "ID": "x1000c1s7b0n0",
            "NID": 1,
            "Type": "Node",
            "State": "On",
            "Enabled": True,
        }
        rfe = doc["redfish_endpoints"][0]
        assert rfe["SchemaVersion"] == 1
        assert rfe["UID"] == rfe["Managers"][0]["uuid"]
        assert doc["ethernet_interfaces"][0]["IPAddresses"] == [
            {"IPAddress": "172.16.0.1", "Network": "nmn"}
        ]
