"""CLI entry-point for fake node discovery.

Usage examples
--------------
# Generate SMD records from a YAML payload:
discovery --payload nodes.yaml --base-uri https://smd.cluster.example

# Read JSON from stdin, take the base URI from the config file:
cat nodes.json | discovery --payload - --format json --config config/discovery.yaml

# Refuse duplicate or malformed xnames:
discovery --payload nodes.yaml --strict
"""

from __future__ import annotations

import argparse
import logging

from src.contracts.node import NodeList
from src.discovery.config import load_config
from src.discovery.errors import DiscoveryError
from src.discovery.groups import build_groups
from src.discovery.pipeline import discover, write_result
from src.shared.config_loader import PAYLOAD_FORMATS, load_payload
from src.shared.logger import LOG_LEVELS, setup_logging

log = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="discovery",
        description="Fake discovery -- node payload -> SMD components, Redfish endpoints, interfaces",
    )
    p.add_argument(
        "--payload",
        required=True,
        help="Node payload file (JSON or YAML). Use '-' to read standard input.",
    )
    p.add_argument(
        "--format",
        dest="payload_format",
        default=None,
        choices=list(PAYLOAD_FORMATS),
        help="Payload format. Default: detected from the file extension, json for stdin.",
    )
    p.add_argument(
        "--base-uri",
        default=None,
        help="Base URI of the inventory service. Overrides discovery.base_uri from --config.",
    )
    p.add_argument(
        "--config",
        default="config/discovery.yaml",
        help="Discovery config YAML (default: config/discovery.yaml). Missing file = defaults.",
    )
    p.add_argument(
        "--out",
        default="out/discovery.json",
        help="Output JSON path (default: out/discovery.json)",
    )
    p.add_argument(
        "--strict",
        action="store_true",
        default=None,
        help="Exit with status 1 without writing --out if any warning (duplicate xname, "
        "bad xname, zero UUID, deprecated 'group' field) was raised.",
    )
    p.add_argument(
        "--log-level",
        default=None,
        choices=list(LOG_LEVELS),
        help="Logging level. Default: INFO",
    )
    return p


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    try:
        cfg = load_config(args.config).merged(
            base_uri=args.base_uri,
            payload_format=args.payload_format,
            log_level=args.log_level,
            strict=args.strict,
        )
        setup_logging(cfg.log_level)

        node_list = NodeList.from_dict(load_payload(args.payload, cfg.payload_format))
        log.debug("Loaded node list: %s", node_list)

        result = discover(cfg.require_base_uri(), node_list)
    except DiscoveryError as exc:
        log.error("%s", exc)
        return 1

    groups = build_groups(node_list, result.warnings)

    if cfg.strict and result.warnings:
        log.error("Strict mode: %d warning(s) raised, nothing written", len(result.warnings))
        return 1

    write_result(result, args.out, groups)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
