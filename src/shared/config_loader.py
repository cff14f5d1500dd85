"""Loading YAML configs and JSON/YAML node payloads."""

from __future__ import annotations

import json
import logging
import sys
from pathlib import Path
from typing import Any

import yaml

from src.discovery.errors import PayloadError

log = logging.getLogger(__name__)

PAYLOAD_FORMATS = ("json", "yaml")


def load_yaml(path: str | Path) -> dict[str, Any]:
    """Read a YAML file and return its contents as a dict.

    Args:
        path: Path to the file.

    Returns:
        File contents as a dictionary.

    Raises:
        FileNotFoundError: If the file does not exist.
    """
    p = Path(path)
    if not p.exists():
        raise FileNotFoundError(f"Config not found: {p}")
    with p.open("r", encoding="utf-8") as fh:
        data = yaml.safe_load(fh)
    log.debug("Loaded config %s (%d top-level keys)", p.name, len(data or {}))
    return data or {}


def detect_format(path: str) -> str:
    """Guess the payload format from the file extension (json by default)."""
    suffix = Path(path).suffix.lower()
    if suffix in (".yaml", ".yml"):
        return "yaml"
    return "json"


def load_payload(path: str, fmt: str | None = None) -> Any:
    """Read a JSON or YAML payload file; ``-`` reads standard input.

    Raises:
        PayloadError: Unknown format, missing file or undecodable content.
    """
    fmt = (fmt or detect_format(path)).lower()
    if fmt not in PAYLOAD_FORMATS:
        raise PayloadError(f"unknown payload format '{fmt}' (expected one of: {', '.join(PAYLOAD_FORMATS)})")

    try:
        if path == "-":
            text = sys.stdin.read()
        else:
            text = Path(path).read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise PayloadError(f"unable to read payload {path}: {exc}") from exc

    try:
        data = yaml.safe_load(text) if fmt == "yaml" else json.loads(text)
    except (json.JSONDecodeError, yaml.YAMLError) as exc:
        raise PayloadError(f"unable to decode {fmt} payload {path}: {exc}") from exc

    log.debug("Loaded %s payload from %s", fmt, "stdin" if path == "-" else path)
    return data
