"""Discovery configuration: YAML file values merged with CLI overrides.

Override rule for every field: an explicit CLI value wins over the
config file, and the config file wins over the built-in default.

Config file layout::

    discovery:
      base_uri: https://smd.cluster.example
      payload_format: yaml
      log_level: INFO
      strict: false
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any

import yaml

from src.discovery.errors import ConfigError
from src.shared.config_loader import load_yaml

log = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class DiscoveryConfig:
    base_uri: str | None = None
    payload_format: str | None = None  # json | yaml, None = detect from extension
    log_level: str = "INFO"
    strict: bool = False  # fail the run when any warning was raised

    def merged(self, **overrides: Any) -> DiscoveryConfig:
        """Return a copy with every non-None override applied."""
        known = {f.name for f in fields(self)}
        unknown = set(overrides) - known
        if unknown:
            raise ConfigError(f"unknown config option(s): {', '.join(sorted(unknown))}")
        return replace(self, **{k: v for k, v in overrides.items() if v is not None})

    def require_base_uri(self) -> str:
        if not self.base_uri:
            raise ConfigError("no base URI configured (set discovery.base_uri or pass --base-uri)")
        return self.base_uri


def load_config(path: str | Path | None) -> DiscoveryConfig:
    """Read the ``discovery`` section of *path*; a missing file yields defaults."""
    if path is None or not Path(path).exists():
        log.debug("No discovery config at %s, using defaults", path)
        return DiscoveryConfig()

    try:
        raw = load_yaml(path)
    except yaml.YAMLError as exc:
        raise ConfigError(f"{path}: invalid YAML: {exc}") from exc

    section = (raw.get("discovery") or {}) if isinstance(raw, dict) else None
    if not isinstance(section, dict):
        raise ConfigError(f"{path}: 'discovery' must be a mapping")
    cfg = DiscoveryConfig().merged(**section)
    log.info("Loaded discovery config from %s", path)
    return cfg
