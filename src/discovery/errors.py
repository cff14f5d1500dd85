"""Error taxonomy for the discovery engine.

Only ``InvalidBaseURI`` ever escapes :func:`src.discovery.pipeline.discover`;
every per-node anomaly is logged as a warning instead.
"""

from __future__ import annotations


class DiscoveryError(Exception):
    """Base class for all discovery exceptions."""


class InvalidBaseURI(DiscoveryError):
    """Raised when the inventory base URI is not a valid URI reference."""


class PayloadError(DiscoveryError):
    """Raised when a node payload cannot be loaded or is structurally malformed."""


class ConfigError(DiscoveryError):
    """Raised when the merged configuration is missing a required value."""


class XnameError(DiscoveryError, ValueError):
    """Raised when an xname does not follow the node naming grammar."""
