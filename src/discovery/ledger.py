"""Per-run deduplication ledger for generated entities."""

from __future__ import annotations

from enum import Enum


class LedgerKind(str, Enum):
    COMPONENT = "component"  # keyed by node xname
    SYSTEM = "system"        # keyed by node xname
    MANAGER = "manager"      # keyed by BMC xname


class DedupLedger:
    """Three independent presence sets, one per entity kind.

    Create one ledger per discovery run and discard it afterwards.
    """

    def __init__(self) -> None:
        self._seen: dict[LedgerKind, set[str]] = {kind: set() for kind in LedgerKind}

    def present(self, kind: LedgerKind, key: str) -> bool:
        return key in self._seen[kind]

    def mark(self, kind: LedgerKind, key: str) -> None:
        self._seen[kind].add(key)

    def count(self, kind: LedgerKind) -> int:
        return len(self._seen[kind])
