"""Best-effort UUID issuance for fake BMC Systems and Managers."""

from __future__ import annotations

import logging
import uuid
from collections.abc import Callable
from typing import NamedTuple

from src.contracts.smd import NIL_UUID

log = logging.getLogger(__name__)

UidFactory = Callable[[], uuid.UUID]


class UidResult(NamedTuple):
    value: uuid.UUID
    ok: bool


def issue_uid(factory: UidFactory = uuid.uuid4) -> UidResult:
    """Generate a random UUID.

    A failing entropy source never propagates: the nil UUID is returned
    with ``ok=False`` and the caller decides whether to warn.
    """
    try:
        return UidResult(factory(), True)
    except (OSError, NotImplementedError, ValueError) as exc:
        log.debug("UUID generation failed: %s", exc)
        return UidResult(NIL_UUID, False)
