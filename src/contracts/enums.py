"""Canonical enumerations for the inventory contract."""

from __future__ import annotations

from enum import Enum


class ComponentType(str, Enum):
    NODE = "Node"
    NODE_BMC = "NodeBMC"


class ComponentState(str, Enum):
    ON = "On"
    OFF = "Off"
    READY = "Ready"


class ResetAction(str, Enum):
    """Redfish ``ResetType`` values (Redfish Reference 6.5.5.1)."""

    ON = "On"
    FORCE_OFF = "ForceOff"
    GRACEFUL_SHUTDOWN = "GracefulShutdown"
    GRACEFUL_RESTART = "GracefulRestart"
    FORCE_RESTART = "ForceRestart"
    NMI = "Nmi"
    FORCE_ON = "ForceOn"
    PUSH_POWER_BUTTON = "PushPowerButton"
    POWER_CYCLE = "PowerCycle"
    SUSPEND = "Suspend"
    PAUSE = "Pause"
    RESUME = "Resume"
