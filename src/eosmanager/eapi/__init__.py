"""
eAPI transport, response records and parsers.

Copyright (c) 2025 DNS Science.io, an After Dark Systems, LLC company.
All rights reserved.
"""

from eosmanager.eapi.client import EapiClient
from eosmanager.eapi.models import (
    BgpConfig,
    BgpNeighbor,
    InterfaceCounters,
    InterfaceMode,
    InterfaceRecord,
    InterfaceStatusEntry,
    InterfaceType,
    LldpNeighbor,
    StaticRouteRecord,
    SwitchSummary,
    VlanRecord,
)

__all__ = [
    "EapiClient",
    "BgpConfig",
    "BgpNeighbor",
    "InterfaceCounters",
    "InterfaceMode",
    "InterfaceRecord",
    "InterfaceStatusEntry",
    "InterfaceType",
    "LldpNeighbor",
    "StaticRouteRecord",
    "SwitchSummary",
    "VlanRecord",
]
