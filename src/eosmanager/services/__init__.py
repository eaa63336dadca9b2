"""
Domain services built on the session registry.

Copyright (c) 2025 DNS Science.io, an After Dark Systems, LLC company.
All rights reserved.
"""

from eosmanager.services.commands import CommandService
from eosmanager.services.interfaces import InterfaceService
from eosmanager.services.routing import RoutingService
from eosmanager.services.vlans import VlanService

__all__ = [
    "CommandService",
    "InterfaceService",
    "RoutingService",
    "VlanService",
]
