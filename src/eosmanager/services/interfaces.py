"""
Interface inspection and configuration.

Copyright (c) 2025 DNS Science.io, an After Dark Systems, LLC company.
All rights reserved.
"""

import logging
from typing import Any

from eosmanager.eapi.models import InterfaceMode, InterfaceRecord
from eosmanager.eapi.parsers import INTERFACE_DETAIL_COMMANDS, parse_interface_details
from eosmanager.exceptions import EosManagerError, ValidationError
from eosmanager.services.base import BaseService
from eosmanager.services.validation import (
    sanitize_interface_name,
    sanitize_text,
    validate_vlan_id,
)

logger = logging.getLogger(__name__)


class InterfaceService(BaseService):
    """Read and change interface settings."""

    async def get_interface_details(self, switch_id: str) -> list[InterfaceRecord]:
        """Get merged details for every interface on a switch."""
        try:
            results = await self.registry.execute_commands(switch_id, INTERFACE_DETAIL_COMMANDS)
            return parse_interface_details(results)
        except EosManagerError as e:
            logger.error(f"Error getting interface details for {switch_id}: {e}")
            raise

    async def set_interface_description(
        self, switch_id: str, interface_name: str, description: str
    ) -> list[dict[str, Any]]:
        """Set an interface description."""
        name = sanitize_interface_name(interface_name)
        text = sanitize_text(description, "description")

        return await self._configure(switch_id, [
            f"interface {name}",
            f"description {text}" if text else "no description",
        ])

    async def set_interface_enabled(
        self, switch_id: str, interface_name: str, enabled: bool
    ) -> list[dict[str, Any]]:
        """Administratively enable or shut down an interface."""
        name = sanitize_interface_name(interface_name)

        return await self._configure(switch_id, [
            f"interface {name}",
            "no shutdown" if enabled else "shutdown",
        ])

    async def set_interface_mode(
        self,
        switch_id: str,
        interface_name: str,
        mode: InterfaceMode | str,
        vlan: int | None = None,
    ) -> list[dict[str, Any]]:
        """Switch an interface between access, trunk and routed.

        Access mode only pins the access VLAN when one is given.
        """
        name = sanitize_interface_name(interface_name)
        try:
            mode = InterfaceMode(mode)
        except ValueError:
            raise ValidationError(f"Invalid interface mode: {mode!r}") from None

        commands = [f"interface {name}"]
        if mode == InterfaceMode.ROUTED:
            commands.append("no switchport")
        elif mode == InterfaceMode.ACCESS:
            commands.append("switchport")
            if vlan:
                commands.append("switchport mode access")
                commands.append(f"switchport access vlan {validate_vlan_id(vlan)}")
        elif mode == InterfaceMode.TRUNK:
            commands.append("switchport")
            commands.append("switchport mode trunk")
        else:
            raise ValidationError(f"Cannot configure interface mode: {mode.value}")

        return await self._configure(switch_id, commands)
