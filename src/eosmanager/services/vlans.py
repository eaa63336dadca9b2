"""
VLAN inspection and configuration.

Copyright (c) 2025 DNS Science.io, an After Dark Systems, LLC company.
All rights reserved.
"""

from typing import Any

from eosmanager.eapi.models import VlanRecord
from eosmanager.eapi.parsers import parse_vlans
from eosmanager.exceptions import IncompleteDataError
from eosmanager.services.base import BaseService
from eosmanager.services.validation import sanitize_text, validate_vlan_id


class VlanService(BaseService):
    """Create, rename, delete and list VLANs."""

    async def get_vlans(self, switch_id: str) -> list[VlanRecord]:
        result = await self._show(switch_id, "show vlan")
        vlans = result.get("vlans") if isinstance(result, dict) else None
        if not isinstance(vlans, dict):
            raise IncompleteDataError("Invalid VLAN data received")
        return parse_vlans(vlans)

    async def create_vlan(
        self, switch_id: str, vlan_id: int, vlan_name: str = ""
    ) -> list[dict[str, Any]]:
        vid = validate_vlan_id(vlan_id)
        name = sanitize_text(vlan_name, "VLAN name")

        commands = [f"vlan {vid}"]
        if name:
            commands.append(f"name {name}")
        return await self._configure(switch_id, commands)

    async def delete_vlan(self, switch_id: str, vlan_id: int) -> list[dict[str, Any]]:
        vid = validate_vlan_id(vlan_id)
        return await self._configure(switch_id, [f"no vlan {vid}"])

    async def rename_vlan(
        self, switch_id: str, vlan_id: int, new_name: str
    ) -> list[dict[str, Any]]:
        vid = validate_vlan_id(vlan_id)
        name = sanitize_text(new_name, "VLAN name")
        return await self._configure(switch_id, [
            f"vlan {vid}",
            f"name {name}" if name else "no name",
        ])
