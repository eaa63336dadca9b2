"""
Static route and BGP inspection and configuration.

Copyright (c) 2025 DNS Science.io, an After Dark Systems, LLC company.
All rights reserved.
"""

import logging
from typing import Any

from eosmanager.eapi.models import BgpConfig, StaticRouteRecord
from eosmanager.eapi.parsers import (
    parse_bgp_neighbors,
    parse_bgp_summary,
    parse_static_routes,
)
from eosmanager.exceptions import RemoteCommandError
from eosmanager.services.base import BaseService
from eosmanager.services.validation import (
    validate_admin_distance,
    validate_asn,
    validate_ip_address,
    validate_prefix,
)

logger = logging.getLogger(__name__)


class RoutingService(BaseService):
    """Static routes and BGP peering."""

    # =========================================================================
    # Static routes
    # =========================================================================

    async def get_static_routes(self, switch_id: str) -> list[StaticRouteRecord]:
        output = await self._show_text(switch_id, "show ip route static")
        return parse_static_routes(output)

    async def add_static_route(
        self,
        switch_id: str,
        prefix: str,
        next_hop: str,
        admin_distance: int = 1,
    ) -> list[dict[str, Any]]:
        """Add a static route.

        The distance is only written when it differs from the default of 1.
        """
        validate_prefix(prefix)
        validate_ip_address(next_hop, "next hop IP address")
        distance = validate_admin_distance(admin_distance)

        command = f"ip route {prefix} {next_hop}"
        if distance != 1:
            command += f" {distance}"
        return await self._configure(switch_id, [command])

    async def delete_static_route(
        self, switch_id: str, prefix: str, next_hop: str
    ) -> list[dict[str, Any]]:
        validate_prefix(prefix)
        validate_ip_address(next_hop, "next hop IP address")
        return await self._configure(switch_id, [f"no ip route {prefix} {next_hop}"])

    # =========================================================================
    # BGP
    # =========================================================================

    async def get_bgp_config(self, switch_id: str) -> BgpConfig:
        """Get the BGP process state and its neighbors.

        Neighbor detail is only fetched when the summary shows a local AS.
        """
        try:
            summary = await self._show_text(switch_id, "show ip bgp summary")
        except RemoteCommandError as e:
            if "not enabled" in e.message:
                return BgpConfig.disabled()
            raise

        config = parse_bgp_summary(summary)
        if not config.asn:
            return config

        detail = await self._show_text(switch_id, "show ip bgp neighbors")
        if detail:
            config.neighbors = parse_bgp_neighbors(detail)
        return config

    async def configure_bgp(
        self, switch_id: str, asn: int, router_id: str | None = None
    ) -> list[dict[str, Any]]:
        local_asn = validate_asn(asn)
        commands = [f"router bgp {local_asn}"]
        if router_id:
            validate_ip_address(router_id, "router ID")
            commands.append(f"router-id {router_id}")
        return await self._configure(switch_id, commands)

    async def add_bgp_neighbor(
        self, switch_id: str, asn: int, neighbor_ip: str, remote_asn: int
    ) -> list[dict[str, Any]]:
        local_asn = validate_asn(asn)
        validate_ip_address(neighbor_ip, "neighbor IP address")
        peer_asn = validate_asn(remote_asn, "remote ASN")
        return await self._configure(switch_id, [
            f"router bgp {local_asn}",
            f"neighbor {neighbor_ip} remote-as {peer_asn}",
        ])

    async def remove_bgp_neighbor(
        self, switch_id: str, asn: int, neighbor_ip: str
    ) -> list[dict[str, Any]]:
        local_asn = validate_asn(asn)
        validate_ip_address(neighbor_ip, "neighbor IP address")
        return await self._configure(switch_id, [
            f"router bgp {local_asn}",
            f"no neighbor {neighbor_ip}",
        ])
