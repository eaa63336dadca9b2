"""
Network topology construction from LLDP data.

Walks the managed switches one at a time, asks each for its LLDP neighbors
and interface status, and stitches the answers into a graph in which each
device appears once. Discovery is best effort per switch: a switch that
fails to answer is logged and skipped.

Copyright (c) 2025 DNS Science.io, an After Dark Systems, LLC company.
All rights reserved.
"""

import asyncio
import logging
import re

from eosmanager.eapi.models import InterfaceStatusEntry, LldpNeighbor, SwitchSummary
from eosmanager.eapi.parsers import parse_interface_status, parse_lldp_neighbors
from eosmanager.exceptions import first_error
from eosmanager.services.base import BaseService
from eosmanager.topology.models import NodeType, TopologyGraph, TopologyLink, TopologyNode

logger = logging.getLogger(__name__)

# Checked in order; the first keyword found in the system description wins
NODE_TYPE_KEYWORDS = [
    (("switch", "arista"), NodeType.SWITCH),
    (("router", "gateway"), NodeType.ROUTER),
    (("server", "host"), NodeType.SERVER),
    (("ap", "access point"), NodeType.WIRELESS),
]

SWITCH_ROW_Y = 25
DEVICE_ROW_Y = 75


def classify_device(description: str) -> NodeType:
    """Guess a neighbor's device type from its LLDP system description."""
    text = (description or "").lower()
    for keywords, node_type in NODE_TYPE_KEYWORDS:
        if any(keyword in text for keyword in keywords):
            return node_type
    return NodeType.UNKNOWN


def neighbor_node_id(chassis_id: str) -> str:
    """Stable node id for a neighbor, derived from its chassis id."""
    return "device-" + re.sub(r"[^0-9A-Za-z]", "", chassis_id or "")


def position_nodes(nodes: list[TopologyNode]) -> None:
    """Lay nodes out in two rows: switches on top, everything else below.

    A lone node is centred. Positions are percentages of the canvas.
    """
    if not nodes:
        return

    if len(nodes) == 1:
        nodes[0].x = 50
        nodes[0].y = 50
        return

    switches = [node for node in nodes if node.type == NodeType.SWITCH]
    others = [node for node in nodes if node.type != NodeType.SWITCH]

    for row, y in ((switches, SWITCH_ROW_Y), (others, DEVICE_ROW_Y)):
        spacing = 100 / (len(row) + 1)
        for index, node in enumerate(row):
            node.x = spacing * (index + 1)
            node.y = y


class TopologyBuilder(BaseService):
    """Builds a TopologyGraph from the switches in a registry."""

    async def get_lldp_neighbors(self, switch_id: str) -> list[LldpNeighbor]:
        output = await self._show_text(switch_id, "show lldp neighbors detail")
        return parse_lldp_neighbors(output)

    async def get_interface_status(self, switch_id: str) -> dict[str, InterfaceStatusEntry]:
        output = await self._show_text(switch_id, "show interfaces status")
        return parse_interface_status(output)

    async def build_network_topology(
        self, switches: list[SwitchSummary] | None = None
    ) -> TopologyGraph:
        """Build the topology graph.

        Args:
            switches: Switches to start from; defaults to every switch in
                the registry

        Returns:
            TopologyGraph with unique node ids and laid-out positions
        """
        if switches is None:
            switches = self.registry.get_all_switch_data()

        graph = TopologyGraph()
        seen: set[str] = set()

        for switch in switches:
            if not switch.id or switch.id in seen:
                continue

            graph.nodes.append(TopologyNode(
                id=switch.id,
                name=switch.hostname or f"Switch-{switch.id}",
                type=NodeType.SWITCH,
                status="online",
                model=switch.model or "",
                ip_address=switch.ip_address or "",
            ))
            seen.add(switch.id)

            # Both calls settle before the next switch is queried
            neighbors, statuses = await asyncio.gather(
                self.get_lldp_neighbors(switch.id),
                self.get_interface_status(switch.id),
                return_exceptions=True,
            )
            error = first_error(neighbors, statuses)
            if error is not None:
                logger.error(f"Error processing switch {switch.id}: {error}")
                continue

            for neighbor in neighbors:
                node_id = neighbor_node_id(neighbor.remote_chassis_id)

                if node_id not in seen:
                    graph.nodes.append(TopologyNode(
                        id=node_id,
                        name=(
                            neighbor.remote_device_name
                            if neighbor.remote_device_name != "Unknown"
                            else f"Device-{node_id[7:13]}"
                        ),
                        type=classify_device(neighbor.remote_description),
                        status="discovered",
                    ))
                    seen.add(node_id)

                local_status = statuses.get(neighbor.local_port)
                graph.links.append(TopologyLink(
                    id=f"link-{switch.id}-{node_id}-{neighbor.local_port}",
                    source=switch.id,
                    target=node_id,
                    source_port=neighbor.local_port,
                    target_port=neighbor.remote_port,
                    status="up" if local_status and local_status.status == "connected" else "down",
                ))

        position_nodes(graph.nodes)
        logger.info(
            f"Built topology with {len(graph.nodes)} node(s) and {len(graph.links)} link(s)"
        )
        return graph
