"""
Topology graph models.

Copyright (c) 2025 DNS Science.io, an After Dark Systems, LLC company.
All rights reserved.
"""

from dataclasses import dataclass, field, asdict
from enum import Enum
from typing import Any


class NodeType(str, Enum):
    """Kind of device a topology node represents."""

    SWITCH = "switch"
    ROUTER = "router"
    SERVER = "server"
    WIRELESS = "wireless"
    UNKNOWN = "unknown"


@dataclass
class TopologyNode:
    """A device in the topology. x and y are percentages (0-100)."""

    id: str
    name: str
    type: NodeType = NodeType.UNKNOWN
    status: str = "discovered"
    x: float = 0.0
    y: float = 0.0
    model: str = ""
    ip_address: str = ""

    def to_dict(self) -> dict[str, Any]:
        data = asdict(self)
        data["type"] = self.type.value
        return data


@dataclass
class TopologyLink:
    """A link reported by LLDP from a managed switch to a neighbor."""

    id: str
    source: str
    target: str
    source_port: str
    target_port: str
    status: str = "down"

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass
class TopologyGraph:
    """Nodes and links of the discovered network."""

    nodes: list[TopologyNode] = field(default_factory=list)
    links: list[TopologyLink] = field(default_factory=list)

    def get_node(self, node_id: str) -> TopologyNode | None:
        for node in self.nodes:
            if node.id == node_id:
                return node
        return None

    def to_dict(self) -> dict[str, Any]:
        return {
            "nodes": [node.to_dict() for node in self.nodes],
            "links": [link.to_dict() for link in self.links],
        }
