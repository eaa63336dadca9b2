"""
LLDP-based network topology.

Copyright (c) 2025 DNS Science.io, an After Dark Systems, LLC company.
All rights reserved.
"""

from eosmanager.topology.builder import (
    TopologyBuilder,
    classify_device,
    neighbor_node_id,
    position_nodes,
)
from eosmanager.topology.models import NodeType, TopologyGraph, TopologyLink, TopologyNode

__all__ = [
    "TopologyBuilder",
    "classify_device",
    "neighbor_node_id",
    "position_nodes",
    "NodeType",
    "TopologyGraph",
    "TopologyLink",
    "TopologyNode",
]
