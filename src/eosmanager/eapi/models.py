"""
Data models for parsed switch state.

Copyright (c) 2025 DNS Science.io, an After Dark Systems, LLC company.
All rights reserved.
"""

from dataclasses import dataclass, field, asdict
from enum import Enum
from typing import Any


class InterfaceType(str, Enum):
    """Interface type, derived from the name prefix."""

    ETHERNET = "ethernet"
    MANAGEMENT = "management"
    PORT_CHANNEL = "port-channel"
    VLAN = "vlan"
    LOOPBACK = "loopback"
    OTHER = "other"


class InterfaceMode(str, Enum):
    """Switchport mode."""

    ACCESS = "access"
    TRUNK = "trunk"
    ROUTED = "routed"
    UNKNOWN = "unknown"


@dataclass
class SwitchSummary:
    """Snapshot of a switch built from the info command bundle."""

    id: str
    hostname: str = "Unknown"
    model: str = "Unknown"
    ip_address: str = ""
    status: str = "online"
    uptime: str = "Unknown"
    cpu_usage: int = 0
    memory_usage: int = 0
    temperature: int = 0
    active_interfaces: int = 0
    total_interfaces: int = 0
    version: str = "Unknown"
    serial_number: str = "Unknown"
    system_mac_address: str = "Unknown"
    interfaces: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return asdict(self)


@dataclass
class InterfaceCounters:
    """Traffic and error counters for an interface."""

    input_errors: int = 0
    output_errors: int = 0
    input_bytes: int = 0
    output_bytes: int = 0
    input_packets: int = 0
    output_packets: int = 0


@dataclass
class InterfaceRecord:
    """Merged view of one interface across the interface show commands."""

    name: str
    type: InterfaceType = InterfaceType.OTHER
    description: str = ""
    status: str = "down"
    enabled: bool = True
    speed: int = 0
    vlan: int | None = None
    mode: InterfaceMode = InterfaceMode.ROUTED
    mac_address: str = ""
    ip_address: str = ""
    ip_prefix_length: int = 0
    mtu: int = 0
    counters: InterfaceCounters = field(default_factory=InterfaceCounters)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        data = asdict(self)
        data["type"] = self.type.value
        data["mode"] = self.mode.value
        return data


@dataclass
class VlanRecord:
    """A VLAN configured on a switch."""

    id: int
    name: str = ""
    status: str = "active"
    interfaces: list[str] = field(default_factory=list)
    dynamic: bool = False

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return asdict(self)


@dataclass
class StaticRouteRecord:
    """A static route parsed from the routing table.

    (prefix, next_hop) is the natural key: a switch may carry several
    routes to one prefix through different next hops.
    """

    id: str
    prefix: str
    next_hop: str
    admin_distance: int = 1
    metric: int = 0
    type: str = "static"

    @property
    def key(self) -> tuple[str, str]:
        return (self.prefix, self.next_hop)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return asdict(self)


@dataclass
class BgpNeighbor:
    """A BGP peer."""

    ip: str
    remote_asn: int | None = None
    state: str = "Idle"
    uptime: str = "never"
    prefixes_received: int = 0
    prefixes_sent: int = 0

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return asdict(self)


@dataclass
class BgpConfig:
    """BGP process state."""

    enabled: bool = False
    asn: int | None = None
    router_id: str | None = None
    neighbors: list[BgpNeighbor] = field(default_factory=list)

    @classmethod
    def disabled(cls) -> "BgpConfig":
        """Zero value returned when BGP is not running."""
        return cls()

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "enabled": self.enabled,
            "asn": self.asn,
            "router_id": self.router_id,
            "neighbors": [n.to_dict() for n in self.neighbors],
        }


@dataclass
class LldpNeighbor:
    """A neighbor entry from 'show lldp neighbors detail'."""

    local_port: str
    remote_chassis_id: str = "Unknown"
    remote_port: str = "Unknown"
    remote_device_name: str = "Unknown"
    remote_description: str = ""
    remote_port_description: str = ""
    link_type: str = "physical"

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return asdict(self)


@dataclass
class InterfaceStatusEntry:
    """One row of the text form of 'show interfaces status'."""

    status: str
    vlan: str = "N/A"
    duplex: str = "unknown"
    speed: str = "unknown"
    type: str = ""

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return asdict(self)
