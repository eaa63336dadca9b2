"""
Parsers for eAPI command results.

Raw command output (JSON results or free-text ``output`` blocks) goes in,
model dataclasses come out. Every parser:
  - Is a pure function with no I/O
  - Degrades missing optional fields to documented defaults
  - Skips unrecognised lines instead of raising mid-scan
  - Raises IncompleteDataError only when required results are absent

Copyright (c) 2025 DNS Science.io, an After Dark Systems, LLC company.
All rights reserved.
"""

import math
import re
import uuid
from typing import Any

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
from eosmanager.eapi.responses import (
    HostnameResponse,
    InterfaceDescriptionsResponse,
    InterfacesResponse,
    InterfaceStatusResponse,
    IpInterfaceBriefResponse,
    ProcessesResponse,
    TemperatureResponse,
    VersionResponse,
)
from eosmanager.exceptions import IncompleteDataError

# Commands whose results parse_switch_info expects, in order
SWITCH_INFO_COMMANDS = [
    "show version",
    "show hostname",
    "show interfaces status",
    "show ip interface brief",
    "show system environment temperature",
    "show system environment cooling",
    "show processes top once",
]

# Commands whose results parse_interface_details expects, in order
INTERFACE_DETAIL_COMMANDS = [
    "show interfaces",
    "show interfaces status",
    "show interfaces description",
    "show ip interface brief",
]

MIN_SWITCH_INFO_RESULTS = 4
MANAGEMENT_INTERFACE = "Management1"

_IPV4 = r"\d+\.\d+\.\d+\.\d+"

STATIC_ROUTE_RE = re.compile(
    rf"^S\s+({_IPV4}/\d+)(?:\s+\[(\d+)/(\d+)\])?\s+(?:via\s+)?({_IPV4})",
    re.MULTILINE,
)
BGP_ROUTER_ID_RE = re.compile(
    rf"BGP router identifier ({_IPV4}), local AS number (\d+)"
)
BGP_SUMMARY_NEIGHBOR_RE = re.compile(rf"^({_IPV4})\s+\d+\s+(\d+)\s+", re.MULTILINE)

# Interface name prefixes that never represent front-panel ports
_EXCLUDED_INTERFACE_PREFIXES = ("CPU", "Loop")

_INTERFACE_TYPE_PREFIXES = [
    ("Ethernet", InterfaceType.ETHERNET),
    ("Management", InterfaceType.MANAGEMENT),
    ("Port-Channel", InterfaceType.PORT_CHANNEL),
    ("Vlan", InterfaceType.VLAN),
    ("Loopback", InterfaceType.LOOPBACK),
]


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def _result(results: list[Any], index: int) -> Any:
    return results[index] if index < len(results) else None


def _int_or(value: Any, default: int = 0) -> int:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return default
    return int(value)


# ============================================================
# Switch summary
# ============================================================

def format_uptime(uptime_seconds: float | None) -> str:
    """Format uptime in seconds as 'Xd Yh Zm'."""
    if uptime_seconds is None:
        return "Unknown"

    days = int(uptime_seconds // 86400)
    hours = int((uptime_seconds % 86400) // 3600)
    minutes = int((uptime_seconds % 3600) // 60)

    return f"{days}d {hours}h {minutes}m"


def parse_switch_info(results: list[Any] | None) -> SwitchSummary:
    """Build a SwitchSummary from the SWITCH_INFO_COMMANDS results.

    The first four results are required. Temperature and process data are
    best-effort; when absent, temperature, CPU and memory degrade to 0.
    Memory is also 0 without a positive memTotal. CPU and memory are
    clamped to 0-100.
    The cooling result (index 5) is not used.

    Raises:
        IncompleteDataError: if fewer than four results are present
    """
    if not results or len(results) < MIN_SWITCH_INFO_RESULTS:
        raise IncompleteDataError("Incomplete data received from switch")

    version = VersionResponse.from_api_response(results[0])
    hostname = HostnameResponse.from_api_response(results[1])
    statuses = InterfaceStatusResponse.from_api_response(results[2])
    ip_brief = IpInterfaceBriefResponse.from_api_response(results[3])

    raw_temperature = _result(results, 4)
    raw_processes = _result(results, 6)

    active = sum(
        1 for name in statuses.interface_statuses
        if statuses.link_status(name) == "connected"
    )

    cpu_usage = 0
    memory_usage = 0
    if raw_processes is not None:
        processes = ProcessesResponse.from_api_response(raw_processes)
        cpu_usage = min(max(_round_half_up(sum(processes.cpu_percentages)), 0), 100)
        mem_total = processes.mem_total
        if mem_total and mem_total > 0:
            mem_free = processes.mem_free or 0
            memory_usage = min(max(_round_half_up((mem_total - mem_free) / mem_total * 100), 0), 100)

    temperature = 0
    if raw_temperature is not None:
        readings = TemperatureResponse.from_api_response(raw_temperature).readings
        if readings:
            temperature = _round_half_up(sum(readings) / len(readings))

    management_ip, _ = ip_brief.address_of(MANAGEMENT_INTERFACE)

    return SwitchSummary(
        id=version.serial_number or uuid.uuid4().hex[:8],
        hostname=hostname.hostname or "Unknown",
        model=version.model_name or "Unknown",
        ip_address=management_ip,
        status="online",
        uptime=format_uptime(version.uptime),
        cpu_usage=cpu_usage,
        memory_usage=memory_usage,
        temperature=temperature,
        active_interfaces=active,
        total_interfaces=len(statuses.interface_statuses),
        version=version.version or "Unknown",
        serial_number=version.serial_number or "Unknown",
        system_mac_address=version.system_mac_address or "Unknown",
        interfaces=statuses.interface_statuses,
    )


# ============================================================
# Interfaces
# ============================================================

def determine_interface_type(name: str) -> InterfaceType:
    """Derive the interface type from its name prefix."""
    for prefix, interface_type in _INTERFACE_TYPE_PREFIXES:
        if name.startswith(prefix):
            return interface_type
    return InterfaceType.OTHER


def determine_interface_mode(status: dict[str, Any]) -> InterfaceMode:
    """Derive the switchport mode from an interface status entry."""
    vlan_info = status.get("vlanInformation")
    if not isinstance(vlan_info, dict):
        return InterfaceMode.ROUTED

    mode = vlan_info.get("interfaceMode")
    if mode == "access":
        return InterfaceMode.ACCESS
    if mode == "trunk":
        return InterfaceMode.TRUNK
    return InterfaceMode.UNKNOWN


def interface_sort_key(name: str) -> tuple:
    """Sort key for interface names.

    Ethernet ports compare numerically on every number in the name
    (Ethernet2 < Ethernet10, Ethernet1/2 < Ethernet1/10). Everything else,
    including Ethernet against non-Ethernet, compares by code point, which
    places all Ethernet ports exactly where the bare word "Ethernet" sorts.
    """
    if name.startswith("Ethernet"):
        return ("Ethernet", tuple(int(n) for n in re.findall(r"\d+", name)), name)
    return (name, (), "")


def parse_interface_details(results: list[Any] | None) -> list[InterfaceRecord]:
    """Merge the INTERFACE_DETAIL_COMMANDS results into InterfaceRecords.

    Raises:
        IncompleteDataError: if fewer than four results are present
    """
    if not results or len(results) < len(INTERFACE_DETAIL_COMMANDS):
        raise IncompleteDataError("Incomplete interface data received")

    base = InterfacesResponse.from_api_response(results[0]).interfaces
    statuses = InterfaceStatusResponse.from_api_response(results[1]).interface_statuses
    descriptions = InterfaceDescriptionsResponse.from_api_response(results[2]).descriptions
    ip_brief = IpInterfaceBriefResponse.from_api_response(results[3])

    names = set(base) | set(statuses) | set(descriptions) | set(ip_brief.interfaces)

    records = []
    for name in names:
        if name.startswith(_EXCLUDED_INTERFACE_PREFIXES):
            continue

        base_data = base.get(name, {})
        status = statuses.get(name, {})
        counters = base_data.get("interfaceCounters") or base_data.get("counters") or {}
        if not isinstance(counters, dict):
            counters = {}
        vlan_info = status.get("vlanInformation")
        vlan_id = vlan_info.get("vlanId") if isinstance(vlan_info, dict) else None
        ip_address, prefix_length = ip_brief.address_of(name)

        records.append(InterfaceRecord(
            name=name,
            type=determine_interface_type(name),
            description=descriptions.get(name, ""),
            status="up" if status.get("linkStatus") == "connected" else "down",
            enabled=status.get("interfaceStatus") not in ("disabled", "notconnect"),
            speed=_int_or(status.get("bandwidth")) or _int_or(base_data.get("bandwidth")),
            vlan=_int_or(vlan_id) or None,
            mode=determine_interface_mode(status),
            mac_address=base_data.get("physicalAddress") or "",
            ip_address=ip_address,
            ip_prefix_length=prefix_length,
            mtu=_int_or(base_data.get("mtu")),
            counters=InterfaceCounters(
                input_errors=_int_or(counters.get("inputErrors")),
                output_errors=_int_or(counters.get("outputErrors")),
                input_bytes=_int_or(counters.get("inOctets")),
                output_bytes=_int_or(counters.get("outOctets")),
                input_packets=_int_or(counters.get("inUcastPkts")),
                output_packets=_int_or(counters.get("outUcastPkts")),
            ),
        ))

    return sorted(records, key=lambda record: interface_sort_key(record.name))


def _header_columns(header: str) -> list[tuple[str, int]]:
    return [(m.group(0).lower(), m.start()) for m in re.finditer(r"\S+", header)]


def _slice_columns(line: str, columns: list[tuple[str, int]]) -> dict[str, str] | None:
    """Cut a row at the header offsets, None if a value straddles a column edge."""
    for _, start in columns[1:]:
        if start < len(line) and not line[start - 1].isspace():
            return None

    fields = {}
    for index, (name, start) in enumerate(columns):
        end = columns[index + 1][1] if index + 1 < len(columns) else None
        fields[name] = line[start:end].strip()
    return fields


def parse_interface_status(output: str) -> dict[str, InterfaceStatusEntry]:
    """Parse the text form of 'show interfaces status'.

    Lines before the 'Port ... Status ... Vlan' header are ignored. Rows are
    cut at the header's column offsets so an empty or multi-word Name column
    does not shift the fields; rows too short for that are split on
    whitespace instead. Rows with fewer than three fields are skipped.
    """
    interfaces: dict[str, InterfaceStatusEntry] = {}
    columns: list[tuple[str, int]] | None = None

    for line in (output or "").strip().splitlines():
        if columns is None:
            if "Port" in line and "Status" in line and "Vlan" in line:
                columns = _header_columns(line)
            continue

        fields = _slice_columns(line, columns) or {}
        if fields.get("port") and fields.get("status") and fields.get("vlan"):
            port, status, vlan = fields["port"], fields["status"], fields["vlan"]
            duplex = fields.get("duplex") or "unknown"
            speed = fields.get("speed") or "unknown"
            port_type = fields.get("type", "")
        else:
            parts = line.split()
            if len(parts) < 3:
                continue
            port, status, vlan = parts[0], parts[1], parts[2]
            duplex = parts[3] if len(parts) > 3 else "unknown"
            speed = parts[4] if len(parts) > 4 else "unknown"
            port_type = " ".join(parts[5:])

        interfaces[port] = InterfaceStatusEntry(
            status=status.lower(),
            vlan=vlan if vlan != "routed" else "N/A",
            duplex=duplex,
            speed=speed,
            type=port_type,
        )

    return interfaces


# ============================================================
# VLANs
# ============================================================

def parse_vlans(vlans: dict[str, Any] | None) -> list[VlanRecord]:
    """Convert the 'vlans' object of 'show vlan' into sorted VlanRecords."""
    if not isinstance(vlans, dict):
        return []

    records = []
    for vlan_id, info in vlans.items():
        try:
            numeric_id = int(vlan_id)
        except (TypeError, ValueError):
            continue
        info = info if isinstance(info, dict) else {}
        members = info.get("interfaces")

        records.append(VlanRecord(
            id=numeric_id,
            name=info.get("name") or "",
            status=info.get("status") or "active",
            interfaces=list(members) if isinstance(members, dict) else [],
            dynamic=bool(info.get("dynamic", False)),
        ))

    return sorted(records, key=lambda record: record.id)


# ============================================================
# Routing
# ============================================================

def parse_static_routes(output: str) -> list[StaticRouteRecord]:
    """Parse static routes from the text of 'show ip route static'.

    Matches 'S <prefix>/<len> [<distance>/<metric>] via <next hop>' where the
    bracketed pair and the word 'via' are optional.
    """
    routes = []
    for match in STATIC_ROUTE_RE.finditer(output or ""):
        routes.append(StaticRouteRecord(
            id=f"static-{len(routes) + 1}",
            prefix=match.group(1),
            next_hop=match.group(4),
            admin_distance=int(match.group(2)) if match.group(2) else 1,
            metric=int(match.group(3)) if match.group(3) else 0,
        ))
    return routes


def parse_bgp_summary(output: str) -> BgpConfig:
    """Parse the text of 'show ip bgp summary'.

    Returns BgpConfig.disabled() when BGP is not active or the router
    identifier line is missing.
    """
    output = output or ""
    if "BGP not active" in output:
        return BgpConfig.disabled()

    match = BGP_ROUTER_ID_RE.search(output)
    if not match:
        return BgpConfig.disabled()

    config = BgpConfig(enabled=True, router_id=match.group(1), asn=int(match.group(2)))
    for row in BGP_SUMMARY_NEIGHBOR_RE.finditer(output):
        config.neighbors.append(BgpNeighbor(ip=row.group(1), remote_asn=int(row.group(2))))

    return config


def parse_bgp_neighbors(output: str) -> list[BgpNeighbor]:
    """Parse the text of 'show ip bgp neighbors' into BgpNeighbors."""
    neighbors = []

    for section in (output or "").split("BGP neighbor is ")[1:]:
        ip_match = re.match(_IPV4, section)
        if not ip_match:
            continue

        neighbor = BgpNeighbor(ip=ip_match.group(0))

        remote_as = re.search(r"Remote AS (\d+)", section)
        if remote_as:
            neighbor.remote_asn = int(remote_as.group(1))

        state = re.search(r"BGP state = (\w+)", section)
        if state:
            neighbor.state = state.group(1)

        uptime = re.search(r"Uptime: ([\d:]+)", section)
        if uptime:
            neighbor.uptime = uptime.group(1)

        prefixes = re.search(r"(\d+) accepted prefixes", section)
        if prefixes:
            neighbor.prefixes_received = int(prefixes.group(1))

        neighbors.append(neighbor)

    return neighbors


# ============================================================
# LLDP
# ============================================================

def parse_lldp_neighbors(output: str) -> list[LldpNeighbor]:
    """Parse the text of 'show lldp neighbors detail'.

    Sections start at 'Port : '. Missing fields fall back to 'Unknown'
    (identity fields) or '' (descriptions).
    """
    neighbors = []

    for section in (output or "").split("Port : ")[1:]:
        port = re.match(r"(\S+)", section)
        if not port:
            continue

        chassis_id = re.search(r"Chassis id\s*:\s*(\S+)", section, re.IGNORECASE)
        port_id = re.search(r"Port id\s*:\s*([^\r\n]+)", section, re.IGNORECASE)
        system_name = re.search(r'System Name\s*:\s*"([^"]+)"', section, re.IGNORECASE)
        system_desc = re.search(r'System Description\s*:\s*"([^"]+)"', section, re.IGNORECASE)
        port_desc = re.search(r'Port Description\s*:\s*"([^"]+)"', section, re.IGNORECASE)

        neighbors.append(LldpNeighbor(
            local_port=port.group(1),
            remote_chassis_id=chassis_id.group(1) if chassis_id else "Unknown",
            remote_port=port_id.group(1).strip() if port_id else "Unknown",
            remote_device_name=system_name.group(1) if system_name else "Unknown",
            remote_description=system_desc.group(1) if system_desc else "",
            remote_port_description=port_desc.group(1) if port_desc else "",
        ))

    return neighbors
