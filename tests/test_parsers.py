"""
Tests for eosmanager.eapi.parsers.
"""

import copy

import pytest

from conftest import (
    BGP_NEIGHBORS_OUTPUT,
    BGP_SUMMARY_OUTPUT,
    INTERFACE_STATUS_OUTPUT,
    LLDP_DETAIL_OUTPUT,
    STATIC_ROUTES_OUTPUT,
    make_switch_info,
)
from eosmanager.eapi.models import InterfaceMode, InterfaceType
from eosmanager.eapi.parsers import (
    determine_interface_mode,
    determine_interface_type,
    format_uptime,
    interface_sort_key,
    parse_bgp_neighbors,
    parse_bgp_summary,
    parse_interface_details,
    parse_interface_status,
    parse_lldp_neighbors,
    parse_static_routes,
    parse_switch_info,
    parse_vlans,
)
from eosmanager.exceptions import IncompleteDataError


# ============================================================
# Switch summary
# ============================================================

def test_format_uptime() -> None:
    assert format_uptime(93784.5) == "1d 2h 3m"
    assert format_uptime(0) == "0d 0h 0m"
    assert format_uptime(None) == "Unknown"


def test_parse_switch_info() -> None:
    summary = parse_switch_info(make_switch_info("SSJ0001", "leaf1", "10.0.0.1"))

    assert summary.id == "SSJ0001"
    assert summary.serial_number == "SSJ0001"
    assert summary.hostname == "leaf1"
    assert summary.model == "DCS-7050TX-64"
    assert summary.version == "4.28.3M"
    assert summary.ip_address == "10.0.0.1"
    assert summary.status == "online"
    assert summary.uptime == "1d 2h 3m"
    assert summary.cpu_usage == 17
    assert summary.memory_usage == 75
    assert summary.temperature == 43  # mean 42.5 rounds half up
    assert summary.active_interfaces == 2
    assert summary.total_interfaces == 3
    assert set(summary.interfaces) == {"Ethernet1", "Ethernet2", "Management1"}


def test_parse_switch_info_is_idempotent() -> None:
    results = make_switch_info()
    snapshot = copy.deepcopy(results)

    assert parse_switch_info(results) == parse_switch_info(results)
    assert results == snapshot


def test_parse_switch_info_requires_four_results() -> None:
    with pytest.raises(IncompleteDataError):
        parse_switch_info(make_switch_info()[:3])
    with pytest.raises(IncompleteDataError):
        parse_switch_info([])
    with pytest.raises(IncompleteDataError):
        parse_switch_info(None)


def test_parse_switch_info_without_optional_results() -> None:
    summary = parse_switch_info(make_switch_info()[:4])

    assert summary.cpu_usage == 0
    assert summary.memory_usage == 0
    assert summary.temperature == 0


def test_parse_switch_info_clamps_cpu() -> None:
    summary = parse_switch_info(make_switch_info(cpu=(80.0, 70.0)))
    assert summary.cpu_usage == 100


def test_parse_switch_info_memory_needs_positive_total() -> None:
    for processes in (
        {"processes": {}, "memFree": 500},
        {"processes": {}, "memTotal": 0, "memFree": 500},
        {"processes": {}},
    ):
        results = make_switch_info()
        results[6] = processes

        assert parse_switch_info(results).memory_usage == 0


def test_parse_switch_info_clamps_memory() -> None:
    over_free = parse_switch_info(make_switch_info(mem_total=100, mem_free=150))
    all_used = parse_switch_info(make_switch_info(mem_total=100, mem_free=-50))

    assert over_free.memory_usage == 0
    assert all_used.memory_usage == 100


def test_parse_switch_info_reads_legacy_temperature_sensors() -> None:
    results = make_switch_info()
    results[4] = {"sensors": {"s1": {"temperature": 30}, "s2": {"temperature": 0}}}

    assert parse_switch_info(results).temperature == 30


def test_parse_switch_info_without_serial_generates_id() -> None:
    results = make_switch_info()
    del results[0]["serialNumber"]

    summary = parse_switch_info(results)

    assert len(summary.id) == 8
    assert summary.serial_number == "Unknown"


# ============================================================
# Interfaces
# ============================================================

def test_determine_interface_type() -> None:
    assert determine_interface_type("Ethernet1/1") == InterfaceType.ETHERNET
    assert determine_interface_type("Management1") == InterfaceType.MANAGEMENT
    assert determine_interface_type("Port-Channel10") == InterfaceType.PORT_CHANNEL
    assert determine_interface_type("Vlan100") == InterfaceType.VLAN
    assert determine_interface_type("Loopback0") == InterfaceType.LOOPBACK
    assert determine_interface_type("Tunnel1") == InterfaceType.OTHER


def test_determine_interface_mode() -> None:
    assert determine_interface_mode({}) == InterfaceMode.ROUTED
    assert determine_interface_mode({"vlanInformation": {"interfaceMode": "access"}}) == InterfaceMode.ACCESS
    assert determine_interface_mode({"vlanInformation": {"interfaceMode": "trunk"}}) == InterfaceMode.TRUNK
    assert determine_interface_mode({"vlanInformation": {"interfaceMode": "dot1q"}}) == InterfaceMode.UNKNOWN


def test_interface_sort_key_orders_ethernet_numerically() -> None:
    names = ["Ethernet10", "Vlan1", "Ethernet2", "Ethernet1/10", "Ethernet1/2", "Management1"]

    ordered = sorted(names, key=interface_sort_key)

    assert ordered == ["Ethernet1/2", "Ethernet1/10", "Ethernet2", "Ethernet10", "Management1", "Vlan1"]


def test_parse_interface_details() -> None:
    results = [
        {
            "interfaces": {
                "Ethernet2": {
                    "physicalAddress": "00:1c:73:00:00:02",
                    "mtu": 9214,
                    "interfaceCounters": {"inputErrors": 3, "inOctets": 1000, "outUcastPkts": 7},
                },
                "Ethernet10": {"mtu": 1500},
                "Loopback0": {"mtu": 65535},
            }
        },
        {
            "interfaceStatuses": {
                "Ethernet2": {
                    "linkStatus": "connected",
                    "interfaceStatus": "connected",
                    "bandwidth": 10000000000,
                    "vlanInformation": {"interfaceMode": "access", "vlanId": 100},
                },
                "Ethernet10": {"linkStatus": "notconnect", "interfaceStatus": "disabled"},
                "CPU0": {"linkStatus": "connected"},
            }
        },
        {"interfaceDescriptions": {"Ethernet2": {"description": "to-server1"}}},
        {
            "interfaces": {
                "Vlan100": {"interfaceAddress": {"ipAddr": {"address": "10.100.0.1", "maskLen": 24}}}
            }
        },
    ]

    records = parse_interface_details(results)

    assert [r.name for r in records] == ["Ethernet2", "Ethernet10", "Vlan100"]

    eth2 = records[0]
    assert eth2.type == InterfaceType.ETHERNET
    assert eth2.status == "up"
    assert eth2.enabled is True
    assert eth2.mode == InterfaceMode.ACCESS
    assert eth2.vlan == 100
    assert eth2.description == "to-server1"
    assert eth2.mtu == 9214
    assert eth2.speed == 10000000000
    assert eth2.counters.input_errors == 3
    assert eth2.counters.input_bytes == 1000
    assert eth2.counters.output_packets == 7

    eth10 = records[1]
    assert eth10.status == "down"
    assert eth10.enabled is False
    assert eth10.mode == InterfaceMode.ROUTED

    vlan100 = records[2]
    assert vlan100.type == InterfaceType.VLAN
    assert vlan100.ip_address == "10.100.0.1"
    assert vlan100.ip_prefix_length == 24


def test_parse_interface_details_requires_four_results() -> None:
    with pytest.raises(IncompleteDataError):
        parse_interface_details([{}, {}, {}])


def test_parse_interface_status() -> None:
    statuses = parse_interface_status(INTERFACE_STATUS_OUTPUT)

    assert set(statuses) == {"Et1", "Et2", "Ma1"}
    assert statuses["Et1"].status == "connected"
    assert statuses["Et1"].vlan == "N/A"
    assert statuses["Et1"].duplex == "full"
    assert statuses["Et1"].speed == "10G"
    assert statuses["Et1"].type == "10GBASE-T"
    assert statuses["Et2"].status == "notconnect"
    assert statuses["Et2"].vlan == "1"


def test_parse_interface_status_without_name_column() -> None:
    output = "Port Status Vlan Duplex Speed Type\nEt1 connected 1 full 10G 10GBASE-T\nEt2 x\n"

    statuses = parse_interface_status(output)

    assert list(statuses) == ["Et1"]
    assert statuses["Et1"].status == "connected"
    assert statuses["Et1"].vlan == "1"


def test_parse_interface_status_ignores_preamble() -> None:
    assert parse_interface_status("no header here\nEt1 connected 1") == {}
    assert parse_interface_status("") == {}


# ============================================================
# VLANs
# ============================================================

def test_parse_vlans() -> None:
    vlans = parse_vlans({
        "100": {"name": "users", "status": "active", "interfaces": {"Ethernet1": {}, "Ethernet2": {}}},
        "1": {"name": "default", "status": "active", "interfaces": {}, "dynamic": False},
        "bogus": {"name": "skipped"},
    })

    assert [v.id for v in vlans] == [1, 100]
    assert vlans[1].name == "users"
    assert vlans[1].interfaces == ["Ethernet1", "Ethernet2"]
    assert parse_vlans(None) == []


# ============================================================
# Routing
# ============================================================

def test_parse_static_routes_example() -> None:
    output = "S 10.0.0.0/24 [1/0] via 192.168.1.1\nS 10.0.1.0/24 via 192.168.1.1"

    routes = parse_static_routes(output)

    assert [(r.prefix, r.next_hop, r.admin_distance, r.metric) for r in routes] == [
        ("10.0.0.0/24", "192.168.1.1", 1, 0),
        ("10.0.1.0/24", "192.168.1.1", 1, 0),
    ]
    assert all(r.type == "static" for r in routes)


def test_parse_static_routes_from_routing_table() -> None:
    routes = parse_static_routes(STATIC_ROUTES_OUTPUT)

    assert [r.key for r in routes] == [
        ("10.1.0.0/24", "192.168.1.1"),
        ("10.2.0.0/16", "192.168.1.2"),
    ]
    assert parse_static_routes("garbage\nC 10.0.0.0/24 is directly connected") == []


def test_parse_static_routes_distance_and_metric() -> None:
    routes = parse_static_routes("S 0.0.0.0/0 [200/5] via 10.0.0.254")
    assert routes[0].admin_distance == 200
    assert routes[0].metric == 5


def test_parse_bgp_summary() -> None:
    config = parse_bgp_summary(BGP_SUMMARY_OUTPUT)

    assert config.enabled is True
    assert config.asn == 65001
    assert config.router_id == "1.1.1.1"
    assert [(n.ip, n.remote_asn) for n in config.neighbors] == [
        ("192.168.1.2", 65002),
        ("192.168.1.3", 65003),
    ]


def test_parse_bgp_summary_not_active() -> None:
    config = parse_bgp_summary("BGP not active")

    assert config.enabled is False
    assert config.asn is None
    assert config.router_id is None
    assert config.neighbors == []
    assert parse_bgp_summary("% unrecognized") == config


def test_parse_bgp_neighbors() -> None:
    neighbors = parse_bgp_neighbors(BGP_NEIGHBORS_OUTPUT)

    assert len(neighbors) == 2
    first, second = neighbors
    assert first.ip == "192.168.1.2"
    assert first.remote_asn == 65002
    assert first.state == "Established"
    assert first.uptime == "01:02:03"
    assert first.prefixes_received == 5
    assert second.state == "Active"
    assert second.uptime == "never"
    assert second.prefixes_received == 0


# ============================================================
# LLDP
# ============================================================

def test_parse_lldp_neighbors() -> None:
    neighbors = parse_lldp_neighbors(LLDP_DETAIL_OUTPUT)

    assert [n.local_port for n in neighbors] == ["Et1", "Et2"]
    first = neighbors[0]
    assert first.remote_chassis_id == "00:1c:73:00:00:01"
    assert first.remote_port == "Ethernet49/1"
    assert first.remote_device_name == "spine1"
    assert first.remote_description == "Arista Networks EOS version 4.28.3M"
    assert first.remote_port_description == "to-leaf1"
    assert neighbors[1].remote_port_description == ""


def test_parse_lldp_neighbors_defaults_missing_fields() -> None:
    neighbors = parse_lldp_neighbors("Port : Et7\n  nothing useful\n")

    assert len(neighbors) == 1
    assert neighbors[0].remote_chassis_id == "Unknown"
    assert neighbors[0].remote_port == "Unknown"
    assert neighbors[0].remote_device_name == "Unknown"
    assert neighbors[0].remote_description == ""
