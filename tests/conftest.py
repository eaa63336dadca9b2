"""
Shared fixtures: a scripted eAPI transport and canned switch output.
"""

import copy
from typing import Any

import pytest

from eosmanager.config import ManagerConfig
from eosmanager.exceptions import SwitchConnectionError
from eosmanager.registry import SessionRegistry


def make_switch_info(
    serial: str = "SSJ17371234",
    hostname: str = "leaf1",
    ip_address: str = "10.0.0.1",
    cpu: tuple[float, ...] = (10.2, 5.1, 2.0),
    mem_total: int = 8000000,
    mem_free: int = 2000000,
) -> list[dict[str, Any]]:
    """Results of SWITCH_INFO_COMMANDS for a small three-port switch."""
    return [
        {
            "modelName": "DCS-7050TX-64",
            "version": "4.28.3M",
            "serialNumber": serial,
            "systemMacAddress": "00:1c:73:aa:bb:cc",
            "uptime": 93784.5,
        },
        {"hostname": hostname, "fqdn": f"{hostname}.lab"},
        {
            "interfaceStatuses": {
                "Ethernet1": {"linkStatus": "connected", "bandwidth": 10000000000},
                "Ethernet2": {"linkStatus": "notconnect", "bandwidth": 10000000000},
                "Management1": {"linkStatus": "connected", "bandwidth": 1000000000},
            }
        },
        {
            "interfaces": {
                "Management1": {
                    "interfaceAddress": {"ipAddr": {"address": ip_address, "maskLen": 24}}
                }
            }
        },
        {"tempSensors": [{"currentTemperature": 40.0}, {"currentTemperature": 45.0}]},
        {"fanTraySlots": []},
        {
            "processes": {str(i): {"cpuPct": pct} for i, pct in enumerate(cpu)},
            "memTotal": mem_total,
            "memFree": mem_free,
        },
    ]


class FakeEapiClient:
    """Stands in for EapiClient.

    ``responses`` maps a command to its result; text-format results are
    wrapped as {"output": ...}. ``errors`` maps a command to the exception
    raised when it appears in a request. Every run_commands call is recorded.
    """

    def __init__(self, ip_address: str, info: list[dict[str, Any]] | None = None):
        self.ip_address = ip_address
        self.info = info if info is not None else make_switch_info(ip_address=ip_address)
        self.info_error: Exception | None = None
        self.responses: dict[str, Any] = {}
        self.errors: dict[str, Exception] = {}
        self.calls: list[tuple[list[str], str]] = []
        self.info_calls = 0

    async def verify(self) -> dict[str, Any]:
        return self.info[0] if self.info else {}

    async def get_switch_info(self) -> list[dict[str, Any]]:
        self.info_calls += 1
        if self.info_error is not None:
            raise self.info_error
        return copy.deepcopy(self.info)

    async def run_commands(self, commands, fmt="json", request_id="EOS-API-CMD"):
        self.calls.append((list(commands), fmt))
        for command in commands:
            if command in self.errors:
                raise self.errors[command]

        results = []
        for command in commands:
            value = self.responses.get(command, {})
            if fmt == "text" and isinstance(value, str):
                value = {"output": value}
            results.append(value)
        return results

    @property
    def commands(self) -> list[list[str]]:
        return [call[0] for call in self.calls]


@pytest.fixture
def config() -> ManagerConfig:
    return ManagerConfig()


@pytest.fixture
def switches() -> dict[str, FakeEapiClient]:
    """Reachable switches by IP. Tests add FakeEapiClients here."""
    return {}


@pytest.fixture
def client_factory(switches):
    def factory(ip_address, username, password, protocol, config=None):
        client = switches.get(ip_address)
        if client is None:
            raise SwitchConnectionError(f"Request to {ip_address} failed: unreachable")
        return client
    return factory


@pytest.fixture
def registry(config, client_factory) -> SessionRegistry:
    return SessionRegistry(config, client_factory=client_factory)


@pytest.fixture
def leaf1(switches) -> FakeEapiClient:
    client = FakeEapiClient("10.0.0.1", make_switch_info("SSJ0001", "leaf1", "10.0.0.1"))
    switches[client.ip_address] = client
    return client


@pytest.fixture
def leaf2(switches) -> FakeEapiClient:
    client = FakeEapiClient("10.0.0.2", make_switch_info("SSJ0002", "leaf2", "10.0.0.2"))
    switches[client.ip_address] = client
    return client


# ============================================================
# Text output samples
# ============================================================

STATIC_ROUTES_OUTPUT = """\
VRF: default
Codes: C - connected, S - static, K - kernel,
       O - OSPF, IA - OSPF inter area, B - BGP

Gateway of last resort is not set

S        10.1.0.0/24 [1/0] via 192.168.1.1, Ethernet1
S        10.2.0.0/16 via 192.168.1.2, Ethernet2
"""

BGP_SUMMARY_OUTPUT = """\
BGP summary information for VRF default
Router identifier 1.1.1.1, local AS number 65001
BGP router identifier 1.1.1.1, local AS number 65001
Neighbor Status Codes: m - Under maintenance
  Neighbor         V  AS           MsgRcvd   MsgSent  InQ OutQ  Up/Down State   PfxRcd PfxAcc
192.168.1.2      4  65002            120       118    0    0 01:02:03 Estab   5      5
192.168.1.3      4  65003              0         0    0    0 00:10:00 Active
"""

BGP_NEIGHBORS_OUTPUT = """\
BGP neighbor is 192.168.1.2, remote AS 65002, external link
  BGP version 4, remote router ID 2.2.2.2, VRF default
  Remote AS 65002
  BGP state = Established, up for 01:02:03
  Uptime: 01:02:03
  Prefix statistics:
    5 accepted prefixes
BGP neighbor is 192.168.1.3, remote AS 65003, external link
  Remote AS 65003
  BGP state = Active
"""

INTERFACE_STATUS_OUTPUT = """\
Port       Name        Status       Vlan     Duplex Speed  Type            Flags Encapsulation
Et1        to-spine1   connected    routed   full   10G    10GBASE-T
Et2                    notconnect   1        auto   auto   10GBASE-T
Ma1                    connected    routed   a-full a-1G   10/100/1000
"""

LLDP_DETAIL_OUTPUT = """\
Interface Ethernet1 detected 1 LLDP neighbors:

  Neighbor 001c.7300.0001/Ethernet1, age 12 seconds
  Discovered 1 day, 2:03:04 ago; Last changed 1 day, 2:03:04 ago
  - Chassis ID type: MAC address (4)
Port : Et1
  Chassis id : 00:1c:73:00:00:01
  Port id : Ethernet49/1
  System Name : "spine1"
  System Description : "Arista Networks EOS version 4.28.3M"
  Port Description : "to-leaf1"
Port : Et2
  Chassis id : 00:1c:73:00:00:01
  Port id : Ethernet50/1
  System Name : "spine1"
  System Description : "Arista Networks EOS version 4.28.3M"
"""
