"""
Typed views over raw eAPI JSON results.

Each record names the fields a parser relies on and fills every absent or
malformed field with a default, so parsers never depend on attribute
lookups failing quietly.

Copyright (c) 2025 DNS Science.io, an After Dark Systems, LLC company.
All rights reserved.
"""

import math
from dataclasses import dataclass, field
from typing import Any


def _as_dict(value: Any) -> dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _as_number(value: Any) -> float | None:
    """Return value as a float if it is a real, finite number."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    if math.isnan(value) or math.isinf(value):
        return None
    return float(value)


def _as_str(value: Any, default: str = "") -> str:
    return value if isinstance(value, str) and value else default


def _entries(value: Any) -> list[Any]:
    """Values of a dict-or-list container, in order."""
    if isinstance(value, dict):
        return list(value.values())
    if isinstance(value, list):
        return value
    return []


@dataclass
class VersionResponse:
    """Result of 'show version'."""

    model_name: str | None = None
    version: str | None = None
    serial_number: str | None = None
    system_mac_address: str | None = None
    uptime: float | None = None

    @classmethod
    def from_api_response(cls, data: Any) -> "VersionResponse":
        data = _as_dict(data)
        return cls(
            model_name=_as_str(data.get("modelName")) or None,
            version=_as_str(data.get("version")) or None,
            serial_number=_as_str(data.get("serialNumber")) or None,
            system_mac_address=_as_str(data.get("systemMacAddress")) or None,
            uptime=_as_number(data.get("uptime")),
        )


@dataclass
class HostnameResponse:
    """Result of 'show hostname'."""

    hostname: str | None = None
    fqdn: str | None = None

    @classmethod
    def from_api_response(cls, data: Any) -> "HostnameResponse":
        data = _as_dict(data)
        return cls(
            hostname=_as_str(data.get("hostname")) or None,
            fqdn=_as_str(data.get("fqdn")) or None,
        )


@dataclass
class InterfaceStatusResponse:
    """Result of 'show interfaces status' in JSON format."""

    interface_statuses: dict[str, dict[str, Any]] = field(default_factory=dict)

    @classmethod
    def from_api_response(cls, data: Any) -> "InterfaceStatusResponse":
        statuses = _as_dict(_as_dict(data).get("interfaceStatuses"))
        return cls(
            interface_statuses={
                name: _as_dict(status) for name, status in statuses.items()
            }
        )

    def link_status(self, name: str) -> str:
        return _as_str(self.interface_statuses.get(name, {}).get("linkStatus"))


@dataclass
class IpInterfaceBriefResponse:
    """Result of 'show ip interface brief'."""

    interfaces: dict[str, dict[str, Any]] = field(default_factory=dict)

    @classmethod
    def from_api_response(cls, data: Any) -> "IpInterfaceBriefResponse":
        interfaces = _as_dict(_as_dict(data).get("interfaces"))
        return cls(
            interfaces={name: _as_dict(info) for name, info in interfaces.items()}
        )

    def address_of(self, name: str) -> tuple[str, int]:
        """Return (address, mask length) for an interface, ("", 0) if unset."""
        ip_addr = _as_dict(
            _as_dict(self.interfaces.get(name, {}).get("interfaceAddress")).get("ipAddr")
        )
        mask_len = _as_number(ip_addr.get("maskLen"))
        return _as_str(ip_addr.get("address")), int(mask_len) if mask_len else 0


@dataclass
class TemperatureResponse:
    """Result of 'show system environment temperature'.

    Older firmware reports a ``sensors`` mapping with ``temperature`` values;
    newer firmware a ``tempSensors`` list with ``currentTemperature``.
    """

    readings: list[float] = field(default_factory=list)

    @classmethod
    def from_api_response(cls, data: Any) -> "TemperatureResponse":
        data = _as_dict(data)
        readings = []

        for sensor in _entries(data.get("sensors")):
            value = _as_number(_as_dict(sensor).get("temperature"))
            if value:
                readings.append(value)

        for sensor in _entries(data.get("tempSensors")):
            value = _as_number(_as_dict(sensor).get("currentTemperature"))
            if value:
                readings.append(value)

        return cls(readings=readings)


@dataclass
class ProcessesResponse:
    """Result of 'show processes top once'."""

    cpu_percentages: list[float] = field(default_factory=list)
    mem_total: float | None = None
    mem_free: float | None = None

    @classmethod
    def from_api_response(cls, data: Any) -> "ProcessesResponse":
        data = _as_dict(data)
        cpu = []
        for process in _entries(data.get("processes")):
            value = _as_number(_as_dict(process).get("cpuPct"))
            if value is not None:
                cpu.append(value)

        return cls(
            cpu_percentages=cpu,
            mem_total=_as_number(data.get("memTotal")),
            mem_free=_as_number(data.get("memFree")),
        )


@dataclass
class InterfacesResponse:
    """Result of 'show interfaces'."""

    interfaces: dict[str, dict[str, Any]] = field(default_factory=dict)

    @classmethod
    def from_api_response(cls, data: Any) -> "InterfacesResponse":
        interfaces = _as_dict(_as_dict(data).get("interfaces"))
        return cls(
            interfaces={name: _as_dict(info) for name, info in interfaces.items()}
        )


@dataclass
class InterfaceDescriptionsResponse:
    """Result of 'show interfaces description'."""

    descriptions: dict[str, str] = field(default_factory=dict)

    @classmethod
    def from_api_response(cls, data: Any) -> "InterfaceDescriptionsResponse":
        entries = _as_dict(_as_dict(data).get("interfaceDescriptions"))
        return cls(
            descriptions={
                name: _as_str(_as_dict(info).get("description"))
                for name, info in entries.items()
            }
        )
