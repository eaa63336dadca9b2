"""
Input checks applied before values are spliced into CLI commands.

These are shape and range checks, not a general escaping scheme: interface
names are reduced to a safe alphabet, free text loses quote characters and
is rejected outright if it contains control characters (a newline would
start a new CLI command).

Copyright (c) 2025 DNS Science.io, an After Dark Systems, LLC company.
All rights reserved.
"""

import re
from typing import Any

from eosmanager.exceptions import ValidationError

VLAN_ID_MIN = 1
VLAN_ID_MAX = 4094
ASN_MIN = 1
ASN_MAX = 4294967295
ADMIN_DISTANCE_MIN = 1
ADMIN_DISTANCE_MAX = 255

_IPV4_OCTET = r"(25[0-5]|2[0-4][0-9]|[01]?[0-9][0-9]?)"
IPV4_RE = re.compile(rf"^{_IPV4_OCTET}\.{_IPV4_OCTET}\.{_IPV4_OCTET}\.{_IPV4_OCTET}$")
_CONTROL_CHARS_RE = re.compile(r"[\x00-\x1f\x7f]")


def is_valid_ip_address(value: Any) -> bool:
    """Check for a dotted-quad IPv4 address."""
    return isinstance(value, str) and bool(IPV4_RE.match(value))


def is_valid_prefix(value: Any) -> bool:
    """Check for an IPv4 prefix in a.b.c.d/len form."""
    if not isinstance(value, str):
        return False
    parts = value.split("/")
    if len(parts) != 2 or not is_valid_ip_address(parts[0]):
        return False
    if not parts[1].isdigit():
        return False
    return 0 <= int(parts[1]) <= 32


def sanitize_interface_name(name: str) -> str:
    """Strip everything outside [A-Za-z0-9/] from an interface name."""
    sanitized = re.sub(r"[^a-zA-Z0-9/]", "", name or "")
    if not sanitized:
        raise ValidationError(f"Invalid interface name: {name!r}")
    return sanitized


def sanitize_text(value: str | None, field_name: str = "text") -> str:
    """Strip quote characters from free text and reject control characters."""
    value = value or ""
    if _CONTROL_CHARS_RE.search(value):
        raise ValidationError(f"Invalid {field_name}: control characters are not allowed")
    return re.sub(r"['\"]", "", value).strip()


def _require_int(value: Any, label: str) -> int:
    if isinstance(value, bool) or (isinstance(value, float) and not value.is_integer()):
        raise ValidationError(f"Invalid {label}: {value!r}")
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"Invalid {label}: {value!r}") from None


def validate_vlan_id(vlan_id: Any) -> int:
    """Return vlan_id as an int in 1-4094."""
    vid = _require_int(vlan_id, "VLAN ID")
    if not VLAN_ID_MIN <= vid <= VLAN_ID_MAX:
        raise ValidationError("Invalid VLAN ID. Must be between 1-4094.")
    return vid


def validate_asn(asn: Any, label: str = "ASN") -> int:
    """Return asn as an int in 1-4294967295."""
    value = _require_int(asn, label)
    if not ASN_MIN <= value <= ASN_MAX:
        raise ValidationError(f"Invalid {label}. Must be between 1 and 4294967295")
    return value


def validate_admin_distance(distance: Any) -> int:
    """Return distance as an int in 1-255."""
    value = _require_int(distance, "administrative distance")
    if not ADMIN_DISTANCE_MIN <= value <= ADMIN_DISTANCE_MAX:
        raise ValidationError("Invalid administrative distance. Must be between 1 and 255")
    return value


def validate_ip_address(value: Any, label: str = "IP address") -> str:
    if not is_valid_ip_address(value):
        raise ValidationError(f"Invalid {label}: {value!r}")
    return value


def validate_prefix(value: Any) -> str:
    if not is_valid_prefix(value):
        raise ValidationError("Invalid prefix format. Expected format: x.x.x.x/y")
    return value
