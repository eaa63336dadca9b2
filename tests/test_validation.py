"""
Tests for input validation helpers.
"""

import pytest

from eosmanager.exceptions import ValidationError
from eosmanager.services.validation import (
    is_valid_ip_address,
    is_valid_prefix,
    sanitize_interface_name,
    sanitize_text,
    validate_admin_distance,
    validate_asn,
    validate_vlan_id,
)


@pytest.mark.parametrize("value, expected", [
    ("192.168.1.1", True),
    ("0.0.0.0", True),
    ("255.255.255.255", True),
    ("256.1.1.1", False),
    ("1.2.3", False),
    ("1.2.3.4.5", False),
    ("a.b.c.d", False),
    (None, False),
])
def test_is_valid_ip_address(value, expected) -> None:
    assert is_valid_ip_address(value) is expected


@pytest.mark.parametrize("value, expected", [
    ("10.0.0.0/8", True),
    ("0.0.0.0/0", True),
    ("10.0.0.0/32", True),
    ("10.0.0.0/33", False),
    ("10.0.0.0", False),
    ("10.0.0.0/", False),
    ("10.0.0.0/-1", False),
    ("10.0.0.0/8/8", False),
])
def test_is_valid_prefix(value, expected) -> None:
    assert is_valid_prefix(value) is expected


def test_vlan_id_bounds() -> None:
    assert validate_vlan_id(1) == 1
    assert validate_vlan_id("4094") == 4094
    for bad in (0, 4095):
        with pytest.raises(ValidationError, match="Must be between 1-4094"):
            validate_vlan_id(bad)


def test_vlan_id_rejects_fractional_values() -> None:
    assert validate_vlan_id(10.0) == 10
    for bad in (10.7, "10.7", True):
        with pytest.raises(ValidationError, match="Invalid VLAN ID"):
            validate_vlan_id(bad)


def test_asn_bounds() -> None:
    assert validate_asn(4294967295) == 4294967295
    with pytest.raises(ValidationError):
        validate_asn(0)
    with pytest.raises(ValidationError, match="remote ASN"):
        validate_asn("x", "remote ASN")


def test_admin_distance_bounds() -> None:
    assert validate_admin_distance(255) == 255
    with pytest.raises(ValidationError):
        validate_admin_distance(0)


def test_sanitize_interface_name() -> None:
    assert sanitize_interface_name("Ethernet1/1") == "Ethernet1/1"
    assert sanitize_interface_name("Port-Channel10") == "PortChannel10"
    with pytest.raises(ValidationError):
        sanitize_interface_name("; ")


def test_sanitize_text() -> None:
    assert sanitize_text('  "core" uplink ') == "core uplink"
    assert sanitize_text(None) == ""
    with pytest.raises(ValidationError, match="description"):
        sanitize_text("a\nreload", "description")
    with pytest.raises(ValidationError):
        sanitize_text("tab\there")
