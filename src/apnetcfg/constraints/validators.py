"""Constraint predicates run on the assigned, enabled networks.

Radio Constraints: the configured channel.
Network Constraints: each network on its own.
Cross-Network Constraints: collisions between networks.
"""

from __future__ import annotations

from collections import Counter

from apnetcfg.constraints.errors import (
    ConstraintViolation,
    Severity,
    ValidationResult,
)
from apnetcfg.models.network import Network
from apnetcfg.utils.dns import is_single_line

MIN_CHANNEL = 1
MAX_CHANNEL = 196

MIN_PASSPHRASE = 8
MAX_PASSPHRASE = 63


def validate_radio_constraints(channel: int) -> ValidationResult:
    """Channel must lie within the 2.4/5 GHz channel plans (1-196)."""
    result = ValidationResult()
    if not MIN_CHANNEL <= channel <= MAX_CHANNEL:
        result.add(ConstraintViolation(
            severity=Severity.ERROR,
            code="channel_out_of_range",
            message=f"Channel {channel} is outside {MIN_CHANNEL}-{MAX_CHANNEL}",
            field="channel",
        ))
    return result


def validate_network_constraints(networks: list[Network]) -> ValidationResult:
    """Validate each network on its own.

    Checks:
    - SSID must not be empty
    - SSID and passphrase must not contain line breaks
    - Passphrase, when given, should be 8-63 characters (WPA limits)
    - Networks without a passphrase are reported as open
    """
    result = ValidationResult()

    for network in networks:
        if not network.ssid.strip():
            result.add(ConstraintViolation(
                severity=Severity.ERROR,
                code="empty_ssid",
                message="SSID is empty",
                network=network.name,
                field="ssid",
            ))

        for field_name, value in (("ssid", network.ssid), ("passphrase", network.passphrase)):
            if value is not None and not is_single_line(value):
                result.add(ConstraintViolation(
                    severity=Severity.ERROR,
                    code="line_break",
                    message=f"{field_name} contains a line break",
                    network=network.name,
                    field=field_name,
                ))

        passphrase = network.passphrase
        if passphrase is None or not passphrase.strip():
            result.add(ConstraintViolation(
                severity=Severity.WARNING,
                code="open_network",
                message="No passphrase, network will be open",
                network=network.name,
                field="passphrase",
            ))
        elif not MIN_PASSPHRASE <= len(passphrase) <= MAX_PASSPHRASE:
            result.add(ConstraintViolation(
                severity=Severity.WARNING,
                code="passphrase_length",
                message=(
                    f"Passphrase has {len(passphrase)} characters, WPA expects "
                    f"{MIN_PASSPHRASE}-{MAX_PASSPHRASE}"
                ),
                network=network.name,
                field="passphrase",
            ))

    return result


def validate_cross_network_constraints(networks: list[Network]) -> ValidationResult:
    """Validate constraints between networks.

    Checks:
    - Subnets must not overlap
    - Interface names must be unique
    - SSIDs should be unique
    """
    result = ValidationResult()

    for i, network in enumerate(networks):
        if network.subnet is None:
            continue
        for other in networks[i + 1:]:
            if other.subnet is not None and network.subnet.overlaps(other.subnet):
                result.add(ConstraintViolation(
                    severity=Severity.ERROR,
                    code="subnet_overlap",
                    message=(
                        f"Subnet {network.subnet} overlaps {other.subnet} "
                        f"of network {other.name!r}"
                    ),
                    network=network.name,
                    field="subnet",
                ))

    interface_counts = Counter(n.interface for n in networks if n.interface is not None)
    for interface, count in sorted(interface_counts.items()):
        if count > 1:
            names = [n.name for n in networks if n.interface == interface]
            result.add(ConstraintViolation(
                severity=Severity.ERROR,
                code="duplicate_interface",
                message=f"Interface {interface} is used by {', '.join(names)}",
                field="interface",
            ))

    ssid_counts = Counter(n.ssid for n in networks)
    for ssid, count in sorted(ssid_counts.items()):
        if count > 1:
            result.add(ConstraintViolation(
                severity=Severity.WARNING,
                code="duplicate_ssid",
                message=f"SSID {ssid!r} is broadcast {count} times",
                field="ssid",
            ))

    return result


def validate_all(networks: list[Network], channel: int) -> ValidationResult:
    """Run every constraint and merge the results."""
    result = ValidationResult()
    result.merge(validate_radio_constraints(channel))
    result.merge(validate_network_constraints(networks))
    result.merge(validate_cross_network_constraints(networks))
    return result
