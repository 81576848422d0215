"""Network builder: order enabled networks and assign subnets and interfaces.

This is the central derivation of a provisioning run. Allocation state is
an explicit Allocations value threaded through the networks in order, so
the same inputs always produce the same assignments.
"""

from __future__ import annotations

import ipaddress
from collections.abc import Iterable
from dataclasses import dataclass, field

from apnetcfg.derivations.interfaces import allocate_interface
from apnetcfg.derivations.subnets import allocate_subnet
from apnetcfg.models.network import InterfaceName, Network


@dataclass(frozen=True)
class Allocations:
    """Subnets and interface names already bound in this run."""

    subnets: frozenset[ipaddress.IPv4Network] = field(default_factory=frozenset)
    interfaces: frozenset[InterfaceName] = field(default_factory=frozenset)

    @classmethod
    def from_networks(cls, networks: Iterable[Network]) -> Allocations:
        """Collect whatever the given networks already have assigned."""
        networks = list(networks)
        return cls(
            subnets=frozenset(n.subnet for n in networks if n.subnet is not None),
            interfaces=frozenset(n.interface for n in networks if n.interface is not None),
        )


def enabled_networks(networks: Iterable[Network]) -> list[Network]:
    """Filter to enabled networks, primary first, others in given order."""
    enabled = [n for n in networks if n.enabled]
    return sorted(enabled, key=lambda n: not n.is_primary)


def assign_network(
    network: Network,
    allocations: Allocations,
    first_subnet: ipaddress.IPv4Network | str,
    first_interface: InterfaceName | str,
) -> tuple[Network, Allocations]:
    """Give ``network`` a subnet and interface unless it already has them.

    Returns the assigned network and the allocations including it.
    """
    subnet = None
    if network.subnet is None:
        subnet = allocate_subnet(first_subnet, allocations.subnets)

    interface = None
    if network.interface is None:
        interface = allocate_interface(first_interface, allocations.interfaces)

    assigned = network.assign(subnet=subnet, interface=interface)
    return assigned, Allocations(
        subnets=allocations.subnets | {assigned.subnet},
        interfaces=allocations.interfaces | {assigned.interface},
    )


def assign_networks(
    networks: Iterable[Network],
    first_subnet: ipaddress.IPv4Network | str,
    first_interface: InterfaceName | str,
) -> list[Network]:
    """Assign every network in order; fixed assignments are honoured first.

    Raises:
        AllocationError: address or interface space is exhausted.
    """
    networks = list(networks)
    allocations = Allocations.from_networks(networks)
    assigned: list[Network] = []
    for network in networks:
        network, allocations = assign_network(
            network, allocations, first_subnet, first_interface,
        )
        assigned.append(network)
    return assigned
