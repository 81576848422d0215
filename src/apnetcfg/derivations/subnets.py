"""Subnet allocation and DHCP address layout.

Each enabled network gets its own block of the configured size, starting
at the configured base (10.42.0.0/16 by default) and stepping through
contiguous blocks of the same prefix length until one is free.
"""

from __future__ import annotations

import ipaddress
from collections.abc import Iterable
from dataclasses import dataclass

from apnetcfg.constraints.errors import AllocationError

_MAX_IPV4 = 0xFFFFFFFF


def next_subnet(subnet: ipaddress.IPv4Network) -> ipaddress.IPv4Network:
    """Return the block immediately following ``subnet``.

    >>> next_subnet(ipaddress.IPv4Network('10.42.0.0/16'))
    IPv4Network('10.43.0.0/16')
    >>> next_subnet(ipaddress.IPv4Network('192.168.7.0/24'))
    IPv4Network('192.168.8.0/24')
    """
    start = int(subnet.broadcast_address) + 1
    if start > _MAX_IPV4:
        raise AllocationError(f"IPv4 address space exhausted after {subnet}")
    return ipaddress.IPv4Network((start, subnet.prefixlen))


def allocate_subnet(
    base: ipaddress.IPv4Network | str,
    taken: Iterable[ipaddress.IPv4Network],
) -> ipaddress.IPv4Network:
    """Return the first block at or after ``base`` that overlaps nothing taken.

    >>> allocate_subnet('10.42.0.0/16', [])
    IPv4Network('10.42.0.0/16')
    >>> allocate_subnet('10.42.0.0/16', [ipaddress.IPv4Network('10.42.0.0/16')])
    IPv4Network('10.43.0.0/16')

    Raises:
        AllocationError: the end of the IPv4 space was reached.
        ValueError: ``base`` is not a valid network (host bits set).
    """
    candidate = ipaddress.IPv4Network(base)
    taken = list(taken)
    while any(candidate.overlaps(other) for other in taken):
        candidate = next_subnet(candidate)
    return candidate


@dataclass(frozen=True)
class DhcpLayout:
    """How one network's subnet is carved up for dnsmasq.

    Attributes:
        subnet: The whole block.
        gateway: Second address of the block; the AP's own address.
        reserved: Addresses kept out of the dynamic pool for static use.
        range_start: First dynamically leased address.
        range_end: Last dynamically leased address.
    """

    subnet: ipaddress.IPv4Network
    gateway: ipaddress.IPv4Address
    reserved: tuple[ipaddress.IPv4Address, ...]
    range_start: ipaddress.IPv4Address
    range_end: ipaddress.IPv4Address


def dhcp_layout(
    subnet: ipaddress.IPv4Network,
    reserved_head: int = 8,
    reserved_tail: int = 5,
) -> DhcpLayout:
    """Split a subnet into gateway, reserved addresses and the DHCP range.

    The block's first address is the network, the second the gateway.
    The next ``reserved_head`` addresses and the block's last
    ``reserved_tail`` addresses are reserved; the rest is the range.

    >>> layout = dhcp_layout(ipaddress.IPv4Network('10.42.0.0/16'))
    >>> str(layout.gateway), str(layout.range_start), str(layout.range_end)
    ('10.42.0.1', '10.42.0.10', '10.42.255.250')
    >>> len(layout.reserved)
    13

    Raises:
        AllocationError: the subnet is too small to leave a DHCP range.
    """
    first = int(subnet.network_address)
    last = int(subnet.broadcast_address)
    range_start = first + 2 + reserved_head
    range_end = last - reserved_tail
    if range_start > range_end:
        raise AllocationError(f"subnet {subnet} is too small for a DHCP range")

    head = range(first + 2, range_start)
    tail = range(range_end + 1, last + 1)
    reserved = tuple(ipaddress.IPv4Address(a) for a in [*head, *tail])

    return DhcpLayout(
        subnet=subnet,
        gateway=ipaddress.IPv4Address(first + 1),
        reserved=reserved,
        range_start=ipaddress.IPv4Address(range_start),
        range_end=ipaddress.IPv4Address(range_end),
    )
