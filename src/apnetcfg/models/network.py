"""Network models: interface names and logical Wi-Fi networks."""

from __future__ import annotations

import ipaddress
import re
from dataclasses import dataclass, replace

# Name of the network that always owns the radio's primary BSS.
PRIMARY_NETWORK = "private"

# Linux IFNAMSIZ is 16 including the terminating NUL.
MAX_INTERFACE_NAME = 15

_TRAILING_DIGITS_RE = re.compile(r'^(.*?)(\d+)$')


@dataclass(frozen=True, order=True)
class InterfaceName:
    """A network interface identifier such as ``wlan0``.

    Ordered lexicographically on the name.
    """

    name: str

    def __post_init__(self) -> None:
        if not self.name or any(c.isspace() or c == '/' for c in self.name):
            raise ValueError(f"Invalid interface name: {self.name!r}")

    def succ(self) -> InterfaceName:
        """Return the next name in the sequence.

        The trailing counter is incremented, keeping any zero padding.
        A name without a counter gets one appended.

        >>> InterfaceName('wlan0').succ()
        InterfaceName(name='wlan1')
        >>> InterfaceName('wlan9').succ()
        InterfaceName(name='wlan10')
        >>> InterfaceName('wl07').succ()
        InterfaceName(name='wl08')
        >>> InterfaceName('guest').succ()
        InterfaceName(name='guest1')
        """
        match = _TRAILING_DIGITS_RE.match(self.name)
        if match is None:
            return InterfaceName(self.name + "1")
        stem, digits = match.groups()
        return InterfaceName(stem + str(int(digits) + 1).zfill(len(digits)))

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True)
class Network:
    """One logical Wi-Fi network (one SSID on the shared radio).

    Attributes:
        name: Unique network name (e.g. 'private', 'public').
        ssid: Broadcast network name.
        passphrase: WPA passphrase, or None for an open network.
        enabled: Whether the network's enabled marker exists.
        subnet: Allocated IPv4 subnet, None until assigned.
        interface: Allocated interface name, None until assigned.
    """

    name: str
    ssid: str
    passphrase: str | None = None
    enabled: bool = False
    subnet: ipaddress.IPv4Network | None = None
    interface: InterfaceName | None = None

    @property
    def is_primary(self) -> bool:
        return self.name == PRIMARY_NETWORK

    @property
    def is_assigned(self) -> bool:
        """True once both subnet and interface are known."""
        return self.subnet is not None and self.interface is not None

    def assign(
        self,
        *,
        subnet: ipaddress.IPv4Network | None = None,
        interface: InterfaceName | None = None,
    ) -> Network:
        """Return a copy with the given subnet and/or interface set.

        An assignment is final: setting a value that is already set
        raises ValueError.
        """
        changes: dict[str, object] = {}
        if subnet is not None:
            if self.subnet is not None:
                raise ValueError(f"network {self.name!r} already has subnet {self.subnet}")
            changes["subnet"] = subnet
        if interface is not None:
            if self.interface is not None:
                raise ValueError(
                    f"network {self.name!r} already has interface {self.interface}"
                )
            changes["interface"] = interface
        return replace(self, **changes)

    def __str__(self) -> str:
        state = "enabled" if self.enabled else "disabled"
        return f"{self.name} ({self.ssid!r}, {state})"
