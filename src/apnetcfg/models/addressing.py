"""Hardware address type: Ethernet MAC / 802.11 BSSID."""

from __future__ import annotations

import re
from dataclasses import dataclass

_MAC_RE = re.compile(r'^([0-9a-f]{2}:){5}[0-9a-f]{2}$')

# Bit 1 of the first octet marks a locally administered address.
LOCALLY_ADMINISTERED = 0x02


@dataclass(frozen=True, order=True)
class MACAddress:
    """A normalized, validated Ethernet MAC address.

    Always stored in lowercase colon-separated format (aa:bb:cc:dd:ee:ff).
    BSSIDs share the same representation.
    """

    address: str

    def __post_init__(self) -> None:
        if not _MAC_RE.match(self.address):
            raise ValueError(f"Invalid MAC address: {self.address!r}")

    @classmethod
    def parse(cls, raw: str) -> MACAddress:
        """Parse a MAC address from various formats.

        Accepts colon-separated, dash-separated, or dot-separated formats.
        Normalizes to lowercase colon-separated.

        >>> MACAddress.parse('00:0E:8E:64:2A:00')
        MACAddress(address='00:0e:8e:64:2a:00')
        >>> MACAddress.parse('00-0e-8e-64-2a-00')
        MACAddress(address='00:0e:8e:64:2a:00')
        """
        raw = raw.strip().lower()
        cleaned = raw.replace('-', '').replace(':', '').replace('.', '')
        if len(cleaned) != 12:
            raise ValueError(f"Invalid MAC address: {raw!r}")
        formatted = ':'.join(cleaned[i:i + 2] for i in range(0, 12, 2))
        return cls(address=formatted)

    @classmethod
    def from_bytes(cls, value: bytes) -> MACAddress:
        """Create from six raw octets.

        >>> MACAddress.from_bytes(bytes([2, 0, 0xb0, 0x0b, 0, 1]))
        MACAddress(address='02:00:b0:0b:00:01')
        """
        if len(value) != 6:
            raise ValueError(f"MAC address needs 6 octets, got {len(value)}")
        return cls(address=':'.join(f'{b:02x}' for b in value))

    def to_bytes(self) -> bytes:
        """Return the six octets.

        >>> MACAddress.parse('00:0e:8e:64:2a:00').to_bytes().hex()
        '000e8e642a00'
        """
        return bytes.fromhex(self.address.replace(':', ''))

    def __str__(self) -> str:
        return self.address
