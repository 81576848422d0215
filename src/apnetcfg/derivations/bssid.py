"""BSSIDs for secondary virtual access points.

The primary BSS uses the radio's own MAC. Every further BSS gets an
address derived from it: locally administered bit set, last octet
counting up from 1.
"""

from __future__ import annotations

from dataclasses import dataclass

from apnetcfg.constraints.errors import AllocationError
from apnetcfg.models.addressing import LOCALLY_ADMINISTERED, MACAddress

# Used when the primary interface's MAC cannot be read.
PLACEHOLDER_MAC = MACAddress("00:00:b0:0b:00:00")


@dataclass(frozen=True)
class BssidState:
    """Sequence position: the base address and the last counter handed out."""

    base: bytes
    counter: int = 0


def init_bssid_sequence(primary_mac: MACAddress | None) -> BssidState:
    """Start a sequence from the primary MAC, or the placeholder if unknown.

    >>> init_bssid_sequence(MACAddress('00:0e:8e:64:2a:77')).base.hex()
    '020e8e642a00'
    >>> init_bssid_sequence(None).base.hex()
    '0200b00b0000'
    """
    octets = bytearray((primary_mac or PLACEHOLDER_MAC).to_bytes())
    octets[0] |= LOCALLY_ADMINISTERED
    octets[5] = 0
    return BssidState(base=bytes(octets))


def next_bssid(state: BssidState) -> tuple[MACAddress, BssidState]:
    """Return the next BSSID and the advanced state.

    >>> bssid, state = next_bssid(init_bssid_sequence(MACAddress('00:0e:8e:64:2a:00')))
    >>> str(bssid), state.counter
    ('02:0e:8e:64:2a:01', 1)

    Raises:
        AllocationError: the last octet would pass 255.
    """
    counter = state.counter + 1
    if counter > 0xFF:
        raise AllocationError("no BSSIDs left: last octet would pass 255")
    octets = bytearray(state.base)
    octets[5] = counter
    return MACAddress.from_bytes(bytes(octets)), BssidState(base=state.base, counter=counter)
