"""Radio hardware information gathered before synthesis."""

from __future__ import annotations

from dataclasses import dataclass

from apnetcfg.models.addressing import MACAddress


@dataclass(frozen=True)
class RadioInfo:
    """What the provisioning run knows about the physical radio.

    Attributes:
        phy: Physical radio name (e.g. 'phy0').
        capability_report: Raw ``iw phy <phy> info`` text, empty if the
            lookup failed.
        mac: Hardware MAC of the primary interface, None if unknown.
        channel: Configured channel number.
    """

    phy: str
    capability_report: str = ""
    mac: MACAddress | None = None
    channel: int = 1
