"""Compose the hostapd and dnsmasq documents for one provisioning run."""

from __future__ import annotations

from dataclasses import dataclass, field

from apnetcfg.config import DnsmasqConfig, RadioConfig
from apnetcfg.generators.dnsmasq import generate_dnsmasq
from apnetcfg.generators.hostapd import generate_hostapd
from apnetcfg.models.network import Network
from apnetcfg.models.radio import RadioInfo


@dataclass(frozen=True)
class Documents:
    """Rendered documents, not yet written anywhere.

    Attributes:
        hostapd: hostapd.conf content.
        dnsmasq: dnsmasq config content keyed by network name, in
            network order.
    """

    hostapd: str
    dnsmasq: dict[str, str] = field(default_factory=dict)


def build_documents(
    networks: list[Network],
    radio: RadioInfo,
    node_name: str,
    radio_config: RadioConfig,
    dnsmasq_config: DnsmasqConfig,
) -> Documents | None:
    """Render every document for the enabled, assigned networks.

    Returns None when ``networks`` is empty, which is distinct from
    returning empty documents: nothing is to be written.
    """
    hostapd = generate_hostapd(networks, radio, radio_config)
    if hostapd is None:
        return None
    return Documents(
        hostapd=hostapd,
        dnsmasq=generate_dnsmasq(networks, node_name, dnsmasq_config),
    )
