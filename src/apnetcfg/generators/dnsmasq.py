"""dnsmasq configuration generator.

Produces one config file per enabled network. Each binds dnsmasq to the
network's interface only, hands out the non-reserved part of the subnet
and points clients at the gateway for routing and DNS.
"""

from __future__ import annotations

import jinja2

from apnetcfg.config import DnsmasqConfig
from apnetcfg.derivations.subnets import DhcpLayout, dhcp_layout
from apnetcfg.models.network import Network
from apnetcfg.utils.dns import dns_label, is_safe_dns_name

FALLBACK_ADDRESS_NAME = "gateway"

_DNSMASQ_TEMPLATE = jinja2.Template("""\
# dnsmasq configuration for the {{ name }} network

interface={{ interface }}

{% for alias in aliases %}
address=/{{ alias }}/{{ layout.gateway }}
{% endfor %}

dhcp-range={{ interface }},{{ layout.range_start }},{{ layout.range_end }},{{ lease_time }}

# Gateway
dhcp-option=3,{{ layout.gateway }}

# DNS
dhcp-option=6,{{ layout.gateway }}

# IP Forward (no)
dhcp-option=19,0

# Source Routing
dhcp-option=20,0

# 44-47 NetBIOS
dhcp-option=44,0.0.0.0
dhcp-option=45,0.0.0.0
dhcp-option=46,8
dhcp-option=47

dhcp-authoritative

bind-interfaces
except-interface=lo
""", trim_blocks=True, keep_trailing_newline=True)


def address_names(node_name: str, aliases: list[str]) -> list[str]:
    """Names resolved to the gateway: configured aliases, then the node.

    Duplicates and names unusable in DNS are dropped; if nothing is
    left the gateway is still published under a fixed name.

    >>> address_names("Pfannkuchenpfanne.example.com", ["ap"])
    ['ap', 'pfannkuchenpfanne']
    """
    names: list[str] = []
    for name in [*aliases, dns_label(node_name)]:
        if is_safe_dns_name(name) and name not in names:
            names.append(name)
    return names or [FALLBACK_ADDRESS_NAME]


def render_dnsmasq(
    network: Network, layout: DhcpLayout, names: list[str], lease_time: str,
) -> str:
    """Render one network's dnsmasq config from a precomputed layout."""
    if network.interface is None:
        raise ValueError(f"network {network.name!r} has no interface assigned")
    return _DNSMASQ_TEMPLATE.render(
        name=network.name,
        interface=network.interface.name,
        aliases=names,
        layout=layout,
        lease_time=lease_time,
    )


def generate_dnsmasq(
    networks: list[Network], node_name: str, config: DnsmasqConfig,
) -> dict[str, str]:
    """Generate dnsmasq configs keyed by network name.

    Every network must have its subnet and interface assigned.
    """
    names = address_names(node_name, config.aliases)
    files: dict[str, str] = {}
    for network in networks:
        if network.subnet is None:
            raise ValueError(f"network {network.name!r} has no subnet assigned")
        layout = dhcp_layout(network.subnet, config.reserved_head, config.reserved_tail)
        files[network.name] = render_dnsmasq(network, layout, names, config.lease_time)
    return files
