"""hostapd configuration generator.

Produces a single hostapd.conf with:
- Radio-level directives (driver, mode, channel, HT capabilities)
- The primary network's SSID and WPA block on the radio's own interface
- One ``bss=`` block per further network, each with a derived BSSID

Lines are emitted in a fixed order without blank lines so that the same
inputs always produce the same bytes.
"""

from __future__ import annotations

from apnetcfg.config import RadioConfig
from apnetcfg.derivations.bssid import init_bssid_sequence, next_bssid
from apnetcfg.derivations.capabilities import (
    parse_capabilities_or_empty,
    supports_ieee80211n,
)
from apnetcfg.derivations.psk import derive_psk
from apnetcfg.models.addressing import MACAddress
from apnetcfg.models.network import Network
from apnetcfg.models.radio import RadioInfo

# WPA2-PSK/CCMP for every secured network; only the key differs.
SECURITY_DIRECTIVES: tuple[tuple[str, str], ...] = (
    ("macaddr_acl", "0"),
    ("auth_algs", "1"),
    ("ignore_broadcast_ssid", "0"),
    ("wpa", "2"),
    ("wpa_key_mgmt", "WPA-PSK"),
    ("rsn_pairwise", "CCMP"),
)


def _interface_of(network: Network) -> str:
    if network.interface is None:
        raise ValueError(f"network {network.name!r} has no interface assigned")
    return network.interface.name


def _radio_section(primary: Network, radio: RadioInfo, config: RadioConfig) -> list[str]:
    """Directives shared by every BSS on the radio."""
    report = radio.capability_report
    ieee80211n = supports_ieee80211n(report, default=config.ieee80211n)
    ht_capab = parse_capabilities_or_empty(report, radio.channel, config.band)
    return [
        f"ctrl_interface={config.ctrl_interface}",
        f"driver={config.driver}",
        f"hw_mode={config.hw_mode}",
        f"ieee80211n={'1' if ieee80211n else '0'}",
        f"ieee80211d={config.ieee80211d}",
        f"country_code={config.country_code}",
        f"wme_enabled={config.wme_enabled}",
        f"wmm_enabled={config.wmm_enabled}",
        f"channel={radio.channel}",
        f"ht_capab={ht_capab}",
        f"interface={_interface_of(primary)}",
    ]


def _security_section(network: Network) -> list[str]:
    """WPA block, or nothing for an open network."""
    psk = derive_psk(network.ssid, network.passphrase)
    if psk is None:
        return []
    output = [f"{key}={value}" for key, value in SECURITY_DIRECTIVES]
    output.append(f"wpa_psk={psk}")
    return output


def _primary_section(network: Network) -> list[str]:
    return [f"ssid={network.ssid}", *_security_section(network)]


def _secondary_section(network: Network, bssid: MACAddress) -> list[str]:
    return [
        f"bss={_interface_of(network)}",
        f"bssid={bssid}",
        f"ssid={network.ssid}",
        *_security_section(network),
    ]


def generate_hostapd(
    networks: list[Network], radio: RadioInfo, config: RadioConfig,
) -> str | None:
    """Generate hostapd.conf for the enabled, assigned networks.

    ``networks`` must be in run order, primary first. Returns None when
    there are no networks: no document is produced at all.
    """
    if not networks:
        return None

    primary, *secondaries = networks
    output: list[str] = []
    output.extend(_radio_section(primary, radio, config))
    output.extend(_primary_section(primary))

    state = init_bssid_sequence(radio.mac)
    for network in secondaries:
        bssid, state = next_bssid(state)
        output.extend(_secondary_section(network, bssid))

    output.append("")
    return "\n".join(output)
