"""Load provisioning configuration from apnetcfg.toml."""

from __future__ import annotations

import ipaddress
import tomllib
from dataclasses import dataclass, field
from pathlib import Path

from apnetcfg.models.network import PRIMARY_NETWORK, InterfaceName

DEFAULT_CONFIG_NAME = "apnetcfg.toml"


@dataclass
class RadioConfig:
    """Radio-level hostapd directives and fallbacks for undetected hardware.

    ``ieee80211n`` is only used when the capability report is empty;
    otherwise support is detected from the report. ``phy`` is used when
    ``iw list`` names no radio.
    """

    ctrl_interface: str = "/var/run/hostapd"
    driver: str = "nl80211"
    hw_mode: str = "g"
    ieee80211d: str = "1"
    country_code: str = "US"
    wme_enabled: str = "1"
    wmm_enabled: str = "1"
    ieee80211n: bool = False
    phy: str = "phy0"
    band: int = 1
    default_channel: int = 1


@dataclass
class NetworkDefaults:
    """Where subnet and interface allocation start."""

    first_subnet: str = "10.42.0.0/16"
    first_interface: str = "wlan0"


@dataclass
class DnsmasqConfig:
    """Per-network DHCP/DNS settings."""

    aliases: list[str] = field(default_factory=list)
    lease_time: str = "24h"
    reserved_head: int = 8
    reserved_tail: int = 5


@dataclass
class StateConfig:
    """Location of the marker and value files."""

    directory: Path = field(default_factory=lambda: Path("/etc/apnetcfg/wifi"))
    node_name_file: str = "box_name"
    channel_file: str = "channel"


@dataclass
class OutputConfig:
    """Where generated documents are written.

    ``dnsmasq_name`` is formatted with the network name.
    """

    hostapd: Path = field(default_factory=lambda: Path("/etc/hostapd/hostapd.conf"))
    dnsmasq_dir: Path = field(default_factory=lambda: Path("/etc/dnsmasq.d"))
    dnsmasq_name: str = "{name}.conf"

    def dnsmasq_path(self, network_name: str) -> Path:
        return self.dnsmasq_dir / self.dnsmasq_name.format(name=network_name)


@dataclass
class ServicesConfig:
    """Commands run after the documents have been replaced."""

    reload: list[str] = field(default_factory=list)


@dataclass
class NetworkSpec:
    """Declaration of one logical network.

    Attributes:
        name: Unique network name.
        path: State sub-directory holding 'enabled', 'password' and an
            optional 'ssid' file ('.' for the state root). Defaults to
            the network name, or '.' for the primary network.
        ssid_suffix: Appended to the node name to form the default SSID.
        subnet: Fixed subnet, skipping allocation.
        interface: Fixed interface name, skipping allocation.
    """

    name: str
    path: str = "."
    ssid_suffix: str = ""
    subnet: ipaddress.IPv4Network | None = None
    interface: InterfaceName | None = None


def default_networks() -> list[NetworkSpec]:
    return [
        NetworkSpec(name=PRIMARY_NETWORK, path="."),
        NetworkSpec(name="public", path="guest", ssid_suffix=" (public)"),
    ]


@dataclass
class ProvisionConfig:
    """Full configuration of a provisioning run."""

    radio: RadioConfig = field(default_factory=RadioConfig)
    defaults: NetworkDefaults = field(default_factory=NetworkDefaults)
    dnsmasq: DnsmasqConfig = field(default_factory=DnsmasqConfig)
    state: StateConfig = field(default_factory=StateConfig)
    outputs: OutputConfig = field(default_factory=OutputConfig)
    services: ServicesConfig = field(default_factory=ServicesConfig)
    networks: list[NetworkSpec] = field(default_factory=default_networks)


def _flag(section: dict, key: str, default: bool) -> bool:
    value = section.get(key, default)
    if not isinstance(value, bool):
        raise ValueError(f"{key} must be true or false, not {value!r}")
    return value


def _build_radio(data: dict) -> RadioConfig:
    """Build radio config from parsed TOML data."""
    section = data.get("radio", {})
    defaults = RadioConfig()
    return RadioConfig(
        ctrl_interface=section.get("ctrl_interface", defaults.ctrl_interface),
        driver=section.get("driver", defaults.driver),
        hw_mode=section.get("hw_mode", defaults.hw_mode),
        ieee80211d=str(section.get("ieee80211d", defaults.ieee80211d)),
        country_code=section.get("country_code", defaults.country_code),
        wme_enabled=str(section.get("wme_enabled", defaults.wme_enabled)),
        wmm_enabled=str(section.get("wmm_enabled", defaults.wmm_enabled)),
        ieee80211n=_flag(section, "ieee80211n", defaults.ieee80211n),
        phy=section.get("phy", defaults.phy),
        band=int(section.get("band", defaults.band)),
        default_channel=int(section.get("default_channel", defaults.default_channel)),
    )


def _build_defaults(data: dict) -> NetworkDefaults:
    section = data.get("defaults", {})
    return NetworkDefaults(
        first_subnet=section.get("first_subnet", NetworkDefaults.first_subnet),
        first_interface=section.get("first_interface", NetworkDefaults.first_interface),
    )


def _build_dnsmasq(data: dict) -> DnsmasqConfig:
    section = data.get("dnsmasq", {})
    return DnsmasqConfig(
        aliases=list(section.get("aliases", [])),
        lease_time=section.get("lease_time", DnsmasqConfig.lease_time),
        reserved_head=int(section.get("reserved_head", DnsmasqConfig.reserved_head)),
        reserved_tail=int(section.get("reserved_tail", DnsmasqConfig.reserved_tail)),
    )


def _build_state(data: dict) -> StateConfig:
    section = data.get("state", {})
    state = StateConfig()
    if "directory" in section:
        state.directory = Path(section["directory"])
    state.node_name_file = section.get("node_name_file", state.node_name_file)
    state.channel_file = section.get("channel_file", state.channel_file)
    return state


def _build_outputs(data: dict) -> OutputConfig:
    section = data.get("outputs", {})
    outputs = OutputConfig()
    if "hostapd" in section:
        outputs.hostapd = Path(section["hostapd"])
    if "dnsmasq_dir" in section:
        outputs.dnsmasq_dir = Path(section["dnsmasq_dir"])
    outputs.dnsmasq_name = section.get("dnsmasq_name", outputs.dnsmasq_name)
    return outputs


def _build_networks(data: dict) -> list[NetworkSpec]:
    """Build network declarations from parsed TOML data.

    Tables are taken in file order. Without a [networks] section the
    private/public pair is used.
    """
    section = data.get("networks")
    if not section:
        return default_networks()

    specs = []
    for name, values in section.items():
        try:
            subnet = _fixed_subnet(values.get("subnet"))
            interface = _fixed_interface(values.get("interface"))
        except ValueError as e:
            raise ValueError(f"[networks.{name}] {e}") from None
        default_path = "." if name == PRIMARY_NETWORK else name
        specs.append(NetworkSpec(
            name=name,
            path=values.get("path", default_path),
            ssid_suffix=values.get("ssid_suffix", ""),
            subnet=subnet,
            interface=interface,
        ))
    return specs


def _fixed_subnet(value) -> ipaddress.IPv4Network | None:
    """Parse a fixed subnet; host bits must be clear.

    >>> _fixed_subnet("10.50.0.0/24")
    IPv4Network('10.50.0.0/24')
    >>> _fixed_subnet(None) is None
    True
    """
    if value is None:
        return None
    if not isinstance(value, str):
        raise ValueError(f"subnet must be a string, not {value!r}")
    try:
        return ipaddress.IPv4Network(value)
    except ValueError as e:
        raise ValueError(f"bad subnet: {e}") from None


def _fixed_interface(value) -> InterfaceName | None:
    if value is None:
        return None
    if not isinstance(value, str):
        raise ValueError(f"interface must be a string, not {value!r}")
    return InterfaceName(value)


def load_config(config_path: Path | str | None = None) -> ProvisionConfig:
    """Load provisioning configuration from a TOML file.

    If config_path is None, looks for apnetcfg.toml in the current
    directory and falls back to the built-in defaults when there is none.
    An explicitly named file must exist.
    """
    if config_path is None:
        config_path = Path(DEFAULT_CONFIG_NAME)
        if not config_path.exists():
            return ProvisionConfig()
    else:
        config_path = Path(config_path)

    with open(config_path, "rb") as f:
        data = tomllib.load(f)

    return ProvisionConfig(
        radio=_build_radio(data),
        defaults=_build_defaults(data),
        dnsmasq=_build_dnsmasq(data),
        state=_build_state(data),
        outputs=_build_outputs(data),
        services=ServicesConfig(
            reload=list(data.get("services", {}).get("reload", [])),
        ),
        networks=_build_networks(data),
    )
