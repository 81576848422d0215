"""apnetcfg: provision access-point networks for hostapd and dnsmasq."""

__version__ = "0.1.0"
