"""Data models for access-point networks and radios."""

from apnetcfg.models.addressing import MACAddress
from apnetcfg.models.network import PRIMARY_NETWORK, InterfaceName, Network
from apnetcfg.models.radio import RadioInfo

__all__ = [
    "PRIMARY_NETWORK",
    "InterfaceName",
    "MACAddress",
    "Network",
    "RadioInfo",
]
