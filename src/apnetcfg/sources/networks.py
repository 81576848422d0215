"""Build Network objects from the state directory.

Layout (relative to the state directory, per network 'path'):
    <path>/enabled    marker: the network is wanted
    <path>/password   WPA passphrase (missing → open network)
    <path>/ssid       optional SSID override
    box_name          optional node name override (state root)
    channel           optional radio channel (state root)
"""

from __future__ import annotations

import socket

from apnetcfg.config import NetworkSpec
from apnetcfg.models.network import Network
from apnetcfg.sources.store import StateStore

MAX_SSID_BYTES = 32
DEFAULT_NODE_NAME = "access-point"


def trim_ssid(ssid: str) -> str:
    """Trim an SSID to 32 bytes without cutting a UTF-8 character.

    >>> trim_ssid("This is a test of SSID trim:   \\u00df")
    'This is a test of SSID trim:'
    >>> trim_ssid("short")
    'short'
    """
    data = ssid.encode("utf-8")
    if len(data) > MAX_SSID_BYTES:
        data = data[:MAX_SSID_BYTES].decode("utf-8", errors="ignore").encode("utf-8")
    return data.decode("utf-8").strip()


def read_node_name(store: StateStore, override_file: str = "box_name") -> str:
    """Return the node's display name.

    Uses the override file if present and non-empty, otherwise the
    short host name.
    """
    name = store.read(override_file)
    if name:
        return name
    hostname = socket.gethostname().split(".")[0]
    return hostname or DEFAULT_NODE_NAME


def read_channel(store: StateStore, channel_file: str = "channel", default: int = 1) -> int:
    """Return the configured channel, or ``default`` if none is stored.

    Raises:
        ValueError: the file holds something other than a positive integer.
    """
    raw = store.read(channel_file)
    if not raw:
        return default
    try:
        channel = int(raw)
    except ValueError:
        raise ValueError(f"channel {raw!r} is not an integer") from None
    if channel <= 0:
        raise ValueError(f"channel {channel} is not positive")
    return channel


def load_network(store: StateStore, spec: NetworkSpec, node_name: str) -> Network:
    """Build one Network from its NetworkSpec and state files."""
    scoped = store.scoped(spec.path)
    ssid = scoped.read("ssid") or f"{node_name}{spec.ssid_suffix}"
    return Network(
        name=spec.name,
        ssid=trim_ssid(ssid),
        passphrase=scoped.read("password"),
        enabled=scoped.has("enabled"),
        subnet=spec.subnet,
        interface=spec.interface,
    )


def load_networks(
    store: StateStore, specs: list[NetworkSpec], node_name: str,
) -> list[Network]:
    """Build all declared networks, enabled or not, in declaration order."""
    return [load_network(store, spec, node_name) for spec in specs]
