"""Supplement: radio and interface details read with iw and ip.

Every lookup is a blocking subprocess call. A missing tool, a non-zero
exit or unparseable output degrades to the documented fallback instead
of failing the run.
"""

from __future__ import annotations

import re
import subprocess
import sys

from apnetcfg.models.addressing import MACAddress
from apnetcfg.models.radio import RadioInfo

COMMAND_TIMEOUT = 10

_WIPHY_RE = re.compile(r'^Wiphy\s+(\S+)', re.MULTILINE)
_INTERFACE_RE = re.compile(r'^\s*Interface\s+(\S+)', re.MULTILINE)
_LINK_ETHER_RE = re.compile(r'link/ether\s+((?:[0-9a-f]{2}:){5}[0-9a-f]{2})', re.IGNORECASE)


def _run(command: list[str], verbose: bool = False) -> str | None:
    """Run a lookup command, returning stdout or None on any failure."""
    try:
        result = subprocess.run(
            command,
            capture_output=True,
            text=True,
            timeout=COMMAND_TIMEOUT,
        )
    except (subprocess.TimeoutExpired, FileNotFoundError, PermissionError) as e:
        if verbose:
            print(f"  command {' '.join(command)!r} failed: {e}", file=sys.stderr)
        return None
    if result.returncode != 0:
        if verbose:
            print(
                f"  command {' '.join(command)!r} exited {result.returncode}",
                file=sys.stderr,
            )
        return None
    return result.stdout


def parse_phy(output: str) -> str | None:
    """Return the first radio named in ``iw list`` output.

    >>> parse_phy("Wiphy phy0\\n\\tmax # scan SSIDs: 4\\n")
    'phy0'
    """
    match = _WIPHY_RE.search(output)
    return match.group(1) if match else None


def parse_interface(output: str) -> str | None:
    """Return the first interface named in ``iw dev`` output.

    >>> parse_interface("phy#0\\n\\tInterface wlp2s0\\n\\t\\tifindex 3\\n")
    'wlp2s0'
    """
    match = _INTERFACE_RE.search(output)
    return match.group(1) if match else None


def parse_mac(output: str) -> MACAddress | None:
    """Return the link/ether address in ``ip link show`` output.

    >>> parse_mac("2: wlan0: <BROADCAST>\\n    link/ether 00:0e:8e:64:2a:00 brd ff:ff:ff:ff:ff:ff")
    MACAddress(address='00:0e:8e:64:2a:00')
    """
    match = _LINK_ETHER_RE.search(output)
    return MACAddress.parse(match.group(1)) if match else None


def detect_phy(fallback: str, verbose: bool = False) -> str:
    """Name of the first wireless radio, ``fallback`` if none is found."""
    output = _run(["iw", "list"], verbose)
    return (parse_phy(output) if output else None) or fallback


def read_capability_report(phy: str, verbose: bool = False) -> str:
    """Raw ``iw phy <phy> info`` output, empty if iw fails."""
    return _run(["iw", "phy", phy, "info"], verbose) or ""


def detect_interface(fallback: str, verbose: bool = False) -> str:
    """Name of the first existing wireless interface, ``fallback`` if none."""
    output = _run(["iw", "dev"], verbose)
    return (parse_interface(output) if output else None) or fallback


def detect_mac(interface: str, verbose: bool = False) -> MACAddress | None:
    """Hardware MAC of ``interface``, None if it cannot be read."""
    output = _run(["ip", "link", "show", interface], verbose)
    return parse_mac(output) if output else None


def detect_radio(
    fallback_phy: str,
    primary_interface: str,
    channel: int,
    verbose: bool = False,
) -> RadioInfo:
    """Gather everything the generators need to know about the radio."""
    phy = detect_phy(fallback_phy, verbose)
    report = read_capability_report(phy, verbose)
    mac = detect_mac(primary_interface, verbose)
    if verbose:
        print(
            f"  radio {phy}: report {len(report)} bytes, "
            f"{primary_interface} mac {mac or 'unknown'}",
            file=sys.stderr,
        )
    return RadioInfo(phy=phy, capability_report=report, mac=mac, channel=channel)
