"""HT capability detection from ``iw phy <phy> info`` output.

Produces the value of hostapd's ``ht_capab`` directive. Each check is an
independent substring test against the band's capabilities section; the
order of the checks is the order of the tokens in the result.
"""

from __future__ import annotations

import re

# HT40 above the primary channel for 1-7, below it from 8 upwards.
HT40_MINUS_FROM_CHANNEL = 8

_IEEE80211N_RE = re.compile(r'HT[248]0', re.IGNORECASE)

_CAPABILITY_CHECKS: tuple[tuple[str, str], ...] = (
    # Channel width (channel bonding)
    ("HT20", "[HT20]"),
    ("HT40", "[HT40{direction}]"),
    # Short guard interval
    ("HT20 SGI", "[SHORT-GI-20]"),
    ("HT40 SGI", "[SHORT-GI-40]"),
    ("DSSS/CCK HT40", "[DSSS_CCK-40]"),
    # Frame aggregation
    ("MAX AMSDU LENGTH: 3839", "[MAX-AMSDU-3839]"),
    # Spatial streams
    ("TX STBC", "[TX-STBC]"),
    ("RX STBC 1", "[RX-STBC1]"),
)


class ParseError(ValueError):
    """The report has no capabilities section for the requested band."""


def _section_re(band: int | None) -> re.Pattern[str]:
    band_prefix = rf'band {band}:.*?' if band is not None else ''
    return re.compile(
        band_prefix + r'capabilities:(?P<capabilities>.*?)frequencies:',
        re.IGNORECASE | re.DOTALL,
    )


def extract_capabilities(report: str, band: int | None = None) -> str:
    """Return the text between ``Capabilities:`` and ``Frequencies:``.

    With ``band`` set, the section must follow that band's ``Band N:``
    header; otherwise the first section in the report is used.

    >>> extract_capabilities("Band 1:\\n Capabilities: 0x2\\n  HT20\\n Frequencies:")
    ' 0x2\\n  HT20\\n '

    Raises:
        ParseError: no such section exists.
    """
    match = _section_re(band).search(report)
    if match is None:
        where = f" for band {band}" if band is not None else ""
        raise ParseError(f"no capabilities section{where} in radio report")
    return match.group("capabilities")


def ht40_direction(channel: int) -> str:
    """Return '+' or '-' for the secondary HT40 channel.

    >>> ht40_direction(1), ht40_direction(7), ht40_direction(8)
    ('+', '+', '-')
    """
    return "+" if channel < HT40_MINUS_FROM_CHANNEL else "-"


def capability_tokens(capabilities: str, channel: int) -> list[str]:
    """Evaluate every check against an extracted capabilities section."""
    direction = ht40_direction(channel)
    return [
        token.format(direction=direction)
        for needle, token in _CAPABILITY_CHECKS
        if needle in capabilities
    ]


def parse_capabilities(report: str, channel: int, band: int | None = None) -> str:
    """Build the ``ht_capab`` bitmask string from a raw radio report.

    >>> parse_capabilities("Capabilities:\\n HT20/HT40\\n RX HT20 SGI\\nFrequencies:", 1)
    '[HT20][HT40+][SHORT-GI-20]'

    Raises:
        ParseError: the report has no capabilities section; callers fall
            back to an empty bitmask.
    """
    return "".join(capability_tokens(extract_capabilities(report, band), channel))


def parse_capabilities_or_empty(report: str, channel: int, band: int | None = None) -> str:
    """Like parse_capabilities(), but an unparseable report yields ''."""
    try:
        return parse_capabilities(report, channel, band)
    except ParseError:
        return ""


def supports_ieee80211n(report: str, default: bool = False) -> bool:
    """Detect 802.11n support from any HT20/HT40/HT80 mention.

    An empty report (iw unavailable) returns ``default``.

    >>> supports_ieee80211n("Capabilities: HT20/HT40")
    True
    >>> supports_ieee80211n("Bitrates (non-HT): 1.0 Mbps")
    False
    >>> supports_ieee80211n("", default=True)
    True
    """
    if not report.strip():
        return default
    return bool(_IEEE80211N_RE.search(report))
