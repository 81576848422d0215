"""Helpers for values interpolated into line-oriented config files.

hostapd and dnsmasq read one ``key=value`` directive per line, so a
value with a line break would inject further directives.
"""

from __future__ import annotations

import re

# RFC 952/1123 labels plus underscores.
_DNS_NAME_RE = re.compile(r"[a-zA-Z0-9._-]+")

_LABEL_INVALID_RE = re.compile(r"[^a-z0-9-]+")

_LINE_BREAK_RE = re.compile(r"[\r\n\x00]")


def is_safe_dns_name(name: str) -> bool:
    """Check if a DNS name is safe for an ``address=/name/ip`` directive.

    >>> is_safe_dns_name("gateway.local")
    True
    >>> is_safe_dns_name("my box")
    False
    >>> is_safe_dns_name("")
    False
    """
    return bool(name and _DNS_NAME_RE.fullmatch(name))


def dns_label(name: str) -> str:
    """Turn a display name into a single DNS label.

    Takes the first dot-separated part, lowercases it and collapses
    anything outside [a-z0-9-] into single hyphens.

    >>> dns_label("pfannkuchenpfanne.example.com")
    'pfannkuchenpfanne'
    >>> dns_label("My Box (public)")
    'my-box-public'
    """
    first = name.split(".")[0].lower()
    return _LABEL_INVALID_RE.sub("-", first).strip("-")


def is_single_line(value: str) -> bool:
    """Check that a value cannot break out of its directive line.

    >>> is_single_line("home network")
    True
    >>> is_single_line("home\\nwpa=0")
    False
    """
    return not _LINE_BREAK_RE.search(value)
