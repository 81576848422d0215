"""Interface name allocation."""

from __future__ import annotations

from collections.abc import Iterable

from apnetcfg.constraints.errors import AllocationError
from apnetcfg.models.network import MAX_INTERFACE_NAME, InterfaceName


def allocate_interface(
    base: InterfaceName | str,
    taken: Iterable[InterfaceName],
) -> InterfaceName:
    """Return the first name at or after ``base`` that is not taken.

    >>> allocate_interface('wlan0', [])
    InterfaceName(name='wlan0')
    >>> allocate_interface('wlan0', [InterfaceName('wlan0'), InterfaceName('wlan1')])
    InterfaceName(name='wlan2')

    Raises:
        AllocationError: the next candidate no longer fits in an
            interface name.
    """
    candidate = base if isinstance(base, InterfaceName) else InterfaceName(base)
    taken = set(taken)
    while candidate in taken:
        candidate = candidate.succ()
    if len(candidate.name) > MAX_INTERFACE_NAME:
        raise AllocationError(
            f"interface names exhausted: {candidate.name!r} is longer than "
            f"{MAX_INTERFACE_NAME} characters"
        )
    return candidate
