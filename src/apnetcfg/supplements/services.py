"""Supplement: hand the new documents over to the daemon supervisor.

Starting and stopping hostapd and dnsmasq belongs to the host's process
supervisor. This module only runs the configured reload commands once
every document has been written.
"""

from __future__ import annotations

import shlex
import subprocess
import sys

RELOAD_TIMEOUT = 60


def reload_services(commands: list[str], verbose: bool = False) -> list[str]:
    """Run each reload command in order.

    Commands are split with shlex and run without a shell. All commands
    are attempted; the ones that failed are returned.
    """
    failed: list[str] = []
    for command in commands:
        if verbose:
            print(f"  reload: {command}", file=sys.stderr)
        try:
            result = subprocess.run(
                shlex.split(command),
                capture_output=True,
                text=True,
                timeout=RELOAD_TIMEOUT,
            )
        except (subprocess.TimeoutExpired, FileNotFoundError, PermissionError) as e:
            print(f"  reload {command!r} failed: {e}", file=sys.stderr)
            failed.append(command)
            continue
        if result.returncode != 0:
            print(
                f"  reload {command!r} exited {result.returncode}: "
                f"{result.stderr.strip()}",
                file=sys.stderr,
            )
            failed.append(command)
    return failed
