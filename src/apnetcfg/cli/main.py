"""CLI entry point for apnetcfg.

Subcommands:
    generate   Run the pipeline and write hostapd/dnsmasq configs.
    validate   Run allocation and constraint checks only.
    info       Show configuration, networks and their allocations.
    psk        Print the WPA key for an SSID and passphrase.
"""

from __future__ import annotations

import argparse
import sys
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from apnetcfg.constraints.errors import ValidationResult
    from apnetcfg.models.network import Network
    from apnetcfg.models.radio import RadioInfo


@dataclass
class PipelineResult:
    """Everything a provisioning run knows before rendering."""

    node_name: str
    channel: int
    networks: list[Network] = field(default_factory=list)
    enabled: list[Network] = field(default_factory=list)
    radio: RadioInfo | None = None
    validation: ValidationResult | None = None


def _load_config(args: argparse.Namespace):
    """Load provisioning config, handling errors."""
    from apnetcfg.config import load_config

    config_path = getattr(args, "config", None)
    try:
        return load_config(config_path)
    except FileNotFoundError:
        print(f"Error: config file not found: {config_path}", file=sys.stderr)
        sys.exit(1)
    except (ValueError, TypeError) as e:
        print(f"Error: invalid config file {config_path}: {e}", file=sys.stderr)
        sys.exit(1)


def _build_pipeline(config, verbose: bool = False) -> PipelineResult:
    """Run the build pipeline: read state → allocate → detect radio → validate.

    Exits with status 1 if the channel is unusable or allocation fails.
    """
    from apnetcfg.constraints.errors import AllocationError
    from apnetcfg.constraints.validators import validate_all
    from apnetcfg.derivations.network_builder import assign_networks, enabled_networks
    from apnetcfg.sources.networks import load_networks, read_channel, read_node_name
    from apnetcfg.sources.store import StateStore
    from apnetcfg.supplements.radio import detect_interface, detect_radio

    store = StateStore(config.state.directory)
    node_name = read_node_name(store, config.state.node_name_file)

    try:
        channel = read_channel(
            store, config.state.channel_file, config.radio.default_channel,
        )
    except ValueError as e:
        print(f"Error: reading channel failed: {e}", file=sys.stderr)
        sys.exit(1)

    networks = load_networks(store, config.networks, node_name)
    enabled = enabled_networks(networks)
    if verbose:
        print(f"Found networks: {[n.name for n in enabled]}", file=sys.stderr)

    result = PipelineResult(node_name=node_name, channel=channel, networks=networks)
    if not enabled:
        return result

    first_interface = detect_interface(config.defaults.first_interface, verbose)
    try:
        enabled = assign_networks(enabled, config.defaults.first_subnet, first_interface)
    except (AllocationError, ValueError) as e:
        print(f"Error: allocation failed: {e}", file=sys.stderr)
        sys.exit(1)

    if verbose:
        for network in enabled:
            print(
                f"  {network.name}: {network.interface} {network.subnet}",
                file=sys.stderr,
            )

    result.enabled = enabled
    result.radio = detect_radio(
        config.radio.phy, enabled[0].interface.name, channel, verbose,
    )
    result.validation = validate_all(enabled, channel)
    return result


# ---------------------------------------------------------------------------
# Subcommand: generate
# ---------------------------------------------------------------------------

def cmd_generate(args: argparse.Namespace) -> int:
    """Run the pipeline and write the config files."""
    from apnetcfg.constraints.errors import ProvisioningError
    from apnetcfg.generators.synthesis import build_documents
    from apnetcfg.supplements.services import reload_services
    from apnetcfg.utils.files import write_all_atomic

    config = _load_config(args)
    pipeline = _build_pipeline(config, args.verbose)

    if not pipeline.enabled:
        print("No enabled networks, nothing to generate.", file=sys.stderr)
        return 0

    validation = pipeline.validation
    if validation.has_errors:
        print("Validation errors found:", file=sys.stderr)
        print(validation.report(), file=sys.stderr)
        if not args.force:
            print("Use --force to generate despite errors.", file=sys.stderr)
            return 1

    if validation.warnings:
        print(f"Validation: {len(validation.warnings)} warning(s)", file=sys.stderr)
        if args.verbose:
            for warning in validation.warnings:
                print(f"  {warning}", file=sys.stderr)

    try:
        documents = build_documents(
            pipeline.enabled,
            pipeline.radio,
            pipeline.node_name,
            config.radio,
            config.dnsmasq,
        )
    except ProvisioningError as e:
        print(f"Error: synthesis failed: {e}", file=sys.stderr)
        return 1

    if args.stdout:
        print("# === hostapd ===")
        print(documents.hostapd, end="")
        for name, content in documents.dnsmasq.items():
            print(f"# === dnsmasq: {name} ===")
            print(content, end="")
        return 0

    hostapd_path = config.outputs.hostapd
    files = {hostapd_path: documents.hostapd}
    for name, content in documents.dnsmasq.items():
        files[config.outputs.dnsmasq_path(name)] = content

    try:
        write_all_atomic(files, modes={hostapd_path: 0o600})
    except OSError as e:
        print(f"Error: writing config files failed: {e}", file=sys.stderr)
        return 1

    for path, content in files.items():
        print(f"  wrote {path} ({len(content)} bytes)")
    print(f"\nGenerated {len(files)} config file(s).")

    if args.reload and config.services.reload:
        failed = reload_services(config.services.reload, args.verbose)
        if failed:
            print(f"Error: {len(failed)} reload command(s) failed.", file=sys.stderr)
            return 1

    return 0


# ---------------------------------------------------------------------------
# Subcommand: validate
# ---------------------------------------------------------------------------

def cmd_validate(args: argparse.Namespace) -> int:
    """Run allocation and constraint validation."""
    config = _load_config(args)
    pipeline = _build_pipeline(config, args.verbose)

    print(f"Networks: {len(pipeline.networks)}")
    print(f"Enabled:  {len(pipeline.enabled)}")
    print()

    if pipeline.validation is None:
        print("No enabled networks.")
        return 0

    print(pipeline.validation.report())
    return 1 if pipeline.validation.has_errors else 0


# ---------------------------------------------------------------------------
# Subcommand: info
# ---------------------------------------------------------------------------

def cmd_info(args: argparse.Namespace) -> int:
    """Show configuration, networks and allocations."""
    config = _load_config(args)
    pipeline = _build_pipeline(config, args.verbose)

    print(f"Node:    {pipeline.node_name}")
    print(f"Channel: {pipeline.channel}")
    print(f"State:   {config.state.directory}")
    print()

    print("Outputs:")
    print(f"  hostapd: {config.outputs.hostapd}")
    print(f"  dnsmasq: {config.outputs.dnsmasq_path('<network>')}")
    print()

    assigned = {n.name: n for n in pipeline.enabled}
    print("Networks:")
    for network in pipeline.networks:
        status = "enabled" if network.enabled else "disabled"
        print(f"  {network.name}: {status}, ssid={network.ssid!r}")
        if network.name in assigned:
            current = assigned[network.name]
            print(f"    interface={current.interface} subnet={current.subnet}")

    if pipeline.radio is not None:
        print()
        mac = pipeline.radio.mac or "unknown"
        print(f"Radio:   {pipeline.radio.phy} (mac {mac})")

    return 0


# ---------------------------------------------------------------------------
# Subcommand: psk
# ---------------------------------------------------------------------------

def cmd_psk(args: argparse.Namespace) -> int:
    """Print the derived WPA key."""
    from apnetcfg.derivations.psk import derive_psk

    psk = derive_psk(args.ssid, args.passphrase)
    if psk is None:
        print("Error: SSID and passphrase must not be empty.", file=sys.stderr)
        return 1
    print(psk)
    return 0


# ---------------------------------------------------------------------------
# Main entry point
# ---------------------------------------------------------------------------

def main(argv: list[str] | None = None) -> int:
    """CLI entry point."""
    parser = argparse.ArgumentParser(
        prog="apnetcfg",
        description="Generate hostapd and dnsmasq configs for access-point networks.",
    )
    parser.add_argument(
        "-c", "--config",
        help="Path to apnetcfg.toml (default: ./apnetcfg.toml, else built-in defaults)",
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true",
        help="Report hardware lookups and allocations on stderr",
    )

    subparsers = parser.add_subparsers(dest="command")

    # generate
    gen_parser = subparsers.add_parser("generate", help="Generate config files")
    gen_parser.add_argument(
        "--stdout", action="store_true",
        help="Print output to stdout instead of writing files",
    )
    gen_parser.add_argument(
        "--force", action="store_true",
        help="Generate even if validation errors exist",
    )
    gen_parser.add_argument(
        "--reload", action="store_true",
        help="Run the configured reload commands after writing",
    )

    # validate
    subparsers.add_parser("validate", help="Run allocation and constraint checks")

    # info
    subparsers.add_parser("info", help="Show configuration and allocations")

    # psk
    psk_parser = subparsers.add_parser("psk", help="Derive a WPA pre-shared key")
    psk_parser.add_argument("ssid")
    psk_parser.add_argument("passphrase")

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 0

    commands = {
        "generate": cmd_generate,
        "validate": cmd_validate,
        "info": cmd_info,
        "psk": cmd_psk,
    }

    return commands[args.command](args)


if __name__ == "__main__":
    sys.exit(main())
