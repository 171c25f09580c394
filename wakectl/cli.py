"""Typer CLI entrypoint."""

from __future__ import annotations

import logging
from pathlib import Path

import typer

from wakectl.core.errors import WakectlError
from wakectl.core.hosts import load_hosts
from wakectl.core.interfaces import list_interfaces, subnet_broadcast
from wakectl.core.mac import is_mac, looks_like_mac, parse_mac
from wakectl.core.packet import build_magic_packet
from wakectl.core.service import WakeService

app = typer.Typer(help="Wake remote hosts over the LAN with Wake-on-LAN magic packets")


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s  %(levelname)-8s  %(name)s  %(message)s",
        datefmt="%H:%M:%S",
    )


@app.command("wake")
def wake_target(
    target: str = typer.Argument(..., help="MAC address or configured host name"),
    protocol: str | None = typer.Option(None, "--protocol", "-p", help="discard (UDP/9) or echo (ICMP)"),
    interface: str | None = typer.Option(None, "--interface", "-i", help="Send via this interface's subnet broadcast"),
    timeout: float | None = typer.Option(None, "--timeout", min=0, help="Echo reply timeout in seconds"),
    config: Path | None = typer.Option(None, "--config", "-c", help="Hosts file path"),
) -> None:
    """Send a magic packet to TARGET."""
    try:
        loaded = load_hosts(config)
        mac = target
        if not is_mac(target):
            if target not in loaded.hosts and looks_like_mac(target):
                parse_mac(target)
            entry = loaded.lookup(target)
            mac = entry.mac
            protocol = protocol or (entry.protocol.value if entry.protocol else None)
            interface = interface or entry.interface

        service = WakeService(config=loaded.config)
        result = service.wake(mac, protocol=protocol, interface=interface, timeout_s=timeout)
        via = f" from {result.source} ({result.interface})" if result.interface else ""
        typer.echo(
            f"Sent magic packet for {result.mac} to {result.destination} "
            f"via {result.protocol.value}{via}"
        )
        if result.response_hex:
            typer.echo(f"response={result.response_hex}")
    except WakectlError as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(code=1) from None


@app.command("hosts")
def list_hosts(
    config: Path | None = typer.Option(None, "--config", "-c", help="Hosts file path"),
) -> None:
    """List configured host aliases."""
    try:
        loaded = load_hosts(config)
        if not loaded.hosts:
            typer.echo("No hosts configured")
            return

        for name, entry in sorted(loaded.hosts.items()):
            extras = []
            if entry.interface:
                extras.append(f"interface={entry.interface}")
            if entry.protocol:
                extras.append(f"protocol={entry.protocol.value}")
            suffix = f" ({', '.join(extras)})" if extras else ""
            typer.echo(f"{name}: {entry.mac}{suffix}")
    except WakectlError as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(code=1) from None


@app.command("interfaces")
def show_interfaces() -> None:
    """List interfaces with an IPv4 address and their subnet broadcast."""
    found = list_interfaces()
    if not found:
        typer.echo("No IPv4 interfaces found")
        return

    for iface in found:
        broadcast = subnet_broadcast(iface.address, iface.netmask)
        typer.echo(f"{iface.name}: {iface.address}/{iface.netmask} broadcast {broadcast}")


@app.command("packet")
def show_packet(mac: str) -> None:
    """Print the magic packet for MAC as hex without sending it."""
    try:
        typer.echo(build_magic_packet(parse_mac(mac)).hex())
    except WakectlError as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(code=1) from None


def run() -> None:
    app()


if __name__ == "__main__":
    run()
