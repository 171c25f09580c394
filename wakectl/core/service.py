"""Service layer used by the public API and the CLI."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from ipaddress import IPv4Address

from wakectl.core.errors import InvalidTimeoutError, UnsupportedProtocolError
from wakectl.core.interfaces import resolve_interface, subnet_broadcast
from wakectl.core.mac import parse_mac
from wakectl.core.model import WakeConfig, WakeProtocol, WakeResult
from wakectl.core.packet import build_magic_packet
from wakectl.transports.base import Transport
from wakectl.transports.discard import DiscardTransport
from wakectl.transports.echo import EchoTransport

LOGGER = logging.getLogger(__name__)


def parse_protocol(value: WakeProtocol | str | None) -> WakeProtocol:
    if value is None:
        return WakeProtocol.DISCARD
    if isinstance(value, WakeProtocol):
        return value
    if isinstance(value, str):
        try:
            return WakeProtocol(value.strip().lower())
        except ValueError:
            pass
    allowed = ", ".join(p.value for p in WakeProtocol)
    raise UnsupportedProtocolError(f"Unsupported protocol '{value}'. Allowed: {allowed}")


def default_transports(config: WakeConfig) -> dict[WakeProtocol, Transport]:
    return {
        WakeProtocol.DISCARD: DiscardTransport(port=config.discard_port),
        WakeProtocol.ECHO: EchoTransport(buffer_size=config.echo_buffer_size),
    }


class WakeService:
    def __init__(
        self,
        *,
        config: WakeConfig | None = None,
        transports: Mapping[WakeProtocol, Transport] | None = None,
    ) -> None:
        self.config = config or WakeConfig()
        self.transports = dict(transports) if transports is not None else default_transports(self.config)

    def wake(
        self,
        mac: str,
        *,
        protocol: WakeProtocol | str | None = None,
        interface: str | None = None,
        timeout_s: float | None = None,
    ) -> WakeResult:
        """Send one magic packet for `mac` and report what was sent.

        With `interface` the packet goes to that interface's subnet broadcast
        from its IPv4 address; otherwise to the configured global broadcast.
        """
        effective_timeout = self.config.echo_timeout_s if timeout_s is None else timeout_s
        if effective_timeout <= 0:
            raise InvalidTimeoutError(f"Timeout must be a positive number of seconds, got {effective_timeout}")

        selected = parse_protocol(protocol)
        transport = self.transports.get(selected)
        if transport is None:
            raise UnsupportedProtocolError(f"No transport registered for protocol '{selected.value}'")

        target = parse_mac(mac)

        source: IPv4Address | None = None
        destination = self.config.broadcast
        if interface:
            iface_addr = resolve_interface(interface)
            source = iface_addr.address
            destination = str(subnet_broadcast(iface_addr.address, iface_addr.netmask))
            LOGGER.debug(
                "Interface %s: address=%s netmask=%s broadcast=%s",
                interface,
                iface_addr.address,
                iface_addr.netmask,
                destination,
            )

        packet = build_magic_packet(target)
        LOGGER.debug("Waking %s via %s to %s", target, selected.value, destination)
        response = transport.send(
            packet,
            destination,
            source=source,
            timeout_s=effective_timeout,
        )

        return WakeResult(
            mac=str(target),
            protocol=selected,
            destination=destination,
            payload_hex=packet.hex(),
            source=str(source) if source is not None else None,
            interface=interface,
            response=response,
        )
