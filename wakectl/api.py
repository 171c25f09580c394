"""Stable public API for building tooling on top of wakectl.

This module is the supported integration surface for third-party callers.
Avoid importing from private/internal modules unless intentionally depending on
non-stable internals.
"""

from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path

from wakectl.core.errors import (
    DestinationResolutionError,
    EchoMismatchError,
    HostLookupError,
    HostsLoadError,
    HostsValidationError,
    InterfaceError,
    InterfaceNotFoundError,
    InvalidAddressFormatError,
    InvalidTimeoutError,
    NoAddressForInterfaceError,
    NoEchoResponseError,
    NoIPv4AddressError,
    ShortWriteError,
    TransportError,
    TransportSocketError,
    UnsupportedProtocolError,
    WakectlError,
)
from wakectl.core.hosts import LoadedHosts, load_hosts
from wakectl.core.interfaces import list_interfaces, resolve_interface, subnet_broadcast
from wakectl.core.mac import parse_mac
from wakectl.core.model import (
    HostEntry,
    InterfaceAddress,
    MacAddress,
    WakeConfig,
    WakeProtocol,
    WakeResult,
)
from wakectl.core.packet import MAGIC_PACKET_SIZE, build_magic_packet
from wakectl.core.service import WakeService, parse_protocol
from wakectl.transports.base import Transport
from wakectl.transports.discard import DiscardTransport
from wakectl.transports.echo import EchoTransport

__all__ = [
    "WakectlError",
    "InvalidAddressFormatError",
    "InvalidTimeoutError",
    "UnsupportedProtocolError",
    "InterfaceError",
    "InterfaceNotFoundError",
    "NoAddressForInterfaceError",
    "NoIPv4AddressError",
    "TransportError",
    "DestinationResolutionError",
    "TransportSocketError",
    "ShortWriteError",
    "NoEchoResponseError",
    "EchoMismatchError",
    "HostsLoadError",
    "HostsValidationError",
    "HostLookupError",
    "HostEntry",
    "InterfaceAddress",
    "MacAddress",
    "WakeConfig",
    "WakeProtocol",
    "WakeResult",
    "MAGIC_PACKET_SIZE",
    "Transport",
    "DiscardTransport",
    "EchoTransport",
    "build_magic_packet",
    "list_interfaces",
    "parse_mac",
    "parse_protocol",
    "resolve_interface",
    "subnet_broadcast",
    "Client",
    "wake",
]


class Client:
    """Public client for sending Wake-on-LAN packets.

    A `Client` wraps the send service and the optional hosts file so callers
    can wake either a raw MAC address or a configured host alias.
    """

    def __init__(
        self,
        *,
        config: WakeConfig | None = None,
        transports: Mapping[WakeProtocol, Transport] | None = None,
        hosts_path: Path | None = None,
        load_hosts_file: bool = False,
    ) -> None:
        if load_hosts_file or hosts_path is not None:
            self._hosts = load_hosts(hosts_path)
        else:
            self._hosts = LoadedHosts(config=WakeConfig(), hosts={})
        self._service = WakeService(config=config or self._hosts.config, transports=transports)

    @property
    def config(self) -> WakeConfig:
        return self._service.config

    def list_hosts(self) -> list[HostEntry]:
        return sorted(self._hosts.hosts.values(), key=lambda h: h.name)

    def wake(
        self,
        mac: str,
        *,
        protocol: WakeProtocol | str | None = None,
        interface: str | None = None,
        timeout_s: float | None = None,
    ) -> WakeResult:
        return self._service.wake(mac, protocol=protocol, interface=interface, timeout_s=timeout_s)

    def wake_host(
        self,
        name: str,
        *,
        protocol: WakeProtocol | str | None = None,
        interface: str | None = None,
        timeout_s: float | None = None,
    ) -> WakeResult:
        entry = self._hosts.lookup(name)
        return self._service.wake(
            entry.mac,
            protocol=protocol or entry.protocol,
            interface=interface or entry.interface,
            timeout_s=timeout_s,
        )


def wake(
    mac: str,
    *,
    protocol: WakeProtocol | str | None = None,
    interface: str | None = None,
    timeout_s: float | None = None,
    config: WakeConfig | None = None,
) -> WakeResult:
    """Wake `mac` with a one-off service; see `WakeService.wake`."""
    return WakeService(config=config).wake(
        mac,
        protocol=protocol,
        interface=interface,
        timeout_s=timeout_s,
    )
