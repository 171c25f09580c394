"""Transport interfaces and shared socket helpers."""

from __future__ import annotations

import socket
from ipaddress import IPv4Address
from typing import Protocol

from wakectl.core.errors import DestinationResolutionError, TransportSocketError


class Transport(Protocol):
    def send(
        self,
        packet: bytes,
        destination: str,
        *,
        source: IPv4Address | None = None,
        timeout_s: float = 2.0,
    ) -> bytes | None:
        """Send a magic packet and optionally return the peer's response."""


def resolve_destination(destination: str) -> str:
    """Resolve `destination` to a dotted IPv4 string usable by the socket layer."""
    try:
        infos = socket.getaddrinfo(destination, None, socket.AF_INET)
    except (socket.gaierror, UnicodeError) as exc:
        raise DestinationResolutionError(
            f"Could not resolve destination '{destination}': {exc}"
        ) from exc
    if not infos:
        raise DestinationResolutionError(f"Could not resolve destination '{destination}'")
    return infos[0][4][0]


def open_socket(family: int, sock_type: int, proto: int, *, label: str) -> socket.socket:
    try:
        sock = socket.socket(family, sock_type, proto)
    except PermissionError as exc:
        raise TransportSocketError(
            f"Could not create {label} socket: {exc}. Raw sockets need root or CAP_NET_RAW."
        ) from exc
    except OSError as exc:
        raise TransportSocketError(f"Could not create {label} socket: {exc}") from exc
    try:
        sock.setsockopt(socket.SOL_SOCKET, socket.SO_BROADCAST, 1)
    except OSError as exc:
        sock.close()
        raise TransportSocketError(f"Could not enable broadcast on {label} socket: {exc}") from exc
    return sock


def bind_and_connect(
    sock: socket.socket,
    source: IPv4Address | None,
    address: tuple,
    *,
    label: str,
) -> None:
    if source is not None:
        try:
            sock.bind((str(source), 0))
        except OSError as exc:
            raise TransportSocketError(f"{label} bind to {source} failed: {exc}") from exc
    try:
        sock.connect(address)
    except OSError as exc:
        raise TransportSocketError(f"{label} connect to {address[0]} failed: {exc}") from exc
