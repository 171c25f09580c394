"""UDP discard-port transport using Python sockets."""

from __future__ import annotations

import logging
import socket
from ipaddress import IPv4Address

from wakectl.core.errors import ShortWriteError, TransportSocketError
from wakectl.core.model import DISCARD_PORT
from wakectl.transports.base import bind_and_connect, open_socket, resolve_destination

LOGGER = logging.getLogger(__name__)


class DiscardTransport:
    """Fire-and-forget UDP send; the discard service never replies."""

    def __init__(self, port: int = DISCARD_PORT) -> None:
        self.port = port

    def send(
        self,
        packet: bytes,
        destination: str,
        *,
        source: IPv4Address | None = None,
        timeout_s: float = 2.0,
    ) -> bytes | None:
        host = resolve_destination(destination)
        udp_socket = open_socket(socket.AF_INET, socket.SOCK_DGRAM, socket.IPPROTO_UDP, label="UDP")
        with udp_socket:
            bind_and_connect(udp_socket, source, (host, self.port), label="UDP")
            try:
                sent = udp_socket.send(packet)
            except OSError as exc:
                raise TransportSocketError(f"UDP send to {host}:{self.port} failed: {exc}") from exc
            LOGGER.debug("Sent %d bytes to %s:%d over UDP", sent, host, self.port)
            if sent != len(packet):
                raise ShortWriteError(expected=len(packet), actual=sent)
        return None
