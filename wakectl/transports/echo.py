"""Raw IPv4/ICMP echo transport using Python sockets."""

from __future__ import annotations

import logging
import socket
from ipaddress import IPv4Address

from wakectl.core.errors import EchoMismatchError, NoEchoResponseError, TransportSocketError
from wakectl.core.model import ECHO_BUFFER_SIZE, ECHO_TIMEOUT_S
from wakectl.transports.base import bind_and_connect, open_socket, resolve_destination

LOGGER = logging.getLogger(__name__)


def _ip_payload(datagram: bytes) -> bytes:
    # Raw IPv4 sockets hand back the IP header along with the payload.
    if len(datagram) >= 20 and datagram[0] >> 4 == 4:
        header_len = (datagram[0] & 0x0F) * 4
        return datagram[header_len:]
    return datagram


class EchoTransport:
    """Write the packet as raw ICMP payload and wait for it to be echoed back."""

    def __init__(self, buffer_size: int = ECHO_BUFFER_SIZE) -> None:
        self.buffer_size = buffer_size

    def send(
        self,
        packet: bytes,
        destination: str,
        *,
        source: IPv4Address | None = None,
        timeout_s: float = ECHO_TIMEOUT_S,
    ) -> bytes | None:
        host = resolve_destination(destination)
        icmp_socket = open_socket(socket.AF_INET, socket.SOCK_RAW, socket.IPPROTO_ICMP, label="ICMP")
        with icmp_socket:
            bind_and_connect(icmp_socket, source, (host, 0), label="ICMP")
            try:
                icmp_socket.send(packet)
            except OSError as exc:
                raise TransportSocketError(f"ICMP send to {host} failed: {exc}") from exc
            LOGGER.debug("Sent %d bytes to %s over ICMP, waiting %.1fs", len(packet), host, timeout_s)

            icmp_socket.settimeout(timeout_s)
            try:
                datagram = icmp_socket.recv(self.buffer_size)
            except (socket.timeout, TimeoutError) as exc:
                raise NoEchoResponseError(
                    f"No response received from {host} within {timeout_s}s"
                ) from exc
            except OSError as exc:
                raise NoEchoResponseError(f"No response received from {host}: {exc}") from exc

        reply = _ip_payload(datagram)
        if reply != packet:
            raise EchoMismatchError(sent=packet, received=reply)
        return reply
