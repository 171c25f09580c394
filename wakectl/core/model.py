"""Core data models used across the codec, service, transports and CLI."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from ipaddress import IPv4Address

DEFAULT_BROADCAST = "255.255.255.255"
DISCARD_PORT = 9
ECHO_TIMEOUT_S = 2.0
ECHO_BUFFER_SIZE = 1024


class WakeProtocol(str, Enum):
    DISCARD = "discard"
    ECHO = "echo"


@dataclass(frozen=True)
class MacAddress:
    octets: bytes

    def __str__(self) -> str:
        return ":".join(f"{b:02X}" for b in self.octets)


@dataclass(frozen=True)
class InterfaceAddress:
    name: str
    address: IPv4Address
    netmask: IPv4Address


@dataclass(frozen=True)
class WakeConfig:
    """Immutable send settings handed to the service and its transports."""

    broadcast: str = DEFAULT_BROADCAST
    discard_port: int = DISCARD_PORT
    echo_timeout_s: float = ECHO_TIMEOUT_S
    echo_buffer_size: int = ECHO_BUFFER_SIZE


@dataclass(frozen=True)
class HostEntry:
    name: str
    mac: str
    interface: str | None = None
    protocol: WakeProtocol | None = None


@dataclass(frozen=True)
class WakeResult:
    mac: str
    protocol: WakeProtocol
    destination: str
    payload_hex: str
    source: str | None = None
    interface: str | None = None
    response: bytes | None = None

    @property
    def response_hex(self) -> str | None:
        return self.response.hex() if self.response is not None else None
