"""Domain-specific errors for wakectl."""

from __future__ import annotations


class WakectlError(Exception):
    """Base error for wakectl."""


class InvalidAddressFormatError(WakectlError):
    """Raised when a MAC address string does not decode to exactly 6 octets."""


class UnsupportedProtocolError(WakectlError):
    """Raised when a protocol selector is not one of the known protocols."""


class InterfaceError(WakectlError):
    """Base error for network interface resolution."""


class InterfaceNotFoundError(InterfaceError):
    """Raised when no interface on this host has the requested name."""


class NoAddressForInterfaceError(InterfaceError):
    """Raised when an interface has no usable address."""


class NoIPv4AddressError(NoAddressForInterfaceError):
    """Raised when an interface only carries loopback or non-IPv4 addresses."""


class TransportError(WakectlError):
    """Base transport error."""


class DestinationResolutionError(TransportError):
    """Raised when a destination cannot be turned into a socket address."""


class TransportSocketError(TransportError):
    """Raised when a socket cannot be opened, bound, connected or written."""


class ShortWriteError(TransportError):
    """Raised when fewer bytes than the full magic packet were sent."""

    def __init__(self, expected: int, actual: int) -> None:
        super().__init__(f"Magic packet sent was {actual} bytes (expected {expected} bytes)")
        self.expected = expected
        self.actual = actual


class NoEchoResponseError(TransportError):
    """Raised when no echo reply arrives before the read deadline."""


class EchoMismatchError(TransportError):
    """Raised when the echo reply differs from the packet that was sent."""

    def __init__(self, sent: bytes, received: bytes) -> None:
        super().__init__(
            f"Received response ({len(received)} bytes) does not match the sent packet "
            f"({len(sent)} bytes)"
        )
        self.sent = sent
        self.received = received


class HostsLoadError(WakectlError):
    """Raised when the hosts file cannot be read."""


class HostsValidationError(WakectlError):
    """Raised when the hosts file does not conform to schema or semantics."""


class HostLookupError(WakectlError):
    """Raised when a target is neither a MAC address nor a configured host."""


class InvalidTimeoutError(WakectlError):
    """Raised when a read timeout is not a positive number of seconds."""
