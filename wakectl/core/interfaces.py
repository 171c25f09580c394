"""Interface address lookup and subnet broadcast calculation."""

from __future__ import annotations

import logging
import socket
from ipaddress import AddressValueError, IPv4Address

import psutil

from wakectl.core.errors import (
    InterfaceNotFoundError,
    NoAddressForInterfaceError,
    NoIPv4AddressError,
)
from wakectl.core.model import InterfaceAddress

LOGGER = logging.getLogger(__name__)


def _ipv4_candidates(name: str, addrs: list) -> list[InterfaceAddress]:
    candidates: list[InterfaceAddress] = []
    for addr in addrs:
        if addr.family != socket.AF_INET or not addr.netmask:
            continue
        try:
            address = IPv4Address(addr.address)
            netmask = IPv4Address(addr.netmask)
        except AddressValueError:
            LOGGER.debug("Skipping unparsable address %r on %s", addr.address, name)
            continue
        if address.is_loopback:
            continue
        candidates.append(InterfaceAddress(name=name, address=address, netmask=netmask))
    return candidates


def resolve_interface(name: str) -> InterfaceAddress:
    """Return the first non-loopback IPv4 address of interface `name`.

    When an interface carries several qualifying addresses the first one in
    the order reported by the OS wins.
    """
    table = psutil.net_if_addrs()
    if name not in table:
        raise InterfaceNotFoundError(f"No network interface named '{name}'")

    addrs = table[name]
    if not addrs:
        raise NoAddressForInterfaceError(f"No address associated with interface {name}")

    candidates = _ipv4_candidates(name, addrs)
    if not candidates:
        raise NoIPv4AddressError(f"No suitable IPv4 address found for interface {name}")

    if len(candidates) > 1:
        LOGGER.debug(
            "Interface %s has %d IPv4 addresses; using %s",
            name,
            len(candidates),
            candidates[0].address,
        )
    return candidates[0]


def list_interfaces() -> list[InterfaceAddress]:
    found: list[InterfaceAddress] = []
    for name, addrs in sorted(psutil.net_if_addrs().items()):
        found.extend(_ipv4_candidates(name, addrs))
    return found


def subnet_broadcast(address: IPv4Address, netmask: IPv4Address) -> IPv4Address:
    """Compute ``(address AND mask) OR (NOT mask)`` octet by octet."""
    octets = bytes(
        (a & m) | (m ^ 0xFF)
        for a, m in zip(address.packed, netmask.packed)
    )
    return IPv4Address(octets)
