from __future__ import annotations

import socket
from collections import namedtuple

import psutil
import pytest

FakeAddr = namedtuple("FakeAddr", ["family", "address", "netmask", "broadcast", "ptp"])

AF_LINK = getattr(psutil, "AF_LINK", -1)


def ipv4(address: str, netmask: str | None = "255.255.255.0") -> FakeAddr:
    return FakeAddr(socket.AF_INET, address, netmask, None, None)


def ipv6(address: str) -> FakeAddr:
    return FakeAddr(socket.AF_INET6, address, "ffff:ffff:ffff:ffff::", None, None)


def link(address: str = "aa:bb:cc:dd:ee:ff") -> FakeAddr:
    return FakeAddr(AF_LINK, address, None, None, None)


@pytest.fixture
def fake_interfaces(monkeypatch: pytest.MonkeyPatch):
    table: dict[str, list[FakeAddr]] = {
        "lo": [ipv4("127.0.0.1", "255.0.0.0"), ipv6("::1")],
        "eth0": [link(), ipv4("192.168.1.42"), ipv6("fe80::1")],
        "wlan0": [link("11:22:33:44:55:66"), ipv4("10.20.30.40", "255.255.0.0")],
        "v6only": [link("22:33:44:55:66:77"), ipv6("fe80::2")],
        "down0": [],
    }
    monkeypatch.setattr(psutil, "net_if_addrs", lambda: table)
    return table
