"""Magic packet encoding."""

from __future__ import annotations

from wakectl.core.model import MacAddress

SYNC_STREAM = b"\xff" * 6
MAC_REPETITIONS = 16
MAGIC_PACKET_SIZE = len(SYNC_STREAM) + 6 * MAC_REPETITIONS


def build_magic_packet(mac: MacAddress) -> bytes:
    """Return the 102-byte payload: six 0xFF bytes, then the MAC sixteen times."""
    return SYNC_STREAM + mac.octets * MAC_REPETITIONS
