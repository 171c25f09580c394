"""MAC address parsing."""

from __future__ import annotations

import re

from wakectl.core.errors import InvalidAddressFormatError
from wakectl.core.model import MacAddress

_MAC_RE = re.compile(
    r"^[0-9a-f]{2}(?P<sep>[:-])[0-9a-f]{2}(?:(?P=sep)[0-9a-f]{2}){4}$"
    r"|^[0-9a-f]{12}$",
    re.IGNORECASE,
)
_HEXISH_RE = re.compile(r"^[0-9a-f:-]+$", re.IGNORECASE)


def parse_mac(text: str) -> MacAddress:
    """Parse ``AA:BB:CC:DD:EE:FF``, ``aa-bb-cc-dd-ee-ff`` or ``AABBCCDDEEFF``.

    One separator style must be used throughout. Raises
    `InvalidAddressFormatError` for anything that does not decode to 6 octets.
    """
    if not isinstance(text, str):
        raise InvalidAddressFormatError(f"MAC address must be a string, got {type(text).__name__}")
    candidate = text.strip()
    if not _MAC_RE.match(candidate):
        raise InvalidAddressFormatError(f"Invalid MAC address '{text}'")
    return MacAddress(octets=bytes.fromhex(candidate.replace(":", "").replace("-", "")))


def is_mac(text: str) -> bool:
    try:
        parse_mac(text)
    except InvalidAddressFormatError:
        return False
    return True


def looks_like_mac(text: str) -> bool:
    """True when `text` was evidently meant as a MAC, even if malformed.

    Any colon counts; dashes only between hex digits, since host names use them.
    """
    candidate = text.strip()
    if ":" in candidate:
        return True
    return "-" in candidate and bool(_HEXISH_RE.match(candidate))
