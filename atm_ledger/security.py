"""PIN hashing and format checks.

PINs are stored as an unsalted, single-round SHA-256 digest. This is a
demonstration ledger, not a security boundary.
"""

import hashlib
import re

PIN_PATTERN = re.compile(r"[0-9]{4}", re.ASCII)


def digest(pin: str) -> str:
    """Return the lowercase hex SHA-256 digest of ``pin``."""
    return hashlib.sha256(pin.encode("utf-8")).hexdigest()


def verify_pin(pin: str, pin_hash: str) -> bool:
    """Check ``pin`` against a stored digest."""
    return digest(pin) == pin_hash


def is_valid_pin(pin: str | None) -> bool:
    """Return True if ``pin`` is exactly four ASCII digits."""
    return pin is not None and PIN_PATTERN.fullmatch(pin) is not None
