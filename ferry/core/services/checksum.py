"""SHA-256 integrity check — must pass before anything touches disk."""

from __future__ import annotations

import hashlib

from ferry.core.errors import ChecksumMismatchError


def sha256_hex(data: bytes) -> str:
    """Lower-case hex SHA-256 digest of ``data``."""
    return hashlib.sha256(data).hexdigest()


def verify_checksum(data: bytes, expected: str) -> None:
    """Require ``sha256(data)`` to equal ``expected`` exactly.

    Raises:
        ChecksumMismatchError: On any difference, including case.
    """
    actual = sha256_hex(data)
    if actual != expected:
        raise ChecksumMismatchError(expected, actual)
