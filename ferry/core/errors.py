"""
Error taxonomy for the install and sync pipelines.

Every stage raises a subclass of ``FerryError`` so that entry points can
report failures uniformly.  Lenient cases (corrupt state file, corrupt
manifest) never raise; they resolve to an ``Absent`` lookup instead.
"""

from __future__ import annotations


class FerryError(Exception):
    """Base class for all ferry failures."""


class FetchError(FerryError):
    """Transport failure: unreachable host, non-2xx status, missing local file."""


class SecurityError(FerryError):
    """Content failed an integrity check and must not be written anywhere."""


class ChecksumMismatchError(SecurityError):
    """SHA-256 of the fetched content differs from the manifest digest."""

    def __init__(self, expected: str, actual: str):
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"Security check failed: Checksum mismatch. "
            f"Expected: {expected}, Got: {actual}"
        )


class ArchiveError(FerryError):
    """The archive stream is corrupt or cannot be read."""


class BinaryNotFoundError(ArchiveError):
    """No archive entry matched the requested binary name."""

    def __init__(self, bin_name: str):
        self.bin_name = bin_name
        super().__init__(f"Binary '{bin_name}' not found in archive")


class RegistryError(FerryError):
    """The configured registry source cannot be synchronized."""


class ManifestError(FerryError):
    """A manifest cannot be written."""
