"""
Archive extraction — gzip+tar, streamed, one named entry.

The archive is read in stream mode (``r|gz``) so entries are visited
exactly once in archive order.  The first regular file whose basename
equals the wanted binary name wins and scanning stops; its byte stream is
handed to a ``place`` callback, which is the only thing that writes.
"""

from __future__ import annotations

import io
import logging
import tarfile
import zlib
from pathlib import PurePosixPath
from typing import IO, Callable, Iterator, TypeVar

from ferry.core.errors import ArchiveError, BinaryNotFoundError

logger = logging.getLogger(__name__)

T = TypeVar("T")

# Errors a truncated or garbled .tar.gz can raise while streaming.
_CORRUPT_ERRORS = (tarfile.TarError, zlib.error, EOFError, OSError)


def iter_members(tar: tarfile.TarFile) -> Iterator[tarfile.TarInfo]:
    """Yield members, converting stream corruption into ``ArchiveError``."""
    while True:
        try:
            member = tar.next()
        except _CORRUPT_ERRORS as e:
            raise ArchiveError(f"Corrupt archive: {e}") from e
        if member is None:
            return
        yield member


def open_stream(content: bytes) -> tarfile.TarFile:
    try:
        return tarfile.open(fileobj=io.BytesIO(content), mode="r|gz")
    except _CORRUPT_ERRORS as e:
        raise ArchiveError(f"Corrupt archive: {e}") from e


def extract_binary(
    content: bytes,
    bin_name: str,
    place: Callable[[IO[bytes]], T],
) -> T:
    """Find ``bin_name`` in a .tar.gz and pass its stream to ``place``.

    Args:
        content: The gzip+tar bytes.
        bin_name: Exact basename to look for (``bin`` of the target).
        place: Called once with the entry's file object; its return value
            is returned.

    Raises:
        BinaryNotFoundError: No regular file with that basename.
        ArchiveError: The stream is corrupt.
    """
    with open_stream(content) as tar:
        for member in iter_members(tar):
            if not member.isfile():
                continue
            if PurePosixPath(member.name).name != bin_name:
                continue

            logger.debug("Matched archive entry %s for %s", member.name, bin_name)
            stream = tar.extractfile(member)
            if stream is None:
                raise ArchiveError(f"Cannot read archive entry {member.name}")
            try:
                return place(stream)
            except (tarfile.TarError, zlib.error, EOFError) as e:
                raise ArchiveError(f"Corrupt archive entry {member.name}: {e}") from e

    raise BinaryNotFoundError(bin_name)
