"""
Install / uninstall — the only operations that mutate State.

Install pipeline:

    fetch → verify checksum → extract + atomic place → record State → Success

A failure in any of the first three stages aborts before State is
touched, and nothing is written to the bin directory unless the checksum
passed and a matching archive entry was found.  The atomic rename inside
``atomic_install`` is the commit point.
"""

from __future__ import annotations

import logging
from functools import partial

from ferry.adapters.base import NULL_OBSERVER, InstallObserver
from ferry.core.context import EngineContext
from ferry.core.models.events import Extracting, Success, VerifyingChecksum
from ferry.core.models.manifest import TargetDefinition
from ferry.core.models.results import InstallResult, UninstallResult
from ferry.core.services.archive import extract_binary
from ferry.core.services.atomic import atomic_install
from ferry.core.services.checksum import verify_checksum
from ferry.core.services.fetch import fetch

logger = logging.getLogger(__name__)


def install_package(
    ctx: EngineContext,
    name: str,
    version: str,
    target: TargetDefinition,
    observer: InstallObserver = NULL_OBSERVER,
) -> InstallResult:
    """Download, verify and install one package binary.

    Args:
        ctx: Engine context; ``ctx.state`` is updated and persisted.
        name: Package name recorded in State.
        version: Version recorded in State.
        target: Download definition for the running platform.
        observer: Receives install events.

    Raises:
        FetchError: The download failed.
        ChecksumMismatchError: The content digest is wrong.
        BinaryNotFoundError: The archive has no entry named ``target.bin``.
        ArchiveError: The archive is corrupt.
        OSError: State could not be written.
    """
    emit = observer.on_install_event
    logger.info("Installing %s %s from %s", name, version, target.url)

    content = fetch(ctx, target.url, emit)

    emit(VerifyingChecksum())
    verify_checksum(content, target.sha256)

    emit(Extracting())
    dest = extract_binary(content, target.bin, partial(atomic_install, ctx.bin_path, target.bin))

    ctx.state.record(name, version, [target.bin])
    ctx.persist_state()

    emit(Success())
    return InstallResult(package_name=name, version=version, path=dest)


def uninstall_package(ctx: EngineContext, name: str) -> UninstallResult | None:
    """Remove a package's binaries and its State entry.

    Returns:
        None if ``name`` is not installed (State is left untouched),
        otherwise the binaries that were actually deleted.  Binaries
        already missing from disk are tolerated.
    """
    pkg = ctx.state.packages.get(name)
    if pkg is None:
        logger.info("%s is not installed", name)
        return None

    removed: list[str] = []
    for binary in pkg.binaries:
        path = ctx.bin_path / binary
        if path.exists():
            path.unlink()
            removed.append(binary)
        else:
            logger.debug("Binary %s already gone", path)

    ctx.state.forget(name)
    ctx.persist_state()

    logger.info("Uninstalled %s (%d binaries removed)", name, len(removed))
    return UninstallResult(package_name=name, binaries_removed=removed)
