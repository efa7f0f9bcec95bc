"""
Registry synchronization — refresh the manifest cache from its source.

The cache is fully replaced on every sync so upstream deletions propagate.

Sources:
    - Local directory (any string not starting with ``http`` or ``file://``):
      ``<source>/packages`` is mirrored into the cache.  A checkout without
      ``packages/`` yields an empty cache.
    - Remote tarball (``http(s)://`` or ``file://``): fetched, then every
      entry under a ``packages`` path segment is written starting from that
      segment, which strips wrapper directories such as ``ferry-main/``.
"""

from __future__ import annotations

import logging
import shutil
import tarfile
import zlib
from pathlib import Path, PurePosixPath

from ferry.adapters.base import NULL_OBSERVER, InstallObserver
from ferry.core.context import EngineContext
from ferry.core.errors import ArchiveError, RegistryError
from ferry.core.models.events import Fetching, InstallEvent, Progress, Unpacking
from ferry.core.models.results import UpdateResult
from ferry.core.services.archive import iter_members, open_stream
from ferry.core.services.fetch import fetch

logger = logging.getLogger(__name__)

PACKAGES_SEGMENT = "packages"


def is_local_source(source: str) -> bool:
    return not source.startswith("http") and not source.startswith("file://")


def update_registry(
    ctx: EngineContext,
    observer: InstallObserver = NULL_OBSERVER,
) -> UpdateResult:
    """Download the registry from the network OR copy it from a local directory.

    Raises:
        RegistryError: A local source path does not exist.
        FetchError: The remote tarball could not be fetched.
        ArchiveError: The remote tarball is corrupt.
    """
    source = ctx.registry_source
    emit = observer.on_update_event
    emit(Fetching(source=source))

    if is_local_source(source):
        source_path = Path(source)
        if not source_path.exists():
            raise RegistryError(f"Local registry path not found: {source_path}")
        _reset_cache(ctx.registry_dir)
        _mirror_local(source_path, ctx.packages_dir)
    else:
        def forward(event: InstallEvent) -> None:
            if isinstance(event, Progress):
                emit(event)

        content = fetch(ctx, source, forward)
        _reset_cache(ctx.registry_dir)
        emit(Unpacking())
        _unpack_packages(content, ctx.registry_dir)

    count = sum(1 for _ in ctx.packages_dir.glob("*/*.toml")) if ctx.packages_dir.is_dir() else 0
    logger.info("Registry updated from %s (%d manifests)", source, count)
    return UpdateResult(source=source, manifests=count)


def _reset_cache(registry_dir: Path) -> None:
    if registry_dir.exists():
        shutil.rmtree(registry_dir)
    registry_dir.mkdir(parents=True)


def _mirror_local(source_path: Path, dest: Path) -> None:
    pkg_source = source_path / PACKAGES_SEGMENT
    if not pkg_source.is_dir():
        logger.info("No %s/ directory in %s — registry is empty", PACKAGES_SEGMENT, source_path)
        return
    shutil.copytree(pkg_source, dest)


def packages_relative_path(member_name: str) -> PurePosixPath | None:
    """Path of an archive entry starting at its ``packages`` segment.

    Returns None for entries outside ``packages/`` and for entries whose
    path would escape the cache (``..`` or absolute components).
    """
    parts = PurePosixPath(member_name).parts
    if PACKAGES_SEGMENT not in parts:
        return None
    rel = parts[parts.index(PACKAGES_SEGMENT):]
    if ".." in rel:
        return None
    return PurePosixPath(*rel)


def _unpack_packages(content: bytes, registry_dir: Path) -> None:
    try:
        with open_stream(content) as tar:
            for member in iter_members(tar):
                rel = packages_relative_path(member.name)
                if rel is None:
                    continue

                dest = registry_dir.joinpath(*rel.parts)
                if member.isdir():
                    dest.mkdir(parents=True, exist_ok=True)
                    continue
                if not member.isfile() or rel == PurePosixPath(PACKAGES_SEGMENT):
                    logger.debug("Skipping non-regular entry %s", member.name)
                    continue

                stream = tar.extractfile(member)
                if stream is None:
                    continue
                dest.parent.mkdir(parents=True, exist_ok=True)
                with open(dest, "wb") as f:
                    shutil.copyfileobj(stream, f)
    except (tarfile.TarError, zlib.error, EOFError) as e:
        raise ArchiveError(f"Corrupt registry archive: {e}") from e
