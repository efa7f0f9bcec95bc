"""
Install-by-name use case — resolve a package for this platform, then install.

Ties together the manifest store and the install pipeline.  Expected
refusals (already installed, unknown package, no build for the target)
come back as skipped/failed outcomes instead of exceptions; pipeline
failures (transport, checksum, archive) still raise.
"""

from __future__ import annotations

import logging

from ferry.adapters.base import NULL_OBSERVER, InstallObserver
from ferry.core.context import EngineContext
from ferry.core.models.results import PackageActionOutcome
from ferry.core.platform import current_target
from ferry.core.services.install_ops import install_package
from ferry.core.services.manifest_store import find_package

logger = logging.getLogger(__name__)


def install_by_name(
    ctx: EngineContext,
    name: str,
    target: str | None = None,
    observer: InstallObserver = NULL_OBSERVER,
) -> PackageActionOutcome:
    """Install ``name`` at the registry's current version.

    Args:
        ctx: Engine context.
        name: Package name.
        target: Target triple (default: the running machine).
        observer: Receives install events.
    """
    triple = target or current_target()

    if ctx.state.is_installed(name):
        return PackageActionOutcome.skip(name, f"{name} is already installed")

    manifest = find_package(ctx, name)
    if manifest is None:
        return PackageActionOutcome.failure(name, f"Package '{name}' not found.")

    definition = manifest.target_for(triple)
    if definition is None:
        return PackageActionOutcome.failure(name, f"No compatible binary for {triple}")

    result = install_package(ctx, name, manifest.version, definition, observer)
    return PackageActionOutcome.success(name, result)
