"""
Upgrade use case — reinstall every package whose registry version moved.

Packages without a manifest, or without a build for the target, are left
alone.  The first pipeline failure aborts the run; packages upgraded
before it stay upgraded (each install persists State on its own).
"""

from __future__ import annotations

import logging

from ferry.adapters.base import NULL_OBSERVER, InstallObserver
from ferry.core.context import EngineContext
from ferry.core.models.results import UpgradedPackage, UpgradeResult
from ferry.core.platform import current_target
from ferry.core.services.install_ops import install_package
from ferry.core.services.manifest_store import find_package

logger = logging.getLogger(__name__)


def upgrade_all(
    ctx: EngineContext,
    target: str | None = None,
    observer: InstallObserver = NULL_OBSERVER,
) -> UpgradeResult:
    """Bring installed packages up to their registry version."""
    triple = target or current_target()
    result = UpgradeResult()

    for name in sorted(ctx.state.packages):
        current = ctx.state.packages[name].version

        manifest = find_package(ctx, name)
        if manifest is None:
            logger.debug("%s: no manifest, skipping", name)
            continue
        definition = manifest.target_for(triple)
        if definition is None:
            logger.debug("%s: no build for %s, skipping", name, triple)
            continue
        if manifest.version == current:
            continue

        logger.info("Upgrading %s %s → %s", name, current, manifest.version)
        install_package(ctx, name, manifest.version, definition, observer)
        result.upgraded.append(
            UpgradedPackage(name=name, from_version=current, to_version=manifest.version)
        )

    return result
