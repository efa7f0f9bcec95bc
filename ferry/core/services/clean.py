"""Remove temp files orphaned by interrupted atomic installs."""

from __future__ import annotations

import logging

from ferry.core.context import EngineContext
from ferry.core.models.results import CleanResult
from ferry.core.services.atomic import TEMP_PREFIX

logger = logging.getLogger(__name__)


def clean_trash(ctx: EngineContext) -> CleanResult:
    """Delete every ``.ferry-tmp-*`` file in the bin directory."""
    cleaned: list[str] = []
    if not ctx.bin_path.is_dir():
        return CleanResult()

    for path in sorted(ctx.bin_path.iterdir()):
        if path.name.startswith(TEMP_PREFIX) and path.is_file():
            path.unlink()
            cleaned.append(path.name)
            logger.debug("Removed %s", path)

    if cleaned:
        logger.info("Cleaned %d orphaned temp files", len(cleaned))
    return CleanResult(files_cleaned=cleaned)
