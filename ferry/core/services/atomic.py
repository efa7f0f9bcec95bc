"""
Atomic binary placement.

Bytes go to a temp file created in the destination directory (same
filesystem, so the final rename is atomic), get the executable bit, then
``os.replace`` swaps it in.  Readers of the destination path see either
the old binary or the complete new one.

Temp files carry ``TEMP_PREFIX`` so ``clean_trash`` can find orphans left
by an interrupted run.
"""

from __future__ import annotations

import logging
import os
import shutil
import tempfile
from pathlib import Path
from typing import IO

logger = logging.getLogger(__name__)

TEMP_PREFIX = ".ferry-tmp-"
EXECUTABLE_MODE = 0o755


def atomic_install(bin_dir: Path, name: str, stream: IO[bytes]) -> Path:
    """Write ``stream`` to ``bin_dir/name`` atomically and make it executable.

    Returns:
        The destination path.
    """
    dest = bin_dir / name
    bin_dir.mkdir(parents=True, exist_ok=True)

    fd, tmp_name = tempfile.mkstemp(dir=bin_dir, prefix=TEMP_PREFIX)
    tmp = Path(tmp_name)
    try:
        with os.fdopen(fd, "wb") as f:
            shutil.copyfileobj(stream, f)
            f.flush()
            os.fsync(f.fileno())
        if os.name == "posix":
            os.chmod(tmp, EXECUTABLE_MODE)
        os.replace(tmp, dest)
    except Exception:
        tmp.unlink(missing_ok=True)
        raise

    logger.info("Installed %s", dest)
    return dest
