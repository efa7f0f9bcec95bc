"""
State file persistence — atomic read/write for State.

State is stored as pretty JSON in ``.local/share/ferry/installed.json``.
Writes are atomic (write to temp file, then rename) so a crash mid-write
never leaves a truncated file behind.

A missing or corrupt file is not an error: ``read_state`` reports it as
``Absent`` and ``load_state`` turns that into an empty State, which keeps
the tool usable after partial data corruption.
"""

from __future__ import annotations

import json
import logging
import os
import tempfile
from pathlib import Path

from pydantic import ValidationError

from ferry.core.models.lookup import INVALID, Absent, Found, Lookup
from ferry.core.models.state import State

logger = logging.getLogger(__name__)


def read_state(path: Path) -> Lookup[State]:
    """Read State from a JSON file without ever raising on bad data."""
    if not path.is_file():
        return Absent(path)

    try:
        raw = path.read_text(encoding="utf-8")
        return Found(State.model_validate(json.loads(raw)))
    except (OSError, UnicodeDecodeError, json.JSONDecodeError, ValidationError) as e:
        return Absent(path, INVALID, str(e))


def load_state(path: Path) -> State:
    """Load State from a JSON file.

    Returns:
        The stored State, or a fresh empty one if the file is missing
        or corrupt.
    """
    result = read_state(path)
    if isinstance(result, Found):
        logger.debug("Loaded state from %s (%d packages)", path, len(result.value.packages))
        return result.value

    if result.invalid:
        logger.warning("Corrupt state file %s: %s — starting fresh", path, result.detail)
    else:
        logger.info("No state file at %s — starting fresh", path)
    return State()


def save_state(state: State, path: Path) -> None:
    """Write ``state`` to ``path`` in full, replacing the old file atomically.

    The JSON is written to a sibling temp file first; the rename is the
    commit point.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    payload = json.dumps(state.model_dump(mode="json"), indent=2, ensure_ascii=False)

    fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=".installed_", suffix=".json.tmp")
    tmp = Path(tmp_name)
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            f.write(payload + "\n")
        os.replace(tmp, path)
    except Exception as e:
        tmp.unlink(missing_ok=True)
        logger.error("Could not persist state to %s: %s", path, e)
        raise
    logger.debug("Persisted %d package(s) to %s", len(state.packages), path)
