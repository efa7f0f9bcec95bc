"""
Engine context — everything an operation needs, passed explicitly.

One ``EngineContext`` is built per caller (CLI run, test, embedding app)
and handed to every core operation.  Nothing in the core reads ambient
process state, so two contexts over two roots never interfere.

Layout under ``root``::

    .local/share/ferry/installed.json          State
    .local/share/ferry/registry/packages/...   manifest cache
    .local/bin/                                installed binaries
"""

from __future__ import annotations

import logging
from pathlib import Path

from pydantic import BaseModel, Field

from ferry import __version__
from ferry.core.config.loader import DEFAULT_GITHUB_API, DEFAULT_REGISTRY_URL, Settings
from ferry.core.models.state import State
from ferry.core.persistence.state_file import load_state, save_state

logger = logging.getLogger(__name__)

APP_NAME = "ferry"
STATE_FILE = "installed.json"


class EngineContext(BaseModel):
    """Filesystem roots, HTTP settings, registry source and loaded State."""

    root: Path
    registry_source: str = DEFAULT_REGISTRY_URL
    github_api: str = DEFAULT_GITHUB_API
    user_agent: str = f"{APP_NAME}/{__version__}"
    timeout: float = 60.0
    state: State = Field(default_factory=State)

    @property
    def data_dir(self) -> Path:
        return self.root / ".local" / "share" / APP_NAME

    @property
    def state_path(self) -> Path:
        return self.data_dir / STATE_FILE

    @property
    def registry_dir(self) -> Path:
        return self.data_dir / "registry"

    @property
    def packages_dir(self) -> Path:
        return self.registry_dir / "packages"

    @property
    def bin_path(self) -> Path:
        return self.root / ".local" / "bin"

    @classmethod
    def create(
        cls,
        root: Path,
        registry_source: str = DEFAULT_REGISTRY_URL,
        **kwargs,
    ) -> EngineContext:
        """Create the directory layout under ``root`` and load State."""
        ctx = cls(root=Path(root), registry_source=registry_source, **kwargs)
        ctx.data_dir.mkdir(parents=True, exist_ok=True)
        ctx.bin_path.mkdir(parents=True, exist_ok=True)
        ctx.state = load_state(ctx.state_path)
        logger.debug(
            "Engine ready (root=%s, registry=%s, %d installed)",
            ctx.root, ctx.registry_source, len(ctx.state.packages),
        )
        return ctx

    @classmethod
    def from_settings(cls, settings: Settings) -> EngineContext:
        return cls.create(
            settings.root,
            settings.registry,
            github_api=settings.github_api,
        )

    def persist_state(self) -> None:
        """Persist the in-memory State in full."""
        save_state(self.state, self.state_path)
