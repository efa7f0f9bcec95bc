"""
Package manifests — one TOML file per package in the registry.

Example (``packages/f/fzf.toml``)::

    version = "0.54.0"
    description = "A command-line fuzzy finder"

    [targets.x86_64-linux]
    url = "https://example.com/fzf-0.54.0-linux_amd64.tar.gz"
    bin = "fzf"
    sha256 = "<64 hex chars>"
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field


class TargetDefinition(BaseModel):
    """Where to fetch the binary for one target triple."""

    url: str
    bin: str
    sha256: str = Field(pattern=r"^[0-9a-f]{64}$")


class PackageManifest(BaseModel):
    """Current version of a package and its per-target downloads."""

    version: str
    description: str | None = None
    targets: dict[str, TargetDefinition] = Field(default_factory=dict)

    def target_for(self, triple: str) -> TargetDefinition | None:
        return self.targets.get(triple)

    def upsert_target(self, triple: str, target: TargetDefinition) -> None:
        """Insert or replace one target, leaving the others alone."""
        self.targets[triple] = target

    def to_toml_dict(self) -> dict[str, Any]:
        """Plain dict ready for TOML serialization (TOML has no null)."""
        data = self.model_dump(mode="json", exclude_none=True)
        data["targets"] = dict(sorted(data["targets"].items()))
        return data
