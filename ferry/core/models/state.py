"""
State — the record of what is actually installed.

Serialized to ``~/.local/share/ferry/installed.json`` and loaded once when
the engine context is created.  It is independent of the registry: a
package may stay installed after its manifest disappears upstream.
"""

from __future__ import annotations

from pydantic import BaseModel, Field


class InstalledPackage(BaseModel):
    """One installed package and the binaries it placed in the bin dir."""

    version: str
    binaries: list[str] = Field(default_factory=list)


class State(BaseModel):
    """Root state model — serialized to installed.json.

    The on-disk shape is exactly ``{"packages": {name: {...}}}``.
    """

    packages: dict[str, InstalledPackage] = Field(default_factory=dict)

    def record(self, name: str, version: str, binaries: list[str]) -> None:
        """Insert or replace the entry for ``name``."""
        self.packages[name] = InstalledPackage(version=version, binaries=list(binaries))

    def forget(self, name: str) -> InstalledPackage | None:
        """Remove and return the entry for ``name``, if any."""
        return self.packages.pop(name, None)

    def is_installed(self, name: str) -> bool:
        return name in self.packages
