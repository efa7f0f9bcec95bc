"""Return values of the engine operations."""

from __future__ import annotations

from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field


class InstallResult(BaseModel):
    package_name: str
    version: str
    path: Path


class UninstallResult(BaseModel):
    package_name: str
    binaries_removed: list[str] = Field(default_factory=list)


class UpdateResult(BaseModel):
    source: str
    manifests: int = 0


class CleanResult(BaseModel):
    files_cleaned: list[str] = Field(default_factory=list)


class UpgradedPackage(BaseModel):
    name: str
    from_version: str
    to_version: str


class UpgradeResult(BaseModel):
    upgraded: list[UpgradedPackage] = Field(default_factory=list)

    @property
    def count(self) -> int:
        return len(self.upgraded)


class PackageActionOutcome(BaseModel):
    """Outcome of a name-level action that may be skipped or refused.

    Modeled on receipts: ``status`` is ``ok``, ``skipped`` or ``failed``
    and never raises for the expected refusals (already installed, no such
    package, no build for this platform).
    """

    name: str
    status: str = "ok"
    message: str = ""
    result: InstallResult | None = None
    metadata: dict[str, Any] = Field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return self.status == "ok"

    @classmethod
    def success(cls, name: str, result: InstallResult) -> PackageActionOutcome:
        return cls(name=name, status="ok", result=result)

    @classmethod
    def skip(cls, name: str, reason: str) -> PackageActionOutcome:
        return cls(name=name, status="skipped", message=reason)

    @classmethod
    def failure(cls, name: str, error: str) -> PackageActionOutcome:
        return cls(name=name, status="failed", message=error)
