"""
Release metadata used by the import tooling.

``Release``/``ReleaseAsset`` mirror the subset of the GitHub
``releases/latest`` payload we read.  ``ScoredAsset`` and
``ImportCandidate`` are ephemeral and never persisted.
"""

from __future__ import annotations

from pydantic import BaseModel, Field


class ReleaseAsset(BaseModel):
    name: str
    browser_download_url: str


class Release(BaseModel):
    tag_name: str
    assets: list[ReleaseAsset] = Field(default_factory=list)


class ScoredAsset(BaseModel):
    score: int
    asset: ReleaseAsset


class ImportCandidate(BaseModel):
    """All assets of a release, ranked best-first for one target."""

    target_slug: str
    target_desc: str
    assets: list[ScoredAsset] = Field(default_factory=list)

    @property
    def best(self) -> ScoredAsset | None:
        return self.assets[0] if self.assets else None
