"""
Release-asset ranking for the import wizard.

Scores a release asset filename against a target triple with a fixed,
context-free keyword heuristic.  Higher is better.  Ties and false
positives are expected; the wizard always lets the user pick.

Global weights apply to every target:

    +20  .tar.gz / .tgz
    -10  .zip
   -100  .deb / .rpm / .msi
   -100  checksum or signature files (sha256, sum, sig)

Per-target keyword groups add their weight once if any keyword matches.
"""

from __future__ import annotations

from typing import NamedTuple, Sequence

from ferry.core.models.release import ImportCandidate, Release, ScoredAsset


class KeywordGroup(NamedTuple):
    keywords: tuple[str, ...]
    weight: int


class ImportTarget(NamedTuple):
    description: str
    slug: str


WRONG = -50

# ── Target keyword tables ───────────────────────────────────────

TARGET_KEYWORDS: dict[str, tuple[KeywordGroup, ...]] = {
    "x86_64-linux": (
        KeywordGroup(("linux",), 10),
        KeywordGroup(("x86_64", "amd64"), 10),
        KeywordGroup(("musl",), 5),
        KeywordGroup(("gnu",), 3),
        KeywordGroup(("aarch64", "arm"), WRONG),
        KeywordGroup(("darwin", "apple", "macos"), WRONG),
        KeywordGroup(("windows", ".exe"), WRONG),
    ),
    "aarch64-macos": (
        KeywordGroup(("apple", "darwin", "macos"), 10),
        KeywordGroup(("aarch64", "arm64"), 10),
        KeywordGroup(("linux",), WRONG),
        KeywordGroup(("x86_64", "amd64"), WRONG),
        KeywordGroup(("windows", ".exe"), WRONG),
    ),
}

DEFAULT_IMPORT_TARGETS: tuple[ImportTarget, ...] = (
    ImportTarget("Linux (x86_64)", "x86_64-linux"),
    ImportTarget("macOS (Apple Silicon)", "aarch64-macos"),
)

_TARBALL_SUFFIXES = (".tar.gz", ".tgz")
_PACKAGE_SUFFIXES = (".deb", ".rpm", ".msi")
_CHECKSUM_MARKERS = ("sha256", "sum", "sig")


def calculate_asset_score(filename: str, target: str) -> int:
    """Score ``filename`` for ``target`` (case-insensitive, pure)."""
    name = filename.lower()
    score = 0

    if name.endswith(_TARBALL_SUFFIXES):
        score += 20
    if name.endswith(".zip"):
        score -= 10
    if name.endswith(_PACKAGE_SUFFIXES):
        score -= 100
    if any(marker in name for marker in _CHECKSUM_MARKERS):
        score -= 100

    for group in TARGET_KEYWORDS.get(target, ()):
        if any(keyword in name for keyword in group.keywords):
            score += group.weight

    return score


def rank_assets(release: Release, target: str) -> list[ScoredAsset]:
    """All assets of ``release``, best first; ties keep listing order."""
    scored = [
        ScoredAsset(score=calculate_asset_score(asset.name, target), asset=asset)
        for asset in release.assets
    ]
    return sorted(scored, key=lambda sa: sa.score, reverse=True)


def build_candidates_from_release(
    release: Release,
    targets: Sequence[ImportTarget] = DEFAULT_IMPORT_TARGETS,
) -> tuple[str, list[ImportCandidate]]:
    """Rank a release's assets for every import target.

    Returns:
        ``(version, candidates)`` where version is the tag without its
        leading ``v``.
    """
    version = release.tag_name.lstrip("v")
    candidates = [
        ImportCandidate(
            target_desc=t.description,
            target_slug=t.slug,
            assets=rank_assets(release, t.slug),
        )
        for t in targets
    ]
    return version, candidates
