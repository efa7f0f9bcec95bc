"""
Tests for release-asset scoring and candidate ranking.
"""

import pytest

from ferry.core.models.release import Release, ReleaseAsset
from ferry.core.services.asset_scoring import (
    DEFAULT_IMPORT_TARGETS,
    ImportTarget,
    build_candidates_from_release,
    calculate_asset_score,
    rank_assets,
)

LINUX = "x86_64-linux"
MAC = "aarch64-macos"


def release_of(tag: str, *names: str) -> Release:
    return Release(
        tag_name=tag,
        assets=[ReleaseAsset(name=n, browser_download_url=f"https://dl/{n}") for n in names],
    )


class TestCalculateScore:
    @pytest.mark.parametrize("filename, expected", [
        ("app-x86_64-unknown-linux-musl.tar.gz", 45),
        ("app-linux-amd64.tar.gz", 40),
        ("app-linux-amd64.zip", 10),
        ("app-linux-arm64.tar.gz", -20),
        ("app-x86_64-apple-darwin.tar.gz", -20),
        ("app_amd64.deb", -90),
    ])
    def test_linux(self, filename: str, expected: int):
        assert calculate_asset_score(filename, LINUX) == expected

    @pytest.mark.parametrize("filename, expected", [
        ("app-aarch64-apple-darwin.tar.gz", 40),
        ("app-x86_64-apple-darwin.tar.gz", -20),
    ])
    def test_macos(self, filename: str, expected: int):
        assert calculate_asset_score(filename, MAC) == expected

    def test_checksum_files_penalized(self):
        assert calculate_asset_score("app-linux-amd64.tar.gz.sha256", LINUX) < -50

    def test_case_insensitive(self):
        assert calculate_asset_score("APP-LINUX-AMD64.TAR.GZ", LINUX) == 40

    def test_tgz(self):
        assert calculate_asset_score("app.tgz", "riscv64-linux") == 20

    def test_unknown_target_global_rules_only(self):
        assert calculate_asset_score("app-linux-amd64.tar.gz", "riscv64-linux") == 20
        assert calculate_asset_score("app.rpm", "riscv64-linux") == -100

    def test_group_counts_once(self):
        # both "apple" and "darwin" belong to the same group
        assert calculate_asset_score("app-apple-darwin-macos", MAC) == 10


class TestRanking:
    def test_best_first(self):
        release = release_of(
            "v1.2.3",
            "app.deb",
            "app.tar.gz",
            "app-x86_64-linux.tar.gz",
            "app-linux.zip",
        )
        version, candidates = build_candidates_from_release(release)

        assert version == "1.2.3"
        linux = next(c for c in candidates if c.target_slug == LINUX)
        assert [sa.asset.name for sa in linux.assets] == [
            "app-x86_64-linux.tar.gz",
            "app.tar.gz",
            "app-linux.zip",
            "app.deb",
        ]
        assert linux.best.asset.name == "app-x86_64-linux.tar.gz"

    def test_one_candidate_per_default_target(self):
        _, candidates = build_candidates_from_release(release_of("v1", "a.tar.gz"))
        assert [c.target_slug for c in candidates] == [t.slug for t in DEFAULT_IMPORT_TARGETS]
        assert candidates[1].target_desc == "macOS (Apple Silicon)"

    def test_custom_targets(self):
        _, candidates = build_candidates_from_release(
            release_of("2.0", "a.tar.gz"),
            targets=[ImportTarget("RISC-V", "riscv64-linux")],
        )
        assert len(candidates) == 1
        assert candidates[0].target_slug == "riscv64-linux"

    def test_ties_keep_listing_order(self):
        ranked = rank_assets(release_of("v1", "b.tar.gz", "a.tar.gz", "c.tar.gz"), "riscv64-linux")
        assert [sa.asset.name for sa in ranked] == ["b.tar.gz", "a.tar.gz", "c.tar.gz"]

    def test_no_assets(self):
        _, candidates = build_candidates_from_release(release_of("v0.1"))
        assert all(c.assets == [] for c in candidates)
        assert candidates[0].best is None

    def test_every_asset_listed(self):
        release = release_of("v1", "x.sha256", "y.msi", "z.tar.gz")
        assert len(rank_assets(release, LINUX)) == 3
