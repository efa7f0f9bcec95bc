"""
End-to-end integration tests — full lifecycle through the CLI.

Tests the complete workflow: update → install → run → upgrade → uninstall.
Uses Click's CliRunner so everything runs in-process; only the installed
binary itself is executed in a subprocess.
"""

from __future__ import annotations

import json
import os
import subprocess
from pathlib import Path

import pytest
from click.testing import CliRunner

from ferry.main import cli

from tests.conftest import LocalRegistry


@pytest.fixture()
def runner() -> CliRunner:
    return CliRunner()


@pytest.fixture()
def env(home: Path, registry: LocalRegistry, tmp_path: Path) -> dict:
    return {
        "HOME": str(home),
        "FERRY_ROOT": str(home),
        "FERRY_REGISTRY_URL": registry.source,
        "FERRY_CONFIG": str(tmp_path / "absent.yml"),
    }


def invoke(runner: CliRunner, env: dict, args: list[str]):
    """Helper: invoke CLI with the isolated environment."""
    return runner.invoke(cli, args, env=env)


def run_binary(path: Path) -> str:
    return subprocess.run(
        [str(path)], capture_output=True, text=True, timeout=10, check=True,
    ).stdout


# ── Lifecycle Tests ──────────────────────────────────────────────


@pytest.mark.skipif(os.name != "posix", reason="runs a shell script binary")
class TestLifecycle:
    """Test the full update → install → upgrade → uninstall lifecycle."""

    def test_full_lifecycle(self, runner, env, registry, home):
        bin_path = home / ".local" / "bin" / "mock-tool"
        state_path = home / ".local" / "share" / "ferry" / "installed.json"

        # 1. Publish v1.0.0 and sync
        registry.add_package("mock-tool", "1.0.0")
        r = invoke(runner, env, ["update"])
        assert r.exit_code == 0, r.output

        # 2. Install and run it
        r = invoke(runner, env, ["install", "mock-tool"])
        assert r.exit_code == 0, r.output
        assert "Hello from mock-tool v1.0.0" in run_binary(bin_path)

        state = json.loads(state_path.read_text())
        assert state["packages"]["mock-tool"]["version"] == "1.0.0"

        # 3. Publish v2.0.0, sync, upgrade
        registry.add_package("mock-tool", "2.0.0")
        assert invoke(runner, env, ["update"]).exit_code == 0
        r = invoke(runner, env, ["upgrade"])
        assert r.exit_code == 0, r.output
        assert "Hello from mock-tool v2.0.0" in run_binary(bin_path)

        r = invoke(runner, env, ["list"])
        assert "mock-tool" in r.output
        assert "v2.0.0" in r.output

        # 4. Uninstall
        r = invoke(runner, env, ["uninstall", "mock-tool"])
        assert r.exit_code == 0
        assert not bin_path.exists()
        assert json.loads(state_path.read_text())["packages"] == {}

    def test_binary_name_differs_from_package(self, runner, env, registry, home):
        registry.add_package("ripgrep", "14.1.0", "rg")
        invoke(runner, env, ["update"])

        r = invoke(runner, env, ["install", "ripgrep"])

        assert r.exit_code == 0, r.output
        assert "ripgrep v14.1.0" in run_binary(home / ".local" / "bin" / "rg")
        assert not (home / ".local" / "bin" / "ripgrep").exists()


# ── Error Handling Tests ─────────────────────────────────────────


class TestErrorHandling:
    """Test that errors are clear and actionable."""

    def test_tampered_package_rejected(self, runner, env, registry, home):
        registry.add_package("evil", "1.0.0", checksum="f" * 64)
        invoke(runner, env, ["update"])

        r = invoke(runner, env, ["install", "evil"])

        assert r.exit_code == 1
        assert "Security check failed" in r.output
        assert "Traceback" not in r.output
        assert not (home / ".local" / "bin" / "evil").exists()
        assert json.loads(invoke(runner, env, ["list", "--json"]).output)["packages"] == {}

    def test_missing_binary_in_archive(self, runner, env, registry):
        registry.add_package("hollow", "1.0.0")
        # manifest claims a different binary than the archive holds
        text = (registry.path / "packages" / "h" / "hollow.toml").read_text()
        registry.write_manifest("hollow", text.replace('bin = "hollow"', 'bin = "other"'))
        invoke(runner, env, ["update"])

        r = invoke(runner, env, ["install", "hollow"])

        assert r.exit_code == 1
        assert "Binary 'other' not found in archive" in r.output

    def test_corrupt_state_file_recovers(self, runner, env, home):
        state_path = home / ".local" / "share" / "ferry" / "installed.json"
        state_path.parent.mkdir(parents=True)
        state_path.write_text("{ not json")

        r = invoke(runner, env, ["list"])

        assert r.exit_code == 0
        assert "No packages installed" in r.output

    def test_invalid_config_file(self, runner, env, tmp_path):
        bad = tmp_path / "bad.yml"
        bad.write_text("- not\n- a mapping\n")
        env["FERRY_CONFIG"] = str(bad)

        r = invoke(runner, env, ["list"])

        assert r.exit_code == 1
        assert "Error:" in r.output
